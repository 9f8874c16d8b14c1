"""
Employee API — Shared Response Schemas
========================================

What:  Error body (RFC 7807 problem details) and the health check body.

Problem details example (validation failure):
    {
        "type": "https://httpstatuses.com/400",
        "title": "Validation Error",
        "status": 400,
        "detail": "Resource 'EmployeeCreateCommand' has 1 validation(s) error(s).",
        "errorCode": "Validation",
        "errorDefinition": "Validation",
        "errors": {"email": "Email is not a valid email address."}
    }
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ProblemDetails(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str = Field(description="https://httpstatuses.com/<status>")
    title: str
    status: int
    detail: str
    error_code: str = Field(description="Machine-readable error code")
    error_definition: str = Field(description="Error category (NotFound, Validation, …)")
    errors: Optional[Dict[str, str]] = Field(
        default=None, description="Field → message map for validation failures"
    )


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container probes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
