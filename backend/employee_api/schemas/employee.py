"""
Employee API — Employee Request/Response Schemas
=================================================

What:  Pydantic models for the employee endpoints.
How:   Python attributes are snake_case; the JSON contract is camelCase
       (`alias_generator=to_camel`). `populate_by_name` lets handlers and
       tests build models with either spelling.

Field rules (required names, lengths, email shape) are NOT enforced here:
they run in EmployeeCommandValidator inside the mediator pipeline, so a
bad payload produces the same validation problem whether it arrives over
HTTP or is dispatched directly.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeCommandPayload(CamelModel):
    """
    Body of POST, PUT and PATCH /api/v1/employees.

    Example:
        {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "supervisorId": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
            "isSupervisor": false
        }
    """

    first_name: str = Field(default="", description="Given name (max 100 chars)")
    last_name: str = Field(default="", description="Family name (max 100 chars)")
    email: str = Field(default="", description="Unique email address (max 100 chars)")
    supervisor_id: Optional[uuid.UUID] = Field(
        default=None, description="Id of the employee this one reports to"
    )
    is_supervisor: bool = Field(default=False, description="Whether the employee has reports")


class PaginationParams(CamelModel):
    """Query parameters of GET /api/v1/employees (page is 1-based)."""

    page: int = Field(default=DEFAULT_PAGE)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(CamelModel):
    """
    What:  One employee as returned by the read endpoints.

    supervisor_name is "First Last" of the direct supervisor when one is
    loaded. total_reports_count counts transitive reports for supervisors
    fetched by id and is 0 everywhere else.
    """

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    is_supervisor: bool = False
    supervisor_id: Optional[uuid.UUID] = None
    supervisor_name: Optional[str] = None
    total_reports_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
