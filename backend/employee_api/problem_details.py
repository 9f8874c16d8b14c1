"""
Employee API — Result → HTTP Problem Details
==============================================

What:  Turns failed Results and application exceptions into RFC 7807
       responses with media type `application/problem+json`.
Who:   Routes (failed Results) and the exception handlers in main.py.

    ErrorDefinition   status  title
    ───────────────   ──────  ──────────────────────
    Validation        400     Validation Error
    NotFound          404     Resource Not Found
    Concurrency       409     Concurrency Conflict
    Conflict          409     Data Conflict
    Unauthorized      401     Unauthorized
    (anything else)   400     Bad Request
"""

from typing import Dict, Mapping, Optional, Tuple

from fastapi.responses import JSONResponse

from employee_api.result import ErrorDefinition, ErrorResult
from employee_api.schemas.common import PROBLEM_JSON_MEDIA_TYPE, ProblemDetails

STATUS_TYPE_URL = "https://httpstatuses.com/{status}"

_STATUS_AND_TITLE: Dict[ErrorDefinition, Tuple[int, str]] = {
    ErrorDefinition.VALIDATION: (400, "Validation Error"),
    ErrorDefinition.NOT_FOUND: (404, "Resource Not Found"),
    ErrorDefinition.CONCURRENCY: (409, "Concurrency Conflict"),
    ErrorDefinition.CONFLICT: (409, "Data Conflict"),
    ErrorDefinition.UNAUTHORIZED: (401, "Unauthorized"),
}
_DEFAULT_STATUS_AND_TITLE = (400, "Bad Request")


def problem_response(
    status: int,
    title: str,
    detail: str,
    error_code: str,
    error_definition: str,
    errors: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    problem = ProblemDetails(
        type=STATUS_TYPE_URL.format(status=status),
        title=title,
        status=status,
        detail=detail,
        error_code=error_code,
        error_definition=error_definition,
        errors=dict(errors) if errors else None,
    )
    return JSONResponse(
        status_code=status,
        content=problem.model_dump(by_alias=True, exclude_none=True),
        headers=dict(headers) if headers else None,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


def error_result_response(error: ErrorResult) -> JSONResponse:
    """Problem response for a failed Result."""
    status, title = _STATUS_AND_TITLE.get(error.definition, _DEFAULT_STATUS_AND_TITLE)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return problem_response(
        status=status,
        title=title,
        detail=error.description,
        error_code=error.code,
        error_definition=error.definition.value,
        errors=error.properties,
        headers=headers,
    )
