"""
Employee API — Employee Route Handlers
========================================

What:  CRUD endpoints under /api/v1/employees (bearer token required).
How:   Each route builds a command or query and sends it through the
       request's Dispatcher. A failed Result becomes a problem-details
       response (see problem_details.py); a successful one is serialized
       with camelCase field names.

    POST   /api/v1/employees          201 + Location, body = new id
    GET    /api/v1/employees          200 list (page, pageSize)
    GET    /api/v1/employees/{id}     200 EmployeeResponse
    PUT    /api/v1/employees/{id}     200 + Location, body = id (full update)
    PATCH  /api/v1/employees/{id}     200 + Location, body = id (direct update)
    DELETE /api/v1/employees/{id}     204
"""

import logging
import uuid
from typing import List, Union

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from employee_api.commands import (
    EmployeeCreateCommand,
    EmployeeDeleteCommand,
    EmployeePatchCommand,
    EmployeeUpdateCommand,
)
from employee_api.dependencies import get_dispatcher
from employee_api.mediator import Dispatcher
from employee_api.problem_details import error_result_response
from employee_api.queries import EmployeeGetAllQuery, EmployeeGetQuery
from employee_api.schemas.common import ProblemDetails
from employee_api.schemas.employee import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    EmployeeCommandPayload,
    EmployeeResponse,
    PaginationParams,
)
from employee_api.security import require_user

logger = logging.getLogger(__name__)

EMPLOYEES_PREFIX = "/api/v1/employees"

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(
    prefix=EMPLOYEES_PREFIX,
    tags=["Employees"],
    dependencies=[Depends(require_user)],
    responses={401: {"description": "Missing or invalid bearer token", "model": ProblemDetails}},
)


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════


def _id_response(status_code: int, employee_id: uuid.UUID) -> JSONResponse:
    """Body is the id; Location points at the employee resource."""
    return JSONResponse(
        status_code=status_code,
        content=str(employee_id),
        headers={"Location": f"{EMPLOYEES_PREFIX}/{employee_id}"},
    )


@router.post(
    "",
    status_code=201,
    response_model=uuid.UUID,
    responses={
        201: {"description": "Employee created; body is the new id"},
        400: {"description": "Validation failed", "model": ProblemDetails},
        404: {"description": "Supervisor not found", "model": ProblemDetails},
        409: {"description": "Email already exists", "model": ProblemDetails},
    },
    summary="Create an employee",
)
async def create_employee(
    payload: EmployeeCommandPayload,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    result = await dispatcher.send(EmployeeCreateCommand(payload))
    if result.is_failure:
        return error_result_response(result.error)
    return _id_response(201, result.unwrap())


@router.put(
    "/{employee_id}",
    response_model=uuid.UUID,
    responses={
        400: {"description": "Validation failed", "model": ProblemDetails},
        404: {"description": "Employee or supervisor not found", "model": ProblemDetails},
        409: {"description": "Email already exists", "model": ProblemDetails},
    },
    summary="Replace every field of an employee",
)
async def update_employee(
    employee_id: uuid.UUID,
    payload: EmployeeCommandPayload,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    result = await dispatcher.send(EmployeeUpdateCommand(employee_id, payload))
    if result.is_failure:
        return error_result_response(result.error)
    return _id_response(200, result.unwrap())


@router.patch(
    "/{employee_id}",
    response_model=uuid.UUID,
    responses={
        400: {"description": "Validation failed", "model": ProblemDetails},
        404: {"description": "Employee or supervisor not found", "model": ProblemDetails},
        409: {"description": "Email already exists", "model": ProblemDetails},
    },
    summary="Update an employee with a direct field-level write",
)
async def patch_employee(
    employee_id: uuid.UUID,
    payload: EmployeeCommandPayload,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    result = await dispatcher.send(EmployeePatchCommand(employee_id, payload))
    if result.is_failure:
        return error_result_response(result.error)
    return _id_response(200, result.unwrap())


@router.delete(
    "/{employee_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Employee still has direct reports", "model": ProblemDetails},
        404: {"description": "Employee not found", "model": ProblemDetails},
    },
    summary="Delete an employee without direct reports",
)
async def delete_employee(
    employee_id: uuid.UUID,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    result = await dispatcher.send(EmployeeDeleteCommand(employee_id))
    if result.is_failure:
        return error_result_response(result.error)
    return Response(status_code=204)


# ══════════════════════════════════════════════════════════════════════════
# Queries
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses={400: {"description": "Invalid pagination", "model": ProblemDetails}},
    summary="List employees, one page at a time",
)
async def list_employees(
    page: int = Query(default=DEFAULT_PAGE, description="1-based page number"),
    page_size: int = Query(
        default=DEFAULT_PAGE_SIZE, alias="pageSize", description="Items per page (max 1000)"
    ),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Union[List[EmployeeResponse], Response]:
    """
    Employees ordered by creation time. `totalReportsCount` is always 0
    here; fetch a single employee to get it.
    """
    query = EmployeeGetAllQuery(PaginationParams(page=page, page_size=page_size))
    result = await dispatcher.send(query)
    if result.is_failure:
        return error_result_response(result.error)
    return result.value


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"description": "Employee not found", "model": ProblemDetails}},
    summary="Get one employee with its transitive report count",
)
async def get_employee(
    employee_id: uuid.UUID,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Union[EmployeeResponse, Response]:
    result = await dispatcher.send(EmployeeGetQuery(employee_id))
    if result.is_failure:
        return error_result_response(result.error)
    return result.unwrap()
