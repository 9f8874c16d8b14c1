"""
Employee API — Employee Handlers
==================================

What:  One handler per employee use case.
How:   Handlers check business rules against the repository and return a
       Result. They never commit: successful commands are committed by
       UnitOfWorkBehavior, failed ones are rolled back.

Update / patch rule order:
    1. target exists                          → NotFound("Employee", id)
    2. email not used by another employee     → Conflict
    3. supervisorId != own id                 → Validation (no query issued)
    4. supervisor exists                      → NotFound("Supervisor", id)
    5. supervisor does not report to target   → Validation (circular reference)
"""

import logging
import uuid
from typing import List, Optional

from employee_api.commands import (
    EmployeeCreateCommand,
    EmployeeDeleteCommand,
    EmployeePatchCommand,
    EmployeeUpdateCommand,
)
from employee_api.clock import Clock
from employee_api.models.employee import Employee
from employee_api.queries import EmployeeGetAllQuery, EmployeeGetQuery
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.result import ErrorResult, Result
from employee_api.schemas.employee import EmployeeCommandPayload, EmployeeResponse

logger = logging.getLogger(__name__)

EMAIL_CONFLICT = "Email already exists"
SELF_SUPERVISOR = "Employee cannot be their own supervisor"
CIRCULAR_SUPERVISOR = (
    "Circular reference detected: The selected supervisor has this employee as their supervisor"
)


def to_employee_response(employee: Employee, total_reports_count: int = 0) -> EmployeeResponse:
    supervisor = employee.supervisor
    return EmployeeResponse(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        is_supervisor=employee.is_supervisor,
        supervisor_id=employee.supervisor_id,
        supervisor_name=supervisor.full_name if supervisor is not None else None,
        total_reports_count=total_reports_count,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


async def check_email_available(
    employees: EmployeeRepository, email: str, employee_id: Optional[uuid.UUID] = None
) -> Optional[ErrorResult]:
    criteria = [Employee.email == email]
    if employee_id is not None:
        criteria.append(Employee.id != employee_id)
    if await employees.any(*criteria):
        return ErrorResult.conflict(EMAIL_CONFLICT)
    return None


async def check_supervisor_assignment(
    employees: EmployeeRepository,
    message_name: str,
    employee_id: uuid.UUID,
    supervisor_id: Optional[uuid.UUID],
) -> Optional[ErrorResult]:
    """Rules 3-5 of an update; None when the assignment is allowed."""
    if supervisor_id is None:
        return None
    if supervisor_id == employee_id:
        return ErrorResult.validation(message_name, {"supervisorId": SELF_SUPERVISOR})

    supervisor = await employees.get_by_id(supervisor_id, tracking=False)
    if supervisor is None:
        return ErrorResult.not_found("Supervisor", str(supervisor_id))
    if supervisor.supervisor_id == employee_id:
        return ErrorResult.validation(message_name, {"supervisorId": CIRCULAR_SUPERVISOR})
    return None


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════


class EmployeeCreateCommandHandler:
    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    async def handle(self, command: EmployeeCreateCommand) -> Result[uuid.UUID]:
        payload = command.payload

        error = await check_email_available(self.employees, payload.email)
        if error is not None:
            return Result.failure(error)

        if payload.supervisor_id is not None and not await self.employees.any(
            Employee.id == payload.supervisor_id
        ):
            return Result.failure(ErrorResult.not_found("Employee", str(payload.supervisor_id)))

        employee = Employee(
            id=uuid.uuid4(),
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            is_supervisor=payload.is_supervisor,
            supervisor_id=payload.supervisor_id,
        )
        self.employees.add(employee)
        logger.info("Employee %s staged for creation", employee.id)
        return Result.success(employee.id)


class EmployeeUpdateCommandHandler:
    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    async def handle(self, command: EmployeeUpdateCommand) -> Result[uuid.UUID]:
        payload = command.payload

        employee = await self.employees.get_by_id(command.id)
        if employee is None:
            return Result.failure(ErrorResult.not_found("Employee", str(command.id)))

        error = await check_email_available(self.employees, payload.email, command.id)
        if error is None:
            error = await check_supervisor_assignment(
                self.employees, type(command).__name__, command.id, payload.supervisor_id
            )
        if error is not None:
            return Result.failure(error)

        employee.update(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            is_supervisor=payload.is_supervisor,
            supervisor_id=payload.supervisor_id,
        )
        self.employees.update(employee)
        return Result.success(employee.id)


class EmployeePatchCommandHandler:
    """
    Applies the payload with a single UPDATE statement instead of loading
    and tracking the row. Rules are the same as for a full update; the
    audit timestamp is written in the same statement.
    """

    def __init__(self, employees: EmployeeRepository, clock: Clock):
        self.employees = employees
        self.clock = clock

    async def handle(self, command: EmployeePatchCommand) -> Result[uuid.UUID]:
        payload: EmployeeCommandPayload = command.payload

        if not await self.employees.any(Employee.id == command.id):
            return Result.failure(ErrorResult.not_found("Employee", str(command.id)))

        error = await check_email_available(self.employees, payload.email, command.id)
        if error is None:
            error = await check_supervisor_assignment(
                self.employees, type(command).__name__, command.id, payload.supervisor_id
            )
        if error is not None:
            return Result.failure(error)

        await self.employees.execute_update(
            {
                "first_name": payload.first_name,
                "last_name": payload.last_name,
                "email": payload.email,
                "is_supervisor": payload.is_supervisor,
                "supervisor_id": payload.supervisor_id,
                "updated_at": self.clock.utc_now,
            },
            Employee.id == command.id,
        )
        return Result.success(command.id)


class EmployeeDeleteCommandHandler:
    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    async def handle(self, command: EmployeeDeleteCommand) -> Result[uuid.UUID]:
        employee = await self.employees.get_by_id(command.id)
        if employee is None:
            return Result.failure(ErrorResult.not_found("Employee", str(command.id)))

        direct_reports = await self.employees.get_direct_reports(command.id)
        if direct_reports:
            return Result.failure(
                ErrorResult.validation(
                    type(command).__name__,
                    {
                        "directReports": (
                            "Cannot delete employee with direct reports. "
                            f"{len(direct_reports)} cases."
                        )
                    },
                )
            )

        await self.employees.remove(employee)
        logger.info("Employee %s staged for deletion", employee.id)
        return Result.success(employee.id)


# ══════════════════════════════════════════════════════════════════════════
# Queries
# ══════════════════════════════════════════════════════════════════════════


class EmployeeGetHandler:
    """Single employee; totalReportsCount is computed for supervisors only."""

    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    async def handle(self, query: EmployeeGetQuery) -> Result[EmployeeResponse]:
        employee = await self.employees.get_by_id_with_supervisor(query.id)
        if employee is None:
            return Result.failure(ErrorResult.not_found("Employee", str(query.id)))

        total_reports = 0
        if employee.is_supervisor:
            total_reports = await self.employees.get_total_reports_count(employee.id)
        return Result.success(to_employee_response(employee, total_reports))


class EmployeeGetAllHandler:
    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    async def handle(self, query: EmployeeGetAllQuery) -> Result[List[EmployeeResponse]]:
        page = await self.employees.get_paginated_with_supervisor(
            query.payload.page, query.payload.page_size
        )
        return Result.success([to_employee_response(employee) for employee in page])
