"""
Employee API — Commands
========================

State-changing messages. Each is handled by exactly one handler in
handlers/ and committed by the unit-of-work behavior when it succeeds.
"""

import uuid
from dataclasses import dataclass

from employee_api.mediator.messages import Command
from employee_api.schemas.auth import LoginPayload
from employee_api.schemas.employee import EmployeeCommandPayload


@dataclass(frozen=True)
class EmployeeCreateCommand(Command):
    payload: EmployeeCommandPayload


@dataclass(frozen=True)
class EmployeeUpdateCommand(Command):
    """Replaces every mutable field of employee `id`."""

    id: uuid.UUID
    payload: EmployeeCommandPayload


@dataclass(frozen=True)
class EmployeePatchCommand(Command):
    """Same contract as EmployeeUpdateCommand, applied with a direct UPDATE."""

    id: uuid.UUID
    payload: EmployeeCommandPayload


@dataclass(frozen=True)
class EmployeeDeleteCommand(Command):
    id: uuid.UUID


@dataclass(frozen=True)
class LoginCommand(Command):
    payload: LoginPayload
