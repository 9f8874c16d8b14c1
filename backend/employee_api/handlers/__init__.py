"""
Employee API — Handlers
========================

One handler per message type, bound to the request context by the
factories below.

    EmployeeCreateCommand  → EmployeeCreateCommandHandler
    EmployeeUpdateCommand  → EmployeeUpdateCommandHandler
    EmployeePatchCommand   → EmployeePatchCommandHandler
    EmployeeDeleteCommand  → EmployeeDeleteCommandHandler
    EmployeeGetQuery       → EmployeeGetHandler
    EmployeeGetAllQuery    → EmployeeGetAllHandler
    LoginCommand           → LoginCommandHandler
"""

from typing import List, Type

from employee_api.commands import (
    EmployeeCreateCommand,
    EmployeeDeleteCommand,
    EmployeePatchCommand,
    EmployeeUpdateCommand,
    LoginCommand,
)
from employee_api.handlers.auth import LoginCommandHandler
from employee_api.handlers.context import HandlerContext
from employee_api.handlers.employees import (
    EmployeeCreateCommandHandler,
    EmployeeDeleteCommandHandler,
    EmployeeGetAllHandler,
    EmployeeGetHandler,
    EmployeePatchCommandHandler,
    EmployeeUpdateCommandHandler,
)
from employee_api.mediator.dispatcher import HandlerRegistry
from employee_api.mediator.messages import Message
from employee_api.queries import EmployeeGetAllQuery, EmployeeGetQuery

MESSAGE_TYPES: List[Type[Message]] = [
    EmployeeCreateCommand,
    EmployeeUpdateCommand,
    EmployeePatchCommand,
    EmployeeDeleteCommand,
    EmployeeGetQuery,
    EmployeeGetAllQuery,
    LoginCommand,
]


def build_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    registry.register(EmployeeCreateCommand, lambda ctx: EmployeeCreateCommandHandler(ctx.employees))
    registry.register(EmployeeUpdateCommand, lambda ctx: EmployeeUpdateCommandHandler(ctx.employees))
    registry.register(
        EmployeePatchCommand, lambda ctx: EmployeePatchCommandHandler(ctx.employees, ctx.clock)
    )
    registry.register(EmployeeDeleteCommand, lambda ctx: EmployeeDeleteCommandHandler(ctx.employees))
    registry.register(EmployeeGetQuery, lambda ctx: EmployeeGetHandler(ctx.employees))
    registry.register(EmployeeGetAllQuery, lambda ctx: EmployeeGetAllHandler(ctx.employees))
    registry.register(LoginCommand, lambda ctx: LoginCommandHandler(ctx.users, ctx.auth))
    return registry


__all__ = ["HandlerContext", "MESSAGE_TYPES", "build_registry"]
