"""
Employee API — Request Composition
====================================

What:  Builds the per-request object graph the routes dispatch through.

    get_db_session ─▶ UnitOfWork ─▶ Employee/User repositories
                                        │
                           HandlerContext (+ AuthService, Clock)
                                        │
    HandlerRegistry (process-wide) ─▶ Dispatcher
                                        └─ Logging → Validation → UnitOfWork

The registry and validators are built once at import time and verified in
the application lifespan; everything below the session is request-scoped.
Tests override `get_db_session`, `get_clock` or `get_auth_service` through
`app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.clock import Clock, system_clock
from employee_api.data.unit_of_work import UnitOfWork
from employee_api.database import get_db_session
from employee_api.handlers import HandlerContext, build_registry
from employee_api.mediator import (
    Dispatcher,
    LoggingBehavior,
    UnitOfWorkBehavior,
    ValidationBehavior,
)
from employee_api.repositories import EmployeeRepository, UserRepository
from employee_api.security import get_auth_service
from employee_api.services.auth_service import AuthService
from employee_api.validators import build_validators

handler_registry = build_registry()
validators = build_validators()


def get_clock() -> Clock:
    return system_clock


def get_unit_of_work(
    session: AsyncSession = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> UnitOfWork:
    return UnitOfWork(session, clock)


def get_dispatcher(
    unit_of_work: UnitOfWork = Depends(get_unit_of_work),
    auth: AuthService = Depends(get_auth_service),
    clock: Clock = Depends(get_clock),
) -> Dispatcher:
    context = HandlerContext(
        unit_of_work=unit_of_work,
        employees=EmployeeRepository(unit_of_work),
        users=UserRepository(unit_of_work),
        auth=auth,
        clock=clock,
    )
    return Dispatcher(
        handler_registry,
        context,
        behaviors=[
            LoggingBehavior(),
            ValidationBehavior(validators),
            UnitOfWorkBehavior(unit_of_work),
        ],
    )
