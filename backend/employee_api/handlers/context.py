"""
Employee API — Handler Context
================================

Request-scoped collaborators handed to every handler factory. Built once
per request by dependencies.py, so all handlers of a request share one
session and one unit of work.
"""

from dataclasses import dataclass

from employee_api.clock import Clock
from employee_api.data.unit_of_work import UnitOfWork
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.repositories.user_repository import UserRepository
from employee_api.services.auth_service import AuthService


@dataclass
class HandlerContext:
    unit_of_work: UnitOfWork
    employees: EmployeeRepository
    users: UserRepository
    auth: AuthService
    clock: Clock
