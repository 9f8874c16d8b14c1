"""
Employee API — Database Seeder
================================

What:  Fills empty tables with login accounts and a sample org chart.
When:  Application startup when SEED_DATABASE is true (see main.py lifespan).

Each table is seeded only when it is empty, so restarts against a
persistent database never duplicate rows.

Sample hierarchy:
    CEO
    ├── Engineering Manager
    │   ├── Backend Engineer
    │   └── Frontend Engineer
    └── Sales Manager
        ├── Account Executive
        └── Sales Representative
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.clock import Clock, system_clock
from employee_api.data.unit_of_work import UnitOfWork
from employee_api.models.employee import Employee
from employee_api.models.user import User
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.repositories.user_repository import UserRepository
from employee_api.services.auth_service import AuthService, auth_service

logger = logging.getLogger(__name__)

# (username, password, email, first name, last name)
SEED_USERS: List[Tuple[str, str, str, str, str]] = [
    ("admin", "Admin@123", "admin@employeechallenge.com", "System", "Administrator"),
    ("manager", "Manager@123", "manager@employeechallenge.com", "Maria", "Manager"),
    ("employee", "Employee@123", "employee@employeechallenge.com", "Evan", "Employee"),
]


def _employee(
    first_name: str,
    last_name: str,
    is_supervisor: bool,
    supervisor: Optional[Employee] = None,
) -> Employee:
    return Employee(
        id=uuid.uuid4(),
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name}.{last_name}@employeechallenge.com".lower(),
        is_supervisor=is_supervisor,
        supervisor_id=supervisor.id if supervisor else None,
    )


def build_sample_hierarchy() -> List[Employee]:
    """Returns the sample org chart, supervisors before their reports."""
    ceo = _employee("Claire", "Chief", True)
    engineering = _employee("Ethan", "Engineering", True, ceo)
    sales = _employee("Sofia", "Sales", True, ceo)
    return [
        ceo,
        engineering,
        sales,
        _employee("Bruno", "Backend", False, engineering),
        _employee("Fiona", "Frontend", False, engineering),
        _employee("Aaron", "Account", False, sales),
        _employee("Rita", "Representative", False, sales),
    ]


async def seed_database(
    session: AsyncSession,
    clock: Clock = system_clock,
    auth: AuthService = auth_service,
) -> int:
    """
    Seeds users and employees into empty tables.

    Returns:
        Number of rows written (0 when both tables already had data).
    """
    unit_of_work = UnitOfWork(session, clock)
    users = UserRepository(unit_of_work)
    employees = EmployeeRepository(unit_of_work)

    if not await users.any():
        for username, password, email, first_name, last_name in SEED_USERS:
            users.add(
                User(
                    id=uuid.uuid4(),
                    username=username,
                    email=email,
                    password_hash=auth.hash_password(password),
                    first_name=first_name,
                    last_name=last_name,
                )
            )
        logger.info("Seeding %d users", len(SEED_USERS))

    if not await employees.any():
        hierarchy = build_sample_hierarchy()
        for employee in hierarchy:
            employees.add(employee)
        logger.info("Seeding %d employees", len(hierarchy))

    if not unit_of_work.has_pending_changes():
        logger.info("Database already seeded")
        return 0
    return await unit_of_work.save_changes()
