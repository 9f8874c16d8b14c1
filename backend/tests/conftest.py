"""
Employee API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite with a
       static pool), a fixed clock and a cheap Argon2 hasher.

Fixture Hierarchy (all function-scoped):
    clock ─┐
           ├── auth_service
    engine ── session_factory ── db_session ── unit_of_work
                                                 ├── employee_repository
                                                 ├── user_repository
                                                 └── dispatcher
    hierarchy: CEO → Manager1, Manager2 → Employee1, Employee2 (Manager1),
               Employee3 (Manager2), committed through a separate session
    test_client: HTTPX AsyncClient with the session, clock and auth
                 dependencies overridden
"""

import os
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["SEED_DATABASE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from argon2 import PasswordHasher
from httpx import ASGITransport, AsyncClient

from employee_api.clock import FixedClock
from employee_api.config import settings
from employee_api.data.unit_of_work import UnitOfWork
from employee_api.database import build_engine, build_session_factory, create_tables
from employee_api.handlers import HandlerContext, build_registry
from employee_api.mediator import (
    Dispatcher,
    LoggingBehavior,
    UnitOfWorkBehavior,
    ValidationBehavior,
)
from employee_api.models.employee import Employee
from employee_api.models.user import User
from employee_api.repositories import EmployeeRepository, UserRepository
from employee_api.services.auth_service import AuthService
from employee_api.validators import build_validators
from factories import TEST_PASSWORD, make_employee


# ══════════════════════════════════════════════════════════════════════════
# Collaborators
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def clock():
    """Frozen at the current second so issued tokens are not already expired."""
    return FixedClock(datetime.now(timezone.utc).replace(microsecond=0))


@pytest.fixture
def fast_hasher():
    """Minimum Argon2 cost; production parameters make each hash take ~50ms."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def auth_service(clock, fast_hasher):
    return AuthService(clock=clock, config=settings, password_hasher=fast_hasher)


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """Private in-memory database with every table created."""
    test_engine = build_engine(url="sqlite+aiosqlite:///:memory:")
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def unit_of_work(db_session, clock):
    return UnitOfWork(db_session, clock)


@pytest.fixture
def employee_repository(unit_of_work):
    return EmployeeRepository(unit_of_work)


@pytest.fixture
def user_repository(unit_of_work):
    return UserRepository(unit_of_work)


@pytest.fixture
def dispatcher(unit_of_work, employee_repository, user_repository, auth_service, clock):
    """Dispatcher wired exactly like a request, minus FastAPI."""
    context = HandlerContext(
        unit_of_work=unit_of_work,
        employees=employee_repository,
        users=user_repository,
        auth=auth_service,
        clock=clock,
    )
    return Dispatcher(
        build_registry(),
        context,
        behaviors=[
            LoggingBehavior(),
            ValidationBehavior(build_validators()),
            UnitOfWorkBehavior(unit_of_work),
        ],
    )


# ══════════════════════════════════════════════════════════════════════════
# Data
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def hierarchy(session_factory, clock) -> Dict[str, Employee]:
    """
    CEO
    ├── Manager1
    │   ├── Employee1
    │   └── Employee2
    └── Manager2
        └── Employee3
    """
    ceo = make_employee("Chief", "Executive", is_supervisor=True)
    manager1 = make_employee("Manager", "One", is_supervisor=True, supervisor=ceo)
    manager2 = make_employee("Manager", "Two", is_supervisor=True, supervisor=ceo)
    people = {
        "ceo": ceo,
        "manager1": manager1,
        "manager2": manager2,
        "employee1": make_employee("Employee", "One", supervisor=manager1),
        "employee2": make_employee("Employee", "Two", supervisor=manager1),
        "employee3": make_employee("Employee", "Three", supervisor=manager2),
    }
    async with session_factory() as session:
        session.add_all(people.values())
        await UnitOfWork(session, clock).save_changes()
    return people


@pytest_asyncio.fixture
async def test_user(session_factory, clock, auth_service) -> User:
    user = User(
        id=uuid.uuid4(),
        username="tester",
        email="tester@example.com",
        password_hash=auth_service.hash_password(TEST_PASSWORD),
        first_name="Test",
        last_name="User",
    )
    async with session_factory() as session:
        session.add(user)
        await UnitOfWork(session, clock).save_changes()
    return user


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, clock, auth_service) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Each request gets a fresh session from the test engine; the lifespan
    (table creation, seeding) does not run under ASGITransport.
    """
    from employee_api.database import get_db_session
    from employee_api.dependencies import get_clock
    from employee_api.main import app
    from employee_api.security import get_auth_service

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(test_user, auth_service) -> Dict[str, str]:
    return {"Authorization": f"Bearer {auth_service.generate_jwt_token(test_user)}"}
