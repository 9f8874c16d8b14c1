"""
Employee API — Seeder Tests
=============================

What we test:
    ✅ Empty tables receive the users and the sample hierarchy
    ✅ Seeded passwords verify against their hashes
    ✅ A second run writes nothing
"""

import pytest

from employee_api.data.unit_of_work import UnitOfWork
from employee_api.repositories import EmployeeRepository, UserRepository
from employee_api.services.seeder import SEED_USERS, build_sample_hierarchy, seed_database


class TestSeeder:
    @pytest.mark.asyncio
    async def test_seeds_users_and_hierarchy(self, session_factory, clock, auth_service):
        async with session_factory() as session:
            written = await seed_database(session, clock=clock, auth=auth_service)

        assert written == len(SEED_USERS) + len(build_sample_hierarchy())

        async with session_factory() as session:
            unit_of_work = UnitOfWork(session, clock)
            admin = await UserRepository(unit_of_work).get_by_username("admin")
            employees = EmployeeRepository(unit_of_work)
            everyone = await employees.get_all()
            roots = [e for e in everyone if e.supervisor_id is None]

            assert admin is not None
            assert auth_service.verify_password("Admin@123", admin.password_hash)
            assert len(roots) == 1
            assert await employees.get_total_reports_count(roots[0].id) == len(everyone) - 1

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, session_factory, clock, auth_service):
        async with session_factory() as session:
            await seed_database(session, clock=clock, auth=auth_service)
        async with session_factory() as session:
            written = await seed_database(session, clock=clock, auth=auth_service)

        assert written == 0

    def test_sample_hierarchy_lists_supervisors_first(self):
        hierarchy = build_sample_hierarchy()
        seen = set()
        for employee in hierarchy:
            assert employee.supervisor_id is None or employee.supervisor_id in seen
            seen.add(employee.id)
