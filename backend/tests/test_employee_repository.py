"""
Employee API — Employee Repository Tests
==========================================

Runs against a real in-memory SQLite database.

What we test:
    ✅ Transitive report counting (sample hierarchy, leaves, cycles, deep chains)
    ✅ Direct reports are one level only
    ✅ Supervisor joins populate `supervisor`
    ✅ Pagination sizes and untracked results
    ✅ Generic reads and writes: any, find, remove, execute_update
"""

import uuid

import pytest

from employee_api.data.unit_of_work import UnitOfWork
from employee_api.models.employee import Employee
from factories import make_employee


class TestTotalReportsCount:
    @pytest.mark.asyncio
    async def test_ceo_has_five_reports(self, employee_repository, hierarchy):
        assert await employee_repository.get_total_reports_count(hierarchy["ceo"].id) == 5

    @pytest.mark.asyncio
    async def test_manager_counts_only_own_branch(self, employee_repository, hierarchy):
        assert await employee_repository.get_total_reports_count(hierarchy["manager1"].id) == 2
        assert await employee_repository.get_total_reports_count(hierarchy["manager2"].id) == 1

    @pytest.mark.asyncio
    async def test_leaf_has_zero_reports(self, employee_repository, hierarchy):
        assert await employee_repository.get_total_reports_count(hierarchy["employee1"].id) == 0

    @pytest.mark.asyncio
    async def test_unknown_id_has_zero_reports(self, employee_repository, hierarchy):
        assert await employee_repository.get_total_reports_count(uuid.uuid4()) == 0

    @pytest.mark.asyncio
    async def test_reports_of_non_supervisor_are_not_descended(
        self, employee_repository, db_session, unit_of_work
    ):
        boss = make_employee("Boss", "Person", is_supervisor=True)
        # Has a report but is not flagged as a supervisor
        middle = make_employee("Middle", "Person", supervisor=boss)
        below = make_employee("Below", "Person", supervisor=middle)
        db_session.add_all([boss, middle, below])
        await unit_of_work.save_changes()

        assert await employee_repository.get_total_reports_count(boss.id) == 1

    @pytest.mark.asyncio
    async def test_cycle_terminates(self, employee_repository, db_session, unit_of_work):
        a = make_employee("Node", "A", is_supervisor=True)
        b = make_employee("Node", "B", is_supervisor=True, supervisor=a)
        c = make_employee("Node", "C", is_supervisor=True, supervisor=b)
        a.supervisor_id = c.id
        db_session.add_all([a, b, c])
        await unit_of_work.save_changes()

        # b and c are below a; a itself is never counted
        assert await employee_repository.get_total_reports_count(a.id) == 2

    @pytest.mark.asyncio
    async def test_deep_chain(self, employee_repository, db_session, unit_of_work):
        chain = [make_employee("Level", "0", is_supervisor=True)]
        for level in range(1, 200):
            chain.append(make_employee("Level", str(level), is_supervisor=True, supervisor=chain[-1]))
        db_session.add_all(chain)
        await unit_of_work.save_changes()

        assert await employee_repository.get_total_reports_count(chain[0].id) == 199

    @pytest.mark.asyncio
    async def test_count_is_independent_of_insert_order(self, session_factory, clock):
        ceo = make_employee("Chief", "Executive", is_supervisor=True)
        managers = [make_employee("Manager", str(i), is_supervisor=True, supervisor=ceo) for i in range(3)]
        staff = [make_employee("Staff", f"{i}{j}", supervisor=m) for i, m in enumerate(managers) for j in range(2)]

        async with session_factory() as session:
            # Reports inserted before their supervisors
            session.add_all(list(reversed(staff)) + list(reversed(managers)) + [ceo])
            await UnitOfWork(session, clock).save_changes()

        async with session_factory() as session:
            from employee_api.repositories import EmployeeRepository

            repository = EmployeeRepository(UnitOfWork(session, clock))
            assert await repository.get_total_reports_count(ceo.id) == 9


class TestDirectReports:
    @pytest.mark.asyncio
    async def test_direct_reports_of_ceo(self, employee_repository, hierarchy):
        reports = await employee_repository.get_direct_reports(hierarchy["ceo"].id)
        assert {r.id for r in reports} == {hierarchy["manager1"].id, hierarchy["manager2"].id}

    @pytest.mark.asyncio
    async def test_leaf_has_no_direct_reports(self, employee_repository, hierarchy):
        assert await employee_repository.get_direct_reports(hierarchy["employee3"].id) == []


class TestSupervisorJoins:
    @pytest.mark.asyncio
    async def test_get_by_id_with_supervisor(self, employee_repository, hierarchy):
        employee = await employee_repository.get_by_id_with_supervisor(hierarchy["employee1"].id)

        assert employee is not None
        assert employee.supervisor is not None
        assert employee.supervisor.id == hierarchy["manager1"].id
        assert employee.supervisor.full_name == "Manager One"

    @pytest.mark.asyncio
    async def test_root_has_no_supervisor(self, employee_repository, hierarchy):
        ceo = await employee_repository.get_by_id_with_supervisor(hierarchy["ceo"].id)
        assert ceo.supervisor is None

    @pytest.mark.asyncio
    async def test_missing_id_returns_none(self, employee_repository, hierarchy):
        assert await employee_repository.get_by_id_with_supervisor(uuid.uuid4()) is None


class TestPagination:
    @pytest.mark.asyncio
    async def test_page_sizes(self, employee_repository, db_session, unit_of_work):
        db_session.add_all([make_employee("Person", str(i)) for i in range(10)])
        await unit_of_work.save_changes()

        first = await employee_repository.get_paginated_with_supervisor(1, 5)
        second = await employee_repository.get_paginated_with_supervisor(2, 5)
        third = await employee_repository.get_paginated_with_supervisor(3, 5)

        assert len(first) == 5
        assert len(second) == 5
        assert third == []
        assert {e.id for e in first}.isdisjoint({e.id for e in second})

    @pytest.mark.asyncio
    async def test_page_results_are_untracked(self, employee_repository, db_session, hierarchy):
        page = await employee_repository.get_paginated_with_supervisor(1, 50)

        assert len(page) == 6
        assert all(employee not in db_session for employee in page)

    @pytest.mark.asyncio
    async def test_page_populates_supervisor_names(self, employee_repository, hierarchy):
        page = await employee_repository.get_paginated_with_supervisor(1, 50)
        by_id = {e.id: e for e in page}

        assert by_id[hierarchy["employee3"].id].supervisor.full_name == "Manager Two"
        assert by_id[hierarchy["ceo"].id].supervisor is None


class TestGenericOperations:
    @pytest.mark.asyncio
    async def test_any(self, employee_repository, hierarchy):
        assert await employee_repository.any(Employee.email == hierarchy["ceo"].email) is True
        assert await employee_repository.any(Employee.email == "nobody@example.com") is False

    @pytest.mark.asyncio
    async def test_any_without_criteria(self, employee_repository, unit_of_work, db_session):
        assert await employee_repository.any() is False
        db_session.add(make_employee("Only", "One"))
        await unit_of_work.save_changes()
        assert await employee_repository.any() is True

    @pytest.mark.asyncio
    async def test_untracked_get_by_id_is_detached(self, employee_repository, db_session, hierarchy):
        employee = await employee_repository.get_by_id(hierarchy["ceo"].id, tracking=False)
        assert employee is not None
        assert employee not in db_session

    @pytest.mark.asyncio
    async def test_tracked_get_by_id_stays_in_session(
        self, employee_repository, db_session, hierarchy
    ):
        employee = await employee_repository.get_by_id(hierarchy["ceo"].id)
        assert employee in db_session

    @pytest.mark.asyncio
    async def test_remove(self, employee_repository, unit_of_work, hierarchy):
        leaf = await employee_repository.get_by_id(hierarchy["employee2"].id)
        await employee_repository.remove(leaf)
        await unit_of_work.save_changes()

        assert await employee_repository.get_by_id(hierarchy["employee2"].id) is None

    @pytest.mark.asyncio
    async def test_execute_update_returns_rows_affected(
        self, employee_repository, unit_of_work, hierarchy
    ):
        rows = await employee_repository.execute_update(
            {"is_supervisor": True}, Employee.supervisor_id == hierarchy["manager1"].id
        )

        assert rows == 2
        assert unit_of_work.has_pending_changes() is True
        await unit_of_work.save_changes()
        updated = await employee_repository.find(Employee.is_supervisor.is_(True))
        assert hierarchy["employee1"].id in {e.id for e in updated}
