"""
Employee API — Unit of Work Tests
===================================

What we test:
    ✅ created_at stamped on commit of an added entity, updated_at left null
    ✅ updated_at stamped on commit of a modified entity, created_at kept
    ✅ has_pending_changes tracks adds, real modifications, entities passed
       to Repository.update() and direct writes
    ✅ rollback discards staged changes
    ✅ timestamps read back from the store are UTC-aware
    ✅ commit failures: IntegrityError propagates, anything else → DatabaseError
"""

from datetime import timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from employee_api.data.unit_of_work import UnitOfWork
from employee_api.exceptions import DatabaseError
from employee_api.models.employee import Employee
from factories import make_employee


class TestAuditStamping:
    @pytest.mark.asyncio
    async def test_added_entity_gets_created_at(self, unit_of_work, db_session, clock):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)

        written = await unit_of_work.save_changes()

        assert written == 1
        assert employee.created_at == clock.utc_now
        assert employee.updated_at is None

    @pytest.mark.asyncio
    async def test_modified_entity_gets_updated_at(self, unit_of_work, db_session, clock):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)
        await unit_of_work.save_changes()
        created_at = employee.created_at

        clock.set(clock.utc_now + timedelta(minutes=5))
        employee.last_name = "King"
        await unit_of_work.save_changes()

        assert employee.created_at == created_at
        assert employee.updated_at == clock.utc_now

    @pytest.mark.asyncio
    async def test_changes_are_persisted(self, unit_of_work, db_session, session_factory):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)
        await unit_of_work.save_changes()

        async with session_factory() as other:
            stored = await other.scalar(select(Employee).where(Employee.id == employee.id))
        assert stored is not None
        assert stored.email == "ada.lovelace@example.com"


class TestPendingChanges:
    @pytest.mark.asyncio
    async def test_nothing_pending_initially(self, unit_of_work):
        assert unit_of_work.has_pending_changes() is False

    @pytest.mark.asyncio
    async def test_add_is_pending(self, unit_of_work, db_session):
        db_session.add(make_employee("Ada", "Lovelace"))
        assert unit_of_work.has_pending_changes() is True

    @pytest.mark.asyncio
    async def test_repository_update_without_changes_is_pending(
        self, unit_of_work, db_session, employee_repository, clock
    ):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)
        await unit_of_work.save_changes()

        employee.first_name = "Ada"
        employee_repository.update(employee)

        assert unit_of_work.has_pending_changes() is True
        clock.set(clock.utc_now + timedelta(minutes=1))
        written = await unit_of_work.save_changes()

        assert written == 1
        assert employee.updated_at == clock.utc_now
        assert unit_of_work.has_pending_changes() is False

    @pytest.mark.asyncio
    async def test_direct_write_is_pending_until_commit(self, unit_of_work):
        unit_of_work.mark_direct_write()
        assert unit_of_work.has_pending_changes() is True

        await unit_of_work.save_changes()

        assert unit_of_work.has_pending_changes() is False

    @pytest.mark.asyncio
    async def test_rollback_discards_staged_add(self, unit_of_work, db_session):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)

        await unit_of_work.rollback()

        assert unit_of_work.has_pending_changes() is False
        assert await db_session.scalar(select(Employee).where(Employee.id == employee.id)) is None


class TestStoredTimestamps:
    @pytest.mark.asyncio
    async def test_reloaded_timestamps_are_utc_aware(
        self, unit_of_work, db_session, session_factory, clock
    ):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)
        await unit_of_work.save_changes()

        async with session_factory() as other:
            stored = await other.get(Employee, employee.id)

        assert stored.created_at.tzinfo is not None
        assert stored.created_at.utcoffset() == timedelta(0)
        assert stored.created_at == clock.utc_now

    @pytest.mark.asyncio
    async def test_offset_timestamps_are_stored_as_utc(
        self, unit_of_work, db_session, session_factory, clock
    ):
        employee = make_employee("Ada", "Lovelace")
        db_session.add(employee)
        plus_two = timezone(timedelta(hours=2))
        clock.set(clock.utc_now.astimezone(plus_two))
        await unit_of_work.save_changes()

        async with session_factory() as other:
            stored = await other.get(Employee, employee.id)

        assert stored.created_at.utcoffset() == timedelta(0)
        assert stored.created_at == clock.utc_now


class TestCommitFailures:
    def failing_unit_of_work(self, clock, error):
        session = MagicMock()
        session.new = []
        session.dirty = []
        session.deleted = []
        session.commit = AsyncMock(side_effect=error)
        session.rollback = AsyncMock()
        return UnitOfWork(session, clock), session

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, clock):
        unit_of_work, session = self.failing_unit_of_work(
            clock, OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )
        unit_of_work.mark_direct_write()

        with pytest.raises(DatabaseError) as exc_info:
            await unit_of_work.save_changes()

        assert exc_info.value.context["operation"] == "commit"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        session.rollback.assert_awaited_once()
        assert unit_of_work.has_pending_changes() is False

    @pytest.mark.asyncio
    async def test_constraint_violation_propagates_unchanged(self, clock):
        unit_of_work, session = self.failing_unit_of_work(
            clock, IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(IntegrityError):
            await unit_of_work.save_changes()
        session.rollback.assert_awaited_once()
