"""
Employee API — Unit of Work
=============================

What:  Per-request transactional scope wrapping one AsyncSession.
How:   Repositories stage changes on the session (add/remove/attribute
       writes); nothing reaches the database until save_changes() runs, which
       stamps audit timestamps from the injected clock, flushes and commits.
Who:   Created per request by dependencies.py; committed by
       UnitOfWorkBehavior after a successful command.

Change detection:
    session.new      → entities to INSERT  → set_auditable_add(now)
    session.dirty    → entities to UPDATE  → set_auditable_modified(now)
                       (only those with net attribute changes)
    mark_modified    → entities handed to Repository.update(), stamped and
                       written even when no value changed
    session.deleted  → entities to DELETE
    direct writes    → UPDATE statements already executed in the open
                       transaction (Repository.execute_update)
"""

import logging
from typing import List, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.clock import Clock
from employee_api.exceptions import DatabaseError
from employee_api.models.base import Entity

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session: AsyncSession, clock: Clock):
        self.session = session
        self.clock = clock
        self._has_direct_writes = False
        self._marked: Set[Entity] = set()

    def mark_direct_write(self) -> None:
        """Records that a statement modified rows outside the change tracker."""
        self._has_direct_writes = True

    def mark_modified(self, entity: Entity) -> None:
        """Schedules an UPDATE for `entity` even if no attribute value changed."""
        self._marked.add(entity)

    def _modified_entities(self) -> List[Entity]:
        session = self.session
        modified = [
            entity
            for entity in session.dirty
            if isinstance(entity, Entity) and session.is_modified(entity)
        ]
        for entity in self._marked:
            if entity in session and entity not in session.new and entity not in session.deleted:
                if entity not in modified:
                    modified.append(entity)
        return modified

    def has_pending_changes(self) -> bool:
        session = self.session
        if session.new or session.deleted or self._has_direct_writes:
            return True
        return bool(self._modified_entities())

    def _reset(self) -> None:
        self._has_direct_writes = False
        self._marked.clear()

    async def save_changes(self) -> int:
        """
        Stamps audit fields, then flushes and commits every pending change.

        Returns:
            Number of tracked entities written (direct writes not included).

        Raises:
            IntegrityError: a unique or foreign key constraint failed
            DatabaseError:  any other store failure during the commit
        """
        now = self.clock.utc_now
        added = [entity for entity in self.session.new if isinstance(entity, Entity)]
        modified = self._modified_entities()
        for entity in added:
            entity.set_auditable_add(now)
        for entity in modified:
            entity.set_auditable_modified(now)
        written = len(self.session.new) + len(self.session.deleted) + len(modified)

        try:
            await self.session.commit()
        except IntegrityError:
            await self.rollback()
            raise
        except SQLAlchemyError as e:
            await self.rollback()
            raise DatabaseError(context={"operation": "commit", "error": str(e)}) from e

        self._reset()
        logger.debug("Unit of work committed %d entities", written)
        return written

    async def rollback(self) -> None:
        """Discards every staged change and the open transaction."""
        await self.session.rollback()
        self._reset()
