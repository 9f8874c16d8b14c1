"""
Employee API — Generic Repository
===================================

What:  CRUD operations over one entity type, bound to a unit of work.
How:   Criteria are SQLAlchemy column expressions, e.g.
           await repo.any(Employee.email == email)
           await repo.find(Employee.supervisor_id == boss_id, tracking=False)
       Writes are staged on the session; the unit of work commits them.

Tracking:
    tracking=True   the returned entities stay in the session, so attribute
                    changes are picked up by the next save_changes()
    tracking=False  entities the session did not already hold are expunged
                    after loading; changing them never writes anything
"""

import uuid
from typing import Any, Generic, List, Mapping, Optional, Sequence, Set, Tuple, Type, TypeVar

from sqlalchemy import ColumnElement, Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.data.unit_of_work import UnitOfWork
from employee_api.models.base import Entity

TEntity = TypeVar("TEntity", bound=Entity)


class Repository(Generic[TEntity]):
    model: Type[TEntity]

    def __init__(self, unit_of_work: UnitOfWork):
        self.unit_of_work = unit_of_work

    @property
    def session(self) -> AsyncSession:
        return self.unit_of_work.session

    # ── Tracking helpers ──────────────────────────────────────────────────

    def _identity_snapshot(self) -> Set[Tuple[Any, ...]]:
        return set(self.session.identity_map.keys())

    def _detach_new(self, entities: Sequence[Entity], snapshot: Set[Tuple[Any, ...]]) -> None:
        """Expunges entities loaded by the last query that were not held before it."""
        for entity in entities:
            key = self.session.identity_key(instance=entity)
            if key not in snapshot and entity in self.session:
                self.session.expunge(entity)

    async def _scalars(self, statement: Select, tracking: bool) -> List[TEntity]:
        snapshot = None if tracking else self._identity_snapshot()
        result = await self.session.execute(statement)
        entities = list(result.scalars().all())
        if snapshot is not None:
            self._detach_new(entities, snapshot)
        return entities

    # ── Reads ─────────────────────────────────────────────────────────────

    def statement(self) -> Select:
        return select(self.model)

    def paginated_statement(self, page: int, page_size: int) -> Select:
        """`page` is 1-based; skip = (page - 1) * page_size."""
        skip = (page - 1) * page_size
        return self.statement().offset(skip).limit(page_size)

    async def get_by_id(self, entity_id: uuid.UUID, tracking: bool = True) -> Optional[TEntity]:
        entities = await self._scalars(
            self.statement().where(self.model.id == entity_id), tracking
        )
        return entities[0] if entities else None

    async def first_or_default(
        self, *criteria: ColumnElement[bool], tracking: bool = True
    ) -> Optional[TEntity]:
        entities = await self._scalars(self.statement().where(*criteria).limit(1), tracking)
        return entities[0] if entities else None

    async def find(self, *criteria: ColumnElement[bool], tracking: bool = True) -> List[TEntity]:
        return await self._scalars(self.statement().where(*criteria), tracking)

    async def get_all(self, tracking: bool = True) -> List[TEntity]:
        return await self._scalars(self.statement(), tracking)

    async def any(self, *criteria: ColumnElement[bool]) -> bool:
        statement = select(self.model.id).where(*criteria).exists()
        result = await self.session.execute(select(statement))
        return bool(result.scalar())

    # ── Writes (staged until the unit of work commits) ────────────────────

    def add(self, entity: TEntity) -> TEntity:
        self.session.add(entity)
        return entity

    async def remove(self, entity: TEntity) -> TEntity:
        await self.session.delete(entity)
        return entity

    def update(self, *entities: TEntity) -> None:
        """
        Re-attaches entities and marks them modified, so each one is stamped
        and written on commit even when no value changed.
        """
        for entity in entities:
            if entity not in self.session:
                self.session.add(entity)
            self.unit_of_work.mark_modified(entity)

    async def execute_update(
        self, values: Mapping[str, Any], *criteria: ColumnElement[bool]
    ) -> int:
        """
        Issues a direct UPDATE for every row matching `criteria`.

        Runs inside the request transaction without loading the rows, so no
        audit interception happens: callers include `updated_at` in `values`.
        Rows already in the session are updated in place by evaluating
        `criteria` in Python, so criteria must be simple column comparisons.

        Returns:
            Number of rows affected.
        """
        statement = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(statement)
        self.unit_of_work.mark_direct_write()
        return result.rowcount
