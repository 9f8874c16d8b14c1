"""
Employee API — Auditable Entity Base
======================================

What:  Abstract ORM base shared by every persisted entity.
How:   Provides the UUID primary key and the audit columns. The audit
       columns are written only at commit time by the unit of work
       (set_auditable_add / set_auditable_modified), never by handlers.

Audit rules:
    created_at   set once, when an added entity is committed
    updated_at   NULL until the first committed modification,
                 then refreshed on every committed modification
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, TypeDecorator, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.database import Base


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamps on every backend.

    SQLite stores DATETIME as text without an offset, so values come back
    naive; they are read back as UTC. Aware values are converted to UTC
    before they are written.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    @staticmethod
    def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return self._as_utc(value)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return self._as_utc(value)


class Entity(Base):
    """Abstract base: identifier + audit timestamps."""

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Assigned by the unit of work just before the INSERT is flushed.
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
    )

    def set_auditable_add(self, created_at: datetime) -> None:
        self.created_at = created_at
        self.updated_at = None

    def set_auditable_modified(self, modified_at: datetime) -> None:
        self.updated_at = modified_at
