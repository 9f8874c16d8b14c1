"""
Employee API — Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       per-request session dependency.
How:   One engine per process; one AsyncSession per request. The session
       dependency never commits: writes are committed by the unit-of-work
       behavior of the mediator pipeline, and anything left uncommitted
       when the request ends is rolled back.
Who:   Route dependencies (see dependencies.py), the seeder, the test suite.

Engine Strategy:
    SQLite (default, in-memory):
        StaticPool: every session shares the single in-memory connection,
        otherwise each connection would see its own empty database.
    Server databases (e.g. postgresql+asyncpg):
        pool_size / max_overflow / pool_pre_ping from settings,
        pool_recycle=3600.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from employee_api.config import Settings, settings


def build_engine(config: Optional[Settings] = None, url: Optional[str] = None) -> AsyncEngine:
    """
    Creates an async engine for the configured database URL.

    Args:
        config: Settings to read pool options from (defaults to the singleton)
        url:    Overrides config.database_url (tests use a private in-memory DB)
    """
    config = config or settings
    database_url = url or config.database_url

    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=config.log_level == "DEBUG",
        )

    return create_async_engine(
        database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        echo=config.log_level == "DEBUG",
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: response DTOs are built from entities after commit
    # autoflush=False: pending writes reach the database only at the commit point
    return async_sessionmaker(
        bind, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine()
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object; create_tables() builds the schema from it.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the request's unit of work
        3. On error: rolls back, then re-raises for the global handler
        4. Always: closes the session, discarding any uncommitted work

    A cancelled request skips the rollback branch (CancelledError is not an
    Exception) but close() still discards the open transaction.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Creates every table registered on Base.metadata (idempotent)."""
    # Models must be imported so their tables are registered on the metadata
    from employee_api import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Closes all pooled connections; called on application shutdown."""
    await engine.dispose()
