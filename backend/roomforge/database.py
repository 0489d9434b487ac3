"""
RoomForge Backend — Database Session Management
================================================

What:  The storage plumbing: one async engine, a session factory, the
       per-request session dependency and table creation.
How:   Routes receive a session through Depends(get_db_session); the unit
       of work commits when the handler returns and rolls back if it raises.

Engine Strategy:
    SQLite (default, in-memory):
        StaticPool keeps exactly one connection open for the whole process.
        An in-memory SQLite database exists only as long as its connection,
        so a regular pool would hand every request an empty database.

    Server databases (PostgreSQL via asyncpg):
        Regular QueuePool sized from settings, with pre-ping and hourly
        recycling of connections.

Request Serialization:
    Every session is opened under `write_lock`, an asyncio.Lock, and the lock
    is held until the session commits or rolls back. Requests therefore run
    one at a time against shared state, and a booking's conflict check and
    its insert can never interleave with another request's write.
"""

import asyncio
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from roomforge.config import settings


def _engine_options() -> Dict[str, Any]:
    """Builds create_async_engine() keyword arguments for the configured backend."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
        options["pool_pre_ping"] = settings.db_pool_pre_ping
        options["pool_recycle"] = 3600
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response models read attributes after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# One unit of work at a time
write_lock = asyncio.Lock()


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Declarative base of the Room and Booking models.

    Shares one metadata object between the models, create_all() at startup
    and Alembic's autogenerate.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yields one session per request, inside the write lock.

    The handler's changes are committed after it returns. Any exception
    rolls them back and propagates to the exception handlers. The lock is
    released only after the session is closed.

    Example usage in a route:
        @router.get("/rooms")
        async def list_rooms(db: AsyncSession = Depends(get_db_session)):
            return await room_service.list_rooms(db)
    """
    async with write_lock:
        async with async_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    What:  Creates all tables that do not exist yet.
    When:  Called during application startup when CREATE_TABLES_ON_STARTUP is set,
           and by the test suite before every test.
    """
    # Register the mapped classes on Base.metadata
    from roomforge.models import booking, room  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    Close every pooled connection. Runs at shutdown and after each test;
    with the in-memory SQLite default it also drops the database.
    """
    await engine.dispose()
