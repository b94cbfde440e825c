"""
Vehicle Registry Backend — Database Session Management
========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine, provides a session dependency that
       auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

In-memory provider:
    The default URL is `sqlite+aiosqlite:///:memory:`. An in-memory SQLite
    database lives inside a single connection, so the engine is built with
    StaticPool: every session reuses that one connection and sees the same
    tables. Disposing the engine drops the database and all of its records.
"""

import asyncio
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from vehicle_api.config import settings


def build_engine(url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    In-memory SQLite needs StaticPool and cross-thread access so the single
    backing connection is shared by all sessions. Returning that connection
    must not roll it back, or one session's close would discard another
    session's pending write; VehicleService ends every transaction itself.
    Other URLs get the driver's default pooling.
    """
    kwargs = {"echo": settings.log_level == "DEBUG"}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs["poolclass"] = StaticPool
        kwargs["pool_reset_on_return"] = None
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_async_engine(url, **kwargs)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class LoopLocalLock:
    """
    An asyncio.Lock that is rebuilt whenever it is used from a new event loop.

    A plain module-level asyncio.Lock binds to the first loop that contends
    it and raises RuntimeError under any later loop (a second test, a
    restarted server). Usage is the same as asyncio.Lock:

        async with lock:
            ...
    """

    def __init__(self) -> None:
        self._lock: asyncio.Lock | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _current(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._loop is not loop:
            self._lock = asyncio.Lock()
            self._loop = loop
        return self._lock

    async def __aenter__(self) -> "LoopLocalLock":
        await self._current().acquire()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._lock.release()


_schema_ready = False
_schema_lock = LoopLocalLock()


def schema_ready() -> bool:
    return _schema_ready


async def init_models() -> None:
    """
    Create all tables on the module engine, once.

    Concurrent first requests share one in-memory connection, so creation
    runs under a lock and re-checks the flag once inside it; only the first
    caller issues DDL. Called by the lifespan on startup and lazily by
    `get_db_session` and the health route, since test clients built on
    ASGITransport never trigger lifespan events.
    """
    global _schema_ready
    if _schema_ready:
        return

    async with _schema_lock:
        if _schema_ready:
            return
        # Import models so their tables are registered on Base.metadata
        from vehicle_api.models import vehicle  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        _schema_ready = True


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Ensures the schema exists (first request only)
        2. Creates a new session from the factory and yields it
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session

    Example usage in a route:
        @router.post("/admin/vehicles")
        async def register(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    if not _schema_ready:
        await init_models()

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    Note:  For the in-memory provider this discards every stored record.
    """
    global _schema_ready
    async with _schema_lock:
        await engine.dispose()
        _schema_ready = False
