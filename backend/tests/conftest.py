"""
Vehicle Registry Backend — Test Configuration (conftest.py)
=============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (failure paths, no real DB)
    ├── db_session: Real session on the in-memory store, disposed afterwards
    ├── store_count: Coroutine returning the current number of records
    ├── test_client: HTTPX AsyncClient for API endpoint testing
    ├── opaque_token / admin_token / viewer_token: bearer strings
    └── fusca_payload: the canonical registration body

Every fixture that touches the store disposes the engine on teardown, so
each test starts from the empty store a fresh process would have.
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTH_VERIFY_TOKENS"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vehicle_api.database import async_session_factory, dispose_engine, init_models
from vehicle_api.services.vehicle_service import vehicle_service


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for exercising error handling without a database.

    Usage:
        mock_db_session.commit.side_effect = RuntimeError("boom")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_session():
    """A real session on the in-memory store; the store is dropped afterwards."""
    await init_models()
    async with async_session_factory() as session:
        yield session
        await session.commit()
    await dispose_engine()


@pytest_asyncio.fixture
async def store_count():
    """
    Returns a coroutine function reporting how many records the store holds.

    Usage:
        assert await store_count() == 1
    """

    async def _count() -> int:
        await init_models()
        async with async_session_factory() as session:
            return await vehicle_service.count(session)

    yield _count
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from vehicle_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dispose_engine()


@pytest.fixture
def fusca_payload():
    return {"id": 1, "modelo": "Fusca", "placa": "AAA1234", "ano": 1985}


@pytest.fixture
def opaque_token():
    """Not a JWT at all."""
    return "faketoken"


@pytest.fixture
def admin_token():
    """A JWT claiming the admin role, signed with a key the server never sees."""
    return jwt.encode({"sub": "alice", "role": "admin"}, "someone-elses-key-0123456789abcdef", algorithm="HS256")


@pytest.fixture
def viewer_token():
    """A decodable JWT without the admin role."""
    return jwt.encode({"sub": "bob", "role": "viewer"}, "someone-elses-key-0123456789abcdef", algorithm="HS256")
