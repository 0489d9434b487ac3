"""
RoomForge Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_session:      AsyncSession on a fresh, empty in-memory database
    ├── seeded_session:  db_session with the demo rooms and bookings loaded
    └── test_client:     HTTPX AsyncClient talking to the app, demo data loaded

Every fixture that touches the database disposes the engine when the test
ends. With the in-memory SQLite engine that drops the whole database, so no
state leaks between tests.
"""

import os

# Settings are read at import time: configure before importing roomforge
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from roomforge.database import async_session_factory, dispose_engine, init_models
from roomforge.services.seed import seed_demo_data


@pytest_asyncio.fixture
async def db_session():
    """
    Provides an AsyncSession on an empty database.

    The session is rolled back and the engine disposed afterwards, which
    discards the in-memory database.
    """
    await init_models()
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
    await dispose_engine()


@pytest_asyncio.fixture
async def seeded_session(db_session):
    """db_session with the 8 demo rooms and 15 demo bookings."""
    await seed_demo_data(db_session)
    await db_session.flush()
    return db_session


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the fixture prepares the
    database (tables + demo data) itself.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from roomforge.main import app, prepare_database

    await prepare_database()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dispose_engine()
