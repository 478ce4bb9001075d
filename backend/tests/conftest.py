"""
LinkShelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Unit-test fixtures (no database):
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    └── sample_link_data: a complete POST /api/links body

    API fixtures (real SQL against in-memory SQLite):
    ├── db_engine: fresh database with both tables, one per test
    ├── session_factory: sessions bound to db_engine
    └── test_client: HTTPX AsyncClient wired to a fresh app; the real
                     get_db_session dependency draws from session_factory

    Lifecycle fixtures (SQLite file under tmp_path):
    ├── database_file_url: aiosqlite URL of the file
    └── file_engine: engine installed as linkshelf.database.engine
"""

import os

# Override settings for testing BEFORE any linkshelf imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from linkshelf import database  # noqa: E402
from linkshelf.database import build_engine, init_models  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_link(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = link
            result = await link_service.get_link(mock_db_session, "abc")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_link_data():
    """A complete, valid POST /api/links body."""
    return {
        "id": "lnk-1700000000000",
        "url": "https://docs.python.org/3/library/asyncio.html",
        "notes": "Event loop reference",
        "folder": "Python",
        "tags": ["python", "asyncio", "reference"],
        "created": "2024-03-01T09:30:00.000Z",
    }


# ══════════════════════════════════════════════════════════════════════════
# Database & API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite with the links and folders tables.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    The app keeps its real get_db_session dependency; only the module's
    session factory is pointed at the in-memory test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    from linkshelf.main import create_app

    monkeypatch.setattr(database, "async_session_factory", session_factory)
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# File-Backed Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def database_file_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'links.db'}"


@pytest_asyncio.fixture
async def file_engine(database_file_url, monkeypatch):
    """
    A SQLite file database installed as the application's engine.

    No tables exist yet. linkshelf.database.engine and its session factory
    are replaced for the duration of the test, so init_models(),
    dispose_engine() and get_db_session() all run against this file.
    """
    engine = build_engine(database_file_url)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database,
        "async_session_factory",
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
    )
    yield engine
    await engine.dispose()
