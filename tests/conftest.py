"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, encryption key, common ids
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import base64
import uuid

import pytest


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    StaticPool keeps one connection so every session sees the same database.
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from chathub.boundary.db.base import Base
    from chathub.boundary.db.connection import enable_sqlite_foreign_keys

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def encryption_key(monkeypatch):
    """Configure a valid AES-256 key and reset the settings cache."""
    from chathub.configs import get_settings

    key = base64.b64encode(b"k" * 32).decode("ascii")
    monkeypatch.setenv("CHATHUB_ENCRYPTION_KEY", key)
    get_settings.cache_clear()
    yield key
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def no_tool_api_keys(monkeypatch):
    """Keep optional generic tools off unless a test configures their keys."""
    from chathub.configs import get_settings

    for name in ("SERP_API_KEY", "TOOLS_SERP_API_KEY", "OPEN_WEATHER_API_KEY", "TOOLS_OPEN_WEATHER_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def chat_id():
    """Generate a test chat ID."""
    return uuid.uuid4()


@pytest.fixture
def folder_id():
    """Generate a test folder ID."""
    return uuid.uuid4()
