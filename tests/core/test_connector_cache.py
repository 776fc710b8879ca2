"""
Tests for ConnectorCache.

Entries need a connector row because cached data cascades with it.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from chathub.boundary.db.base import utc_now
from chathub.boundary.db.CRUD.cached_data_crud import cached_data_crud
from chathub.boundary.db.CRUD.connector_crud import connector_crud
from chathub.core.cache import CacheTTL, ConnectorCache


@pytest.fixture
def cache(test_session_factory):
    return ConnectorCache(test_session_factory)


@pytest.fixture
async def connector_id(test_session_factory):
    async with test_session_factory() as session:
        row = await connector_crud.create(
            session, type="aws", name="AWS", config="token", enabled=True
        )
        await session.commit()
        return row.id


async def expire_entry(session_factory, connector_id, key):
    async with session_factory() as session:
        entry = await cached_data_crud.get_entry(session, connector_id, key)
        await cached_data_crud.update_by_id(
            session, entry.id, expires_at=utc_now() - timedelta(seconds=5)
        )
        await session.commit()


class TestGetAndSet:
    async def test_round_trip(self, cache, connector_id):
        # Act
        await cache.set(connector_id, "aws:lambdas", [{"name": "fn"}])

        # Assert
        assert await cache.get(connector_id, "aws:lambdas") == [{"name": "fn"}]

    async def test_missing_entry(self, cache, connector_id):
        assert await cache.get(connector_id, "nothing") is None

    async def test_set_replaces_existing_entry(self, cache, connector_id, test_session_factory):
        # Act
        await cache.set(connector_id, "k", 1)
        await cache.set(connector_id, "k", 2)

        # Assert
        assert await cache.get(connector_id, "k") == 2
        async with test_session_factory() as session:
            assert len(await cached_data_crud.list_entries(session, connector_id)) == 1

    async def test_expired_entry_is_deleted_on_read(self, cache, connector_id, test_session_factory):
        # Arrange
        await cache.set(connector_id, "k", "v")
        await expire_entry(test_session_factory, connector_id, "k")

        # Act
        value = await cache.get(connector_id, "k")

        # Assert
        assert value is None
        async with test_session_factory() as session:
            assert await cached_data_crud.get_entry(session, connector_id, "k") is None


class TestGetOrFetch:
    async def test_fetches_once_then_serves_cache(self, cache, connector_id):
        # Arrange
        fetcher = AsyncMock(return_value={"pipelines": []})

        # Act
        first = await cache.get_or_fetch(connector_id, "aws:pipelines", fetcher)
        second = await cache.get_or_fetch(connector_id, "aws:pipelines", fetcher)

        # Assert
        assert first == second == {"pipelines": []}
        fetcher.assert_awaited_once()

    async def test_fetch_error_is_not_cached(self, cache, connector_id):
        # Arrange
        fetcher = AsyncMock(side_effect=RuntimeError("boom"))

        # Act / Assert
        with pytest.raises(RuntimeError):
            await cache.get_or_fetch(connector_id, "k", fetcher)
        assert await cache.get(connector_id, "k") is None


class TestMaintenance:
    async def test_invalidate_single_key_and_all(self, cache, connector_id):
        # Arrange
        await cache.set(connector_id, "a", 1)
        await cache.set(connector_id, "b", 2)
        await cache.set(connector_id, "c", 3)

        # Act
        single = await cache.invalidate(connector_id, "a")
        rest = await cache.invalidate(connector_id)

        # Assert
        assert single == 1
        assert rest == 2

    async def test_cleanup_and_stats(self, cache, connector_id, test_session_factory):
        # Arrange
        await cache.set(connector_id, "fresh", 1, ttl=CacheTTL.LONG)
        await cache.set(connector_id, "stale", 2)
        await expire_entry(test_session_factory, connector_id, "stale")

        # Act
        before = {s["cacheKey"]: s for s in await cache.stats()}
        cleaned = await cache.cleanup_expired()
        after = await cache.stats(connector_id)

        # Assert
        assert before["stale"]["isExpired"] is True
        assert before["stale"]["ttlRemaining"] == 0
        assert before["fresh"]["isExpired"] is False
        assert 0 < before["fresh"]["ttlRemaining"] <= CacheTTL.LONG * 1000
        assert before["fresh"]["connectorId"] == str(connector_id)
        assert cleaned == 1
        assert [s["cacheKey"] for s in after] == ["fresh"]

    async def test_entries_removed_with_connector(self, cache, connector_id, test_session_factory):
        # Arrange
        await cache.set(connector_id, "k", 1)

        # Act
        async with test_session_factory() as session:
            await connector_crud.delete_by_type(session, "aws")
            await session.commit()

        # Assert
        assert await cache.stats() == []
