"""Integration tests for connector and cached-data persistence."""

from datetime import datetime, timedelta, timezone

from chathub.boundary.db.CRUD import cached_data_crud, connector_crud

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestConnectorCRUD:
    async def test_upsert_creates_then_replaces(self, test_async_db):
        # Act
        created = await connector_crud.upsert(test_async_db, "aws", "AWS", "token-1", True)
        replaced = await connector_crud.upsert(test_async_db, "aws", "AWS", "token-2", False)

        # Assert
        assert replaced.id == created.id
        assert replaced.config == "token-2"
        assert replaced.enabled is False
        assert len(await connector_crud.get_all(test_async_db)) == 1

    async def test_list_enabled(self, test_async_db):
        # Arrange
        await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)
        await connector_crud.upsert(test_async_db, "github", "GitHub", "t", False)

        # Act
        enabled = await connector_crud.list_enabled(test_async_db)

        # Assert
        assert [c.type for c in enabled] == ["aws"]

    async def test_delete_by_type(self, test_async_db):
        # Arrange
        await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)

        # Act / Assert
        assert await connector_crud.delete_by_type(test_async_db, "aws") is True
        assert await connector_crud.get_by_type(test_async_db, "aws") is None
        assert await connector_crud.delete_by_type(test_async_db, "aws") is False


class TestCachedDataCRUD:
    async def test_upsert_replaces_entry(self, test_async_db):
        # Arrange
        connector = await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)

        # Act
        await cached_data_crud.upsert(test_async_db, connector.id, "ec2:list", "[1]", NOW)
        await cached_data_crud.upsert(test_async_db, connector.id, "ec2:list", "[2]", NOW + timedelta(minutes=5))

        # Assert
        entries = await cached_data_crud.list_entries(test_async_db, connector.id)
        assert [e.data for e in entries] == ["[2]"]

    async def test_delete_expired_only_removes_old_entries(self, test_async_db):
        # Arrange
        connector = await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)
        await cached_data_crud.upsert(test_async_db, connector.id, "old", "{}", NOW - timedelta(minutes=1))
        await cached_data_crud.upsert(test_async_db, connector.id, "fresh", "{}", NOW + timedelta(minutes=1))

        # Act
        removed = await cached_data_crud.delete_expired(test_async_db, NOW)

        # Assert
        assert removed == 1
        assert await cached_data_crud.get_entry(test_async_db, connector.id, "old") is None
        assert await cached_data_crud.get_entry(test_async_db, connector.id, "fresh") is not None

    async def test_delete_entry_and_for_connector(self, test_async_db):
        # Arrange
        connector = await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)
        for key in ("a", "b", "c"):
            await cached_data_crud.upsert(test_async_db, connector.id, key, "{}", NOW)

        # Act / Assert
        assert await cached_data_crud.delete_entry(test_async_db, connector.id, "a") == 1
        assert await cached_data_crud.delete_for_connector(test_async_db, connector.id) == 2
        assert await cached_data_crud.list_entries(test_async_db) == []
