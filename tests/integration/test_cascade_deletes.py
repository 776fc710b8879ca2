"""
Integration tests for ON DELETE behaviour.

Deletes go through the database, so identity-map state is expired
before re-reading affected rows.
"""

from datetime import datetime, timezone

from chathub.boundary.db.CRUD import cached_data_crud, chat_crud, connector_crud, folder_crud, message_crud


class TestCascadeDeletes:
    async def test_deleting_chat_removes_messages(self, test_async_db):
        # Arrange
        chat = await chat_crud.create(test_async_db, title="Doomed")
        message = await message_crud.create(test_async_db, chat_id=chat.id, role="user", content="hi")
        message_id = message.id

        # Act
        await chat_crud.delete_by_id(test_async_db, chat.id)
        test_async_db.expire_all()

        # Assert
        assert await message_crud.get_by_id(test_async_db, message_id) is None

    async def test_deleting_folder_unfiles_chats_and_removes_subfolders(self, test_async_db):
        # Arrange
        root = await folder_crud.create(test_async_db, name="Root")
        child = await folder_crud.create(test_async_db, name="Child", parent_id=root.id)
        chat = await chat_crud.create(test_async_db, title="Filed", folder_id=child.id)
        child_id, chat_id = child.id, chat.id

        # Act
        await folder_crud.delete_by_id(test_async_db, root.id)
        test_async_db.expire_all()

        # Assert
        assert await folder_crud.exists(test_async_db, child_id) is False
        reloaded = await chat_crud.get_by_id(test_async_db, chat_id)
        assert reloaded is not None
        assert reloaded.folder_id is None

    async def test_deleting_connector_removes_cached_data(self, test_async_db):
        # Arrange
        connector = await connector_crud.upsert(test_async_db, "aws", "AWS", "t", True)
        await cached_data_crud.upsert(
            test_async_db, connector.id, "s3:buckets", "[]", datetime(2030, 1, 1, tzinfo=timezone.utc)
        )

        # Act
        await connector_crud.delete_by_type(test_async_db, "aws")
        test_async_db.expire_all()

        # Assert
        assert await cached_data_crud.list_entries(test_async_db) == []
