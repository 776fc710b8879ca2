"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from chathub.boundary.db.CRUD import chat_crud, folder_crud

    chat = await chat_crud.get_with_messages(db, chat_id)
"""

from chathub.boundary.db.CRUD.base_crud import BaseCRUD
from chathub.boundary.db.CRUD.folder_crud import FolderCRUD, folder_crud
from chathub.boundary.db.CRUD.chat_crud import UNFILED, ChatCRUD, chat_crud
from chathub.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from chathub.boundary.db.CRUD.connector_crud import ConnectorCRUD, connector_crud
from chathub.boundary.db.CRUD.cached_data_crud import CachedDataCRUD, cached_data_crud
from chathub.boundary.db.CRUD.singleton_crud import (
    SingletonCRUD,
    settings_crud,
    user_context_crud,
)

__all__ = [
    "BaseCRUD",
    "FolderCRUD",
    "folder_crud",
    "ChatCRUD",
    "chat_crud",
    "UNFILED",
    "MessageCRUD",
    "message_crud",
    "ConnectorCRUD",
    "connector_crud",
    "CachedDataCRUD",
    "cached_data_crud",
    "SingletonCRUD",
    "settings_crud",
    "user_context_crud",
]
