"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(), init_models()
  - Domain models and CRUD singletons

Dependencies: sqlalchemy, chathub.configs
System role: Database adapter for chats, folders, connectors and preferences
"""

from chathub.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin
from chathub.boundary.db.models import (
    SINGLETON_ID,
    AppSettingsModel,
    CachedDataModel,
    ChatModel,
    ConnectorModel,
    FolderModel,
    MessageModel,
    MessageRole,
    UserContextModel,
)
from chathub.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    init_models,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "init_models",
    "FolderModel",
    "ChatModel",
    "MessageModel",
    "MessageRole",
    "ConnectorModel",
    "CachedDataModel",
    "UserContextModel",
    "AppSettingsModel",
    "SINGLETON_ID",
]
