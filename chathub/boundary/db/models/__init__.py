"""
Database models package.

Exports:
  - FolderModel, ChatModel, MessageModel, MessageRole: Conversation entities
  - ConnectorModel, CachedDataModel: Connector credentials and response cache
  - UserContextModel, AppSettingsModel, SINGLETON_ID: Singleton rows

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Database model definitions for domain entities
"""

from chathub.boundary.db.models.folder_model import FolderModel
from chathub.boundary.db.models.chat_model import ChatModel, DEFAULT_CHAT_TITLE
from chathub.boundary.db.models.message_model import MessageModel, MessageRole
from chathub.boundary.db.models.connector_model import CachedDataModel, ConnectorModel
from chathub.boundary.db.models.singleton_models import (
    SINGLETON_ID,
    AppSettingsModel,
    UserContextModel,
)

__all__ = [
    "FolderModel",
    "ChatModel",
    "DEFAULT_CHAT_TITLE",
    "MessageModel",
    "MessageRole",
    "ConnectorModel",
    "CachedDataModel",
    "UserContextModel",
    "AppSettingsModel",
    "SINGLETON_ID",
]
