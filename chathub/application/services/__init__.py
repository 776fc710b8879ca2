from chathub.application.services.chat_service import ChatService
from chathub.application.services.chat_stream_service import ChatStreamService, ChatTurn
from chathub.application.services.connector_service import ConnectorService
from chathub.application.services.folder_service import FolderService
from chathub.application.services.settings_service import ContextService, SettingsService

__all__ = [
    "ChatService",
    "ChatStreamService",
    "ChatTurn",
    "ConnectorService",
    "ContextService",
    "FolderService",
    "SettingsService",
]
