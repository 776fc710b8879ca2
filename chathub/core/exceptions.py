"""
Exception hierarchy for ChatHub.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatHubException(Exception):
    """Base exception for all ChatHub application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ValidationError(ChatHubException):
    """Raised when request input fails business validation (HTTP 400)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(ChatHubException):
    """Raised when a referenced entity does not exist (HTTP 404)."""


class ChatNotFoundError(NotFoundError):
    """Raised when a chat cannot be found."""

    def __init__(self, chat_id: Any) -> None:
        super().__init__("Chat not found", {"chat_id": str(chat_id)})


class FolderNotFoundError(NotFoundError):
    """Raised when a folder (or a requested parent folder) cannot be found."""

    def __init__(self, folder_id: Any, message: str = "Folder not found") -> None:
        super().__init__(message, {"folder_id": str(folder_id)})


class ConnectorError(ChatHubException):
    """Raised when a connector cannot be built or queried."""

    def __init__(
        self,
        message: str,
        connector_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if connector_type:
            details["connector_type"] = connector_type
        super().__init__(message, details)


class EncryptionError(ChatHubException):
    """Raised when credential encryption or decryption fails."""
