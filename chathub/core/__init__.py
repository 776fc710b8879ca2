"""
Core business logic module.

Contains the exception hierarchy, credential encryption, the connector
framework, generic tools and the chat agent.
"""

from chathub.core.exceptions import (
    ChatHubException,
    ValidationError,
    NotFoundError,
    ChatNotFoundError,
    FolderNotFoundError,
    ConnectorError,
    EncryptionError,
)

__all__ = [
    "ChatHubException",
    "ValidationError",
    "NotFoundError",
    "ChatNotFoundError",
    "FolderNotFoundError",
    "ConnectorError",
    "EncryptionError",
]
