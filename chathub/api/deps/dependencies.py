"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: chathub.application, chathub.boundary, chathub.core
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.application.services import (
    ChatService,
    ChatStreamService,
    ConnectorService,
    ContextService,
    FolderService,
    SettingsService,
)
from chathub.application.services.chat_stream_service import ChatModelFactory
from chathub.boundary.db import get_async_db, get_async_session_factory
from chathub.core.agentic_system.agent import create_chat_model
from chathub.core.cache import ConnectorCache


@lru_cache
def get_connector_cache() -> ConnectorCache:
    """Get connector cache singleton."""
    return ConnectorCache(get_async_session_factory())


def get_chat_model_factory() -> ChatModelFactory:
    """
    Get the chat model factory.

    Tests override this dependency with a fake model.
    """
    return create_chat_model


def get_folder_service(db: AsyncSession = Depends(get_async_db, scope="function")) -> FolderService:
    """
    Get folder service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        FolderService: Folder service instance
    """
    return FolderService(db=db)


def get_chat_service(db: AsyncSession = Depends(get_async_db, scope="function")) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service instance
    """
    return ChatService(db=db)


def get_connector_service(
    db: AsyncSession = Depends(get_async_db, scope="function"),
    cache: ConnectorCache = Depends(get_connector_cache),
) -> ConnectorService:
    return ConnectorService(db=db, cache=cache)


def get_settings_service(db: AsyncSession = Depends(get_async_db, scope="function")) -> SettingsService:
    return SettingsService(db=db)


def get_context_service(db: AsyncSession = Depends(get_async_db, scope="function")) -> ContextService:
    return ContextService(db=db)


def get_chat_stream_service(
    db: AsyncSession = Depends(get_async_db, scope="function"),
    model_factory: ChatModelFactory = Depends(get_chat_model_factory),
    cache: ConnectorCache = Depends(get_connector_cache),
) -> ChatStreamService:
    """
    Get chat stream service instance.

    Args:
        db: Request session used to prepare the turn
        model_factory: Chat model factory (injected via Depends)
        cache: Connector cache (injected via Depends)

    Returns:
        ChatStreamService: Service whose stream writes through its own sessions
    """
    return ChatStreamService(
        db=db,
        model_factory=model_factory,
        session_factory=get_async_session_factory(),
        cache=cache,
    )
