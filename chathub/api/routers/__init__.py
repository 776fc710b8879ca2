"""
API routers.

Exports all routers for FastAPI application assembly.
"""

from chathub.api.routers.cache import router as cache_router
from chathub.api.routers.chat_stream import router as chat_stream_router
from chathub.api.routers.chats import router as chats_router
from chathub.api.routers.connectors import router as connectors_router
from chathub.api.routers.folders import router as folders_router
from chathub.api.routers.health import router as health_router
from chathub.api.routers.settings import router as settings_router

__all__ = [
    "cache_router",
    "chat_stream_router",
    "chats_router",
    "connectors_router",
    "folders_router",
    "health_router",
    "settings_router",
]
