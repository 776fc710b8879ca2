"""
Connector cache API endpoints.

Routes: GET /cache (entry statistics), DELETE /cache (remove expired entries),
GET /cache/preload (preload freshness), POST /cache/preload (warm the cache)

Dependencies: chathub.application.services, chathub.core.cache
System role: Cache maintenance HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from chathub.api.deps.dependencies import get_connector_cache, get_connector_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services import ConnectorService
from chathub.core.cache import ConnectorCache

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("")
@handle_api_errors
async def get_cache_stats(
    cache: ConnectorCache = Depends(get_connector_cache),
) -> list[dict[str, Any]]:
    return await cache.stats()


@router.delete("")
@handle_api_errors
async def cleanup_cache(
    cache: ConnectorCache = Depends(get_connector_cache),
) -> dict[str, int]:
    return {"cleaned": await cache.cleanup_expired()}


@router.get("/preload")
@handle_api_errors
async def get_preload_status(
    connector_service: ConnectorService = Depends(get_connector_service),
) -> list[dict[str, Any]]:
    """List each enabled connector's preloadable entries and whether they are stale."""
    return await connector_service.cache_status()


@router.post("/preload")
@handle_api_errors
async def preload_cache(
    connector_service: ConnectorService = Depends(get_connector_service),
) -> dict[str, Any]:
    """
    Fetch missing or expired connector listings into the cache.

    Returns:
        dict: total, successful, failed, fromCache and per-entry results
    """
    return await connector_service.preload_caches()
