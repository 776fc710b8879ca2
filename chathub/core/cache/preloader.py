"""
Connector cache warm-up.

Each connector names the listings worth fetching ahead of the first tool
call; ``preload_all`` fills them in parallel across connectors, and
``cache_status`` reports which of them are missing or stale.

Dependencies: asyncio, chathub.core.cache.connector_cache
System role: Background cache warming for enabled connectors
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

from chathub.core.cache.connector_cache import CacheTTL, ConnectorCache

if TYPE_CHECKING:
    from chathub.core.connectors.base import Connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreloadTarget:
    """One cache entry a connector can fill ahead of time."""

    cache_key: str
    fetcher: Callable[[], Awaitable[Any]]
    ttl: int = CacheTTL.MEDIUM


async def preload_connector(cache: ConnectorCache, connector: "Connector") -> list[dict[str, Any]]:
    """
    Fill every preload target of one connector.

    Fresh entries are left alone. A failing target is reported in its
    result and does not stop the others.

    Returns:
        list[dict]: connectorType, cacheKey, success, fromCache and,
        on failure, error
    """
    results: list[dict[str, Any]] = []
    for target in connector.preload_targets():
        result: dict[str, Any] = {
            "connectorType": connector.type,
            "cacheKey": target.cache_key,
            "success": True,
            "fromCache": False,
        }
        try:
            if await cache.get(connector.connector_id, target.cache_key) is not None:
                result["fromCache"] = True
            else:
                data = await target.fetcher()
                await cache.set(connector.connector_id, target.cache_key, data, target.ttl)
        except Exception as e:
            logger.warning(
                "Cache preload failed",
                extra={"connector_type": connector.type, "cache_key": target.cache_key, "error": str(e)},
            )
            result["success"] = False
            result["error"] = str(e) or type(e).__name__
        results.append(result)
    return results


async def preload_all(cache: ConnectorCache, connectors: Sequence["Connector"]) -> dict[str, Any]:
    """
    Warm the cache for every connector concurrently.

    Returns:
        dict: total, successful, failed, fromCache and the per-target results
    """
    batches = await asyncio.gather(
        *(preload_connector(cache, c) for c in connectors if c.connector_id is not None)
    )
    results = [result for batch in batches for result in batch]
    summary = {
        "total": len(results),
        "successful": sum(1 for r in results if r["success"]),
        "failed": sum(1 for r in results if not r["success"]),
        "fromCache": sum(1 for r in results if r["fromCache"]),
        "results": results,
    }
    logger.info(
        "Connector caches preloaded",
        extra={k: summary[k] for k in ("total", "successful", "failed")},
    )
    return summary


async def cache_status(cache: ConnectorCache, connectors: Sequence["Connector"]) -> list[dict[str, Any]]:
    """
    Report the freshness of each connector's preload targets.

    A target with no entry is stale and has a null expiresAt.
    """
    status: list[dict[str, Any]] = []
    for connector in connectors:
        if connector.connector_id is None:
            continue
        entries = {e["cacheKey"]: e for e in await cache.stats(connector.connector_id)}
        for target in connector.preload_targets():
            entry = entries.get(target.cache_key)
            status.append({
                "connectorId": str(connector.connector_id),
                "type": connector.type,
                "cacheKey": target.cache_key,
                "isStale": entry is None or entry["isExpired"],
                "expiresAt": entry["expiresAt"] if entry else None,
            })
    return status
