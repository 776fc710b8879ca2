"""
Connector response cache.

Database-backed, TTL-bound cache for expensive connector API calls. Each
operation opens its own short-lived session so tools running inside a
streaming response can use it without the request session.

Dependencies: sqlalchemy, chathub.boundary.db
System role: Memoisation layer for connector tools
"""

import json
import logging
from datetime import timedelta
from enum import IntEnum
from typing import Any, Awaitable, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chathub.boundary.db.base import utc_now
from chathub.boundary.db.connection import get_async_session_factory
from chathub.boundary.db.CRUD.cached_data_crud import cached_data_crud

logger = logging.getLogger(__name__)


class CacheTTL(IntEnum):
    """TTL presets in seconds."""

    SHORT = 5 * 60
    MEDIUM = 15 * 60
    LONG = 60 * 60
    DAY = 24 * 60 * 60


class CacheKeys:
    AWS_PIPELINES = "aws:pipelines"
    AWS_LAMBDAS = "aws:lambdas"


class ConnectorCache:
    """
    Cache keyed by (connector_id, cache_key).

    Args:
        session_factory: Session factory; defaults to the application one
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory or get_async_session_factory()

    async def get(self, connector_id: UUID, cache_key: str) -> Any | None:
        """
        Return cached data, or None when missing, expired or unreadable.

        Expired entries are deleted on read.
        """
        async with self._session_factory() as session:
            entry = await cached_data_crud.get_entry(session, connector_id, cache_key)
            if entry is None:
                return None

            if utc_now() > entry.expires_at:
                await cached_data_crud.delete_entry(session, connector_id, cache_key)
                await session.commit()
                logger.debug(
                    "Cache entry expired",
                    extra={"connector_id": str(connector_id), "cache_key": cache_key},
                )
                return None

            try:
                return json.loads(entry.data)
            except json.JSONDecodeError:
                logger.warning(
                    "Cache entry is not valid JSON",
                    extra={"connector_id": str(connector_id), "cache_key": cache_key},
                )
                return None

    async def set(
        self,
        connector_id: UUID,
        cache_key: str,
        data: Any,
        ttl: int = CacheTTL.MEDIUM,
    ) -> None:
        expires_at = utc_now() + timedelta(seconds=int(ttl))
        async with self._session_factory() as session:
            await cached_data_crud.upsert(
                session,
                connector_id=connector_id,
                cache_key=cache_key,
                data=json.dumps(data),
                expires_at=expires_at,
            )
            await session.commit()

    async def get_or_fetch(
        self,
        connector_id: UUID,
        cache_key: str,
        fetcher: Callable[[], Awaitable[Any]],
        ttl: int = CacheTTL.MEDIUM,
    ) -> Any:
        """
        Return cached data or call ``fetcher`` and cache its result.

        Exceptions raised by ``fetcher`` propagate and nothing is cached.
        """
        cached = await self.get(connector_id, cache_key)
        if cached is not None:
            logger.debug(
                "Cache hit",
                extra={"connector_id": str(connector_id), "cache_key": cache_key},
            )
            return cached

        data = await fetcher()
        await self.set(connector_id, cache_key, data, ttl)
        return data

    async def invalidate(self, connector_id: UUID, cache_key: str | None = None) -> int:
        """Drop one key, or every key of the connector when ``cache_key`` is None."""
        async with self._session_factory() as session:
            if cache_key is None:
                removed = await cached_data_crud.delete_for_connector(session, connector_id)
            else:
                removed = await cached_data_crud.delete_entry(session, connector_id, cache_key)
            await session.commit()
        return removed

    async def cleanup_expired(self) -> int:
        async with self._session_factory() as session:
            removed = await cached_data_crud.delete_expired(session, utc_now())
            await session.commit()
        logger.info("Expired cache entries removed", extra={"count": removed})
        return removed

    async def stats(self, connector_id: UUID | None = None) -> list[dict[str, Any]]:
        """
        Describe cached entries, most recently updated first.

        Returns:
            list[dict]: connectorId, cacheKey, expiresAt, createdAt,
            updatedAt, isExpired and ttlRemaining (milliseconds)
        """
        async with self._session_factory() as session:
            entries = await cached_data_crud.list_entries(session, connector_id)

        now = utc_now()
        stats = []
        for entry in sorted(entries, key=lambda e: e.updated_at, reverse=True):
            expires_at = entry.expires_at
            remaining = (expires_at - now).total_seconds()
            stats.append({
                "connectorId": str(entry.connector_id),
                "cacheKey": entry.cache_key,
                "expiresAt": expires_at.isoformat(),
                "createdAt": entry.created_at.isoformat(),
                "updatedAt": entry.updated_at.isoformat(),
                "isExpired": remaining < 0,
                "ttlRemaining": max(0, int(remaining * 1000)),
            })
        return stats
