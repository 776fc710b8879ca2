"""
Connector cache CRUD operations.

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Connector response cache persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.models.connector_model import CachedDataModel
from chathub.boundary.db.CRUD.base_crud import BaseCRUD


class CachedDataCRUD(BaseCRUD[CachedDataModel]):
    """CRUD operations for CachedDataModel, keyed by (connector_id, cache_key)."""

    def __init__(self) -> None:
        super().__init__(CachedDataModel)

    async def get_entry(
        self,
        session: AsyncSession,
        connector_id: UUID,
        cache_key: str,
    ) -> CachedDataModel | None:
        stmt = select(CachedDataModel).where(
            CachedDataModel.connector_id == connector_id,
            CachedDataModel.cache_key == cache_key,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        connector_id: UUID,
        cache_key: str,
        data: str,
        expires_at: datetime,
    ) -> CachedDataModel:
        """Store ``data`` under (connector_id, cache_key), replacing any previous entry."""
        existing = await self.get_entry(session, connector_id, cache_key)
        if existing is None:
            return await self.create(
                session,
                connector_id=connector_id,
                cache_key=cache_key,
                data=data,
                expires_at=expires_at,
            )
        return await self.update_by_id(session, existing.id, data=data, expires_at=expires_at)

    async def delete_entry(self, session: AsyncSession, connector_id: UUID, cache_key: str) -> int:
        stmt = delete(CachedDataModel).where(
            CachedDataModel.connector_id == connector_id,
            CachedDataModel.cache_key == cache_key,
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def delete_for_connector(self, session: AsyncSession, connector_id: UUID) -> int:
        stmt = delete(CachedDataModel).where(CachedDataModel.connector_id == connector_id)
        result = await session.execute(stmt)
        return result.rowcount

    async def delete_expired(self, session: AsyncSession, now: datetime) -> int:
        """Delete entries that expired before ``now``; returns the number removed."""
        stmt = delete(CachedDataModel).where(CachedDataModel.expires_at < now)
        result = await session.execute(stmt)
        return result.rowcount

    async def list_entries(
        self,
        session: AsyncSession,
        connector_id: UUID | None = None,
    ) -> Sequence[CachedDataModel]:
        stmt = select(CachedDataModel)
        if connector_id is not None:
            stmt = stmt.where(CachedDataModel.connector_id == connector_id)
        result = await session.execute(stmt)
        return result.scalars().all()


cached_data_crud = CachedDataCRUD()
