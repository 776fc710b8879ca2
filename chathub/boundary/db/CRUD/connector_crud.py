"""
Connector CRUD operations.

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Connector configuration persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.models.connector_model import ConnectorModel
from chathub.boundary.db.CRUD.base_crud import BaseCRUD


class ConnectorCRUD(BaseCRUD[ConnectorModel]):
    """CRUD operations for ConnectorModel, keyed by connector type."""

    def __init__(self) -> None:
        super().__init__(ConnectorModel)

    async def get_by_type(self, session: AsyncSession, type: str) -> ConnectorModel | None:
        """Connector row for ``type`` if configured."""
        stmt = select(ConnectorModel).where(ConnectorModel.type == type)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_enabled(self, session: AsyncSession) -> Sequence[ConnectorModel]:
        """All enabled connector rows."""
        stmt = select(ConnectorModel).where(ConnectorModel.enabled.is_(True))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def upsert(
        self,
        session: AsyncSession,
        type: str,
        name: str,
        config: str,
        enabled: bool,
    ) -> ConnectorModel:
        """
        Create or replace the connector row for ``type``.

        Args:
            session: Async database session
            type: Connector type key
            name: Display name
            config: Encrypted config token
            enabled: Whether the connector is enabled

        Returns:
            The created or updated ConnectorModel
        """
        existing = await self.get_by_type(session, type)
        if existing is None:
            return await self.create(session, type=type, name=name, config=config, enabled=enabled)
        return await self.update_by_id(session, existing.id, name=name, config=config, enabled=enabled)

    async def delete_by_type(self, session: AsyncSession, type: str) -> bool:
        """Delete the connector row for ``type``; False if none existed."""
        stmt = delete(ConnectorModel).where(ConnectorModel.type == type)
        result = await session.execute(stmt)
        return result.rowcount > 0


connector_crud = ConnectorCRUD()
