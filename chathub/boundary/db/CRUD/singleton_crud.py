"""
Singleton-row CRUD operations.

User context and settings are stored as a single row with id "singleton".

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Per-install preferences persistence operations
"""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.models.singleton_models import (
    SINGLETON_ID,
    AppSettingsModel,
    UserContextModel,
)
from chathub.boundary.db.CRUD.base_crud import BaseCRUD

SingletonT = TypeVar("SingletonT", AppSettingsModel, UserContextModel)


class SingletonCRUD(BaseCRUD[SingletonT]):
    """CRUD for a model whose table holds exactly one row."""

    async def get(self, session: AsyncSession) -> SingletonT | None:
        return await self.get_by_id(session, SINGLETON_ID)

    async def get_or_create(self, session: AsyncSession, **defaults) -> SingletonT:
        """
        Return the singleton row, creating it with ``defaults`` if absent.

        Args:
            session: Async database session
            **defaults: Field values for a newly created row

        Returns:
            The singleton instance
        """
        instance = await self.get(session)
        if instance is None:
            instance = await self.create(session, id=SINGLETON_ID, **defaults)
        return instance

    async def upsert(self, session: AsyncSession, **values) -> SingletonT:
        """Update the singleton row with ``values``, creating it if absent."""
        instance = await self.get(session)
        if instance is None:
            return await self.create(session, id=SINGLETON_ID, **values)
        return await self.update_by_id(session, SINGLETON_ID, **values)


settings_crud: SingletonCRUD[AppSettingsModel] = SingletonCRUD(AppSettingsModel)
user_context_crud: SingletonCRUD[UserContextModel] = SingletonCRUD(UserContextModel)
