"""
Folder CRUD operations.

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Folder tree persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.models.folder_model import FolderModel
from chathub.boundary.db.CRUD.base_crud import BaseCRUD


class FolderCRUD(BaseCRUD[FolderModel]):
    """CRUD operations for FolderModel."""

    def __init__(self) -> None:
        super().__init__(FolderModel)

    async def list_ordered(self, session: AsyncSession) -> Sequence[FolderModel]:
        """Return every folder ordered by sort_order, then name."""
        stmt = select(FolderModel).order_by(FolderModel.sort_order, FolderModel.name)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def max_sort_order(
        self,
        session: AsyncSession,
        parent_id: UUID | None,
    ) -> int | None:
        """
        Highest sort_order among the children of ``parent_id``.

        Args:
            session: Async database session
            parent_id: Parent folder ID, None for root folders

        Returns:
            Maximum sort_order, or None when there are no siblings
        """
        stmt = select(func.max(FolderModel.sort_order))
        if parent_id is None:
            stmt = stmt.where(FolderModel.parent_id.is_(None))
        else:
            stmt = stmt.where(FolderModel.parent_id == parent_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_parent_id(self, session: AsyncSession, id: UUID) -> UUID | None:
        """Parent of folder ``id`` (None for roots and unknown folders)."""
        stmt = select(FolderModel.parent_id).where(FolderModel.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


folder_crud = FolderCRUD()
