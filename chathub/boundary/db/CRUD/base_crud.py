"""
Base CRUD operations for SQLAlchemy models.

Generic create/read/update/delete shared by the model-specific CRUD
classes. Every method flushes and none commits: the request dependency
(or the streaming service's own session) owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic CRUD bound to one model class.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert one row and return it with server/ORM defaults loaded.

        Args:
            session: Async database session
            **kwargs: Model field values
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def create_many(self, session: AsyncSession, rows: Iterable[dict[str, Any]]) -> list[ModelT]:
        """Insert several rows with a single flush, preserving input order."""
        instances = [self.model(**row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """All rows, optionally paginated (``limit=None`` means no limit)."""
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(self, session: AsyncSession, id: Any, **kwargs) -> ModelT | None:
        """
        Assign ``kwargs`` to the row with primary key ``id``.

        Goes through the loaded instance rather than a bulk UPDATE so the
        ``updated_at`` onupdate hook fires and loaded relationships stay
        consistent.

        Returns:
            The updated instance, or None if no row has that id
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await session.flush()
        return instance

    async def delete_by_id(self, session: AsyncSession, id: Any) -> bool:
        """
        Delete by primary key; child rows follow the ON DELETE actions.

        Returns:
            True if a row was deleted
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
