"""
Message CRUD operations.

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Chat message persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.models.message_model import MessageModel
from chathub.boundary.db.CRUD.base_crud import BaseCRUD


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def matching(
        self,
        session: AsyncSession,
        chat_id: UUID,
        term: str,
        limit: int = 3,
    ) -> Sequence[MessageModel]:
        """
        Newest messages of a chat whose content contains ``term``.

        Args:
            session: Async database session
            chat_id: Chat UUID
            term: Case-insensitive search term
            limit: Maximum number of messages

        Returns:
            Matching messages ordered by created_at desc
        """
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.chat_id == chat_id,
                func.lower(MessageModel.content).contains(term.lower(), autoescape=True),
            )
            .order_by(MessageModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()
