"""
Chat CRUD operations.

Provides chat listing with message counts, eager loading of messages
and folder, and title/content search.

Dependencies: sqlalchemy, chathub.boundary.db.models
System role: Conversation persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from chathub.boundary.db.base import utc_now
from chathub.boundary.db.models.chat_model import ChatModel
from chathub.boundary.db.models.message_model import MessageModel
from chathub.boundary.db.CRUD.base_crud import BaseCRUD

UNFILED = "unfiled"


def _message_count_subquery():
    return (
        select(func.count(MessageModel.id))
        .where(MessageModel.chat_id == ChatModel.id)
        .correlate(ChatModel)
        .scalar_subquery()
    )


class ChatCRUD(BaseCRUD[ChatModel]):
    """CRUD operations for ChatModel."""

    def __init__(self) -> None:
        super().__init__(ChatModel)

    async def list_chats(
        self,
        session: AsyncSession,
        folder_filter: UUID | str | None = None,
    ) -> list[tuple[ChatModel, int]]:
        """
        List chats with their folder and message count, newest first.

        Args:
            session: Async database session
            folder_filter: None for all chats, "unfiled" for chats without
                a folder, or a folder UUID

        Returns:
            list of (chat, message_count) tuples ordered by updated_at desc
        """
        stmt = (
            select(ChatModel, _message_count_subquery())
            .options(selectinload(ChatModel.folder))
            .order_by(ChatModel.updated_at.desc())
        )
        if folder_filter == UNFILED:
            stmt = stmt.where(ChatModel.folder_id.is_(None))
        elif folder_filter is not None:
            stmt = stmt.where(ChatModel.folder_id == folder_filter)

        result = await session.execute(stmt)
        return [(chat, count) for chat, count in result.all()]

    async def list_unarchived_in_folders(self, session: AsyncSession) -> Sequence[ChatModel]:
        """Non-archived chats that are filed in a folder, newest first."""
        stmt = (
            select(ChatModel)
            .where(ChatModel.folder_id.is_not(None), ChatModel.archived.is_(False))
            .order_by(ChatModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_with_messages(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> ChatModel | None:
        """
        Retrieve chat with eagerly loaded folder and ordered messages.

        Args:
            session: Async database session
            id: Chat UUID

        Returns:
            ChatModel with folder and messages loaded, None if not found
        """
        stmt = (
            select(ChatModel)
            .where(ChatModel.id == id)
            .options(selectinload(ChatModel.folder), selectinload(ChatModel.messages))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        session: AsyncSession,
        term: str,
        limit: int = 20,
    ) -> list[tuple[ChatModel, int]]:
        """
        Find chats whose title or any message contains ``term``.

        Matching is case-insensitive and treats LIKE wildcards literally.

        Args:
            session: Async database session
            term: Search term
            limit: Maximum number of chats

        Returns:
            list of (chat, message_count) tuples ordered by updated_at desc
        """
        lowered = term.lower()
        message_match = (
            select(MessageModel.id)
            .where(
                MessageModel.chat_id == ChatModel.id,
                func.lower(MessageModel.content).contains(lowered, autoescape=True),
            )
            .correlate(ChatModel)
            .exists()
        )
        stmt = (
            select(ChatModel, _message_count_subquery())
            .where(
                or_(
                    func.lower(ChatModel.title).contains(lowered, autoescape=True),
                    message_match,
                )
            )
            .options(selectinload(ChatModel.folder))
            .order_by(ChatModel.updated_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(chat, count) for chat, count in result.all()]

    async def touch(self, session: AsyncSession, id: UUID) -> None:
        """Bump the chat's updated_at so it sorts first."""
        await self.update_by_id(session, id, updated_at=utc_now())


chat_crud = ChatCRUD()
