"""
Chat service orchestrator.

Coordinates chat lifecycle, messages, forking and search.

Dependencies: chathub.boundary.db.CRUD, chathub.boundary.db.models
System role: Chat use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.base import utc_now
from chathub.boundary.db.CRUD.chat_crud import chat_crud
from chathub.boundary.db.CRUD.folder_crud import folder_crud
from chathub.boundary.db.CRUD.message_crud import message_crud
from chathub.boundary.db.models.chat_model import DEFAULT_CHAT_TITLE, ChatModel
from chathub.boundary.db.models.message_model import MessageModel, MessageRole
from chathub.core.exceptions import ChatNotFoundError, FolderNotFoundError, ValidationError

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
EXCERPT_CONTEXT = 50
EXCERPT_FALLBACK_LENGTH = 150
MATCHES_PER_CHAT = 3


def message_to_dict(message: MessageModel) -> dict[str, Any]:
    return {
        "id": message.id,
        "chat_id": message.chat_id,
        "role": message.role,
        "content": message.content,
        "tool_calls": message.tool_calls,
        "tool_name": message.tool_name,
        "created_at": message.created_at,
    }


def _folder_ref(chat: ChatModel) -> dict[str, Any] | None:
    if chat.folder is None:
        return None
    return {"id": chat.folder.id, "name": chat.folder.name}


def chat_to_dict(chat: ChatModel, message_count: int) -> dict[str, Any]:
    """Serialize a chat whose folder relationship is loaded."""
    return {
        "id": chat.id,
        "title": chat.title,
        "folder_id": chat.folder_id,
        "folder": _folder_ref(chat),
        "archived": chat.archived,
        "archived_at": chat.archived_at,
        "created_at": chat.created_at,
        "updated_at": chat.updated_at,
        "message_count": message_count,
    }


def make_excerpt(content: str, term: str) -> str:
    """
    Excerpt of ``content`` around the first case-insensitive match of ``term``.

    Keeps 50 characters either side and marks cut ends with "...". Without
    a match, content over 150 characters is shortened to its start.
    """
    index = content.lower().find(term.lower())
    if index != -1:
        start = max(0, index - EXCERPT_CONTEXT)
        end = min(len(content), index + len(term) + EXCERPT_CONTEXT)
        return (
            ("..." if start > 0 else "")
            + content[start:end]
            + ("..." if end < len(content) else "")
        )
    if len(content) > EXCERPT_FALLBACK_LENGTH:
        return content[:EXCERPT_FALLBACK_LENGTH] + "..."
    return content


class ChatService:
    """Chat service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize chat service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _ensure_folder(self, folder_id: UUID | None) -> None:
        if folder_id is not None and not await folder_crud.exists(self.db, folder_id):
            raise FolderNotFoundError(folder_id)

    async def _load_detail(self, chat_id: UUID) -> dict[str, Any]:
        chat = await chat_crud.get_with_messages(self.db, chat_id)
        if chat is None:
            raise ChatNotFoundError(chat_id)
        data = chat_to_dict(chat, len(chat.messages))
        data["messages"] = [message_to_dict(m) for m in chat.messages]
        return data

    async def list_chats(self, folder_filter: UUID | str | None = None) -> list[dict[str, Any]]:
        """
        List chats with folder and message count, most recently updated first.

        Args:
            folder_filter: None for all chats, "unfiled", or a folder UUID
        """
        rows = await chat_crud.list_chats(self.db, folder_filter)
        return [chat_to_dict(chat, count) for chat, count in rows]

    async def create_chat(
        self,
        title: str | None = None,
        folder_id: UUID | None = None,
    ) -> dict[str, Any]:
        """
        Create an empty chat.

        Args:
            title: Optional title, trimmed; defaults to "New Chat"
            folder_id: Optional folder

        Returns:
            dict: Chat with folder and an empty message list

        Raises:
            FolderNotFoundError: If ``folder_id`` does not exist
        """
        await self._ensure_folder(folder_id)
        chat = await chat_crud.create(
            self.db,
            title=(title or "").strip() or DEFAULT_CHAT_TITLE,
            folder_id=folder_id,
        )
        logger.info(
            "Chat created",
            extra={"chat_id": str(chat.id), "folder_id": str(folder_id) if folder_id else None},
        )
        return await self._load_detail(chat.id)

    async def get_chat(self, chat_id: UUID) -> dict[str, Any]:
        """
        Get chat with folder and messages in creation order.

        Raises:
            ChatNotFoundError: If chat does not exist
        """
        return await self._load_detail(chat_id)

    async def update_chat(self, chat_id: UUID, updates: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a partial update.

        Args:
            chat_id: Chat UUID
            updates: Subset of title, folder_id, archived. A present
                ``folder_id`` of None unfiles the chat.

        Raises:
            ChatNotFoundError: If chat does not exist
            FolderNotFoundError: If the new folder does not exist
        """
        if not await chat_crud.exists(self.db, chat_id):
            raise ChatNotFoundError(chat_id)

        values: dict[str, Any] = {}
        if updates.get("title") is not None:
            values["title"] = updates["title"].strip() or UNTITLED
        if "folder_id" in updates:
            await self._ensure_folder(updates["folder_id"])
            values["folder_id"] = updates["folder_id"]
        if updates.get("archived") is not None:
            values["archived"] = updates["archived"]
            values["archived_at"] = utc_now() if updates["archived"] else None

        await chat_crud.update_by_id(self.db, chat_id, **values)
        logger.info("Chat updated", extra={"chat_id": str(chat_id), "fields": sorted(values)})
        return await self._load_detail(chat_id)

    async def delete_chat(self, chat_id: UUID) -> None:
        """
        Delete a chat and its messages.

        Raises:
            ChatNotFoundError: If chat does not exist
        """
        if not await chat_crud.delete_by_id(self.db, chat_id):
            raise ChatNotFoundError(chat_id)
        logger.info("Chat deleted", extra={"chat_id": str(chat_id)})

    async def add_message(
        self,
        chat_id: UUID,
        role: str,
        content: str,
        tool_calls: Any = None,
        tool_name: str | None = None,
    ) -> dict[str, Any]:
        """
        Append a message and bump the chat's updated_at.

        Raises:
            ValidationError: If ``role`` is not a known message role
            ChatNotFoundError: If chat does not exist
        """
        if role not in {r.value for r in MessageRole}:
            raise ValidationError(f"Invalid role: {role}", field="role")
        if not await chat_crud.exists(self.db, chat_id):
            raise ChatNotFoundError(chat_id)

        message = await message_crud.create(
            self.db,
            chat_id=chat_id,
            role=role,
            content=content,
            tool_calls=tool_calls,
            tool_name=tool_name,
        )
        await chat_crud.touch(self.db, chat_id)
        logger.debug("Message added", extra={"chat_id": str(chat_id), "role": role})
        return message_to_dict(message)

    async def fork_chat(self, chat_id: UUID, options: dict[str, Any]) -> dict[str, Any]:
        """
        Copy a chat and all its messages into a new chat.

        Args:
            chat_id: Source chat UUID
            options: Optional title and folder_id. Without ``folder_id`` the
                fork stays in the source folder; an explicit None unfiles it.

        Returns:
            dict: The new chat with its messages

        Raises:
            ChatNotFoundError: If the source chat does not exist
            FolderNotFoundError: If the requested folder does not exist
        """
        original = await chat_crud.get_with_messages(self.db, chat_id)
        if original is None:
            raise ChatNotFoundError(chat_id)

        if "folder_id" in options:
            folder_id = options["folder_id"]
            await self._ensure_folder(folder_id)
        else:
            folder_id = original.folder_id

        title = (options.get("title") or "").strip() or f"{original.title} (Fork)"
        source_messages = list(original.messages)

        fork = await chat_crud.create(self.db, title=title, folder_id=folder_id)
        await message_crud.create_many(
            self.db,
            (
                {
                    "chat_id": fork.id,
                    "role": message.role,
                    "content": message.content,
                    "tool_calls": message.tool_calls,
                    "tool_name": message.tool_name,
                    "created_at": message.created_at,
                }
                for message in source_messages
            ),
        )

        logger.info(
            "Chat forked",
            extra={
                "source_chat_id": str(chat_id),
                "chat_id": str(fork.id),
                "message_count": len(source_messages),
            },
        )
        return await self._load_detail(fork.id)

    async def search_chats(self, query: str | None, limit: int = 20) -> list[dict[str, Any]]:
        """
        Search chat titles and message content.

        Args:
            query: Search term; blank returns no results
            limit: Maximum number of chats

        Returns:
            list[dict]: Chats with up to three matching message excerpts each
        """
        term = (query or "").strip()
        if not term:
            return []

        rows = await chat_crud.search(self.db, term, limit)
        results = []
        for chat, count in rows:
            matches = await message_crud.matching(self.db, chat.id, term, MATCHES_PER_CHAT)
            results.append({
                "id": chat.id,
                "title": chat.title,
                "folder": _folder_ref(chat),
                "message_count": count,
                "updated_at": chat.updated_at,
                "matching_messages": [
                    {
                        "id": m.id,
                        "role": m.role,
                        "excerpt": make_excerpt(m.content, term),
                        "created_at": m.created_at,
                    }
                    for m in matches
                ],
            })

        logger.info("Chat search completed", extra={"term_length": len(term), "results": len(results)})
        return results
