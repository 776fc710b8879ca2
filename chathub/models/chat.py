"""
Chat and message schemas.

Request/response schemas for chat, message, fork and search operations.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from chathub.models.common import CamelModel

MessageRoleLiteral = Literal["user", "assistant", "system", "tool"]


class FolderRef(CamelModel):
    id: uuid.UUID
    name: str


class CreateChatRequest(CamelModel):
    """Request schema for creating a chat."""

    title: str | None = Field(None, max_length=255, description="Chat title, defaults to 'New Chat'")
    folder_id: uuid.UUID | None = Field(None, description="Folder to file the chat in")


class UpdateChatRequest(CamelModel):
    """Partial update; ``folderId: null`` unfiles the chat."""

    title: str | None = Field(None, max_length=255)
    folder_id: uuid.UUID | None = None
    archived: bool | None = None


class ForkChatRequest(CamelModel):
    """Fork options; an explicit ``folderId: null`` forks into no folder."""

    title: str | None = Field(None, max_length=255)
    folder_id: uuid.UUID | None = None


class CreateMessageRequest(CamelModel):
    """Request schema for appending a message to a chat."""

    role: str = Field(..., description="One of user, assistant, system, tool")
    content: str
    tool_calls: list[dict[str, Any]] | dict[str, Any] | None = None
    tool_name: str | None = None


class MessageResponse(CamelModel):
    id: uuid.UUID
    chat_id: uuid.UUID
    role: MessageRoleLiteral
    content: str
    tool_calls: list[dict[str, Any]] | dict[str, Any] | None = None
    tool_name: str | None = None
    created_at: datetime


class ChatResponse(CamelModel):
    """Chat as listed in the sidebar."""

    id: uuid.UUID
    title: str
    folder_id: uuid.UUID | None
    folder: FolderRef | None = None
    archived: bool
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    message_count: int = 0


class ChatDetailResponse(ChatResponse):
    """Chat with its full message history."""

    messages: list[MessageResponse] = Field(default_factory=list)


class SearchMessageMatch(CamelModel):
    id: uuid.UUID
    role: MessageRoleLiteral
    excerpt: str
    created_at: datetime


class SearchResult(CamelModel):
    id: uuid.UUID
    title: str
    folder: FolderRef | None = None
    message_count: int
    updated_at: datetime
    matching_messages: list[SearchMessageMatch] = Field(default_factory=list)


class SearchResponse(CamelModel):
    results: list[SearchResult] = Field(default_factory=list)
