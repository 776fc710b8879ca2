"""
Message ORM model.

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Chat message persistence
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chathub.boundary.db.base import Base, UTCDateTime, UUIDMixin, utc_now


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class MessageModel(Base, UUIDMixin):
    """
    Message ORM model.

    Messages are immutable apart from the assistant placeholder, which is
    filled in once streaming completes.

    Attributes:
        id: UUID primary key (auto-generated)
        chat_id: Owning chat (ON DELETE CASCADE)
        role: One of MessageRole values
        content: Message text
        tool_calls: Tool call records made while producing this message
        tool_name: Tool name for role="tool" messages
        created_at: Creation timestamp (UTC), defines message order
    """

    __tablename__ = "messages"

    chat_id: Mapped[UUID] = mapped_column(
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        doc="user, assistant, system or tool",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    tool_calls: Mapped[list | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        doc="Tool call records: [{toolCallId, toolName, args, result}]",
    )

    tool_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        nullable=False,
    )

    chat = relationship("ChatModel", back_populates="messages")
