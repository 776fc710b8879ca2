"""
Chat ORM model.

A chat is a persisted conversation: an ordered list of messages that may
be filed in a folder and archived.

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Conversation persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chathub.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin

DEFAULT_CHAT_TITLE = "New Chat"


class ChatModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Display title ("New Chat" until one is generated)
        folder_id: Containing folder (None when unfiled)
        archived: Whether the chat is hidden from the folder tree
        archived_at: When the chat was archived
        messages: Messages in creation order (cascading delete)
    """

    __tablename__ = "chats"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=DEFAULT_CHAT_TITLE,
        doc="Chat display title",
    )

    folder_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        index=True,
        doc="Containing folder ID (None when unfiled)",
    )

    archived: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    archived_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
    )

    # Relationships
    folder = relationship(
        "FolderModel",
        back_populates="chats",
        foreign_keys=[folder_id],
    )
    messages = relationship(
        "MessageModel",
        back_populates="chat",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MessageModel.created_at",
    )
