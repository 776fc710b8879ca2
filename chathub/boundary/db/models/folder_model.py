"""
Folder ORM model.

Folders form a tree (self-referencing parent_id) used to organise chats
in the sidebar.

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Folder hierarchy persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chathub.boundary.db.base import Base, UUIDMixin, TimestampMixin


class FolderModel(Base, UUIDMixin, TimestampMixin):
    """
    Folder ORM model.

    Deleting a folder deletes its subfolders (ON DELETE CASCADE on
    parent_id) and unfiles its chats (ON DELETE SET NULL on chats.folder_id).

    Attributes:
        id: UUID primary key (auto-generated)
        name: Display name
        parent_id: Parent folder ID (None for root folders)
        sort_order: Position among siblings
        created_at: Folder creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Folder display name",
    )

    parent_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=True,
        default=None,
        index=True,
        doc="Parent folder ID (None for root folders)",
    )

    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Position among sibling folders",
    )

    # Relationships
    parent = relationship(
        "FolderModel",
        remote_side="FolderModel.id",
        back_populates="children",
    )
    children = relationship(
        "FolderModel",
        back_populates="parent",
        passive_deletes=True,
    )
    chats = relationship(
        "ChatModel",
        back_populates="folder",
        passive_deletes=True,
    )
