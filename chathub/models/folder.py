"""
Folder schemas.

Dependencies: pydantic
System role: Folder API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from chathub.models.common import CamelModel


class CreateFolderRequest(CamelModel):
    """Request schema for creating a folder."""

    name: str = Field(..., max_length=255, description="Folder name")
    parent_id: uuid.UUID | None = Field(None, description="Parent folder, omitted for a root folder")


class UpdateFolderRequest(CamelModel):
    """
    Request schema for updating a folder.

    Only fields present in the payload are applied; ``parentId: null``
    moves the folder to the root.
    """

    name: str | None = Field(None, max_length=255)
    parent_id: uuid.UUID | None = None
    sort_order: int | None = None


class FolderChatSummary(CamelModel):
    id: uuid.UUID
    title: str
    archived: bool
    updated_at: datetime


class FolderResponse(CamelModel):
    """Folder node; ``children`` is populated for tree responses."""

    id: uuid.UUID
    name: str
    parent_id: uuid.UUID | None
    sort_order: int
    created_at: datetime
    updated_at: datetime
    children: list["FolderResponse"] = Field(default_factory=list)
    chats: list[FolderChatSummary] = Field(default_factory=list)
