"""
Folder service orchestrator.

Coordinates the folder tree: listing, creation, renaming and moving
(with cycle detection), and deletion.

Dependencies: chathub.boundary.db.CRUD
System role: Folder use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.CRUD.chat_crud import chat_crud
from chathub.boundary.db.CRUD.folder_crud import folder_crud
from chathub.boundary.db.models.folder_model import FolderModel
from chathub.core.exceptions import FolderNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _folder_to_dict(folder: FolderModel) -> dict[str, Any]:
    return {
        "id": folder.id,
        "name": folder.name,
        "parent_id": folder.parent_id,
        "sort_order": folder.sort_order,
        "created_at": folder.created_at,
        "updated_at": folder.updated_at,
        "children": [],
        "chats": [],
    }


class FolderService:
    """Folder service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize folder service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_tree(self) -> list[dict[str, Any]]:
        """
        Build the folder tree.

        Every node carries its children and its non-archived chats, newest
        first. Siblings are ordered by sort_order then name. A folder whose
        parent no longer exists is returned as a root.

        Returns:
            list[dict]: Root folder nodes
        """
        folders = await folder_crud.list_ordered(self.db)
        chats = await chat_crud.list_unarchived_in_folders(self.db)

        nodes = {folder.id: _folder_to_dict(folder) for folder in folders}
        for chat in chats:
            node = nodes.get(chat.folder_id)
            if node is not None:
                node["chats"].append({
                    "id": chat.id,
                    "title": chat.title,
                    "archived": chat.archived,
                    "updated_at": chat.updated_at,
                })

        roots = []
        for folder in folders:
            node = nodes[folder.id]
            parent = nodes.get(folder.parent_id) if folder.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent["children"].append(node)
        return roots

    async def create_folder(self, name: str, parent_id: UUID | None = None) -> dict[str, Any]:
        """
        Create a folder at the end of its siblings.

        Args:
            name: Folder name (trimmed, must not be blank)
            parent_id: Parent folder, None for a root folder

        Returns:
            dict: Created folder

        Raises:
            ValidationError: If the name is blank
            FolderNotFoundError: If the parent does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Folder name is required", field="name")

        if parent_id is not None and not await folder_crud.exists(self.db, parent_id):
            raise FolderNotFoundError(parent_id, "Parent folder not found")

        max_order = await folder_crud.max_sort_order(self.db, parent_id)
        folder = await folder_crud.create(
            self.db,
            name=name,
            parent_id=parent_id,
            sort_order=(max_order or 0) + 1,
        )
        logger.info(
            "Folder created",
            extra={"folder_id": str(folder.id), "parent_id": str(parent_id) if parent_id else None},
        )
        return _folder_to_dict(folder)

    async def _is_descendant(self, folder_id: UUID, candidate_id: UUID) -> bool:
        """True if ``candidate_id`` lies below ``folder_id`` in the tree."""
        current: UUID | None = candidate_id
        seen: set[UUID] = set()
        while current is not None and current not in seen:
            if current == folder_id:
                return True
            seen.add(current)
            current = await folder_crud.get_parent_id(self.db, current)
        return False

    async def update_folder(self, folder_id: UUID, updates: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a partial update.

        Args:
            folder_id: Folder UUID
            updates: Subset of name, parent_id, sort_order. A present
                ``parent_id`` of None moves the folder to the root.

        Returns:
            dict: Updated folder

        Raises:
            FolderNotFoundError: If the folder or the new parent is missing
            ValidationError: On a blank name or a move that would create a cycle
        """
        if not await folder_crud.exists(self.db, folder_id):
            raise FolderNotFoundError(folder_id)

        values: dict[str, Any] = {}

        if "name" in updates and updates["name"] is not None:
            name = updates["name"].strip()
            if not name:
                raise ValidationError("Folder name cannot be empty", field="name")
            values["name"] = name

        if "parent_id" in updates:
            parent_id = updates["parent_id"]
            if parent_id is not None:
                if parent_id == folder_id:
                    raise ValidationError("Folder cannot be its own parent", field="parentId")
                if not await folder_crud.exists(self.db, parent_id):
                    raise FolderNotFoundError(parent_id, "Parent folder not found")
                if await self._is_descendant(folder_id, parent_id):
                    raise ValidationError("Cannot move folder to its own descendant", field="parentId")
            values["parent_id"] = parent_id

        if updates.get("sort_order") is not None:
            values["sort_order"] = updates["sort_order"]

        folder = await folder_crud.update_by_id(self.db, folder_id, **values)
        logger.info(
            "Folder updated",
            extra={"folder_id": str(folder_id), "fields": sorted(values)},
        )
        return _folder_to_dict(folder)

    async def delete_folder(self, folder_id: UUID) -> None:
        """
        Delete a folder and its subfolders; their chats become unfiled.

        Raises:
            FolderNotFoundError: If the folder does not exist
        """
        deleted = await folder_crud.delete_by_id(self.db, folder_id)
        if not deleted:
            raise FolderNotFoundError(folder_id)
        logger.info("Folder deleted", extra={"folder_id": str(folder_id)})
