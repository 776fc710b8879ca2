"""
Folder API endpoints.

Routes:
- GET /folders - Folder tree with chats
- POST /folders - Create folder
- PATCH /folders/{id} - Rename, move or reorder folder
- DELETE /folders/{id} - Delete folder and subfolders

Dependencies: chathub.application.services, chathub.models
System role: Folder management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from chathub.api.deps.dependencies import get_folder_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services.folder_service import FolderService
from chathub.models.common import SuccessResponse
from chathub.models.folder import CreateFolderRequest, FolderResponse, UpdateFolderRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=list[FolderResponse])
@handle_api_errors
async def list_folders(
    folder_service: FolderService = Depends(get_folder_service),
) -> list[FolderResponse]:
    """Folder tree; roots ordered by sort order then name."""
    return await folder_service.get_tree()


@router.post("", response_model=FolderResponse, status_code=201)
@handle_api_errors
async def create_folder(
    request: CreateFolderRequest,
    folder_service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """
    Create a folder.

    Raises:
        HTTPException(400): Blank name
        HTTPException(404): Parent folder not found
    """
    return await folder_service.create_folder(name=request.name, parent_id=request.parent_id)


@router.patch("/{folder_id}", response_model=FolderResponse)
@handle_api_errors
async def update_folder(
    folder_id: UUID,
    request: UpdateFolderRequest,
    folder_service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """
    Update a folder. Only fields present in the body are applied.

    Raises:
        HTTPException(400): Blank name or a move that would create a cycle
        HTTPException(404): Folder or new parent not found
    """
    return await folder_service.update_folder(folder_id, request.model_dump(exclude_unset=True))


@router.delete("/{folder_id}", response_model=SuccessResponse)
@handle_api_errors
async def delete_folder(
    folder_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> SuccessResponse:
    """Delete a folder and its subfolders; their chats become unfiled."""
    await folder_service.delete_folder(folder_id)
    return SuccessResponse()
