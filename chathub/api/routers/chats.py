"""
Chat API endpoints.

Routes:
- GET /chats - List chats (optionally by folder or "unfiled")
- POST /chats - Create chat
- GET /chats/search - Search titles and messages
- GET /chats/{id} - Chat with messages
- PATCH /chats/{id} - Rename, move or archive chat
- DELETE /chats/{id} - Delete chat
- POST /chats/{id} - Append message
- POST /chats/{id}/fork - Copy chat with its messages

Dependencies: chathub.application.services, chathub.models
System role: Chat management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query

from chathub.api.deps.dependencies import get_chat_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services.chat_service import ChatService
from chathub.boundary.db.CRUD.chat_crud import UNFILED
from chathub.core.exceptions import ValidationError
from chathub.models.chat import (
    ChatDetailResponse,
    ChatResponse,
    CreateChatRequest,
    CreateMessageRequest,
    ForkChatRequest,
    MessageResponse,
    SearchResponse,
    UpdateChatRequest,
)
from chathub.models.common import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["chats"])


def _parse_folder_filter(folder_id: str | None) -> UUID | str | None:
    if folder_id is None or folder_id == UNFILED:
        return folder_id
    try:
        return UUID(folder_id)
    except ValueError as e:
        raise ValidationError("Invalid folderId", field="folderId") from e


@router.get("", response_model=list[ChatResponse])
@handle_api_errors
async def list_chats(
    folder_id: str | None = Query(None, alias="folderId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[ChatResponse]:
    """
    List chats, most recently updated first.

    Args:
        folder_id: Folder UUID, "unfiled", or omitted for all chats
    """
    return await chat_service.list_chats(_parse_folder_filter(folder_id))


@router.post("", response_model=ChatDetailResponse, status_code=201)
@handle_api_errors
async def create_chat(
    request: CreateChatRequest | None = Body(None),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatDetailResponse:
    """
    Create a chat.

    Raises:
        HTTPException(404): Folder not found
    """
    request = request or CreateChatRequest()
    return await chat_service.create_chat(title=request.title, folder_id=request.folder_id)


@router.get("/search", response_model=SearchResponse)
@handle_api_errors
async def search_chats(
    q: str | None = None,
    limit: int = Query(20, ge=1, le=100),
    chat_service: ChatService = Depends(get_chat_service),
) -> SearchResponse:
    """Case-insensitive search over chat titles and message content."""
    results = await chat_service.search_chats(q, limit)
    return SearchResponse(results=results)


@router.get("/{chat_id}", response_model=ChatDetailResponse)
@handle_api_errors
async def get_chat(
    chat_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatDetailResponse:
    """
    Chat with folder and messages.

    Raises:
        HTTPException(404): Chat not found
    """
    return await chat_service.get_chat(chat_id)


@router.patch("/{chat_id}", response_model=ChatDetailResponse)
@handle_api_errors
async def update_chat(
    chat_id: UUID,
    request: UpdateChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatDetailResponse:
    """
    Update a chat. Only fields present in the body are applied.

    Raises:
        HTTPException(404): Chat or folder not found
    """
    return await chat_service.update_chat(chat_id, request.model_dump(exclude_unset=True))


@router.delete("/{chat_id}", response_model=SuccessResponse)
@handle_api_errors
async def delete_chat(
    chat_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse:
    """Delete a chat and its messages."""
    await chat_service.delete_chat(chat_id)
    return SuccessResponse()


@router.post("/{chat_id}", response_model=MessageResponse, status_code=201)
@handle_api_errors
async def add_message(
    chat_id: UUID,
    request: CreateMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> MessageResponse:
    """
    Append a message to a chat.

    Raises:
        HTTPException(400): Invalid role
        HTTPException(404): Chat not found
    """
    return await chat_service.add_message(
        chat_id,
        role=request.role,
        content=request.content,
        tool_calls=request.tool_calls,
        tool_name=request.tool_name,
    )


@router.post("/{chat_id}/fork", response_model=ChatDetailResponse, status_code=201)
@handle_api_errors
async def fork_chat(
    chat_id: UUID,
    request: ForkChatRequest | None = Body(None),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatDetailResponse:
    """
    Fork a chat into a new chat with copies of its messages.

    Raises:
        HTTPException(404): Chat or folder not found
    """
    options = request.model_dump(exclude_unset=True) if request else {}
    return await chat_service.fork_chat(chat_id, options)
