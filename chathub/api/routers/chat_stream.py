"""
Streaming chat endpoint.

Routes: POST /chat - Stream a chat completion as newline-delimited JSON

The request transaction (user message and assistant placeholder) is
committed before the stream starts; the reply is written by the stream
itself when it ends.

Dependencies: chathub.application.services, chathub.models.streaming
System role: Streaming chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from chathub.api.deps.dependencies import get_chat_stream_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services.chat_stream_service import ChatStreamService
from chathub.models.streaming import ChatStreamRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat")
@handle_api_errors
async def stream_chat(
    request: ChatStreamRequest,
    stream_service: ChatStreamService = Depends(get_chat_stream_service),
) -> StreamingResponse:
    """
    Run one chat turn.

    Response headers carry the ids of the stored user message and the
    assistant message that the stream fills in.

    Raises:
        HTTPException(400): Missing chatId or message
        HTTPException(404): Chat not found
    """
    turn = await stream_service.prepare(request.chat_id, request.message)
    logger.info("Chat stream starting", extra={"chat_id": str(turn.chat_id)})
    return StreamingResponse(
        stream_service.stream(turn),
        media_type="text/plain; charset=utf-8",
        headers={
            "X-User-Message-Id": str(turn.user_message_id),
            "X-Assistant-Message-Id": str(turn.assistant_message_id),
        },
    )
