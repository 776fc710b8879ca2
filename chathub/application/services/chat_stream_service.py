"""
Chat stream service orchestrator.

Runs one chat turn: persists the user message, assembles prompt, model
and tools, streams the agent's events as NDJSON, then stores the
assistant reply and generates a title for new chats.

Dependencies: chathub.boundary.db, chathub.core.agentic_system, chathub.core.connectors
System role: Streaming chat use case orchestration
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_core.tools import BaseTool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chathub.application.services.connector_service import ConnectorService
from chathub.boundary.db.CRUD.chat_crud import chat_crud
from chathub.boundary.db.CRUD.message_crud import message_crud
from chathub.boundary.db.CRUD.singleton_crud import settings_crud, user_context_crud
from chathub.boundary.db.models.chat_model import DEFAULT_CHAT_TITLE
from chathub.boundary.db.models.message_model import MessageRole
from chathub.configs import get_settings
from chathub.core.agentic_system.agent import (
    ChatAgent,
    EnabledConnector,
    build_history,
    build_system_prompt,
    generate_title,
)
from chathub.core.cache import ConnectorCache
from chathub.core.exceptions import ChatNotFoundError, ValidationError
from chathub.core.tools import get_generic_tools
from chathub.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

# Strong references to finish tasks that outlive a cancelled stream
_finish_tasks: set[asyncio.Task] = set()

ChatModelFactory = Callable[[str | None, int | None], BaseChatModel]


@dataclass
class ChatTurn:
    """Everything the stream needs once the request transaction is committed."""

    chat_id: UUID
    user_message_id: UUID
    assistant_message_id: UUID
    model_id: str
    messages: list[BaseMessage]
    tools: list[BaseTool] = field(default_factory=list)
    first_message: str | None = None


class ChatStreamService:
    """Chat stream service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        model_factory: ChatModelFactory,
        session_factory: async_sessionmaker[AsyncSession],
        cache: ConnectorCache | None = None,
    ) -> None:
        """
        Initialize chat stream service.

        Args:
            db: Request-scoped session used while preparing the turn
            model_factory: Builds a chat model from (model_id, max_tokens)
            session_factory: Opens sessions for writes after streaming
            cache: Cache handed to connector instances
        """
        self.db = db
        self.model_factory = model_factory
        self.session_factory = session_factory
        self.cache = cache

    async def prepare(self, chat_id: UUID, message: str) -> ChatTurn:
        """
        Persist the user message and an empty assistant message.

        Commits before returning so the stream can run in its own session.

        Raises:
            ValidationError: If the message is blank
            ChatNotFoundError: If chat does not exist
        """
        if not message or not message.strip():
            raise ValidationError("Message is required", field="message")

        chat = await chat_crud.get_with_messages(self.db, chat_id)
        if chat is None:
            raise ChatNotFoundError(chat_id)
        prior = [(m.role, m.content) for m in chat.messages]
        is_first_user_message = not any(role == MessageRole.USER.value for role, _ in prior)
        needs_title = is_first_user_message and chat.title == DEFAULT_CHAT_TITLE

        app_settings = await settings_crud.get_or_create(self.db)
        user_context = await user_context_crud.get(self.db)

        user_message = await message_crud.create(
            self.db, chat_id=chat_id, role=MessageRole.USER.value, content=message
        )

        connectors = await ConnectorService(self.db, self.cache).get_enabled_connectors()
        tools = get_generic_tools()
        system_prompt = build_system_prompt(
            user_context=user_context.content if user_context else None,
            additional_instructions=app_settings.system_prompt,
            enabled_connectors=[EnabledConnector(type=c.type, name=c.name) for c in connectors],
            generic_tools=[t.name for t in tools],
        )

        for connector in connectors:
            tools.extend(connector.get_tools())

        assistant_message = await message_crud.create(
            self.db, chat_id=chat_id, role=MessageRole.ASSISTANT.value, content=""
        )
        await chat_crud.touch(self.db, chat_id)
        await self.db.commit()

        logger.info(
            "Chat turn prepared",
            extra={
                "chat_id": str(chat_id),
                "model_id": app_settings.selected_model,
                "tool_count": len(tools),
                "connector_count": len(connectors),
            },
        )
        return ChatTurn(
            chat_id=chat_id,
            user_message_id=user_message.id,
            assistant_message_id=assistant_message.id,
            model_id=app_settings.selected_model,
            messages=build_history(system_prompt, prior) + [HumanMessage(content=message)],
            tools=tools,
            first_message=message if needs_title else None,
        )

    async def stream(self, turn: ChatTurn) -> AsyncGenerator[str, None]:
        """
        Stream NDJSON events for a prepared turn.

        A failure is reported as an error event. The text produced so far
        is saved even when the client disconnects mid-stream.

        Yields:
            str: One JSON event per line
        """
        llm = get_settings().llm
        full_text = ""
        tool_records: list[dict[str, Any]] = []
        pending: dict[str, dict[str, Any]] = {}

        try:
            agent = ChatAgent(
                self.model_factory(turn.model_id, None),
                tools=turn.tools,
                max_rounds=llm.max_tool_rounds,
            )
            async for event in agent.astream(turn.messages):
                if event.type == StreamEventType.TEXT:
                    full_text += event.data["text"]
                elif event.type == StreamEventType.TOOL_CALL:
                    record = {
                        "toolCallId": event.data["toolCallId"],
                        "toolName": event.data["toolName"],
                        "args": event.data["args"],
                    }
                    pending[record["toolCallId"]] = record
                    tool_records.append(record)
                elif event.type == StreamEventType.TOOL_RESULT:
                    record = pending.get(event.data["toolCallId"])
                    if record is not None:
                        record["result"] = event.data["result"]
                yield event.to_ndjson()
        except Exception as e:
            logger.exception(
                "Chat stream failed",
                extra={"chat_id": str(turn.chat_id), "error": str(e)},
            )
            yield StreamEvent.error(str(e) or "Stream failed").to_ndjson()
        finally:
            finish = asyncio.ensure_future(self._finish(turn, full_text, list(tool_records)))
            _finish_tasks.add(finish)
            finish.add_done_callback(_finish_tasks.discard)
            await asyncio.shield(finish)

    async def _finish(
        self,
        turn: ChatTurn,
        text: str,
        tool_records: list[dict[str, Any]],
    ) -> None:
        await self._save_reply(turn, text, tool_records)
        if turn.first_message:
            await self._generate_title(turn)

    async def _save_reply(
        self,
        turn: ChatTurn,
        text: str,
        tool_records: list[dict[str, Any]],
    ) -> None:
        async with self.session_factory() as session:
            await message_crud.update_by_id(
                session,
                turn.assistant_message_id,
                content=text,
                tool_calls=tool_records or None,
            )
            await chat_crud.touch(session, turn.chat_id)
            await session.commit()
        logger.info(
            "Assistant reply saved",
            extra={
                "chat_id": str(turn.chat_id),
                "message_id": str(turn.assistant_message_id),
                "text_length": len(text),
                "tool_calls": len(tool_records),
            },
        )

    async def _generate_title(self, turn: ChatTurn) -> None:
        """Title the chat after its first exchange; failures are logged only."""
        try:
            model = self.model_factory(turn.model_id, get_settings().llm.title_max_tokens)
            title = await generate_title(model, turn.first_message)
            if not title:
                return
            async with self.session_factory() as session:
                await chat_crud.update_by_id(session, turn.chat_id, title=title)
                await session.commit()
            logger.info("Chat title generated", extra={"chat_id": str(turn.chat_id), "title": title})
        except Exception as e:
            logger.warning(
                "Failed to generate chat title",
                extra={"chat_id": str(turn.chat_id), "error": str(e)},
            )
