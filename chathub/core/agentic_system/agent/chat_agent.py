"""
Chat agent with a streaming tool-calling loop.

Streams model text, executes requested tools between model rounds and
feeds their results back until the model stops calling tools or the
round limit is reached.

Dependencies: langchain_core
System role: Chat completion orchestration
"""

import json
import logging
import re
from collections.abc import AsyncGenerator
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)
from langchain_core.messages.utils import message_chunk_to_message
from langchain_core.tools import BaseTool

from chathub.core.agentic_system.agent.chat_agent_prompt import get_title_prompt
from chathub.models.streaming import StreamEvent
from chathub.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 5

_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def content_to_text(content: Any) -> str:
    """Text of a message content, which Bedrock may return as a list of blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("type") == "text":
                parts.append(item.get("text", ""))
        return "".join(parts)
    return ""


def build_history(
    system_prompt: str,
    messages: list[tuple[str, str]],
) -> list[BaseMessage]:
    """
    Convert stored (role, content) pairs into model messages.

    Empty messages and roles other than user/assistant are skipped.
    """
    history: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for role, content in messages:
        if not content:
            continue
        if role == "user":
            history.append(HumanMessage(content=content))
        elif role == "assistant":
            history.append(AIMessage(content=content))
    return history


class ChatAgent:
    """
    Streaming chat agent.

    Yields StreamEvent objects: text deltas, tool calls, tool results and
    a final finish event carrying the full text.
    """

    def __init__(
        self,
        model: BaseChatModel,
        tools: list[BaseTool] | None = None,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ) -> None:
        """
        Initialize the agent.

        Args:
            model: Chat model supporting tool binding
            tools: Tools offered to the model
            max_rounds: Maximum number of model calls per turn
        """
        self._tools = {t.name: t for t in tools or []}
        self._model = model.bind_tools(list(self._tools.values())) if self._tools else model
        self._max_rounds = max_rounds

    async def _run_tool(self, name: str, args: dict[str, Any]) -> Any:
        tool = self._tools.get(name)
        if tool is None:
            return {"error": f"Unknown tool: {name}"}
        try:
            return await tool.ainvoke(args)
        except Exception as e:
            log_exception_with_context(logger, "Tool execution failed", e, tool_name=name, tool_args=args)
            return {"error": f"Tool {name} failed: {e}"}

    async def astream(self, messages: list[BaseMessage]) -> AsyncGenerator[StreamEvent, None]:
        """
        Run the tool loop over ``messages``.

        Args:
            messages: System prompt, history and the new user message

        Yields:
            StreamEvent: text, tool_call, tool_result, then finish
        """
        history = list(messages)
        full_text = ""

        for round_index in range(self._max_rounds):
            logger.info(f"{__name__}:astream - Round {round_index + 1}: calling model")
            aggregate = None
            async for chunk in self._model.astream(history):
                text = content_to_text(chunk.content)
                if text:
                    full_text += text
                    yield StreamEvent.text(text)
                aggregate = chunk if aggregate is None else aggregate + chunk

            if aggregate is None:
                break

            response = message_chunk_to_message(aggregate)
            history.append(response)
            tool_calls = getattr(response, "tool_calls", None) or []
            if not tool_calls:
                break

            for call in tool_calls:
                name = call["name"]
                args = call.get("args") or {}
                call_id = call.get("id") or f"call_{round_index}_{name}"
                yield StreamEvent.tool_call(call_id, name, args)

                result = await self._run_tool(name, args)
                log_with_context(logger, logging.INFO, "Tool executed", tool_name=name, result=result)
                yield StreamEvent.tool_result(call_id, name, result)
                history.append(
                    ToolMessage(content=json.dumps(result, default=str), tool_call_id=call_id)
                )
        else:
            logger.warning(f"{__name__}:astream - Stopped after {self._max_rounds} rounds")

        yield StreamEvent.finish(full_text)


async def generate_title(model: BaseChatModel, first_message: str) -> str:
    """
    Ask ``model`` for a short chat title.

    Returns:
        str: Title without surrounding quotes; empty if the model returned nothing
    """
    response = await model.ainvoke([HumanMessage(content=get_title_prompt(first_message))])
    title = content_to_text(response.content).strip()
    return _QUOTES_RE.sub("", title).strip()
