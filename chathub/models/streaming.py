"""
Streaming event schemas for chat completions.

Events are sent as newline-delimited JSON, one object per line.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from chathub.models.common import CamelModel


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    TEXT = "text"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    FINISH = "finish"
    ERROR = "error"


class StreamEvent(BaseModel):
    """
    Streaming event.

    Attributes:
        type: Event type identifier
        data: Event-specific fields, merged into the top-level object
    """

    type: StreamEventType
    data: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"type": self.type.value, **self.data}

    def to_ndjson(self) -> str:
        return json.dumps(self.to_dict(), default=str) + "\n"

    @classmethod
    def text(cls, text: str) -> "StreamEvent":
        return cls(type=StreamEventType.TEXT, data={"text": text})

    @classmethod
    def tool_call(cls, tool_call_id: str, tool_name: str, args: dict[str, Any]) -> "StreamEvent":
        return cls(
            type=StreamEventType.TOOL_CALL,
            data={"toolCallId": tool_call_id, "toolName": tool_name, "args": args},
        )

    @classmethod
    def tool_result(cls, tool_call_id: str, tool_name: str, result: Any) -> "StreamEvent":
        return cls(
            type=StreamEventType.TOOL_RESULT,
            data={"toolCallId": tool_call_id, "toolName": tool_name, "result": result},
        )

    @classmethod
    def finish(cls, text: str) -> "StreamEvent":
        return cls(type=StreamEventType.FINISH, data={"text": text})

    @classmethod
    def error(cls, message: str) -> "StreamEvent":
        return cls(type=StreamEventType.ERROR, data={"error": message})


class ChatStreamRequest(CamelModel):
    """Client request for a streamed completion."""

    chat_id: uuid.UUID
    message: str
