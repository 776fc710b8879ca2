"""
Tests for the streaming chat agent.

A scripted model double replays AIMessageChunk rounds so the tool loop
can be driven without Bedrock.
"""

import json

from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import tool

from chathub.core.agentic_system.agent import ChatAgent, build_history, generate_title
from chathub.core.agentic_system.agent.chat_agent import content_to_text


class ScriptedModel:
    def __init__(self, rounds, reply=None):
        self.rounds = list(rounds)
        self.reply = reply
        self.seen = []
        self.bound = None

    def bind_tools(self, tools):
        self.bound = [t.name for t in tools]
        return self

    async def astream(self, messages):
        self.seen.append(list(messages))
        for chunk in self.rounds.pop(0):
            yield chunk

    async def ainvoke(self, messages):
        self.seen.append(list(messages))
        return self.reply


def call_chunk(name, args, call_id):
    return AIMessageChunk(
        content="",
        tool_call_chunks=[{"name": name, "args": json.dumps(args), "id": call_id, "index": 0}],
    )


@tool
async def echo(text: str) -> dict:
    """Echo the text back."""
    return {"echo": text}


@tool
async def explode(text: str) -> dict:
    """Always fails."""
    raise RuntimeError("kaboom")


async def run(agent, messages):
    return [event async for event in agent.astream(messages)]


class TestContentToText:
    def test_string_and_blocks(self):
        assert content_to_text("plain") == "plain"
        assert content_to_text([{"type": "text", "text": "a"}, {"type": "tool_use"}, "b"]) == "ab"
        assert content_to_text(None) == ""


class TestBuildHistory:
    def test_skips_empty_and_non_chat_roles(self):
        # Act
        history = build_history(
            "system",
            [("user", "q"), ("assistant", ""), ("tool", "raw"), ("assistant", "a")],
        )

        # Assert
        assert isinstance(history[0], SystemMessage)
        assert [type(m) for m in history[1:]] == [HumanMessage, AIMessage]
        assert [m.content for m in history[1:]] == ["q", "a"]


class TestChatAgent:
    async def test_text_only_round(self):
        # Arrange
        model = ScriptedModel([[AIMessageChunk(content="Hi "), AIMessageChunk(content="there")]])
        agent = ChatAgent(model)

        # Act
        events = await run(agent, [HumanMessage(content="hello")])

        # Assert
        assert [e.to_dict() for e in events] == [
            {"type": "text", "text": "Hi "},
            {"type": "text", "text": "there"},
            {"type": "finish", "text": "Hi there"},
        ]
        assert model.bound is None

    async def test_tool_call_then_answer(self):
        # Arrange
        model = ScriptedModel([
            [call_chunk("echo", {"text": "ping"}, "c1")],
            [AIMessageChunk(content="pong")],
        ])
        agent = ChatAgent(model, tools=[echo])

        # Act
        events = await run(agent, [HumanMessage(content="echo ping")])

        # Assert
        assert [e.type.value for e in events] == ["tool_call", "tool_result", "text", "finish"]
        assert events[0].data == {"toolCallId": "c1", "toolName": "echo", "args": {"text": "ping"}}
        assert events[1].data["result"] == {"echo": "ping"}
        second_round = model.seen[1]
        assert isinstance(second_round[-1], ToolMessage)
        assert json.loads(second_round[-1].content) == {"echo": "ping"}
        assert model.bound == ["echo"]

    async def test_unknown_tool_returns_error_result(self):
        # Arrange
        model = ScriptedModel([
            [call_chunk("missing", {}, "c1")],
            [AIMessageChunk(content="sorry")],
        ])
        agent = ChatAgent(model, tools=[echo])

        # Act
        events = await run(agent, [HumanMessage(content="x")])

        # Assert
        assert events[1].data["result"] == {"error": "Unknown tool: missing"}

    async def test_tool_exception_returns_error_result(self):
        # Arrange
        model = ScriptedModel([
            [call_chunk("explode", {"text": "x"}, "c1")],
            [AIMessageChunk(content="it failed")],
        ])
        agent = ChatAgent(model, tools=[explode])

        # Act
        events = await run(agent, [HumanMessage(content="x")])

        # Assert
        assert events[1].data["result"] == {"error": "Tool explode failed: kaboom"}
        assert events[-1].data == {"text": "it failed"}

    async def test_stops_after_max_rounds(self):
        # Arrange
        model = ScriptedModel([
            [call_chunk("echo", {"text": "1"}, "c1")],
            [call_chunk("echo", {"text": "2"}, "c2")],
            [call_chunk("echo", {"text": "3"}, "c3")],
        ])
        agent = ChatAgent(model, tools=[echo], max_rounds=2)

        # Act
        events = await run(agent, [HumanMessage(content="loop")])

        # Assert
        assert len(model.seen) == 2
        assert [e.type.value for e in events].count("tool_call") == 2
        assert events[-1].type.value == "finish"


class TestGenerateTitle:
    async def test_strips_quotes(self):
        # Arrange
        model = ScriptedModel([], reply=AIMessage(content='"Fixing the Build"'))

        # Act
        title = await generate_title(model, "why is CI red")

        # Assert
        assert title == "Fixing the Build"
        assert "why is CI red" in model.seen[0][0].content
