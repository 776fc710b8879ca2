from chathub.core.agentic_system.agent.chat_agent import ChatAgent, build_history, generate_title
from chathub.core.agentic_system.agent.chat_agent_prompt import (
    EnabledConnector,
    build_system_prompt,
    get_title_prompt,
)
from chathub.core.agentic_system.agent.chat_model import create_chat_model, resolve_model_id

__all__ = [
    "ChatAgent",
    "EnabledConnector",
    "build_history",
    "build_system_prompt",
    "create_chat_model",
    "generate_title",
    "get_title_prompt",
    "resolve_model_id",
]
