"""
Chat model factory.

Maps public model ids to Bedrock model ids and builds Bedrock Converse
chat models.

Dependencies: langchain_aws, chathub.configs
System role: LLM client construction for the chat agent
"""

import logging

from langchain_aws import ChatBedrockConverse
from langchain_core.language_models import BaseChatModel

from chathub.configs import get_settings

logger = logging.getLogger(__name__)


def resolve_model_id(model_id: str | None) -> str:
    """
    Bedrock model id for a public model id.

    Unknown or empty ids fall back to the configured default model.
    """
    llm = get_settings().llm
    if model_id and model_id in llm.models:
        return llm.models[model_id]
    if model_id:
        logger.warning(
            "Unknown model requested, using default",
            extra={"model_id": model_id, "default_model": llm.default_model},
        )
    return llm.models.get(llm.default_model, next(iter(llm.models.values())))


def create_chat_model(model_id: str | None, max_tokens: int | None = None) -> BaseChatModel:
    """
    Build a streaming-capable Bedrock chat model.

    Args:
        model_id: Public model id from settings
        max_tokens: Token limit override (defaults to LLM_MAX_TOKENS)

    Returns:
        BaseChatModel: ChatBedrockConverse instance
    """
    llm = get_settings().llm
    return ChatBedrockConverse(
        model=resolve_model_id(model_id),
        region_name=llm.region,
        temperature=llm.temperature,
        max_tokens=max_tokens or llm.max_tokens,
    )
