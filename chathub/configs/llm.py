"""
LLM configuration settings.

Bedrock region, model catalogue and generation limits for the chat agent.

Dependencies: pydantic, pydantic_settings
System role: Model selection and generation configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chathub.configs.base import BaseSettings

DEFAULT_MODEL = "claude-sonnet-4-20250514"

# Public model ids exposed through /api/settings, mapped to Bedrock inference profiles.
DEFAULT_MODEL_MAP: dict[str, str] = {
    "claude-sonnet-4-20250514": "us.anthropic.claude-sonnet-4-20250514-v1:0",
    "claude-opus-4-20250514": "us.anthropic.claude-opus-4-20250514-v1:0",
    "claude-3-5-haiku-20241022": "us.anthropic.claude-3-5-haiku-20241022-v1:0",
}


class LLMSettings(BaseSettings):
    """Bedrock chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(default="us-east-1", description="AWS region for Bedrock runtime")
    default_model: str = Field(default=DEFAULT_MODEL, description="Model used when settings hold an unknown id")
    models: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_MODEL_MAP),
        description="Public model id to Bedrock model id mapping",
    )
    temperature: float = Field(default=0.7, description="Sampling temperature for chat replies")
    max_tokens: int = Field(default=4096, description="Maximum tokens per model round")
    max_tool_rounds: int = Field(default=5, description="Maximum model rounds per chat turn")
    title_max_tokens: int = Field(default=30, description="Maximum tokens for generated chat titles")
