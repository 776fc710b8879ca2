"""
Unified application settings.

Aggregates the settings groups into one object and caches it for the
process.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from chathub.configs.base import BaseSettings
from chathub.configs.database import DatabaseSettings
from chathub.configs.llm import LLMSettings
from chathub.configs.security import SecuritySettings
from chathub.configs.tools import ToolsSettings


class Settings(BaseSettings):
    """Application settings: top-level fields plus one attribute per group."""

    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description='Allowed CORS origins as a JSON list (e.g. ["http://localhost:3000"])',
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    tools: ToolsSettings = Field(default_factory=ToolsSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings, reading the environment on first use.

    Tests that change environment variables call ``get_settings.cache_clear()``.
    """
    return Settings()
