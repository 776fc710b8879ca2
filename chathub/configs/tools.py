"""
Generic tool configuration settings.

API keys for the optional generic tools. A tool whose key is unset is
not offered to the model.

Dependencies: pydantic, pydantic_settings
System role: Third-party API keys for generic tools
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from chathub.configs.base import BaseSettings


class ToolsSettings(BaseSettings):
    """Keys for the SerpAPI web search and OpenWeather tools."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOOLS_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    serp_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TOOLS_SERP_API_KEY", "SERP_API_KEY"),
        description="SerpAPI key enabling the web_search tool",
    )
    open_weather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TOOLS_OPEN_WEATHER_API_KEY", "OPEN_WEATHER_API_KEY"),
        description="OpenWeatherMap key enabling the weather tool",
    )
