"""
Generic tools available to every chat, independent of connectors.

Exports:
  - get_generic_tools(): calculator, datetime and web_fetch tools, plus
    web_search and weather when their API keys are configured
  - GENERIC_TOOL_DESCRIPTIONS: one-line summaries used in the system prompt
"""

from langchain_core.tools import BaseTool

from chathub.configs import get_settings
from chathub.configs.tools import ToolsSettings
from chathub.core.tools.calculator import create_calculator_tool
from chathub.core.tools.datetime_tool import create_datetime_tool
from chathub.core.tools.weather import create_weather_tool
from chathub.core.tools.web_fetch import create_web_fetch_tool
from chathub.core.tools.web_search import create_web_search_tool

GENERIC_TOOL_DESCRIPTIONS: dict[str, str] = {
    "calculator": "Evaluate math expressions and convert units",
    "datetime": "Get current time, convert timezones, calculate date differences",
    "web_fetch": "Read content from any URL (articles, documentation, web pages)",
    "web_search": "Search the web for current information",
    "weather": "Get current weather and forecasts for any location",
}

# Tools offered only when their API key is set
KEY_GATED_TOOLS = ("web_search", "weather")


def get_generic_tools(config: ToolsSettings | None = None) -> list[BaseTool]:
    """
    Build the generic tools.

    Args:
        config: Tool API keys; defaults to the application settings
    """
    if config is None:
        config = get_settings().tools
    tools = [
        create_calculator_tool(),
        create_datetime_tool(),
        create_web_fetch_tool(),
    ]
    if config.serp_api_key:
        tools.append(create_web_search_tool(config.serp_api_key))
    if config.open_weather_api_key:
        tools.append(create_weather_tool(config.open_weather_api_key))
    return tools


__all__ = ["GENERIC_TOOL_DESCRIPTIONS", "KEY_GATED_TOOLS", "get_generic_tools"]
