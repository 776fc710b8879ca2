"""Tests for generic tool selection."""

from chathub.configs.tools import ToolsSettings
from chathub.core.tools import get_generic_tools


class TestGetGenericTools:
    def test_keyless_tools_only_by_default(self):
        # Act
        tools = get_generic_tools()

        # Assert
        assert [t.name for t in tools] == ["calculator", "datetime", "web_fetch"]

    def test_keys_enable_search_and_weather(self):
        # Arrange
        config = ToolsSettings(serp_api_key="serp", open_weather_api_key="owm")

        # Act
        tools = get_generic_tools(config)

        # Assert
        assert [t.name for t in tools] == ["calculator", "datetime", "web_fetch", "web_search", "weather"]

    def test_keys_read_from_environment(self, monkeypatch):
        # Arrange
        from chathub.configs import get_settings

        monkeypatch.setenv("OPEN_WEATHER_API_KEY", "owm")
        get_settings.cache_clear()

        # Act
        names = [t.name for t in get_generic_tools()]

        # Assert
        assert "weather" in names
        assert "web_search" not in names
