"""Tests for the weather tool using httpx's mock transport."""

import httpx

from chathub.core.tools.weather import (
    convert_speed,
    convert_temperature,
    create_weather_tool,
    get_weather,
    location_params,
    summarize_forecast,
    wind_direction,
)

CURRENT = {
    "coord": {"lon": -122.33, "lat": 47.61},
    "weather": [{"main": "Rain", "description": "light rain"}],
    "main": {"temp": 283.15, "feels_like": 281.15, "temp_min": 282.15, "temp_max": 284.15, "pressure": 1012, "humidity": 87},
    "visibility": 9000,
    "wind": {"speed": 5.0, "deg": 225, "gust": 10.0},
    "clouds": {"all": 90},
    "sys": {"country": "US", "sunrise": 1700000000, "sunset": 1700030000},
    "timezone": 0,
    "name": "Seattle",
}


def forecast_item(dt_txt, dt, temp=288.15):
    return {
        "dt": dt,
        "dt_txt": dt_txt,
        "main": {"temp": temp, "feels_like": temp, "temp_min": temp, "temp_max": temp, "humidity": 50},
        "weather": [{"main": "Clear", "description": "clear sky"}],
        "wind": {"speed": 1.0},
        "pop": 0.25,
    }


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestConversions:
    def test_temperature(self):
        assert convert_temperature(283.15, "celsius") == 10.0
        assert convert_temperature(283.15, "fahrenheit") == 50

    def test_speed(self):
        assert convert_speed(10, "celsius") == {"value": 36.0, "unit": "km/h"}
        assert convert_speed(10, "fahrenheit") == {"value": 22.4, "unit": "mph"}

    def test_wind_direction(self):
        assert wind_direction(0) == "N"
        assert wind_direction(225) == "SW"
        assert wind_direction(350) == "N"

    def test_location_params(self):
        assert location_params("40.7128,-74.0060") == {"lat": "40.7128", "lon": "-74.0060"}
        assert location_params("Tokyo, JP") == {"q": "Tokyo, JP"}


class TestSummarizeForecast:
    def test_picks_reading_nearest_noon_per_day(self):
        # Arrange
        data = {
            "list": [
                forecast_item("2026-03-14 09:00:00", 1773478800, temp=280.15),
                forecast_item("2026-03-14 12:00:00", 1773489600, temp=290.15),
                forecast_item("2026-03-14 18:00:00", 1773511200, temp=285.15),
                forecast_item("2026-03-15 00:00:00", 1773532800),
            ]
        }

        # Act
        forecast = summarize_forecast(data, "celsius")

        # Assert
        assert len(forecast) == 2
        assert forecast[0]["temperature"] == 17.0
        assert forecast[0]["date"] == "Sat, Mar 14"
        assert forecast[0]["precipitationChance"] == 25


class TestGetWeather:
    async def test_current_conditions(self):
        # Arrange
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen.update(request.url.params)
            return httpx.Response(200, json=CURRENT)

        # Act
        async with client_for(handler) as client:
            result = await get_weather("Seattle", "owm-key", units="celsius", client=client)

        # Assert
        assert seen["path"].endswith("/weather")
        assert seen["q"] == "Seattle"
        assert seen["appid"] == "owm-key"
        assert result["location"]["name"] == "Seattle"
        assert result["current"]["temperature"] == 10.0
        assert result["current"]["unit"] == "°C"
        assert result["current"]["visibility"] == 9
        assert result["current"]["wind"] == {"speed": 18.0, "unit": "km/h", "direction": "SW", "gust": 36.0}
        assert "forecast" not in result

    async def test_includes_forecast_when_requested(self):
        # Arrange
        def handler(request):
            if request.url.path.endswith("/forecast"):
                return httpx.Response(200, json={"list": [forecast_item("2026-03-14 12:00:00", 1773489600)]})
            return httpx.Response(200, json=CURRENT)

        # Act
        async with client_for(handler) as client:
            result = await get_weather("47.61,-122.33", "key", forecast=True, client=client)

        # Assert
        assert len(result["forecast"]) == 1
        assert result["forecast"][0]["wind"]["unit"] == "mph"

    async def test_unknown_location(self):
        # Arrange
        def handler(request):
            return httpx.Response(404, json={"message": "city not found"})

        # Act
        async with client_for(handler) as client:
            result = await get_weather("Atlantis", "key", client=client)

        # Assert
        assert result == {"error": "Location not found: Atlantis"}

    async def test_blank_location_rejected(self):
        assert await get_weather("  ", "key") == {
            "error": "Please provide a location (city name or coordinates)"
        }


class TestWeatherTool:
    def test_tool_name_and_schema(self):
        # Act
        tool = create_weather_tool("key")

        # Assert
        assert tool.name == "weather"
        assert set(tool.args) == {"location", "units", "forecast"}
