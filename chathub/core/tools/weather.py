"""
Weather tool backed by OpenWeatherMap.

Current conditions for a city name or "lat,lon" pair, optionally with a
five-day forecast taking the reading closest to noon for each day.

Dependencies: httpx, langchain_core.tools, pydantic
System role: Generic weather tool for the chat agent
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5"
WEATHER_TIMEOUT_SECONDS = 15.0
FORECAST_DAYS = 5

Units = Literal["celsius", "fahrenheit"]

_COORDINATES = re.compile(r"^(-?\d+\.?\d*),\s*(-?\d+\.?\d*)$")
_COMPASS = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE", "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]


def wind_direction(degrees: float) -> str:
    return _COMPASS[round(degrees / 22.5) % 16]


def convert_temperature(kelvin: float, units: Units) -> float:
    """Celsius to one decimal, Fahrenheit to a whole degree."""
    if units == "celsius":
        return round(kelvin - 273.15, 1)
    return round((kelvin - 273.15) * 9 / 5 + 32)


def convert_speed(mps: float, units: Units) -> dict[str, Any]:
    if units == "celsius":
        return {"value": round(mps * 3.6, 1), "unit": "km/h"}
    return {"value": round(mps * 2.237, 1), "unit": "mph"}


def location_params(location: str) -> dict[str, str]:
    match = _COORDINATES.match(location.strip())
    if match:
        return {"lat": match.group(1), "lon": match.group(2)}
    return {"q": location}


def _clock(epoch: int, offset_seconds: int) -> str:
    local = datetime.fromtimestamp(epoch, tz=timezone.utc) + timedelta(seconds=offset_seconds)
    return local.strftime("%I:%M %p")


def summarize_current(data: dict[str, Any], units: Units) -> dict[str, Any]:
    """Shape an OpenWeather current-conditions payload."""
    main = data["main"]
    wind = data.get("wind", {})
    conditions = (data.get("weather") or [{}])[0]
    speed = convert_speed(wind.get("speed", 0), units)
    offset = data.get("timezone", 0)

    current: dict[str, Any] = {
        "temperature": convert_temperature(main["temp"], units),
        "feelsLike": convert_temperature(main["feels_like"], units),
        "tempMin": convert_temperature(main["temp_min"], units),
        "tempMax": convert_temperature(main["temp_max"], units),
        "unit": "°C" if units == "celsius" else "°F",
        "humidity": main["humidity"],
        "pressure": main["pressure"],
        "visibility": round(data.get("visibility", 0) / 1000),
        "conditions": conditions.get("main") or "Unknown",
        "description": conditions.get("description") or "",
        "wind": {
            "speed": speed["value"],
            "unit": speed["unit"],
            "direction": wind_direction(wind.get("deg", 0)),
        },
        "clouds": data.get("clouds", {}).get("all", 0),
        "sunrise": _clock(data["sys"]["sunrise"], offset),
        "sunset": _clock(data["sys"]["sunset"], offset),
    }
    if wind.get("gust"):
        current["wind"]["gust"] = convert_speed(wind["gust"], units)["value"]

    return {
        "location": {
            "name": data["name"],
            "country": data["sys"].get("country", ""),
            "coordinates": {"lat": data["coord"]["lat"], "lon": data["coord"]["lon"]},
        },
        "current": current,
    }


def summarize_forecast(data: dict[str, Any], units: Units) -> list[dict[str, Any]]:
    """One reading per day, the one nearest noon, for up to five days."""
    daily: dict[str, dict[str, Any]] = {}
    for item in data.get("list", []):
        day, time_part = item["dt_txt"].split(" ")
        hour = int(time_part.split(":")[0])
        existing = daily.get(day)
        if existing is None or abs(hour - 12) < abs(int(existing["dt_txt"].split(" ")[1][:2]) - 12):
            daily[day] = item

    forecast = []
    for item in list(daily.values())[:FORECAST_DAYS]:
        when = datetime.fromtimestamp(item["dt"], tz=timezone.utc)
        conditions = (item.get("weather") or [{}])[0]
        speed = convert_speed(item.get("wind", {}).get("speed", 0), units)
        forecast.append({
            "date": f"{when:%a, %b} {when.day}",
            "temperature": convert_temperature(item["main"]["temp"], units),
            "feelsLike": convert_temperature(item["main"]["feels_like"], units),
            "tempMin": convert_temperature(item["main"]["temp_min"], units),
            "tempMax": convert_temperature(item["main"]["temp_max"], units),
            "humidity": item["main"]["humidity"],
            "conditions": conditions.get("main") or "Unknown",
            "description": conditions.get("description") or "",
            "wind": {"speed": speed["value"], "unit": speed["unit"]},
            "precipitationChance": round(item.get("pop", 0) * 100),
        })
    return forecast


async def get_weather(
    location: str,
    api_key: str,
    units: Units = "fahrenheit",
    forecast: bool = False,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Fetch current weather, and optionally the forecast, for a location.

    A failed forecast request leaves the forecast out rather than
    failing the whole call.

    Returns:
        dict: location, current and optionally forecast; or ``{"error": ...}``
    """
    if not location or not location.strip():
        return {"error": "Please provide a location (city name or coordinates)"}

    params = {**location_params(location), "appid": api_key}
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=WEATHER_TIMEOUT_SECONDS)
    try:
        response = await client.get(f"{OPENWEATHER_URL}/weather", params=params)
        if response.status_code == 404:
            return {"error": f"Location not found: {location}"}
        if response.is_error:
            logger.warning(
                "Weather API error",
                extra={"location": location, "status_code": response.status_code, "body": response.text[:500]},
            )
            return {"error": f"Weather API error: {response.status_code}"}

        result = summarize_current(response.json(), units)

        if forecast:
            forecast_response = await client.get(f"{OPENWEATHER_URL}/forecast", params=params)
            if forecast_response.is_success:
                result["forecast"] = summarize_forecast(forecast_response.json(), units)
    except httpx.HTTPError as e:
        logger.warning("Weather request failed", extra={"location": location, "error": str(e)})
        return {"error": f"Failed to get weather: {e}"}
    except (KeyError, ValueError) as e:
        logger.warning("Unexpected weather response", extra={"location": location, "error": str(e)})
        return {"error": f"Failed to get weather: unexpected response ({e})"}
    finally:
        if owns_client:
            await client.aclose()

    logger.info("Weather fetched", extra={"location": result["location"]["name"]})
    return result


class WeatherInput(BaseModel):
    """Input schema for the weather tool."""

    location: str = Field(
        ...,
        description=(
            'City name (e.g., "London", "New York, US", "Tokyo, JP") or coordinates '
            'as "lat,lon" (e.g., "40.7128,-74.0060")'
        ),
    )
    units: Units = Field("fahrenheit", description="Temperature units (default: fahrenheit)")
    forecast: bool = Field(
        False,
        description="If true, include 5-day forecast in addition to current weather",
    )


def create_weather_tool(api_key: str) -> BaseTool:
    """Create the weather tool bound to an OpenWeatherMap key."""

    @tool("weather", args_schema=WeatherInput)
    async def weather(location: str, units: Units = "fahrenheit", forecast: bool = False) -> dict[str, Any]:
        """Get current weather conditions and forecasts for any location. Returns temperature, humidity, wind, and conditions. Supports city names or coordinates."""
        return await get_weather(location, api_key, units=units, forecast=forecast)

    return weather
