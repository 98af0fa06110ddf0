"""Current weather parsing - Pure functions."""

from dataclasses import dataclass
from typing import Any, Mapping


DEFAULT_ICON = "fa-cloud-sun"

WEATHER_ICONS = {
    "Clear": "fa-sun",
    "Clouds": "fa-cloud",
    "Rain": "fa-cloud-rain",
    "Drizzle": "fa-cloud-rain",
    "Thunderstorm": "fa-bolt",
    "Snow": "fa-snowflake",
    "Mist": "fa-smog",
    "Smoke": "fa-smog",
    "Haze": "fa-smog",
    "Dust": "fa-smog",
    "Fog": "fa-smog",
    "Sand": "fa-smog",
    "Ash": "fa-smog",
    "Squall": "fa-wind",
    "Tornado": "fa-wind",
}


@dataclass(frozen=True)
class WeatherReport:
    """Current weather at a location.

    Attributes:
        condition: Condition group (e.g. 'Rain')
        description: Longer description (e.g. 'light rain')
        temperature_c: Air temperature in °C
        humidity: Relative humidity in percent
        wind_speed: Wind speed in m/s
    """
    condition: str
    description: str
    temperature_c: float
    humidity: int
    wind_speed: float

    @property
    def icon(self) -> str:
        return weather_icon(self.condition)


def weather_icon(condition: str) -> str:
    """Map a condition group to an icon name."""
    return WEATHER_ICONS.get(condition, DEFAULT_ICON)


def parse_weather(data: Mapping[str, Any]) -> WeatherReport | None:
    """Parse an OpenWeatherMap current-weather response.

    Pure function.

    Args:
        data: JSON response body (metric units)

    Returns:
        WeatherReport or None if required fields are missing
    """
    try:
        weather = (data.get("weather") or [{}])[0]
        main = data["main"]
        return WeatherReport(
            condition=str(weather.get("main", "")),
            description=str(weather.get("description", "")),
            temperature_c=float(main["temp"]),
            humidity=int(main.get("humidity", 0)),
            wind_speed=float((data.get("wind") or {}).get("speed", 0.0)),
        )
    except (KeyError, TypeError, ValueError, IndexError):
        return None
