"""OpenWeatherMap Client - Imperative Shell.

This module handles HTTP communication with the OpenWeatherMap
current-weather API. All I/O is contained here.
"""

import logging

import requests

from src.core.config import DEFAULT_WEATHER_URL
from src.core.errors import SourceUnavailable
from src.core.geo import Coordinate
from src.core.weather import WeatherReport, parse_weather


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10


class WeatherClient:
    """Client for current weather at a coordinate.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_WEATHER_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize weather client.

        Args:
            api_key: OpenWeatherMap API key
            base_url: Current-weather endpoint
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def current(self, coordinate: Coordinate) -> WeatherReport:
        """Fetch current weather in metric units.

        This method performs HTTP I/O.

        Raises:
            SourceUnavailable: If the request fails or the body is unusable
        """
        logger.info(
            "Fetching weather for (%s, %s)",
            coordinate.latitude,
            coordinate.longitude,
        )

        try:
            response = requests.get(
                self.base_url,
                params={
                    "lat": coordinate.latitude,
                    "lon": coordinate.longitude,
                    "units": "metric",
                    "appid": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("Weather request failed: %s", str(e))
            raise SourceUnavailable(f"Weather request failed: {e}") from e

        report = parse_weather(data) if isinstance(data, dict) else None
        if report is None:
            logger.error("Weather response could not be parsed")
            raise SourceUnavailable("Weather response could not be parsed")

        return report
