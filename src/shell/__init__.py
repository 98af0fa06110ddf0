"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Overpass API client (HTTP)
- Pool record store (database)
- Nominatim geocoding client (HTTP)
- OpenWeatherMap client (HTTP)
- Pool telemetry client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.overpass_client import OverpassClient
from src.shell.pool_store import PoolStore
from src.shell.geocoding_client import GeocodingClient
from src.shell.weather_client import WeatherClient
from src.shell.telemetry_client import TelemetryClient
from src.shell.config_loader import load_config, Config

__all__ = [
    "OverpassClient",
    "PoolStore",
    "GeocodingClient",
    "WeatherClient",
    "TelemetryClient",
    "load_config",
    "Config",
]
