"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in src/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import (
    DEFAULT_DATABASE_URL,
    DEFAULT_NOMINATIM_URL,
    DEFAULT_OVERPASS_URL,
    DEFAULT_SEARCH_RADIUS_M,
    DEFAULT_WEATHER_URL,
    Config,
)


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-strings and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _parse_origins(value: Any) -> list[str]:
    if value is None:
        return Config().cors_origins
    if isinstance(value, str):
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(_resolve_value(o)) for o in value]


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    resolved = {key: _resolve_value(value) for key, value in data.items()}

    weather_api_key = resolved.get("weather_api_key")
    if isinstance(weather_api_key, str) and weather_api_key.startswith("${"):
        weather_api_key = None

    return Config(
        database_url=resolved.get("database_url", DEFAULT_DATABASE_URL),
        overpass_url=resolved.get("overpass_url", DEFAULT_OVERPASS_URL),
        nominatim_url=resolved.get("nominatim_url", DEFAULT_NOMINATIM_URL),
        weather_url=resolved.get("weather_url", DEFAULT_WEATHER_URL),
        weather_api_key=weather_api_key,
        search_radius_m=int(resolved.get("search_radius_m", DEFAULT_SEARCH_RADIUS_M)),
        request_timeout_seconds=int(resolved.get("request_timeout_seconds", 30)),
        overpass_query_timeout_seconds=int(resolved.get("overpass_query_timeout_seconds", 25)),
        telemetry_timeout_seconds=int(resolved.get("telemetry_timeout_seconds", 10)),
        user_agent=resolved.get("user_agent", Config().user_agent),
        cors_origins=_parse_origins(resolved.get("cors_origins")),
        seed_database=_parse_bool(resolved.get("seed_database"), True),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: database=%s, radius=%dm",
        config.database_url.split("://", 1)[0],
        config.search_radius_m,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        DATABASE_URL: SQLAlchemy URL of the pool database
        OVERPASS_URL: Overpass API interpreter URL
        NOMINATIM_URL: Nominatim search URL
        WEATHER_API_KEY: OpenWeatherMap API key
        SEARCH_RADIUS_M: Default nearby radius in meters
        REQUEST_TIMEOUT: Outbound HTTP timeout in seconds
        CORS_ORIGIN: Comma-separated allowed origins
        SEED_DATABASE: Seed an empty database on startup (true/false)

    Returns:
        Config object from environment
    """
    data: dict[str, Any] = {}

    mapping = {
        "DATABASE_URL": "database_url",
        "OVERPASS_URL": "overpass_url",
        "NOMINATIM_URL": "nominatim_url",
        "WEATHER_API_KEY": "weather_api_key",
        "SEARCH_RADIUS_M": "search_radius_m",
        "REQUEST_TIMEOUT": "request_timeout_seconds",
        "CORS_ORIGIN": "cors_origins",
        "SEED_DATABASE": "seed_database",
    }

    for env_name, key in mapping.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value

    if "weather_api_key" not in data:
        logger.warning("WEATHER_API_KEY not set, weather lookups disabled")

    return load_config_from_dict(data)
