"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field


DEFAULT_DATABASE_URL = "sqlite:///data/pools.db"
DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_SEARCH_RADIUS_M = 5000


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        database_url: SQLAlchemy URL of the pool record store
        overpass_url: Overpass API interpreter endpoint
        nominatim_url: Nominatim search endpoint
        weather_url: OpenWeatherMap current-weather endpoint
        weather_api_key: OpenWeatherMap API key (None disables weather)
        search_radius_m: Default nearby search radius in meters
        request_timeout_seconds: Timeout for outbound HTTP requests
        overpass_query_timeout_seconds: Server-side Overpass query timeout
        telemetry_timeout_seconds: Timeout for live telemetry requests
        user_agent: User-Agent sent to OpenStreetMap services
        cors_origins: Origins allowed by the HTTP API
        seed_database: Create the table and seed pools on startup
    """
    database_url: str = DEFAULT_DATABASE_URL
    overpass_url: str = DEFAULT_OVERPASS_URL
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    weather_url: str = DEFAULT_WEATHER_URL
    weather_api_key: str | None = None
    search_radius_m: int = DEFAULT_SEARCH_RADIUS_M
    request_timeout_seconds: int = 30
    overpass_query_timeout_seconds: int = 25
    telemetry_timeout_seconds: int = 10
    user_agent: str = "pool-finder/1.0"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    seed_database: bool = True


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def _validate_positive(value: int, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.database_url or config.database_url.startswith("${"):
        errors.append(ValidationError(
            field="database_url",
            message="Database URL not set",
        ))

    for name in ("overpass_url", "nominatim_url"):
        if not getattr(config, name):
            errors.append(ValidationError(field=name, message="URL not set"))

    errors.extend(_validate_positive(config.search_radius_m, "search_radius_m"))
    errors.extend(_validate_positive(config.request_timeout_seconds, "request_timeout_seconds"))
    errors.extend(_validate_positive(
        config.overpass_query_timeout_seconds,
        "overpass_query_timeout_seconds",
    ))
    errors.extend(_validate_positive(config.telemetry_timeout_seconds, "telemetry_timeout_seconds"))

    # Warn about missing weather key
    if not config.weather_api_key or config.weather_api_key.startswith("${"):
        errors.append(ValidationError(
            field="weather_api_key",
            message="Weather API key not set; weather lookups are disabled",
            severity="warning",
        ))

    if not config.cors_origins:
        errors.append(ValidationError(
            field="cors_origins",
            message="No CORS origins configured",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
