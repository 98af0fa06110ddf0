"""Unit tests for configuration validation.

Pure function tests - no mocks needed.
"""

from src.core.config import Config, validate_config


class TestValidateConfig:
    """Tests for validate_config() function."""

    def test_defaults_are_valid(self):
        """Default config has no critical errors."""
        result = validate_config(Config())

        assert result.valid is True
        assert result.critical_errors == []

    def test_missing_weather_key_is_a_warning(self):
        """Weather is optional, so a missing key only warns."""
        result = validate_config(Config(weather_api_key=None))

        assert result.valid is True
        assert [w.field for w in result.warnings] == ["weather_api_key"]

    def test_unresolved_weather_key_is_a_warning(self):
        result = validate_config(Config(weather_api_key="${WEATHER_API_KEY}"))

        assert "weather_api_key" in [w.field for w in result.warnings]

    def test_weather_key_set(self):
        result = validate_config(Config(weather_api_key="abc123"))

        assert result.warnings == []

    def test_unresolved_database_url_is_an_error(self):
        """An unresolved ${VAR} URL is invalid."""
        result = validate_config(Config(database_url="${DATABASE_URL}"))

        assert result.valid is False
        assert result.critical_errors[0].field == "database_url"

    def test_non_positive_radius_and_timeouts(self):
        """Radius and timeouts must be positive."""
        result = validate_config(Config(
            search_radius_m=0,
            request_timeout_seconds=-1,
            weather_api_key="abc",
        ))

        assert result.valid is False
        assert {e.field for e in result.critical_errors} == {
            "search_radius_m",
            "request_timeout_seconds",
        }

    def test_empty_service_url(self):
        result = validate_config(Config(overpass_url="", weather_api_key="abc"))

        assert [e.field for e in result.critical_errors] == ["overpass_url"]

    def test_no_cors_origins_warns(self):
        result = validate_config(Config(cors_origins=[], weather_api_key="abc"))

        assert result.valid is True
        assert [w.field for w in result.warnings] == ["cors_origins"]
