"""Unit tests for weather parsing.

Pure function tests - no mocks needed, fast execution.
"""

import pytest

from src.core.weather import DEFAULT_ICON, parse_weather, weather_icon


SAMPLE = {
    "weather": [{"main": "Rain", "description": "light rain"}],
    "main": {"temp": 28.4, "humidity": 74},
    "wind": {"speed": 3.6},
    "name": "Hyderabad",
}


class TestWeatherIcon:
    """Tests for weather_icon() function."""

    @pytest.mark.parametrize("condition,icon", [
        ("Clear", "fa-sun"),
        ("Clouds", "fa-cloud"),
        ("Rain", "fa-cloud-rain"),
        ("Thunderstorm", "fa-bolt"),
        ("Haze", "fa-smog"),
    ])
    def test_known_conditions(self, condition, icon):
        assert weather_icon(condition) == icon

    def test_unknown_condition_uses_default(self):
        assert weather_icon("Meteor shower") == DEFAULT_ICON


class TestParseWeather:
    """Tests for parse_weather() function."""

    def test_parses_sample(self):
        """All fields are read from the response."""
        report = parse_weather(SAMPLE)

        assert report is not None
        assert report.condition == "Rain"
        assert report.description == "light rain"
        assert report.temperature_c == 28.4
        assert report.humidity == 74
        assert report.wind_speed == 3.6
        assert report.icon == "fa-cloud-rain"

    def test_optional_blocks_default(self):
        """Missing weather and wind blocks fall back to defaults."""
        report = parse_weather({"main": {"temp": 30}})

        assert report.condition == ""
        assert report.wind_speed == 0.0
        assert report.humidity == 0
        assert report.icon == DEFAULT_ICON

    @pytest.mark.parametrize("data", [
        {},
        {"main": {}},
        {"main": {"temp": "hot"}},
    ])
    def test_missing_temperature_returns_none(self, data):
        assert parse_weather(data) is None
