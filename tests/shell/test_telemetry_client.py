"""Tests for the live telemetry client.

Uses the `responses` library to mock HTTP requests.
"""

import pytest
import requests
import responses

from src.core.errors import SourceUnavailable
from src.shell.telemetry_client import TelemetryClient


ENDPOINT = "http://telemetry.test/api/pool-data/1"


class TestTelemetryClientFetch:
    """Tests for TelemetryClient.fetch()."""

    @responses.activate
    def test_returns_parsed_reading(self):
        responses.add(
            responses.GET,
            ENDPOINT,
            json={
                "water_quality": {"temperature": 26.5, "ph": 7.2, "chlorine": 1.5},
                "occupancy": {"current": 12, "max_capacity": 50},
            },
            status=200,
        )

        telemetry = TelemetryClient().fetch(ENDPOINT)

        assert telemetry.water_quality.ph == 7.2
        assert telemetry.occupancy.current == 12

    @responses.activate
    def test_malformed_payload_raises_source_unavailable(self):
        responses.add(responses.GET, ENDPOINT, json={"status": "ok"}, status=200)

        with pytest.raises(SourceUnavailable):
            TelemetryClient().fetch(ENDPOINT)

    @responses.activate
    def test_not_found_raises_source_unavailable(self):
        responses.add(responses.GET, ENDPOINT, json={"detail": "Pool not found"}, status=404)

        with pytest.raises(SourceUnavailable):
            TelemetryClient().fetch(ENDPOINT)

    @responses.activate
    def test_connection_error_raises_source_unavailable(self):
        responses.add(
            responses.GET,
            ENDPOINT,
            body=requests.exceptions.ConnectionError("refused"),
        )

        with pytest.raises(SourceUnavailable):
            TelemetryClient().fetch(ENDPOINT)
