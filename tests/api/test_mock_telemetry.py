"""Tests for the mock telemetry server."""

import random
import time
from unittest.mock import Mock

from fastapi.testclient import TestClient

from api.mock_telemetry import create_app
from src.core.simulation import TelemetryStateStore, default_readings


def make_client(seed=1):
    store = TelemetryStateStore(rng=random.Random(seed))
    return TestClient(create_app(store, update_interval_seconds=None)), store


class TestPoolDataEndpoint:
    """Tests for GET /api/pool-data/{pool_id}."""

    def test_returns_reading(self):
        client, store = make_client()

        response = client.get("/api/pool-data/1")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"water_quality", "occupancy"}
        assert body["water_quality"]["temperature"] == store.get(1).water_quality.temperature
        assert body["occupancy"]["max_capacity"] == 50

    def test_reading_drifts_within_bounds(self):
        client, _ = make_client(seed=3)
        start = default_readings()[2].water_quality

        body = client.get("/api/pool-data/2").json()

        assert abs(body["water_quality"]["temperature"] - start.temperature) <= 0.55
        assert 6.8 <= body["water_quality"]["ph"] <= 7.8

    def test_unknown_pool_is_404(self):
        client, _ = make_client()

        assert client.get("/api/pool-data/42").status_code == 404


class TestPeriodicUpdates:
    """Tests for the background drift while the app runs."""

    def test_advances_all_pools_on_interval(self):
        store = Mock(spec=TelemetryStateStore)

        with TestClient(create_app(store, update_interval_seconds=0.01)):
            time.sleep(0.2)

        assert store.advance_all.called

    def test_stops_on_shutdown(self):
        store = Mock(spec=TelemetryStateStore)

        with TestClient(create_app(store, update_interval_seconds=0.01)):
            time.sleep(0.1)
        calls = store.advance_all.call_count
        time.sleep(0.1)

        assert store.advance_all.call_count == calls

    def test_disabled_without_interval(self):
        store = Mock(spec=TelemetryStateStore)

        with TestClient(create_app(store, update_interval_seconds=None)):
            time.sleep(0.05)

        store.advance_all.assert_not_called()

    def test_readings_change_without_requests(self):
        store = TelemetryStateStore(rng=random.Random(5))
        before = store.get(1)

        with TestClient(create_app(store, update_interval_seconds=0.01)):
            time.sleep(0.2)

        assert store.get(1) != before
