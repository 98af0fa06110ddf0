"""Unit tests for response formatting.

Pure function tests - no mocks needed.
"""

import pytest

from src.core.location import GeocodedPlace
from src.core.pool import (
    SOURCE_EXTERNAL,
    ExternalFeature,
    Facilities,
    FeatureTags,
    OpeningHours,
    PoolRecord,
    Provenance,
    UnifiedPoolResult,
)
from src.core.ranking import TIER_FALLBACK, TIER_PROXIMITY, SearchResult
from src.core.telemetry import LiveTelemetry, Occupancy, QualityAssessment, WaterQuality
from src.core.weather import WeatherReport
from src.core.formatter import (
    format_distance,
    format_opening_hours,
    pool_to_dict,
    quality_status_label,
    result_to_dict,
    search_result_to_dict,
    telemetry_to_dict,
    weather_to_dict,
)


@pytest.fixture
def sample_pool():
    """Create a sample stored pool for testing."""
    return PoolRecord(
        id=1,
        name="Aqua Swimming Pool",
        address="123 Main Street, Attapur",
        city="Hyderabad",
        postal_code="500048",
        latitude=17.3850,
        longitude=78.4867,
        api_endpoint="http://localhost:3001/api/pool-data/1",
        contact_number="+91 40 1234 5678",
        email="info@aqua.example",
        opening_hours=OpeningHours.uniform("6:00 AM - 9:00 PM"),
        facilities=Facilities(lifeguard_available=True, locker_facility=True),
    )


class TestFormatOpeningHours:
    """Tests for format_opening_hours() function."""

    def test_week_order_and_capitalized(self):
        """Lines start on Monday and end on Sunday."""
        lines = format_opening_hours(OpeningHours(monday="7:00 AM - 8:00 PM"))

        assert len(lines) == 7
        assert lines[0] == "Monday: 7:00 AM - 8:00 PM"
        assert lines[-1] == "Sunday: 9:00 AM - 6:00 PM"


class TestFormatDistance:
    """Tests for format_distance() function."""

    def test_one_decimal(self):
        assert format_distance(1.234) == "1.2 km away"

    def test_zero_is_a_distance(self):
        assert format_distance(0.0) == "0.0 km away"

    def test_none(self):
        assert format_distance(None) is None


class TestQualityStatusLabel:
    """Tests for quality_status_label() function."""

    @pytest.mark.parametrize("status,label", [
        ("good", "Good"),
        ("warning", "Needs Attention"),
        ("danger", "Action Required"),
        ("other", "other"),
    ])
    def test_labels(self, status, label):
        assert quality_status_label(status) == label


class TestPoolToDict:
    """Tests for pool_to_dict() function."""

    def test_field_names(self, sample_pool):
        """Keys follow the stored column names."""
        data = pool_to_dict(sample_pool)

        assert data["id"] == 1
        assert data["pool_name"] == "Aqua Swimming Pool"
        assert data["postal_code"] == "500048"
        assert data["has_live_data"] is True
        assert data["opening_hours"]["friday"] == "6:00 AM - 9:00 PM"
        assert data["lifeguard_available"] is True
        assert data["cctv_installed"] is False


class TestResultToDict:
    """Tests for result_to_dict() function."""

    def test_includes_source_distance_and_provenance(self, sample_pool):
        """Result extras are added to the pool fields."""
        feature = ExternalFeature(
            id=1001,
            element_type="way",
            latitude=17.3850,
            longitude=78.4867,
            tags=FeatureTags({"name": "Aqua", "leisure": "swimming_pool"}),
        )
        result = UnifiedPoolResult(
            pool=sample_pool,
            has_live_data=True,
            provenance=Provenance.from_feature(feature),
            distance_km=0.0,
        )

        data = result_to_dict(result)

        assert data["distance"] == 0.0
        assert data["osm_data"] == {
            "id": 1001,
            "name": "Aqua",
            "type": "way",
            "tags": {"name": "Aqua", "leisure": "swimming_pool"},
        }

    def test_no_provenance(self, sample_pool):
        """Results not from the map have null osm_data."""
        result = UnifiedPoolResult(
            pool=sample_pool,
            has_live_data=False,
            source=SOURCE_EXTERNAL,
        )

        data = result_to_dict(result)

        assert data["osm_data"] is None
        assert data["distance"] is None
        assert data["source"] == SOURCE_EXTERNAL
        assert data["has_live_data"] is False


class TestSearchResultToDict:
    """Tests for search_result_to_dict() function."""

    def test_tier_and_count(self, sample_pool):
        result = SearchResult(
            tier=TIER_PROXIMITY,
            pools=(UnifiedPoolResult(pool=sample_pool, has_live_data=True),),
        )

        data = search_result_to_dict(result)

        assert data["tier"] == TIER_PROXIMITY
        assert data["fallback"] is False
        assert data["count"] == 1
        assert "location" not in data

    def test_fallback_with_location(self):
        place = GeocodedPlace(17.37, 78.43, "Attapur, Hyderabad", area="Attapur", city="Hyderabad")

        data = search_result_to_dict(SearchResult(tier=TIER_FALLBACK, pools=()), place=place)

        assert data["fallback"] is True
        assert data["pools"] == []
        assert data["location"]["label"] == "Attapur, Hyderabad"


class TestTelemetryToDict:
    """Tests for telemetry_to_dict() function."""

    def test_with_occupancy(self):
        telemetry = LiveTelemetry(
            water_quality=WaterQuality(26.5, 7.2, 1.5),
            occupancy=Occupancy(current=12, max_capacity=50),
        )
        assessment = QualityAssessment(status="warning", issues=("pH level approaching limits",))

        data = telemetry_to_dict(telemetry, assessment)

        assert data["water_quality"] == {"temperature": 26.5, "ph": 7.2, "chlorine": 1.5}
        assert data["occupancy"] == {"current": 12, "max_capacity": 50}
        assert data["assessment"] == {
            "status": "warning",
            "label": "Needs Attention",
            "issues": ["pH level approaching limits"],
        }

    def test_without_occupancy(self):
        telemetry = LiveTelemetry(water_quality=WaterQuality(26.5, 7.2, 1.5))

        data = telemetry_to_dict(telemetry, QualityAssessment(status="good"))

        assert data["occupancy"] is None
        assert data["assessment"]["issues"] == []


class TestWeatherToDict:
    """Tests for weather_to_dict() function."""

    def test_rounds_values(self):
        report = WeatherReport(
            condition="Clear",
            description="clear sky",
            temperature_c=28.6,
            humidity=40,
            wind_speed=3.4,
        )

        data = weather_to_dict(report)

        assert data["temperature"] == 29
        assert data["wind_speed"] == 3
        assert data["icon"] == "fa-sun"
