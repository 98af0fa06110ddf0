"""Response formatting - Pure functions.

This module shapes pools, search results, telemetry and weather into
JSON-serializable dicts for the HTTP layer, and renders display strings.
All functions are pure with no side effects.
"""

from typing import Any

from src.core.location import GeocodedPlace
from src.core.pool import DAYS, OpeningHours, PoolRecord, Provenance, UnifiedPoolResult
from src.core.ranking import SearchResult
from src.core.telemetry import (
    STATUS_DANGER,
    STATUS_GOOD,
    STATUS_WARNING,
    LiveTelemetry,
    QualityAssessment,
)
from src.core.weather import WeatherReport


STATUS_LABELS = {
    STATUS_GOOD: "Good",
    STATUS_WARNING: "Needs Attention",
    STATUS_DANGER: "Action Required",
}


def format_opening_hours(hours: OpeningHours) -> list[str]:
    """Render opening hours as 'Monday: 9:00 AM - 6:00 PM' lines in week order."""
    schedule = hours.as_dict()
    return [f"{day.capitalize()}: {schedule[day]}" for day in DAYS]


def format_distance(distance_km: float | None) -> str | None:
    """Render a distance like '1.2 km away'."""
    if distance_km is None:
        return None
    return f"{distance_km:.1f} km away"


def quality_status_label(status: str) -> str:
    """Display label for an assessment status."""
    return STATUS_LABELS.get(status, status)


def pool_to_dict(pool: PoolRecord) -> dict[str, Any]:
    """Convert a PoolRecord to a JSON-serializable dict."""
    facilities = pool.facilities
    return {
        "id": pool.id,
        "pool_name": pool.name,
        "address": pool.address,
        "city": pool.city,
        "postal_code": pool.postal_code,
        "latitude": pool.latitude,
        "longitude": pool.longitude,
        "api_endpoint": pool.api_endpoint,
        "has_live_data": pool.has_live_data,
        "contact_number": pool.contact_number,
        "email": pool.email,
        "opening_hours": pool.opening_hours.as_dict(),
        "lifeguard_available": facilities.lifeguard_available,
        "emergency_equipment_available": facilities.emergency_equipment_available,
        "cctv_installed": facilities.cctv_installed,
        "changing_rooms_available": facilities.changing_rooms_available,
        "locker_facility": facilities.locker_facility,
    }


def _provenance_to_dict(provenance: Provenance) -> dict[str, Any]:
    return {
        "id": provenance.id,
        "name": provenance.name,
        "type": provenance.element_type,
        "tags": dict(provenance.tags),
    }


def result_to_dict(result: UnifiedPoolResult) -> dict[str, Any]:
    """Convert a UnifiedPoolResult to a JSON-serializable dict."""
    data = pool_to_dict(result.pool)
    data["has_live_data"] = result.has_live_data
    data["source"] = result.source
    data["distance"] = result.distance_km
    data["osm_data"] = (
        _provenance_to_dict(result.provenance) if result.provenance is not None else None
    )
    return data


def search_result_to_dict(
    result: SearchResult,
    place: GeocodedPlace | None = None,
) -> dict[str, Any]:
    """Convert a tagged SearchResult to a response body."""
    data: dict[str, Any] = {
        "tier": result.tier,
        "fallback": result.is_fallback,
        "count": len(result.pools),
        "pools": [result_to_dict(r) for r in result.pools],
    }

    if place is not None:
        data["location"] = {
            "label": place.label,
            "area": place.area,
            "city": place.city,
            "latitude": place.latitude,
            "longitude": place.longitude,
        }

    return data


def telemetry_to_dict(
    telemetry: LiveTelemetry,
    assessment: QualityAssessment,
) -> dict[str, Any]:
    """Convert a live reading and its assessment to a response body."""
    quality = telemetry.water_quality
    data: dict[str, Any] = {
        "water_quality": {
            "temperature": quality.temperature,
            "ph": quality.ph,
            "chlorine": quality.chlorine,
        },
        "occupancy": None,
        "assessment": {
            "status": assessment.status,
            "label": quality_status_label(assessment.status),
            "issues": list(assessment.issues),
        },
    }

    if telemetry.occupancy is not None:
        data["occupancy"] = {
            "current": telemetry.occupancy.current,
            "max_capacity": telemetry.occupancy.max_capacity,
        }

    return data


def weather_to_dict(report: WeatherReport) -> dict[str, Any]:
    """Convert a WeatherReport to a response body."""
    return {
        "condition": report.condition,
        "description": report.description,
        "temperature": round(report.temperature_c),
        "humidity": report.humidity,
        "wind_speed": round(report.wind_speed),
        "icon": report.icon,
    }
