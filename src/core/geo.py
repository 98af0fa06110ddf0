"""Geographic calculations - Pure functions.

This module provides distance and bounding box calculations for pool
locations. All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any

from src.core.errors import InvalidQuery


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Half-width of the flat matching box around an external feature, in degrees.
# Not corrected for latitude, so the box narrows in longitude away from the equator.
MATCH_BOX_DEGREES = 0.001


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in degrees.

    Out-of-range values are carried as-is; nothing here rejects them.
    """
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(origin: Coordinate, target: Coordinate) -> float:
    """Great-circle distance in kilometers between two coordinates.

    Pure function.
    """
    return calculate_distance(
        origin.latitude,
        origin.longitude,
        target.latitude,
        target.longitude,
    )


def match_box(
    latitude: float,
    longitude: float,
    delta: float = MATCH_BOX_DEGREES,
) -> BoundingBox:
    """Build the flat ±delta degree box used to match nearby records.

    Pure function.

    Args:
        latitude: Box center latitude
        longitude: Box center longitude
        delta: Half-width in degrees, applied to both axes

    Returns:
        BoundingBox around the point
    """
    return BoundingBox(
        min_latitude=latitude - delta,
        max_latitude=latitude + delta,
        min_longitude=longitude - delta,
        max_longitude=longitude + delta,
    )


def _parse_degrees(value: Any, field_name: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidQuery(f"{field_name} is required")

    if isinstance(value, bool):
        raise InvalidQuery(f"{field_name} must be a number")

    try:
        degrees = float(value)
    except (TypeError, ValueError):
        raise InvalidQuery(f"{field_name} must be a number, got {value!r}")

    if not math.isfinite(degrees):
        raise InvalidQuery(f"{field_name} must be finite, got {value!r}")

    return degrees


def parse_coordinate(latitude: Any, longitude: Any) -> Coordinate:
    """Parse raw query values into a Coordinate.

    Pure function. Only presence and numeric form are checked; the
    physical range is not enforced.

    Args:
        latitude: Raw latitude (number or numeric string)
        longitude: Raw longitude (number or numeric string)

    Returns:
        Parsed Coordinate

    Raises:
        InvalidQuery: If either value is missing or not a finite number
    """
    return Coordinate(
        latitude=_parse_degrees(latitude, "latitude"),
        longitude=_parse_degrees(longitude, "longitude"),
    )
