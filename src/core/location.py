"""Geocoding result parsing - Pure functions.

Turns Nominatim search results into a typed place with a short
"area, city" label for display.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from src.core.geo import Coordinate


AREA_KEYS = ("suburb", "neighbourhood", "quarter", "district")
CITY_KEYS = ("city", "town", "village", "state")


@dataclass(frozen=True)
class GeocodedPlace:
    """A place found for a free-text query.

    Attributes:
        latitude: Place latitude
        longitude: Place longitude
        display_name: Full name from the geocoder
        area: Neighbourhood-level name (may be empty)
        city: City-level name (may be empty)
    """
    latitude: float
    longitude: float
    display_name: str
    area: str = ""
    city: str = ""

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def label(self) -> str:
        parts = [p for p in (self.area, self.city) if p]
        return ", ".join(parts) or self.display_name


def _first_present(address: Mapping[str, Any], keys: Sequence[str]) -> str:
    for key in keys:
        value = address.get(key)
        if value:
            return str(value)
    return ""


def extract_area_and_city(result: Mapping[str, Any]) -> tuple[str, str]:
    """Pick area and city names from a geocoder result.

    Pure function. Address details are preferred; when either is
    missing, the first two comma-separated parts of the display name
    are used instead.
    """
    address = result.get("address") or {}
    area = _first_present(address, AREA_KEYS)
    city = _first_present(address, CITY_KEYS)

    if not area or not city:
        parts = [p.strip() for p in str(result.get("display_name", "")).split(",")]
        if len(parts) >= 2:
            area = area or parts[0]
            city = city or parts[1]

    return area, city


def parse_place(results: Sequence[Mapping[str, Any]]) -> GeocodedPlace | None:
    """Parse the best geocoder hit.

    Pure function: the first result with a usable coordinate wins.

    Args:
        results: Nominatim JSON search results

    Returns:
        GeocodedPlace or None if nothing usable was found
    """
    for result in results:
        try:
            latitude = float(result["lat"])
            longitude = float(result["lon"])
        except (KeyError, TypeError, ValueError):
            continue

        area, city = extract_area_and_city(result)
        return GeocodedPlace(
            latitude=latitude,
            longitude=longitude,
            display_name=str(result.get("display_name", "")),
            area=area,
            city=city,
        )

    return None
