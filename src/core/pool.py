"""Pool data models and map feature parsing - Pure functions.

This module defines the typed pool records shown to callers and parses
Overpass JSON elements into ExternalFeature objects.
All functions are pure with no side effects.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from src.core.geo import Coordinate


DAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DEFAULT_OPENING_HOURS = "9:00 AM - 6:00 PM"

# Placeholders for unmatched map features missing address or contact tags
ADDRESS_UNAVAILABLE = "Address not available"
CITY_UNAVAILABLE = "City not available"
POSTAL_CODE_UNAVAILABLE = "Postal code not available"
CONTACT_UNAVAILABLE = "Not available"

SOURCE_INTERNAL = "internal"
SOURCE_EXTERNAL = "external"
SOURCE_SEED = "seed"


@dataclass(frozen=True)
class FeatureTags(Mapping[str, str]):
    """Free-form OpenStreetMap tags with typed access to the keys we use.

    Attributes:
        values: Raw tag key/value pairs
    """
    values: Mapping[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def _text(self, key: str) -> str | None:
        value = self.values.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def name(self) -> str | None:
        return self._text("name")

    @property
    def street(self) -> str | None:
        return self._text("addr:street")

    @property
    def city(self) -> str | None:
        return self._text("addr:city")

    @property
    def postcode(self) -> str | None:
        return self._text("addr:postcode")

    @property
    def phone(self) -> str | None:
        return self._text("phone")

    @property
    def email(self) -> str | None:
        return self._text("email")

    @property
    def opening_hours(self) -> str | None:
        return self._text("opening_hours")


@dataclass(frozen=True)
class ExternalFeature:
    """A swimming pool feature returned by the map data service.

    Attributes:
        id: OpenStreetMap element ID
        element_type: 'node', 'way' or 'relation'
        latitude: Feature latitude (the center for ways and relations)
        longitude: Feature longitude
        tags: Tags attached to the element
    """
    id: int
    element_type: str
    latitude: float
    longitude: float
    tags: FeatureTags = field(default_factory=FeatureTags)

    @property
    def name(self) -> str | None:
        return self.tags.name

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class OpeningHours:
    """Weekly opening hours, one human-readable range per day."""
    monday: str = DEFAULT_OPENING_HOURS
    tuesday: str = DEFAULT_OPENING_HOURS
    wednesday: str = DEFAULT_OPENING_HOURS
    thursday: str = DEFAULT_OPENING_HOURS
    friday: str = DEFAULT_OPENING_HOURS
    saturday: str = DEFAULT_OPENING_HOURS
    sunday: str = DEFAULT_OPENING_HOURS

    @classmethod
    def uniform(cls, hours: str) -> "OpeningHours":
        """Same hours every day of the week."""
        return cls(**{day: hours for day in DAYS})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "OpeningHours":
        """Build from a day-keyed mapping; missing days get the default."""
        data = data or {}
        return cls(**{
            day: str(data[day]) if data.get(day) else DEFAULT_OPENING_HOURS
            for day in DAYS
        })

    def as_dict(self) -> dict[str, str]:
        return {day: getattr(self, day) for day in DAYS}


@dataclass(frozen=True)
class Facilities:
    """Facility flags for a pool.

    Attributes:
        lifeguard_available: A lifeguard is on duty
        emergency_equipment_available: Emergency equipment on site
        cctv_installed: CCTV coverage
        changing_rooms_available: Changing rooms on site
        locker_facility: Lockers available
    """
    lifeguard_available: bool = False
    emergency_equipment_available: bool = False
    cctv_installed: bool = False
    changing_rooms_available: bool = False
    locker_facility: bool = False

    @classmethod
    def external_default(cls) -> "Facilities":
        """Flags assumed for a pool known only from map data.

        Changing rooms and lockers are assumed present, everything else absent.
        """
        return cls(changing_rooms_available=True, locker_facility=True)


@dataclass(frozen=True)
class PoolRecord:
    """A pool as held by the internal record store.

    Attributes:
        id: Store identity (None for records not stored)
        name: Pool name
        address: Street address
        city: City
        postal_code: Postal code
        latitude: Pool latitude
        longitude: Pool longitude
        api_endpoint: URL serving live telemetry (optional)
        contact_number: Phone number
        email: Contact email
        opening_hours: Weekly schedule
        facilities: Facility flags
    """
    id: int | None
    name: str
    address: str
    city: str
    postal_code: str
    latitude: float
    longitude: float
    api_endpoint: str | None = None
    contact_number: str = CONTACT_UNAVAILABLE
    email: str = CONTACT_UNAVAILABLE
    opening_hours: OpeningHours = field(default_factory=OpeningHours)
    facilities: Facilities = field(default_factory=Facilities)

    @property
    def has_live_data(self) -> bool:
        """True iff a non-empty telemetry endpoint is set."""
        return bool(self.api_endpoint)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class Provenance:
    """The map feature a result was built from or matched against."""
    id: int
    name: str
    element_type: str
    tags: Mapping[str, str]

    @classmethod
    def from_feature(cls, feature: ExternalFeature) -> "Provenance":
        return cls(
            id=feature.id,
            name=feature.name or "",
            element_type=feature.element_type,
            tags=dict(feature.tags),
        )


@dataclass(frozen=True)
class UnifiedPoolResult:
    """A pool as shown to the caller.

    Attributes:
        pool: The pool fields (stored, synthesized from map data, or seed)
        has_live_data: Whether live telemetry can be fetched
        source: One of 'internal', 'external' or 'seed'
        provenance: Originating map feature, when there is one
        distance_km: Distance from the query point, once computed
    """
    pool: PoolRecord
    has_live_data: bool
    source: str = SOURCE_INTERNAL
    provenance: Provenance | None = None
    distance_km: float | None = None

    @property
    def name(self) -> str:
        return self.pool.name

    @property
    def coordinate(self) -> Coordinate:
        return self.pool.coordinate


def _element_coordinate(element: Mapping[str, Any]) -> tuple[float, float] | None:
    if element.get("lat") is not None and element.get("lon") is not None:
        return float(element["lat"]), float(element["lon"])

    center = element.get("center") or {}
    if center.get("lat") is not None and center.get("lon") is not None:
        return float(center["lat"]), float(center["lon"])

    return None


def parse_feature(element: Mapping[str, Any]) -> ExternalFeature | None:
    """Parse a single Overpass element into an ExternalFeature.

    Pure function: takes raw dict, returns typed feature or None if the
    element has no usable id or location.

    Args:
        element: Overpass JSON element

    Returns:
        ExternalFeature or None if parsing fails
    """
    try:
        coordinate = _element_coordinate(element)
        if coordinate is None:
            return None

        raw_tags = element.get("tags") or {}
        tags = FeatureTags({str(k): str(v) for k, v in raw_tags.items()})

        return ExternalFeature(
            id=int(element["id"]),
            element_type=str(element.get("type", "node")),
            latitude=coordinate[0],
            longitude=coordinate[1],
            tags=tags,
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def parse_features(data: Mapping[str, Any]) -> list[ExternalFeature]:
    """Parse an Overpass JSON response into ExternalFeatures.

    Pure function: drops elements that cannot be located, keeps the
    service's order.

    Args:
        data: Overpass JSON response body

    Returns:
        List of parsed features
    """
    features = []

    for element in data.get("elements") or []:
        feature = parse_feature(element)
        if feature is not None:
            features.append(feature)

    return features
