"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It's the "glue" that
makes the application work.
"""

import logging
from dataclasses import dataclass
from typing import Any

from src.core.config import Config
from src.core.errors import InvalidQuery
from src.core.geo import Coordinate, parse_coordinate
from src.core.location import GeocodedPlace
from src.core.matching import reconcile
from src.core.pool import SOURCE_INTERNAL, PoolRecord, UnifiedPoolResult
from src.core.ranking import (
    TIER_PROXIMITY,
    TIER_TEXT,
    SearchResult,
    build_fallback,
    rank_by_distance,
)
from src.core.seed import SEED_POOLS
from src.core.telemetry import LiveTelemetry, QualityAssessment, assess_water_quality
from src.core.weather import WeatherReport
from src.shell.geocoding_client import GeocodingClient
from src.shell.overpass_client import OverpassClient
from src.shell.pool_store import PoolStore
from src.shell.telemetry_client import TelemetryClient
from src.shell.weather_client import WeatherClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationSearch:
    """Result of a free-text search.

    Attributes:
        query: The text searched for
        result: Pools found, tagged with the tier that produced them
        place: The geocoded place, when the text resolved to one
    """
    query: str
    result: SearchResult
    place: GeocodedPlace | None = None


@dataclass(frozen=True)
class PoolTelemetry:
    """Live reading for a pool with its safety assessment."""
    pool: PoolRecord
    telemetry: LiveTelemetry
    assessment: QualityAssessment


class PoolFinder:
    """Coordinates pool search, reconciliation and live data.

    This class wires together:
    - Overpass client (nearby pool features)
    - Pool store (operator records)
    - Core functions (matching, ranking, assessment)
    - Geocoding client (free-text locations)
    - Telemetry and weather clients (live data)
    """

    def __init__(
        self,
        config: Config,
        store: PoolStore | None = None,
        overpass_client: OverpassClient | None = None,
        geocoding_client: GeocodingClient | None = None,
        telemetry_client: TelemetryClient | None = None,
        weather_client: WeatherClient | None = None,
    ) -> None:
        """Initialize with configuration.

        Args:
            config: Application configuration
            store: Pool record store (created if not provided)
            overpass_client: Overpass client (created if not provided)
            geocoding_client: Geocoding client (created if not provided)
            telemetry_client: Telemetry client (created if not provided)
            weather_client: Weather client (created when an API key is configured)
        """
        self.config = config
        self.store = store or PoolStore.from_url(config.database_url)
        self.overpass_client = overpass_client or OverpassClient(
            base_url=config.overpass_url,
            timeout=config.request_timeout_seconds,
            query_timeout=config.overpass_query_timeout_seconds,
            user_agent=config.user_agent,
        )
        self.geocoding_client = geocoding_client or GeocodingClient(
            base_url=config.nominatim_url,
            timeout=config.request_timeout_seconds,
            user_agent=config.user_agent,
        )
        self.telemetry_client = telemetry_client or TelemetryClient(
            timeout=config.telemetry_timeout_seconds,
        )
        if weather_client is None and config.weather_api_key:
            weather_client = WeatherClient(
                api_key=config.weather_api_key,
                base_url=config.weather_url,
                timeout=config.request_timeout_seconds,
            )
        self.weather_client = weather_client

    def _radius(self, radius_m: Any) -> int:
        if radius_m is None or radius_m == "":
            return self.config.search_radius_m

        try:
            radius = int(float(radius_m))
        except (TypeError, ValueError):
            raise InvalidQuery(f"radius must be a number, got {radius_m!r}")

        if radius <= 0:
            raise InvalidQuery(f"radius must be positive, got {radius}")

        return radius

    def nearby(self, latitude: Any, longitude: Any, radius_m: Any = None) -> list[UnifiedPoolResult]:
        """Tier 1: pools near a point, nearest first.

        Args:
            latitude: Query latitude (raw value)
            longitude: Query longitude (raw value)
            radius_m: Search radius in meters (config default if None)

        Returns:
            Reconciled results ranked by distance

        Raises:
            InvalidQuery: Missing or malformed coordinate or radius
            SourceUnavailable: Overpass failed
            StoreUnavailable: A store lookup failed
        """
        origin = parse_coordinate(latitude, longitude)
        radius = self._radius(radius_m)

        features = self.overpass_client.fetch_near(origin, radius)

        # Pure core functions; store lookups are injected
        results = reconcile(features, origin, self.store.find_match)
        ranked = rank_by_distance(results, origin)

        logger.info(
            "Nearby search at (%s, %s): %d features, %d results",
            origin.latitude,
            origin.longitude,
            len(features),
            len(ranked),
        )

        return ranked

    def all_pools(self) -> SearchResult:
        """Tier 2: every stored pool plus the seed pools, live data first."""
        stored = self.store.list_all()
        result = build_fallback(stored, SEED_POOLS)

        logger.info(
            "Fallback listing: %d stored + %d seed pools",
            len(stored),
            len(SEED_POOLS),
        )

        return result

    def discover(self, latitude: Any, longitude: Any, radius_m: Any = None) -> SearchResult:
        """Run tier 1 and fall back to tier 2 when it finds nothing."""
        ranked = self.nearby(latitude, longitude, radius_m)
        if ranked:
            return SearchResult(tier=TIER_PROXIMITY, pools=tuple(ranked))

        logger.info("No pools near (%s, %s), using fallback listing", latitude, longitude)
        return self.all_pools()

    def search_text(self, text: str | None) -> list[PoolRecord]:
        """Free-text search over stored pool names, cities and addresses.

        Raises:
            InvalidQuery: Empty query
            StoreUnavailable: The store query failed
        """
        if text is None or not text.strip():
            raise InvalidQuery("query is required")

        return self.store.search_text(text.strip())

    def search(self, text: str | None) -> LocationSearch:
        """Search by place name, falling back to a stored-pool text search.

        The text is geocoded first. When it resolves to a place, pools
        around that place are found with the tier cascade. When the
        geocoder finds nothing, stored pools are searched by text.

        Raises:
            InvalidQuery: Empty query
            SourceUnavailable: Geocoding or Overpass failed
            StoreUnavailable: A store query failed
        """
        if text is None or not text.strip():
            raise InvalidQuery("query is required")

        query = text.strip()
        place = self.geocoding_client.geocode(query)

        if place is not None:
            result = self.discover(place.latitude, place.longitude)
            return LocationSearch(query=query, result=result, place=place)

        records = self.store.search_text(query)
        pools = tuple(
            UnifiedPoolResult(pool=r, has_live_data=r.has_live_data, source=SOURCE_INTERNAL)
            for r in records
        )
        return LocationSearch(query=query, result=SearchResult(tier=TIER_TEXT, pools=pools))

    def pool_details(self, pool_id: int) -> PoolRecord | None:
        """Return a stored pool by id, or None."""
        return self.store.get_pool(pool_id)

    def pool_telemetry(self, pool: PoolRecord) -> PoolTelemetry | None:
        """Fetch and assess a pool's live reading.

        Returns None for pools without a telemetry endpoint.

        Raises:
            SourceUnavailable: The telemetry endpoint failed
        """
        if not pool.has_live_data:
            return None

        telemetry = self.telemetry_client.fetch(pool.api_endpoint)
        assessment = assess_water_quality(telemetry.water_quality)

        if assessment.issues:
            logger.warning(
                "Pool %s water quality %s: %s",
                pool.id,
                assessment.status,
                "; ".join(assessment.issues),
            )

        return PoolTelemetry(pool=pool, telemetry=telemetry, assessment=assessment)

    def weather(self, latitude: Any, longitude: Any) -> WeatherReport | None:
        """Current weather at a point, or None when weather is not configured.

        Raises:
            InvalidQuery: Missing or malformed coordinate
            SourceUnavailable: The weather service failed
        """
        coordinate: Coordinate = parse_coordinate(latitude, longitude)

        if self.weather_client is None:
            logger.warning("Weather requested but no API key configured")
            return None

        return self.weather_client.current(coordinate)
