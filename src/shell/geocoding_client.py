"""Nominatim Geocoding Client - Imperative Shell.

This module handles HTTP communication with the OpenStreetMap Nominatim
search API. All I/O is contained here; result parsing is in the core module.
"""

import logging

import requests

from src.core.config import DEFAULT_NOMINATIM_URL
from src.core.errors import SourceUnavailable
from src.core.location import GeocodedPlace, parse_place


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10

DEFAULT_USER_AGENT = "pool-finder/1.0"


class GeocodingClient:
    """Client for resolving free-text locations to coordinates.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_NOMINATIM_URL,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize geocoding client.

        Args:
            base_url: Nominatim search URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header (required by Nominatim's usage policy)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent

    def geocode(self, query: str) -> GeocodedPlace | None:
        """Resolve a free-text query to the best matching place.

        This method performs HTTP I/O.

        Args:
            query: Place name or address

        Returns:
            GeocodedPlace, or None if the geocoder found nothing

        Raises:
            SourceUnavailable: If the request fails
        """
        logger.info("Geocoding %r", query)

        try:
            response = requests.get(
                self.base_url,
                params={"format": "json", "addressdetails": "1", "q": query},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            results = response.json()
        except requests.RequestException as e:
            logger.error("Geocoding request failed: %s", str(e))
            raise SourceUnavailable(f"Geocoding request failed: {e}") from e

        if not isinstance(results, list):
            logger.warning("Geocoder returned a non-list body for %r", query)
            return None

        place = parse_place(results)
        if place is None:
            logger.info("No place found for %r", query)
        else:
            logger.info("Geocoded %r to %s", query, place.label)

        return place
