"""Overpass API Client - Imperative Shell.

This module handles HTTP communication with the OpenStreetMap Overpass
API to find swimming pools around a point.
All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from src.core.config import DEFAULT_OVERPASS_URL, DEFAULT_SEARCH_RADIUS_M
from src.core.errors import SourceUnavailable
from src.core.geo import Coordinate
from src.core.pool import ExternalFeature, parse_features


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30

# Server-side query timeout (seconds)
DEFAULT_QUERY_TIMEOUT = 25


def build_pool_query(
    coordinate: Coordinate,
    radius_m: int = DEFAULT_SEARCH_RADIUS_M,
    query_timeout: int = DEFAULT_QUERY_TIMEOUT,
) -> str:
    """Build an Overpass QL query for swimming pools around a point.

    Ways and relations are returned with their center so every element
    can be placed on the map.

    Args:
        coordinate: Search center
        radius_m: Search radius in meters
        query_timeout: Server-side timeout in seconds

    Returns:
        Overpass QL query text
    """
    around = f"(around:{radius_m},{coordinate.latitude},{coordinate.longitude})"
    return (
        f"[out:json][timeout:{query_timeout}];\n"
        "(\n"
        f'  node["leisure"="swimming_pool"]{around};\n'
        f'  way["leisure"="swimming_pool"]{around};\n'
        f'  relation["leisure"="swimming_pool"]{around};\n'
        ");\n"
        "out center tags;\n"
    )


class OverpassClient:
    """Client for fetching swimming pool features from the Overpass API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OVERPASS_URL,
        timeout: int = DEFAULT_TIMEOUT,
        query_timeout: int = DEFAULT_QUERY_TIMEOUT,
        user_agent: str | None = None,
    ) -> None:
        """Initialize Overpass client.

        Args:
            base_url: Overpass interpreter URL
            timeout: Request timeout in seconds
            query_timeout: Server-side query timeout in seconds
            user_agent: User-Agent header value (optional)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.query_timeout = query_timeout
        self.user_agent = user_agent

    def fetch_near(
        self,
        coordinate: Coordinate,
        radius_m: int = DEFAULT_SEARCH_RADIUS_M,
    ) -> list[ExternalFeature]:
        """Fetch swimming pool features within a radius of a point.

        This method performs HTTP I/O. An empty list means the service
        found nothing; it is not an error.

        Args:
            coordinate: Search center
            radius_m: Search radius in meters

        Returns:
            Parsed features in service order

        Raises:
            SourceUnavailable: On transport failure, non-success status
                or an unreadable response body
        """
        query = build_pool_query(coordinate, radius_m, self.query_timeout)

        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        logger.info(
            "Fetching pools from Overpass within %dm of (%s, %s)",
            radius_m,
            coordinate.latitude,
            coordinate.longitude,
        )

        try:
            response = requests.post(
                self.base_url,
                data={"data": query},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("Overpass request failed: %s", str(e))
            raise SourceUnavailable(f"Overpass request failed: {e}") from e

        if not isinstance(data, dict):
            logger.error("Overpass returned an unexpected body")
            raise SourceUnavailable("Overpass returned an unexpected body")

        features = parse_features(data)

        logger.info("Fetched %d pool features from Overpass", len(features))

        return features
