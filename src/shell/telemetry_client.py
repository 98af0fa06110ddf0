"""Live Telemetry Client - Imperative Shell.

Fetches water quality readings from a pool's telemetry endpoint.
"""

import logging

import requests

from src.core.errors import SourceUnavailable
from src.core.telemetry import LiveTelemetry, parse_telemetry


logger = logging.getLogger(__name__)


# Default timeout for telemetry requests (seconds)
DEFAULT_TIMEOUT = 10


class TelemetryClient:
    """Client for pool telemetry endpoints.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def fetch(self, endpoint: str) -> LiveTelemetry:
        """Fetch the current reading from a telemetry endpoint.

        This method performs HTTP I/O.

        Args:
            endpoint: The pool's api_endpoint URL

        Returns:
            Parsed LiveTelemetry

        Raises:
            SourceUnavailable: If the request fails or the payload is malformed
        """
        logger.info("Fetching live telemetry from %s", endpoint)

        try:
            response = requests.get(endpoint, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("Telemetry request failed: %s", str(e))
            raise SourceUnavailable(f"Telemetry request failed: {e}") from e

        telemetry = parse_telemetry(data) if isinstance(data, dict) else None
        if telemetry is None:
            logger.error("Malformed telemetry payload from %s", endpoint)
            raise SourceUnavailable(f"Malformed telemetry payload from {endpoint}")

        return telemetry
