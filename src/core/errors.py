"""Error taxonomy for pool search.

Every error raised by the core or the shell is one of these. The HTTP
layer maps them to responses; nothing below it retries or degrades.
"""


class PoolFinderError(Exception):
    """Base class for pool search errors."""


class SourceUnavailable(PoolFinderError):
    """A third-party data source (map data, geocoder, telemetry, weather) failed."""


class StoreUnavailable(PoolFinderError):
    """The internal pool record store failed."""


class InvalidQuery(PoolFinderError):
    """The caller supplied a missing or malformed query."""
