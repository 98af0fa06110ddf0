"""Result ranking and fallback ordering - Pure functions.

Tier 1 orders reconciled results by distance from the query point.
Tier 2 is the listing of every known pool, used when tier 1 is empty:
pools with live data first, then alphabetical by name.
"""

import dataclasses
from dataclasses import dataclass
from typing import Iterable

from src.core.geo import Coordinate, distance_between
from src.core.pool import (
    SOURCE_INTERNAL,
    SOURCE_SEED,
    PoolRecord,
    UnifiedPoolResult,
)


TIER_PROXIMITY = "proximity"
TIER_FALLBACK = "fallback"
TIER_TEXT = "text"


@dataclass(frozen=True)
class SearchResult:
    """An ordered result set tagged with the tier that produced it.

    Attributes:
        tier: 'proximity', 'fallback' or 'text'
        pools: Ordered results
    """
    tier: str
    pools: tuple[UnifiedPoolResult, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return self.tier == TIER_FALLBACK

    def __len__(self) -> int:
        return len(self.pools)


def attach_distance(result: UnifiedPoolResult, origin: Coordinate) -> UnifiedPoolResult:
    """Ensure a result carries its distance from the query point.

    Pure function. A distance already computed by the store is kept,
    including 0.0; otherwise it is computed from the pool's coordinate.
    """
    if result.distance_km is not None:
        return result

    return dataclasses.replace(
        result,
        distance_km=distance_between(origin, result.coordinate),
    )


def rank_by_distance(
    results: Iterable[UnifiedPoolResult],
    origin: Coordinate,
) -> list[UnifiedPoolResult]:
    """Order results nearest first.

    Pure function. The sort is stable: results at equal distance keep
    their input order.

    Args:
        results: Reconciled results
        origin: The caller's query point

    Returns:
        Results with distances attached, ascending by distance
    """
    with_distance = [attach_distance(r, origin) for r in results]
    return sorted(with_distance, key=lambda r: r.distance_km)


def _fallback_key(result: UnifiedPoolResult) -> tuple[bool, str, str]:
    # Case-insensitive first; on a tie lowercase sorts before uppercase
    name = result.name
    return (not result.has_live_data, name.casefold(), name.swapcase())


def sort_fallback(results: Iterable[UnifiedPoolResult]) -> list[UnifiedPoolResult]:
    """Order a fallback listing: live data first, then by name.

    Pure function. Names compare alphabetically ignoring case, with
    lowercase before uppercase when two names differ only in case.
    """
    return sorted(results, key=_fallback_key)


def build_fallback(
    stored: Iterable[PoolRecord],
    seeds: Iterable[PoolRecord],
) -> SearchResult:
    """Build the tier-2 listing from every stored pool plus the seed pools.

    Pure function. The two lists are combined as-is; a stored copy of a
    seed pool appears twice.

    Args:
        stored: Every record in the store
        seeds: The fixed demonstration pools

    Returns:
        SearchResult tagged as a fallback listing
    """
    combined = [
        UnifiedPoolResult(pool=record, has_live_data=record.has_live_data, source=SOURCE_INTERNAL)
        for record in stored
    ]
    combined.extend(
        UnifiedPoolResult(pool=record, has_live_data=record.has_live_data, source=SOURCE_SEED)
        for record in seeds
    )

    return SearchResult(tier=TIER_FALLBACK, pools=tuple(sort_fallback(combined)))
