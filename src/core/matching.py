"""Reconciliation of map features with stored pools - Pure functions.

Each named map feature is looked up in the record store through an
injected lookup callable. A hit becomes the stored pool annotated with
the feature as provenance; a miss becomes a pool synthesized from the
feature's tags. The functions here do no I/O themselves.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from src.core.geo import Coordinate
from src.core.pool import (
    ADDRESS_UNAVAILABLE,
    CITY_UNAVAILABLE,
    CONTACT_UNAVAILABLE,
    DEFAULT_OPENING_HOURS,
    POSTAL_CODE_UNAVAILABLE,
    SOURCE_EXTERNAL,
    SOURCE_INTERNAL,
    ExternalFeature,
    Facilities,
    OpeningHours,
    PoolRecord,
    Provenance,
    UnifiedPoolResult,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreMatch:
    """A stored pool matched to a map feature.

    Attributes:
        record: The first record the store returned
        distance_km: Store-computed distance from the query point
    """
    record: PoolRecord
    distance_km: float | None = None


# (feature, query point) -> first matching stored pool, or None
MatchLookup = Callable[[ExternalFeature, Coordinate], StoreMatch | None]


def build_matched_result(
    feature: ExternalFeature,
    match: StoreMatch,
) -> UnifiedPoolResult:
    """Annotate a stored pool with the map feature it matched.

    Pure function.
    """
    return UnifiedPoolResult(
        pool=match.record,
        has_live_data=match.record.has_live_data,
        source=SOURCE_INTERNAL,
        provenance=Provenance.from_feature(feature),
        distance_km=match.distance_km,
    )


def build_unmatched_result(feature: ExternalFeature) -> UnifiedPoolResult:
    """Synthesize a pool from a map feature with no stored counterpart.

    Pure function. Missing address and contact tags become placeholder
    strings, the feature's single opening_hours tag (or the default
    range) is repeated for every day, and facility flags take the map
    defaults. Such pools never have live data.

    Args:
        feature: A named map feature

    Returns:
        UnifiedPoolResult sourced from the map feature
    """
    tags = feature.tags

    pool = PoolRecord(
        id=None,
        name=feature.name or "",
        address=tags.street or ADDRESS_UNAVAILABLE,
        city=tags.city or CITY_UNAVAILABLE,
        postal_code=tags.postcode or POSTAL_CODE_UNAVAILABLE,
        latitude=feature.latitude,
        longitude=feature.longitude,
        api_endpoint=None,
        contact_number=tags.phone or CONTACT_UNAVAILABLE,
        email=tags.email or CONTACT_UNAVAILABLE,
        opening_hours=OpeningHours.uniform(tags.opening_hours or DEFAULT_OPENING_HOURS),
        facilities=Facilities.external_default(),
    )

    return UnifiedPoolResult(
        pool=pool,
        has_live_data=False,
        source=SOURCE_EXTERNAL,
        provenance=Provenance.from_feature(feature),
    )


def reconcile(
    features: Iterable[ExternalFeature],
    query: Coordinate,
    find_match: MatchLookup,
) -> list[UnifiedPoolResult]:
    """Reconcile map features against the record store.

    Features without a name are skipped. Every other feature costs one
    lookup, in feature order. Lookup errors propagate unchanged so a
    single failure aborts the whole reconciliation.

    Args:
        features: Map features from the data service
        query: The caller's query point
        find_match: Record store lookup

    Returns:
        One result per named feature, in feature order
    """
    results = []
    skipped = 0

    for feature in features:
        if not feature.name:
            skipped += 1
            continue

        match = find_match(feature, query)
        if match is not None:
            results.append(build_matched_result(feature, match))
        else:
            results.append(build_unmatched_result(feature))

    if skipped:
        logger.debug("Skipped %d unnamed map features", skipped)

    return results
