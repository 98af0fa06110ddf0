"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Geo/distance calculations
- Map feature parsing
- Pool reconciliation
- Result ranking and fallback ordering
- Water quality assessment
- Response formatting

All functions here are deterministic and have no I/O.
"""

from src.core.errors import InvalidQuery, SourceUnavailable, StoreUnavailable
from src.core.geo import Coordinate, calculate_distance, match_box, parse_coordinate
from src.core.pool import ExternalFeature, PoolRecord, UnifiedPoolResult, parse_features
from src.core.matching import StoreMatch, reconcile
from src.core.ranking import SearchResult, build_fallback, rank_by_distance, sort_fallback
from src.core.telemetry import QualityAssessment, WaterQuality, assess_water_quality

__all__ = [
    # Errors
    "InvalidQuery",
    "SourceUnavailable",
    "StoreUnavailable",
    # Geo
    "Coordinate",
    "calculate_distance",
    "match_box",
    "parse_coordinate",
    # Pools
    "ExternalFeature",
    "PoolRecord",
    "UnifiedPoolResult",
    "parse_features",
    # Matching
    "StoreMatch",
    "reconcile",
    # Ranking
    "SearchResult",
    "build_fallback",
    "rank_by_distance",
    "sort_fallback",
    # Telemetry
    "QualityAssessment",
    "WaterQuality",
    "assess_water_quality",
]
