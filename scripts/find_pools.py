#!/usr/bin/env python3
"""Find pools from the command line.

Runs the same search the API runs and prints the results.

Usage:
    # Pools near a point (falls back to all known pools when none are near)
    python scripts/find_pools.py --lat 17.3850 --lng 78.4867

    # Custom radius in meters
    python scripts/find_pools.py --lat 17.3850 --lng 78.4867 --radius 2000

    # Search by place name or pool text
    python scripts/find_pools.py --query Attapur

    # Raw JSON output
    python scripts/find_pools.py --query Attapur --json

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
"""

import argparse
import json
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.core.errors import PoolFinderError
from src.core.formatter import format_distance, search_result_to_dict
from src.core.ranking import SearchResult
from src.orchestrator import PoolFinder
from src.shell.config_loader import load_config

logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def print_results(result: SearchResult, heading: str) -> None:
    """Print a result set as a readable list."""
    print(heading)
    if result.is_fallback:
        print("No swimming pools found at the location. Showing all known pools.")
    print("=" * 60)

    if not result.pools:
        print("No swimming pools found.")
        return

    for pool in result.pools:
        live = "LIVE" if pool.has_live_data else "    "
        distance = format_distance(pool.distance_km) or ""
        print(f"[{live}] {pool.name:<35} {distance}")
        print(f"       {pool.pool.address}, {pool.pool.city}, {pool.pool.postal_code}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Find swimming pools")
    parser.add_argument("--lat", help="Latitude of the search center")
    parser.add_argument("--lng", help="Longitude of the search center")
    parser.add_argument("--radius", help="Search radius in meters")
    parser.add_argument("--query", help="Place name or pool text to search for")
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    args = parser.parse_args()

    if not args.query and (args.lat is None or args.lng is None):
        parser.error("Provide --query or both --lat and --lng")

    finder = PoolFinder(load_config())

    try:
        if args.query:
            search = finder.search(args.query)
            result, place = search.result, search.place
            heading = f"Swimming Pools in {place.label}" if place else f'Search Results for "{args.query}"'
        else:
            result = finder.discover(args.lat, args.lng, args.radius)
            place = None
            heading = f"Swimming Pools near {args.lat}, {args.lng}"
    except PoolFinderError as e:
        logger.error("Search failed: %s", e)
        return 1

    if args.json:
        print(json.dumps(search_result_to_dict(result, place=place), indent=2))
    else:
        print_results(result, heading)

    return 0


if __name__ == "__main__":
    sys.exit(main())
