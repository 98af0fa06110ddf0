"""Pool Finder API - FastAPI service.

Serves nearby pool search, the all-pools fallback listing, free-text
search, pool details, live water quality and weather.
"""

import logging
import os
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import Config
from src.core.errors import InvalidQuery, SourceUnavailable, StoreUnavailable
from src.core.formatter import (
    format_opening_hours,
    pool_to_dict,
    result_to_dict,
    search_result_to_dict,
    telemetry_to_dict,
    weather_to_dict,
)
from src.orchestrator import PoolFinder
from src.shell.config_loader import load_config, load_config_from_env


log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("DATABASE_URL"):
        return load_config_from_env()
    else:
        return load_config()


CONFIG = _get_config()

app = FastAPI(
    title="Pool Finder API",
    description="Find swimming pools nearby and check their water quality",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


_finder: PoolFinder | None = None


def get_finder() -> PoolFinder:
    """Get or create the shared PoolFinder."""
    global _finder
    if _finder is None:
        finder = PoolFinder(CONFIG)
        if CONFIG.seed_database:
            finder.store.initialize(seed=True)
        _finder = finder
        logger.info("PoolFinder initialized")
    return _finder


# ===== Error Mapping =====

@app.exception_handler(InvalidQuery)
async def invalid_query_handler(request: Request, exc: InvalidQuery) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(SourceUnavailable)
async def source_unavailable_handler(request: Request, exc: SourceUnavailable) -> JSONResponse:
    logger.error("Upstream source failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Pool store failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ===== Public Endpoints =====

@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/pools/nearby")
def get_nearby_pools(
    lat: str | None = Query(default=None),
    lng: str | None = Query(default=None),
    radius: str | None = Query(default=None),
    finder: PoolFinder = Depends(get_finder),
):
    """Pools near a point, nearest first (tier 1 only)."""
    ranked = finder.nearby(lat, lng, radius)
    return [result_to_dict(r) for r in ranked]


@app.get("/api/pools/discover")
def discover_pools(
    lat: str | None = Query(default=None),
    lng: str | None = Query(default=None),
    radius: str | None = Query(default=None),
    finder: PoolFinder = Depends(get_finder),
):
    """Pools near a point, falling back to all known pools when none are found."""
    result = finder.discover(lat, lng, radius)
    return search_result_to_dict(result)


@app.get("/api/pools/all")
def get_all_pools(finder: PoolFinder = Depends(get_finder)):
    """Every known pool, live data first, then alphabetical."""
    result = finder.all_pools()
    return [result_to_dict(r) for r in result.pools]


@app.get("/api/pools/search")
def search_pools(
    query: str | None = Query(default=None),
    finder: PoolFinder = Depends(get_finder),
):
    """Stored pools whose name, city or address contains the query."""
    records = finder.search_text(query)
    return [pool_to_dict(r) for r in records]


@app.get("/api/pools/lookup")
def lookup_pools(
    q: str | None = Query(default=None),
    finder: PoolFinder = Depends(get_finder),
):
    """Geocode a place name and search around it, or search stored pools by text."""
    search = finder.search(q)
    response = search_result_to_dict(search.result, place=search.place)
    response["query"] = search.query
    return response


@app.get("/api/pools/{pool_id}")
def get_pool(pool_id: int, finder: PoolFinder = Depends(get_finder)):
    """Details for one stored pool."""
    pool = finder.pool_details(pool_id)
    if pool is None:
        raise HTTPException(status_code=404, detail="Pool not found")

    response = pool_to_dict(pool)
    response["opening_hours_display"] = format_opening_hours(pool.opening_hours)
    return response


@app.get("/api/pools/{pool_id}/telemetry")
def get_pool_telemetry(pool_id: int, finder: PoolFinder = Depends(get_finder)):
    """Live water quality for one stored pool, with its safety assessment."""
    pool = finder.pool_details(pool_id)
    if pool is None:
        raise HTTPException(status_code=404, detail="Pool not found")

    live = finder.pool_telemetry(pool)
    if live is None:
        raise HTTPException(status_code=404, detail="Live data not available for this pool")

    response = telemetry_to_dict(live.telemetry, live.assessment)
    response["pool_id"] = pool.id
    response["fetched_at"] = datetime.now(timezone.utc).isoformat()
    return response


@app.get("/api/weather")
def get_weather(
    lat: str | None = Query(default=None),
    lng: str | None = Query(default=None),
    finder: PoolFinder = Depends(get_finder),
):
    """Current weather at a point."""
    report = finder.weather(lat, lng)
    if report is None:
        raise HTTPException(status_code=503, detail="Weather service not configured")

    response = weather_to_dict(report)
    response["fetched_at"] = datetime.now(timezone.utc).isoformat()
    return response
