"""Mock Telemetry Server - FastAPI service.

Serves drifting water quality readings for demonstration pools, in the
payload shape pool telemetry endpoints use. Readings live in a
TelemetryStateStore created with the app and injected into handlers.
While the app runs, a background task drifts every reading on a fixed
interval so values change even when nobody polls.
"""

import asyncio
import contextlib
import logging

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from src.core.simulation import TelemetryStateStore


logger = logging.getLogger(__name__)

DEFAULT_UPDATE_INTERVAL_SECONDS = 30.0


class WaterQualityPayload(BaseModel):
    temperature: float
    ph: float
    chlorine: float


class OccupancyPayload(BaseModel):
    current: int
    max_capacity: int


class PoolDataPayload(BaseModel):
    water_quality: WaterQualityPayload
    occupancy: OccupancyPayload | None = None


async def run_periodic_updates(state: TelemetryStateStore, interval_seconds: float) -> None:
    """Drift every reading once per interval until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        state.advance_all()
        logger.debug("Advanced mock telemetry for all pools")


def create_app(
    store: TelemetryStateStore | None = None,
    update_interval_seconds: float | None = DEFAULT_UPDATE_INTERVAL_SECONDS,
) -> FastAPI:
    """Create the mock server around a telemetry state store.

    Args:
        store: Readings to serve; the demonstration pools by default
        update_interval_seconds: Period of the background drift, or None
            to drift only on request
    """
    state = store or TelemetryStateStore()

    @contextlib.asynccontextmanager
    async def lifespan(_: FastAPI):
        if not update_interval_seconds or update_interval_seconds <= 0:
            yield
            return

        logger.info("Starting mock telemetry updates every %ss", update_interval_seconds)
        task = asyncio.create_task(run_periodic_updates(state, update_interval_seconds))
        try:
            yield
        finally:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            logger.info("Stopped mock telemetry updates")

    mock_app = FastAPI(
        title="Mock Pool Telemetry",
        description="Simulated water quality readings",
        version="1.0.0",
        lifespan=lifespan,
    )

    def get_store() -> TelemetryStateStore:
        return state

    @mock_app.get("/api/pool-data/{pool_id}", response_model=PoolDataPayload)
    def get_pool_data(pool_id: int, telemetry: TelemetryStateStore = Depends(get_store)):
        """Drift and return one pool's reading."""
        reading = telemetry.advance(pool_id)
        if reading is None:
            logger.warning("No mock telemetry for pool %s", pool_id)
            raise HTTPException(status_code=404, detail="Pool not found")

        quality = reading.water_quality
        occupancy = None
        if reading.occupancy is not None:
            occupancy = OccupancyPayload(
                current=reading.occupancy.current,
                max_capacity=reading.occupancy.max_capacity,
            )

        return PoolDataPayload(
            water_quality=WaterQualityPayload(
                temperature=quality.temperature,
                ph=quality.ph,
                chlorine=quality.chlorine,
            ),
            occupancy=occupancy,
        )

    return mock_app


app = create_app()
