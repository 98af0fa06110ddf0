"""Mock telemetry generation.

Readings drift by small random steps and are clamped to the safe
envelope. The state lives in a TelemetryStateStore owned by whoever
serves it; the random source is injected so drift is reproducible.
"""

import random
import threading
from dataclasses import dataclass, replace

from src.core.telemetry import LiveTelemetry, Occupancy, WaterQuality


@dataclass(frozen=True)
class DriftLimits:
    """Maximum step and clamp bounds for one measurement."""
    step: float
    minimum: float
    maximum: float


TEMPERATURE_DRIFT = DriftLimits(step=0.5, minimum=24.0, maximum=30.0)
PH_DRIFT = DriftLimits(step=0.2, minimum=6.8, maximum=7.8)
CHLORINE_DRIFT = DriftLimits(step=0.3, minimum=1.0, maximum=2.0)
OCCUPANCY_STEP = 2


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _drift(value: float, limits: DriftLimits, rng: random.Random) -> float:
    stepped = value + rng.uniform(-limits.step, limits.step)
    return round(_clamp(stepped, limits.minimum, limits.maximum), 1)


def drift_telemetry(telemetry: LiveTelemetry, rng: random.Random) -> LiveTelemetry:
    """Return the next reading after one random drift step.

    Args:
        telemetry: Current reading
        rng: Random source

    Returns:
        New LiveTelemetry, measurements rounded to one decimal
    """
    quality = telemetry.water_quality
    water_quality = WaterQuality(
        temperature=_drift(quality.temperature, TEMPERATURE_DRIFT, rng),
        ph=_drift(quality.ph, PH_DRIFT, rng),
        chlorine=_drift(quality.chlorine, CHLORINE_DRIFT, rng),
    )

    occupancy = telemetry.occupancy
    if occupancy is not None:
        step = round(rng.uniform(-OCCUPANCY_STEP, OCCUPANCY_STEP))
        occupancy = replace(
            occupancy,
            current=int(_clamp(occupancy.current + step, 0, occupancy.max_capacity)),
        )

    return LiveTelemetry(water_quality=water_quality, occupancy=occupancy)


def default_readings() -> dict[int, LiveTelemetry]:
    """Starting readings for the three demonstration pools."""
    return {
        1: LiveTelemetry(
            water_quality=WaterQuality(temperature=26.5, ph=7.2, chlorine=1.5),
            occupancy=Occupancy(current=12, max_capacity=50),
        ),
        2: LiveTelemetry(
            water_quality=WaterQuality(temperature=27.0, ph=7.4, chlorine=1.8),
            occupancy=Occupancy(current=25, max_capacity=75),
        ),
        3: LiveTelemetry(
            water_quality=WaterQuality(temperature=26.8, ph=7.3, chlorine=1.6),
            occupancy=Occupancy(current=20, max_capacity=60),
        ),
    }


class TelemetryStateStore:
    """Owned, mutable store of mock readings keyed by pool id."""

    def __init__(
        self,
        readings: dict[int, LiveTelemetry] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._readings = dict(readings) if readings is not None else default_readings()
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def get(self, pool_id: int) -> LiveTelemetry | None:
        return self._readings.get(pool_id)

    def advance(self, pool_id: int) -> LiveTelemetry | None:
        """Drift one pool's reading and return the new value."""
        with self._lock:
            current = self._readings.get(pool_id)
            if current is None:
                return None

            updated = drift_telemetry(current, self._rng)
            self._readings[pool_id] = updated
            return updated

    def advance_all(self) -> None:
        """Drift every pool's reading, for a periodic updater."""
        for pool_id in list(self._readings):
            self.advance(pool_id)
