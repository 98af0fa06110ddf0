"""Water quality telemetry models and assessment - Pure functions.

This module parses live telemetry payloads and classifies a reading's
safety status. All functions are pure with no side effects.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping


STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"

_SEVERITY = {STATUS_GOOD: 0, STATUS_WARNING: 1, STATUS_DANGER: 2}


@dataclass(frozen=True)
class SafeRange:
    """Inclusive danger and warning bounds for one measurement.

    Attributes:
        danger_min: Below this is dangerous
        danger_max: Above this is dangerous
        warning_min: Below this (but within danger bounds) needs attention
        warning_max: Above this (but within danger bounds) needs attention
        danger_issue: Issue text when the danger bounds are exceeded
        warning_issue: Issue text when only the warning bounds are exceeded
    """
    danger_min: float
    danger_max: float
    warning_min: float
    warning_max: float
    danger_issue: str
    warning_issue: str

    def classify(self, value: float) -> tuple[str, str | None]:
        """Return (status, issue) for a single value."""
        if value < self.danger_min or value > self.danger_max:
            return STATUS_DANGER, self.danger_issue
        if value < self.warning_min or value > self.warning_max:
            return STATUS_WARNING, self.warning_issue
        return STATUS_GOOD, None


TEMPERATURE_RANGE = SafeRange(
    danger_min=24.0,
    danger_max=30.0,
    warning_min=25.0,
    warning_max=29.0,
    danger_issue="Temperature outside safe range (24-30°C)",
    warning_issue="Temperature approaching limits",
)

PH_RANGE = SafeRange(
    danger_min=6.8,
    danger_max=7.8,
    warning_min=7.0,
    warning_max=7.6,
    danger_issue="pH level outside safe range (6.8-7.8)",
    warning_issue="pH level approaching limits",
)

CHLORINE_RANGE = SafeRange(
    danger_min=1.0,
    danger_max=2.0,
    warning_min=1.2,
    warning_max=1.8,
    danger_issue="Chlorine level outside safe range (1.0-2.0 ppm)",
    warning_issue="Chlorine level approaching limits",
)


@dataclass(frozen=True)
class WaterQuality:
    """A single water quality reading.

    Attributes:
        temperature: Water temperature in °C
        ph: pH level
        chlorine: Free chlorine in ppm
    """
    temperature: float
    ph: float
    chlorine: float


@dataclass(frozen=True)
class Occupancy:
    """Swimmer count against capacity."""
    current: int
    max_capacity: int


@dataclass(frozen=True)
class LiveTelemetry:
    """A live telemetry payload for one pool."""
    water_quality: WaterQuality
    occupancy: Occupancy | None = None


@dataclass(frozen=True)
class QualityAssessment:
    """Outcome of assessing a reading.

    Attributes:
        status: 'good', 'warning' or 'danger'
        issues: Human-readable problems found, in check order
    """
    status: str
    issues: tuple[str, ...] = field(default_factory=tuple)


def assess_water_quality(reading: WaterQuality) -> QualityAssessment:
    """Classify a reading's safety status.

    Pure function. All three measurements are always checked. The
    status is the most severe of the three: danger if any measurement
    is outside its danger bounds, else warning if any is outside its
    warning bounds, else good.

    Args:
        reading: Water quality reading

    Returns:
        QualityAssessment with status and issues
    """
    checks = (
        (TEMPERATURE_RANGE, reading.temperature),
        (PH_RANGE, reading.ph),
        (CHLORINE_RANGE, reading.chlorine),
    )

    status = STATUS_GOOD
    issues = []

    for safe_range, value in checks:
        level, issue = safe_range.classify(value)
        if issue is not None:
            issues.append(issue)
        if _SEVERITY[level] > _SEVERITY[status]:
            status = level

    return QualityAssessment(status=status, issues=tuple(issues))


def parse_telemetry(data: Mapping[str, Any]) -> LiveTelemetry | None:
    """Parse a live telemetry payload.

    Pure function: returns None if the water quality block is missing
    or malformed. A malformed occupancy block is dropped.

    Args:
        data: JSON payload from a pool's telemetry endpoint

    Returns:
        LiveTelemetry or None if parsing fails
    """
    try:
        quality = data["water_quality"]
        water_quality = WaterQuality(
            temperature=float(quality["temperature"]),
            ph=float(quality["ph"]),
            chlorine=float(quality["chlorine"]),
        )
    except (KeyError, TypeError, ValueError):
        return None

    occupancy = None
    raw_occupancy = data.get("occupancy")
    if raw_occupancy:
        try:
            occupancy = Occupancy(
                current=int(raw_occupancy["current"]),
                max_capacity=int(raw_occupancy["max_capacity"]),
            )
        except (KeyError, TypeError, ValueError):
            occupancy = None

    return LiveTelemetry(water_quality=water_quality, occupancy=occupancy)
