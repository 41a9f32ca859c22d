"""Health metric models: status-tagged values and the immutable snapshot."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, get_args

# ---------------------------------------------------------------------------
# Domain vocabulary
# ---------------------------------------------------------------------------

# Classification of a value against the user's personal baseline.
Status = Literal["higher_than_normal", "normal", "lower_than_normal"]

# Which of the three dashboards a DisplayModel is built for.
MetricKind = Literal["strain", "recovery", "sleep"]

STATUSES: tuple[str, ...] = get_args(Status)
METRIC_KINDS: tuple[str, ...] = get_args(MetricKind)

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# Snapshot attributes that hold a ValueWithStatus, in display order.
VALUE_FIELDS = (
    "time_asleep_minutes",
    "time_in_bed_minutes",
    "resting_heart_rate",
    "heart_rate_variability",
    "exercise_minutes",
    "calories_burned",
)

SCORE_FIELDS = ("sleep_score", "recovery_score", "strain_score")

# Snapshot attributes that hold a TargetRange.
TARGET_FIELDS = ("strain_target_range",)


def _check_percentage(name: str, value: float) -> None:
    if not PERCENT_MIN <= value <= PERCENT_MAX:
        raise ValueError(f"{name} must be within [0, 100], got {value!r}")


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValueWithStatus:
    """A non-negative metric value and its baseline status.

    The unit is implied by the metric it is attached to (minutes, bpm, ms, kcal).
    """

    value: float
    status: Status

    def __post_init__(self) -> None:
        if not math.isfinite(self.value) or self.value < 0:
            raise ValueError(f"Metric value must be finite and non-negative, got {self.value!r}")
        if self.status not in STATUSES:
            raise ValueError(f"Unknown status: {self.status!r}")


@dataclass(frozen=True)
class TargetRange:
    """A desired band of percentages, drawn as a secondary zone on a ring."""

    low: float
    high: float

    def __post_init__(self) -> None:
        _check_percentage("TargetRange.low", self.low)
        _check_percentage("TargetRange.high", self.high)
        if self.low > self.high:
            raise ValueError(
                f"TargetRange.low ({self.low!r}) exceeds TargetRange.high ({self.high!r})"
            )

    @classmethod
    def from_pair(cls, pair: tuple[float, float]) -> TargetRange:
        low, high = pair
        return cls(low=low, high=high)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthSnapshot:
    """One complete set of metric values captured at a point in time.

    Built in a single call by a MetricCatalog and never mutated afterwards.
    ``is_stale`` is only ever True for a last-known snapshot re-served by a
    caching catalog after its source became unavailable.
    """

    sleep_score: float
    recovery_score: float
    strain_score: float
    strain_target_range: TargetRange
    time_asleep_minutes: ValueWithStatus
    time_in_bed_minutes: ValueWithStatus
    resting_heart_rate: ValueWithStatus
    heart_rate_variability: ValueWithStatus
    exercise_minutes: ValueWithStatus
    calories_burned: ValueWithStatus
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_stale: bool = False

    def __post_init__(self) -> None:
        for name in SCORE_FIELDS:
            _check_percentage(name, getattr(self, name))
        if not isinstance(self.strain_target_range, TargetRange):
            raise ValueError("strain_target_range must be a TargetRange")
        for name in VALUE_FIELDS:
            if not isinstance(getattr(self, name), ValueWithStatus):
                raise ValueError(f"{name} must be a ValueWithStatus")

    def score_for(self, kind: MetricKind) -> float:
        """Return the headline percentage for a dashboard kind."""
        if kind not in METRIC_KINDS:
            raise KeyError(kind)
        return getattr(self, f"{kind}_score")

    def value_for(self, metric: str) -> ValueWithStatus:
        """Return one of the six status-tagged values by attribute name."""
        if metric not in VALUE_FIELDS:
            raise KeyError(metric)
        return getattr(self, metric)
