"""Deterministic presentation mapping: HealthSnapshot -> display-ready values.

Every function here is pure. Fractions are in the [0, 1] trim space of a
circular indicator; strings are exactly what a widget shows.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Any, Literal, NamedTuple

from healthwidget.core.widgets.loader import load_default_registry
from healthwidget.core.widgets.models import RowDefinition, WidgetDefinition
from healthwidget.core.widgets.registry import WidgetRegistry
from healthwidget.domains.health.domain_logic.metric_models import (
    PERCENT_MAX,
    PERCENT_MIN,
    HealthSnapshot,
    MetricKind,
    Status,
    TargetRange,
)

IndicatorDirection = Literal["up", "down"]

# Rotation that moves an arc's start from 3 o'clock to 12 o'clock.
ARC_ROTATION_DEGREES = -90.0


# ---------------------------------------------------------------------------
# Display types
# ---------------------------------------------------------------------------

class ArcRange(NamedTuple):
    """A [start, end] span of a ring's circumference, both in [0, 1]."""

    start: float
    end: float


@dataclass(frozen=True)
class RingDisplay:
    label: str
    color: str
    percentage_text: str
    arc_fraction: float
    target_zone: ArcRange | None = None
    rotation_degrees: float = ARC_ROTATION_DEGREES


@dataclass(frozen=True)
class MetricRowDisplay:
    title: str
    value_text: str
    direction: IndicatorDirection


@dataclass(frozen=True)
class DisplayModel:
    """Everything a rendering surface needs to draw one widget."""

    kind: str
    display_name: str
    description: str
    ring: RingDisplay
    rows: tuple[MetricRowDisplay, ...] = field(default_factory=tuple)
    captured_at: datetime | None = None
    is_stale: bool = False

    def as_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        data = asdict(self)
        target = self.ring.target_zone
        data["ring"]["target_zone"] = [target.start, target.end] if target else None
        data["rows"] = [asdict(r) for r in self.rows]
        data["captured_at"] = self.captured_at.isoformat() if self.captured_at else None
        return data


# ---------------------------------------------------------------------------
# Formatting primitives
# ---------------------------------------------------------------------------

def percentage_to_arc_fraction(percentage: float) -> float:
    """Map a percentage in [0, 100] to the fraction of the ring to fill."""
    if not PERCENT_MIN <= percentage <= PERCENT_MAX:
        raise ValueError(f"percentage must be within [0, 100], got {percentage!r}")
    return percentage / 100


def format_duration(minutes: float) -> str:
    """Format minutes as ``"{h}h {m}m"``.

    Fractional minutes are truncated, not rounded: 75.9 -> "1h 15m".
    """
    if not math.isfinite(minutes) or minutes < 0:
        raise ValueError(f"minutes must be finite and non-negative, got {minutes!r}")
    whole = math.floor(minutes)
    return f"{whole // 60}h {whole % 60}m"


def format_percentage(percentage: float) -> str:
    """Ring centre text, truncated to a whole percent."""
    return f"{int(percentage)}%"


def format_quantity(value: float, unit: str) -> str:
    """Whole-number value with its unit, e.g. ``"654 kcal"``."""
    text = str(int(value))
    return f"{text} {unit}" if unit else text


def status_to_indicator_direction(status: Status) -> IndicatorDirection:
    """Arrow direction for a status badge.

    Only ``higher_than_normal`` points up; ``normal`` and
    ``lower_than_normal`` both render as down.
    """
    return "up" if status == "higher_than_normal" else "down"


def target_zone_to_arc_range(target: TargetRange | tuple[float, float]) -> ArcRange:
    """Map a target band onto the same trim space as the main arc."""
    if not isinstance(target, TargetRange):
        target = TargetRange.from_pair(target)
    return ArcRange(
        start=percentage_to_arc_fraction(target.low),
        end=percentage_to_arc_fraction(target.high),
    )


# ---------------------------------------------------------------------------
# Widget assembly
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def default_registry() -> WidgetRegistry:
    """Registry of the packaged strain, recovery and sleep widgets."""
    return load_default_registry()


def _present_row(snapshot: HealthSnapshot, row: RowDefinition) -> MetricRowDisplay:
    metric = snapshot.value_for(row.metric)
    if row.format == "duration":
        text = format_duration(metric.value)
    else:
        text = format_quantity(metric.value, row.unit)
    return MetricRowDisplay(
        title=row.title,
        value_text=text,
        direction=status_to_indicator_direction(metric.status),
    )


def present_definition(snapshot: HealthSnapshot, definition: WidgetDefinition) -> DisplayModel:
    """Build the display model for an explicit widget definition."""
    score = snapshot.score_for(definition.kind)
    target_zone = None
    if definition.ring.target_zone:
        target_zone = target_zone_to_arc_range(getattr(snapshot, definition.ring.target_zone))

    return DisplayModel(
        kind=definition.kind,
        display_name=definition.display_name,
        description=definition.description,
        ring=RingDisplay(
            label=definition.ring.label,
            color=definition.ring.color,
            percentage_text=format_percentage(score),
            arc_fraction=percentage_to_arc_fraction(score),
            target_zone=target_zone,
        ),
        rows=tuple(_present_row(snapshot, row) for row in definition.rows),
        captured_at=snapshot.captured_at,
        is_stale=snapshot.is_stale,
    )


def present(
    snapshot: HealthSnapshot,
    kind: MetricKind,
    registry: WidgetRegistry | None = None,
) -> DisplayModel:
    """Build the display model for one dashboard kind.

    Raises:
        KeyError: no widget is registered for ``kind``.
    """
    if registry is None:
        registry = default_registry()
    definition = registry.require(kind)
    return present_definition(snapshot, definition)
