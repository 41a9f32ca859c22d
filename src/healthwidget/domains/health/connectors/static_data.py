"""Fixed health metrics used until a real data source is connected.

The values describe an ordinary day: moderate strain below its target band,
a short night with an elevated HRV, and an active afternoon.
"""

from __future__ import annotations

from healthwidget.domains.health.domain_logic.metric_models import (
    HealthSnapshot,
    TargetRange,
    ValueWithStatus,
)


def get_static_scores() -> dict:
    """Return the headline percentages and the strain target band."""
    return {
        "sleep_score": 75,
        "recovery_score": 60,
        "strain_score": 40,
        "strain_target_range": (50, 60),
    }


def get_static_values() -> dict:
    """Return the six status-tagged metrics as (value, status) pairs."""
    return {
        "time_asleep_minutes": (472, "lower_than_normal"),
        "time_in_bed_minutes": (482, "higher_than_normal"),
        "resting_heart_rate": (59, "lower_than_normal"),      # bpm
        "heart_rate_variability": (85, "higher_than_normal"),  # ms
        "exercise_minutes": (75, "higher_than_normal"),
        "calories_burned": (654, "lower_than_normal"),        # kcal
    }


def build_static_snapshot() -> HealthSnapshot:
    """Assemble the fixed values into a validated snapshot."""
    scores = get_static_scores()
    values = {
        name: ValueWithStatus(value=value, status=status)
        for name, (value, status) in get_static_values().items()
    }
    return HealthSnapshot(
        sleep_score=scores["sleep_score"],
        recovery_score=scores["recovery_score"],
        strain_score=scores["strain_score"],
        strain_target_range=TargetRange.from_pair(scores["strain_target_range"]),
        **values,
    )
