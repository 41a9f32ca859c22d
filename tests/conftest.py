"""Shared test fixtures for health widget tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WIDGET_LOG_LEVEL", "info")
    monkeypatch.delenv("WIDGET_REFRESH_INTERVAL_MINUTES", raising=False)
    monkeypatch.delenv("WIDGET_MAX_STALE_MINUTES", raising=False)
    monkeypatch.delenv("WIDGET_DEFINITIONS_DIR", raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from healthwidget.domains.health.connectors import DataUnavailable  # noqa: E402
from healthwidget.domains.health.domain_logic.metric_models import (  # noqa: E402
    HealthSnapshot,
    TargetRange,
    ValueWithStatus,
)

FIXED_NOW = datetime(2026, 3, 7, 9, 30, tzinfo=timezone.utc)


def make_snapshot(**overrides) -> HealthSnapshot:
    """Create a valid snapshot with sensible defaults."""
    values = {
        "sleep_score": 80,
        "recovery_score": 55,
        "strain_score": 30,
        "strain_target_range": TargetRange(low=40, high=70),
        "time_asleep_minutes": ValueWithStatus(420, "normal"),
        "time_in_bed_minutes": ValueWithStatus(450, "normal"),
        "resting_heart_rate": ValueWithStatus(62, "normal"),
        "heart_rate_variability": ValueWithStatus(48, "normal"),
        "exercise_minutes": ValueWithStatus(30, "normal"),
        "calories_burned": ValueWithStatus(400, "normal"),
        "captured_at": FIXED_NOW,
    }
    values.update(overrides)
    return HealthSnapshot(**values)


class FakeCatalog:
    """Catalog that replays a script of snapshots and outages.

    Each call pops the next item; ``None`` means the source is unavailable.
    """

    def __init__(self, script: list[HealthSnapshot | None], source: str = "fake") -> None:
        self._script = list(script)
        self._source = source
        self.calls = 0

    def fetch(self) -> HealthSnapshot:
        self.calls += 1
        item = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if item is None:
            raise DataUnavailable(f"{self._source} offline")
        return item

    @property
    def data_source(self) -> str:
        return self._source


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def snapshot() -> HealthSnapshot:
    return make_snapshot()


@pytest.fixture
def snapshot_factory():
    """Factory fixture: ``snapshot_factory(strain_score=90)``."""
    return make_snapshot


@pytest.fixture
def catalog_factory():
    """Factory fixture: ``catalog_factory([snap, None])``."""
    return FakeCatalog
