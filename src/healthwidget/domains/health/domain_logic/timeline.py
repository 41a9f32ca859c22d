"""Widget timeline entries and their refresh policy.

A timeline is a list of dated entries plus the earliest time the host should
ask for a new one. Nothing here schedules work; the host decides when to call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from healthwidget.domains.health.connectors import MetricCatalog
from healthwidget.domains.health.domain_logic.metric_models import HealthSnapshot

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = timedelta(hours=1)


@dataclass(frozen=True)
class HealthEntry:
    """A snapshot pinned to the date it should be displayed from."""

    date: datetime
    snapshot: HealthSnapshot


@dataclass(frozen=True)
class Timeline:
    """Entries to display and when to request the next timeline."""

    entries: tuple[HealthEntry, ...] = field(default_factory=tuple)
    refresh_after: datetime | None = None

    @property
    def current(self) -> HealthEntry | None:
        return self.entries[0] if self.entries else None


def make_entry(catalog: MetricCatalog, now: datetime | None = None) -> HealthEntry:
    """Single entry for placeholders and previews."""
    return HealthEntry(date=now or datetime.now(timezone.utc), snapshot=catalog.fetch())


def build_timeline(
    catalog: MetricCatalog,
    now: datetime | None = None,
    refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL,
) -> Timeline:
    """One entry for ``now``; ask again after ``refresh_interval``.

    Raises:
        ValueError: ``refresh_interval`` is not positive.
        DataUnavailable: propagated from the catalog.
    """
    if refresh_interval <= timedelta(0):
        raise ValueError("refresh_interval must be positive")
    now = now or datetime.now(timezone.utc)
    entry = make_entry(catalog, now)
    refresh_after = now + refresh_interval
    logger.debug(
        "Built timeline from '%s'; refresh after %s",
        catalog.data_source,
        refresh_after.isoformat(),
    )
    return Timeline(entries=(entry,), refresh_after=refresh_after)
