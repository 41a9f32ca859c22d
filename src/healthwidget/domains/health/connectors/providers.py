"""Concrete MetricCatalog implementations."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from healthwidget.domains.health.connectors import DataUnavailable, MetricCatalog
from healthwidget.domains.health.connectors.static_data import build_static_snapshot
from healthwidget.domains.health.domain_logic.metric_models import HealthSnapshot

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StaticMetricCatalog:
    """Returns the fixed metric table. Always available."""

    def fetch(self) -> HealthSnapshot:
        return build_static_snapshot()

    @property
    def data_source(self) -> str:
        return "static"


class CachedMetricCatalog:
    """Wraps a catalog and re-serves its last snapshot when it goes dark.

    A re-served snapshot is returned with ``is_stale=True`` so it is never
    presented as fresh. Once the last snapshot is older than
    ``max_stale_age`` the outage is surfaced as ``DataUnavailable``.

    Usage::

        catalog = CachedMetricCatalog(remote_catalog, max_stale_age=timedelta(hours=3))
        snapshot = catalog.fetch()
        if snapshot.is_stale:
            ...
    """

    def __init__(
        self,
        source: MetricCatalog,
        max_stale_age: timedelta = timedelta(hours=3),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_stale_age < timedelta(0):
            raise ValueError("max_stale_age must not be negative")
        self._source = source
        self._max_stale_age = max_stale_age
        self._clock = clock
        self._last: HealthSnapshot | None = None

    def fetch(self) -> HealthSnapshot:
        """Return a fresh snapshot, or the last-known one flagged as stale.

        Raises:
            DataUnavailable: the source failed and nothing recent is cached.
        """
        try:
            snapshot = self._source.fetch()
        except DataUnavailable:
            if self._last is None:
                logger.error("Source '%s' unavailable and no snapshot cached", self._source.data_source)
                raise
            age = self._clock() - self._last.captured_at
            if age > self._max_stale_age:
                logger.error(
                    "Source '%s' unavailable; cached snapshot is %s old (limit %s)",
                    self._source.data_source,
                    age,
                    self._max_stale_age,
                )
                raise
            logger.warning(
                "Source '%s' unavailable; serving snapshot captured at %s",
                self._source.data_source,
                self._last.captured_at.isoformat(),
            )
            return dataclasses.replace(self._last, is_stale=True)

        self._last = snapshot
        return snapshot

    @property
    def last_snapshot(self) -> HealthSnapshot | None:
        """The most recent fresh snapshot, if any."""
        return self._last

    @property
    def data_source(self) -> str:
        return f"cached:{self._source.data_source}"
