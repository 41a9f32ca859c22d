"""Metric catalogs — abstraction layer for health snapshot retrieval."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from healthwidget.domains.health.domain_logic.metric_models import HealthSnapshot


class MetricCatalogError(Exception):
    """Base class for catalog failures."""


class DataUnavailable(MetricCatalogError):
    """Raised when a catalog cannot produce a complete snapshot."""


@runtime_checkable
class MetricCatalog(Protocol):
    """Abstract interface for health snapshot retrieval.

    Widgets call ``fetch()`` without knowing whether values come from a
    static table, a cache, or a real data source. Implementations either
    return a complete, internally consistent snapshot or raise
    ``DataUnavailable``; partial snapshots are not supported.
    """

    def fetch(self) -> HealthSnapshot:
        """Return the current snapshot."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source, e.g. 'static' or 'cached'."""
        ...
