"""Composite metric catalog — tries several sources in priority order.

The first catalog that returns a snapshot wins. A catalog that raises
``DataUnavailable`` is skipped; any other error propagates. When every
catalog is unavailable the composite raises ``DataUnavailable`` itself.
"""

from __future__ import annotations

import logging

from healthwidget.domains.health.connectors import DataUnavailable, MetricCatalog
from healthwidget.domains.health.domain_logic.metric_models import HealthSnapshot

logger = logging.getLogger(__name__)


class CompositeMetricCatalog:
    """Chains MetricCatalogs with priority ordering.

    Usage::

        composite = CompositeMetricCatalog([
            device_catalog,   # Highest priority
            StaticMetricCatalog(),  # Fallback
        ])
        snapshot = composite.fetch()
    """

    def __init__(self, catalogs: list[MetricCatalog]) -> None:
        """Initialize with catalogs in priority order (highest first).

        Args:
            catalogs: Ordered list of MetricCatalogs. The first one that
                returns a snapshot wins.
        """
        if not catalogs:
            raise ValueError("At least one catalog is required")
        self._catalogs = list(catalogs)
        self._active: MetricCatalog | None = None

    def fetch(self) -> HealthSnapshot:
        """Return the snapshot of the highest-priority available catalog."""
        for catalog in self._catalogs:
            try:
                snapshot = catalog.fetch()
            except DataUnavailable as exc:
                logger.info("Catalog '%s' unavailable: %s", catalog.data_source, exc)
                continue
            self._active = catalog
            return snapshot
        self._active = None
        raise DataUnavailable(
            "No catalog could produce a snapshot "
            f"(tried: {', '.join(c.data_source for c in self._catalogs)})"
        )

    @property
    def data_source(self) -> str:
        """Source of the catalog that answered the last fetch, else the fallback."""
        if self._active is not None:
            return self._active.data_source
        return self._catalogs[-1].data_source

    def get_provenance(self) -> dict[str, str]:
        """Return provenance info naming the priority chain."""
        return {
            "data_source": self.data_source,
            "data_source_note": (
                f"Composite catalog with {len(self._catalogs)} source(s). "
                f"Priority: {' > '.join(c.data_source for c in self._catalogs)}."
            ),
        }
