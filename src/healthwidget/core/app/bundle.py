"""Health widget bundle — application factory.

This module provides:
- create_bundle() for testability (tests inject their own catalog and registry)
- WidgetBundle, which renders the strain, recovery and sleep widgets
"""

from __future__ import annotations

import logging
from datetime import datetime

from healthwidget.core.config.settings import Settings, get_settings
from healthwidget.core.widgets.loader import load_default_registry
from healthwidget.core.widgets.registry import WidgetRegistry
from healthwidget.domains.health.connectors import MetricCatalog
from healthwidget.domains.health.connectors.providers import (
    CachedMetricCatalog,
    StaticMetricCatalog,
)
from healthwidget.domains.health.domain_logic.metric_models import METRIC_KINDS
from healthwidget.domains.health.domain_logic.presentation import DisplayModel, present
from healthwidget.domains.health.domain_logic.timeline import Timeline, build_timeline

logger = logging.getLogger(__name__)


class WidgetBundle:
    """The three dashboards sharing one catalog and one definition registry."""

    def __init__(
        self,
        catalog: MetricCatalog,
        registry: WidgetRegistry,
        settings: Settings,
    ) -> None:
        self.catalog = catalog
        self.registry = registry
        self.settings = settings

    def kinds(self, family: str | None = None) -> list[str]:
        """Registered widget kinds in bundle order (strain, recovery, sleep).

        With ``family``, only widgets that support that size (e.g. "system_small").
        """
        kinds = []
        for kind in METRIC_KINDS:
            definition = self.registry.get(kind)
            if definition is None:
                continue
            if family is not None and family not in definition.families:
                continue
            kinds.append(kind)
        return kinds

    def widgets_for_metric(self, metric: str) -> list[str]:
        """Kinds that must be re-rendered when ``metric`` changes, in bundle order."""
        feeding = {d.kind for d in self.registry.find_by_metric(metric)}
        return [k for k in self.kinds() if k in feeding]

    def timeline(self, now: datetime | None = None) -> Timeline:
        """Fetch once and wrap the snapshot in a timeline."""
        return build_timeline(self.catalog, now=now, refresh_interval=self.settings.refresh_interval)

    def render(self, kind: str, now: datetime | None = None) -> DisplayModel:
        """Render one widget from a fresh timeline entry."""
        entry = self.timeline(now).current
        return present(entry.snapshot, kind, self.registry)

    def render_all(
        self,
        now: datetime | None = None,
        family: str | None = None,
    ) -> dict[str, DisplayModel]:
        """Render every widget (optionally one family) from a single snapshot."""
        entry = self.timeline(now).current
        if entry.snapshot.is_stale:
            logger.warning("Rendering widgets from a stale snapshot (%s)", entry.snapshot.captured_at)
        return {kind: present(entry.snapshot, kind, self.registry) for kind in self.kinds(family)}


def create_bundle(
    *,
    catalog_override: MetricCatalog | None = None,
    registry_override: WidgetRegistry | None = None,
    settings_override: Settings | None = None,
) -> WidgetBundle:
    """Create and configure the widget bundle.

    1. Loads settings
    2. Loads widget definitions (packaged, or from WIDGET_DEFINITIONS_DIR)
    3. Wraps the catalog (static by default) in a staleness-aware cache
    """
    settings = settings_override or get_settings()

    if registry_override is not None:
        registry = registry_override
    else:
        registry = load_default_registry(settings.widget_definitions_dir or None)

    if catalog_override is not None:
        catalog = catalog_override
    else:
        catalog = CachedMetricCatalog(StaticMetricCatalog(), max_stale_age=settings.max_stale_age)
        logger.info("Using static metric catalog")

    missing = [k for k in METRIC_KINDS if registry.get(k) is None]
    if missing:
        logger.warning("No widget definition for: %s", ", ".join(missing))

    return WidgetBundle(catalog=catalog, registry=registry, settings=settings)
