"""Widget registry — in-memory index for loaded widget definitions."""

from __future__ import annotations

import logging

from healthwidget.core.widgets.models import WidgetDefinition

logger = logging.getLogger(__name__)


class WidgetRegistry:
    """In-memory registry of widget definitions, keyed by kind."""

    def __init__(self) -> None:
        self._widgets: dict[str, WidgetDefinition] = {}
        self._by_metric: dict[str, list[str]] = {}

    def register(self, definition: WidgetDefinition) -> None:
        """Add a definition to all indexes."""
        if definition.kind in self._widgets:
            raise ValueError(f"Duplicate widget kind registered: {definition.kind!r}")
        self._widgets[definition.kind] = definition

        for row in definition.rows:
            kinds = self._by_metric.setdefault(row.metric, [])
            if definition.kind not in kinds:
                kinds.append(definition.kind)

    def get(self, kind: str) -> WidgetDefinition | None:
        """Look up a definition by kind."""
        return self._widgets.get(kind)

    def require(self, kind: str) -> WidgetDefinition:
        """Look up a definition by kind, raising KeyError when absent."""
        definition = self._widgets.get(kind)
        if definition is None:
            raise KeyError(f"No widget registered for kind {kind!r}")
        return definition

    def find_by_metric(self, metric: str) -> list[WidgetDefinition]:
        """Find widgets that show a given snapshot metric in one of their rows."""
        kinds = self._by_metric.get(metric, [])
        return [self._widgets[k] for k in kinds]

    def kinds(self) -> list[str]:
        """Return registered kinds in registration order."""
        return list(self._widgets)

    def all(self) -> list[WidgetDefinition]:
        """Return all registered definitions."""
        return list(self._widgets.values())

    def __len__(self) -> int:
        return len(self._widgets)
