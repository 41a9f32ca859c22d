"""Widget loader — reads YAML widget definitions from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from healthwidget.core.widgets.models import RingDefinition, RowDefinition, WidgetDefinition
from healthwidget.core.widgets.registry import WidgetRegistry
from healthwidget.domains.health.domain_logic.metric_models import (
    METRIC_KINDS,
    TARGET_FIELDS,
    VALUE_FIELDS,
)

logger = logging.getLogger(__name__)

# Packaged definitions for the strain, recovery and sleep widgets.
DEFAULT_WIDGET_DIR = Path(__file__).resolve().parent.parent.parent / "domains" / "health" / "widgets"

_ROW_FORMATS = ("duration", "quantity")


class WidgetDefinitionError(Exception):
    """Raised when a widget definition file is malformed."""


def load_widget_directory(directory: str | Path, registry: WidgetRegistry) -> int:
    """Load all YAML widget definitions from a directory.

    Returns the number of definitions loaded.
    Skips files starting with underscore (like _schema.yaml).

    Raises:
        WidgetDefinitionError: a file could not be parsed or validated.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Widget directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.glob("*.yaml")):
        if path.name.startswith("_"):
            continue
        definition = load_widget_file(path)
        registry.register(definition)
        count += 1
        logger.debug("Loaded widget: %s (v%s)", definition.kind, definition.version)
    return count


def load_widget_file(path: Path) -> WidgetDefinition:
    """Parse a YAML file into a WidgetDefinition instance."""
    try:
        with open(path) as f:
            data: dict[str, Any] = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise WidgetDefinitionError(f"{path}: invalid YAML ({exc})") from exc

    if not isinstance(data, dict):
        raise WidgetDefinitionError(f"{path}: expected a mapping at the top level")

    try:
        return _build_definition(data)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WidgetDefinitionError(f"{path}: {exc}") from exc


def _build_definition(data: dict[str, Any]) -> WidgetDefinition:
    kind = data["kind"]
    if kind not in METRIC_KINDS:
        raise ValueError(f"unknown widget kind {kind!r}")

    ring_data = data.get("ring") or {}
    if not isinstance(ring_data, dict):
        raise ValueError("ring must be a mapping")
    target_zone = ring_data.get("target_zone")
    if target_zone is not None and target_zone not in TARGET_FIELDS:
        raise ValueError(f"unknown target zone {target_zone!r}")

    rows = []
    for row_data in data.get("rows") or []:
        if not isinstance(row_data, dict):
            raise ValueError(f"row must be a mapping, got {row_data!r}")
        metric = row_data["metric"]
        if metric not in VALUE_FIELDS:
            raise ValueError(f"unknown metric {metric!r}")
        row_format = row_data.get("format", "quantity")
        if row_format not in _ROW_FORMATS:
            raise ValueError(f"unknown row format {row_format!r}")
        rows.append(
            RowDefinition(
                title=row_data["title"],
                metric=metric,
                format=row_format,
                unit=row_data.get("unit") or "",
            )
        )

    return WidgetDefinition(
        kind=kind,
        version=str(data["version"]),
        display_name=data["display_name"],
        description=(data.get("description") or "").strip(),
        ring=RingDefinition(
            label=ring_data["label"],
            color=ring_data.get("color", "gray"),
            target_zone=target_zone,
        ),
        rows=rows,
        families=list(data.get("families") or ["system_small"]),
    )


def load_default_registry(directory: str | Path | None = None) -> WidgetRegistry:
    """Build a registry from ``directory``, or from the packaged definitions."""
    registry = WidgetRegistry()
    source = Path(directory) if directory else DEFAULT_WIDGET_DIR
    count = load_widget_directory(source, registry)
    logger.info("Loaded %d widget definitions from %s", count, source)
    return registry
