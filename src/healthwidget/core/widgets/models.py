"""Data models for widget definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# How a row renders its value: "7h 52m" or "654 kcal".
RowFormat = Literal["duration", "quantity"]


@dataclass
class RingDefinition:
    """The circular progress indicator at the top of a widget."""

    label: str
    color: str
    target_zone: str | None = None   # snapshot attribute holding a TargetRange


@dataclass
class RowDefinition:
    """One metric row under the ring."""

    title: str
    metric: str                      # snapshot attribute holding a ValueWithStatus
    format: RowFormat = "quantity"
    unit: str = ""


@dataclass
class WidgetDefinition:
    """A complete declarative description of one dashboard widget."""

    kind: str
    version: str
    display_name: str
    description: str
    ring: RingDefinition
    rows: list[RowDefinition] = field(default_factory=list)
    families: list[str] = field(default_factory=lambda: ["system_small"])
