"""Tests for widget definition loading and the widget registry."""

from __future__ import annotations

import textwrap

import pytest

from healthwidget.core.widgets.loader import (
    DEFAULT_WIDGET_DIR,
    WidgetDefinitionError,
    load_default_registry,
    load_widget_directory,
    load_widget_file,
)
from healthwidget.core.widgets.models import RingDefinition, WidgetDefinition
from healthwidget.core.widgets.registry import WidgetRegistry

_VALID = """
kind: sleep
version: 2
display_name: Night
description: >
  Custom sleep widget.
ring:
  label: rest
  color: blue
rows:
  - title: Asleep
    metric: time_asleep_minutes
    format: duration
"""


def _write(directory, name, body):
    path = directory / name
    path.write_text(textwrap.dedent(body))
    return path


# ---------------------------------------------------------------------------
# Packaged definitions
# ---------------------------------------------------------------------------

class TestPackagedDefinitions:
    def test_directory_ships_three_widgets(self):
        names = sorted(p.name for p in DEFAULT_WIDGET_DIR.glob("*.yaml"))
        assert names == ["recovery.yaml", "sleep.yaml", "strain.yaml"]

    def test_default_registry(self):
        registry = load_default_registry()
        assert sorted(registry.kinds()) == ["recovery", "sleep", "strain"]

    def test_strain_definition(self):
        strain = load_default_registry().require("strain")
        assert strain.display_name == "Strain"
        assert strain.description == "View your strain metrics."
        assert strain.ring.target_zone == "strain_target_range"
        assert [r.metric for r in strain.rows] == ["exercise_minutes", "calories_burned"]
        assert strain.rows[1].unit == "kcal"
        assert strain.families == ["system_small"]

    def test_only_strain_has_target_zone(self):
        registry = load_default_registry()
        assert registry.require("recovery").ring.target_zone is None
        assert registry.require("sleep").ring.target_zone is None


# ---------------------------------------------------------------------------
# File parsing
# ---------------------------------------------------------------------------

class TestLoadWidgetFile:
    def test_parses_valid_file(self, tmp_path):
        definition = load_widget_file(_write(tmp_path, "night.yaml", _VALID))
        assert definition.kind == "sleep"
        assert definition.version == "2"
        assert definition.description == "Custom sleep widget."
        assert definition.ring.color == "blue"
        assert definition.rows[0].format == "duration"

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "bad.yaml", "kind: [unclosed\n")
        with pytest.raises(WidgetDefinitionError, match="bad.yaml"):
            load_widget_file(path)

    def test_non_mapping(self, tmp_path):
        path = _write(tmp_path, "list.yaml", "- a\n- b\n")
        with pytest.raises(WidgetDefinitionError, match="mapping"):
            load_widget_file(path)

    def test_unknown_kind(self, tmp_path):
        path = _write(tmp_path, "x.yaml", _VALID.replace("kind: sleep", "kind: hydration"))
        with pytest.raises(WidgetDefinitionError, match="hydration"):
            load_widget_file(path)

    def test_unknown_metric(self, tmp_path):
        path = _write(tmp_path, "x.yaml", _VALID.replace("time_asleep_minutes", "steps"))
        with pytest.raises(WidgetDefinitionError, match="steps"):
            load_widget_file(path)

    def test_unknown_format(self, tmp_path):
        path = _write(tmp_path, "x.yaml", _VALID.replace("format: duration", "format: clock"))
        with pytest.raises(WidgetDefinitionError, match="clock"):
            load_widget_file(path)

    def test_unknown_target_zone(self, tmp_path):
        body = _VALID.replace("color: blue", "color: blue\n  target_zone: sleep_target_range")
        with pytest.raises(WidgetDefinitionError, match="sleep_target_range"):
            load_widget_file(_write(tmp_path, "x.yaml", body))

    def test_empty_ring_names_file(self, tmp_path):
        body = "kind: sleep\nversion: 1\ndisplay_name: Night\nring:\n"
        with pytest.raises(WidgetDefinitionError, match="empty_ring.yaml"):
            load_widget_file(_write(tmp_path, "empty_ring.yaml", body))

    def test_non_mapping_ring(self, tmp_path):
        body = "kind: sleep\nversion: 1\ndisplay_name: Night\nring: [rest, blue]\n"
        with pytest.raises(WidgetDefinitionError, match="ring must be a mapping"):
            load_widget_file(_write(tmp_path, "x.yaml", body))

    def test_non_mapping_row(self, tmp_path):
        body = _VALID + "  - just a string\n"
        with pytest.raises(WidgetDefinitionError, match="row must be a mapping"):
            load_widget_file(_write(tmp_path, "x.yaml", body))

    def test_empty_description_loads_as_blank(self, tmp_path):
        body = _VALID.replace("description: >\n  Custom sleep widget.\n", "description:\n")
        definition = load_widget_file(_write(tmp_path, "x.yaml", body))
        assert definition.description == ""

    def test_missing_required_key(self, tmp_path):
        path = _write(tmp_path, "x.yaml", _VALID.replace("display_name: Night\n", ""))
        with pytest.raises(WidgetDefinitionError, match="display_name"):
            load_widget_file(path)


# ---------------------------------------------------------------------------
# Directory loading
# ---------------------------------------------------------------------------

class TestLoadWidgetDirectory:
    def test_missing_directory_loads_nothing(self, tmp_path):
        registry = WidgetRegistry()
        assert load_widget_directory(tmp_path / "missing", registry) == 0
        assert len(registry) == 0

    def test_skips_underscore_files(self, tmp_path):
        _write(tmp_path, "night.yaml", _VALID)
        _write(tmp_path, "_schema.yaml", "anything: true\n")
        registry = WidgetRegistry()
        assert load_widget_directory(tmp_path, registry) == 1
        assert registry.kinds() == ["sleep"]

    def test_duplicate_kind_rejected(self, tmp_path):
        _write(tmp_path, "a.yaml", _VALID)
        _write(tmp_path, "b.yaml", _VALID)
        with pytest.raises(ValueError, match="Duplicate"):
            load_widget_directory(tmp_path, WidgetRegistry())

    def test_override_directory(self, tmp_path):
        _write(tmp_path, "night.yaml", _VALID)
        registry = load_default_registry(tmp_path)
        assert registry.kinds() == ["sleep"]
        assert registry.require("sleep").display_name == "Night"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestWidgetRegistry:
    def _definition(self, kind="strain"):
        return WidgetDefinition(
            kind=kind,
            version="1",
            display_name=kind.title(),
            description="",
            ring=RingDefinition(label=kind, color="gray"),
        )

    def test_get_and_require(self):
        registry = WidgetRegistry()
        registry.register(self._definition())
        assert registry.get("strain").display_name == "Strain"
        assert registry.get("sleep") is None
        with pytest.raises(KeyError):
            registry.require("sleep")

    def test_find_by_metric(self):
        registry = load_default_registry()
        found = registry.find_by_metric("exercise_minutes")
        assert [d.kind for d in found] == ["strain"]
        assert registry.find_by_metric("steps") == []

    def test_all_in_registration_order(self):
        registry = WidgetRegistry()
        registry.register(self._definition("sleep"))
        registry.register(self._definition("strain"))
        assert [d.kind for d in registry.all()] == ["sleep", "strain"]
