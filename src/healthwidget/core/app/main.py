"""Widget preview entry point — ``python -m healthwidget.core.app.main``.

Renders every widget once and prints the display models as JSON.
"""

from __future__ import annotations

import json
import logging
import sys

from healthwidget.core.app.bundle import create_bundle
from healthwidget.core.config.settings import get_settings
from healthwidget.domains.health.connectors import DataUnavailable


def run() -> int:
    """Render all widgets to stdout. Returns a process exit code."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.widget_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    bundle = create_bundle(settings_override=settings)
    try:
        models = bundle.render_all()
    except DataUnavailable as exc:
        logger.error("Cannot render widgets: %s", exc)
        return 1

    logger.info("Rendered %d widgets from '%s'", len(models), bundle.catalog.data_source)
    json.dump({kind: model.as_dict() for kind, model in models.items()}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(run())
