"""Application settings loaded from environment variables."""

from __future__ import annotations

from datetime import timedelta

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Health widget configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    widget_log_level: str = "info"

    # Timeline: the host is asked to refresh this long after each build.
    widget_refresh_interval_minutes: int = 60

    # A cached snapshot older than this is no longer served when the source is down.
    widget_max_stale_minutes: int = 180

    # Directory of widget definition YAML files. Empty = packaged definitions.
    widget_definitions_dir: str = ""

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(minutes=self.widget_refresh_interval_minutes)

    @property
    def max_stale_age(self) -> timedelta:
        return timedelta(minutes=self.widget_max_stale_minutes)


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
