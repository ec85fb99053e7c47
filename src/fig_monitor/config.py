"""
Application settings.

Values come from environment variables prefixed with ``FIG_MONITOR_`` or a
local ``.env`` file, e.g. ``FIG_MONITOR_DATA_DIR=/srv/figs``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Woombye, QLD
DEFAULT_LAT = -26.66
DEFAULT_LON = 152.96
DEFAULT_TIMEZONE = "Australia/Brisbane"

DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/1yyWzM30TzFoMyt14Vi6MpkE__SA2qlTDE-8rbL2dyxE/"
    "edit?usp=sharing"
)


class Settings(BaseSettings):
    """Runtime configuration for the monitor."""

    model_config = SettingsConfigDict(
        env_prefix="FIG_MONITOR_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "fig-monitor"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    lat: float = Field(default=DEFAULT_LAT, ge=-90, le=90)
    lon: float = Field(default=DEFAULT_LON, ge=-180, le=180)
    timezone: str = DEFAULT_TIMEZONE

    data_dir: Path = Path("data")
    storage_key: str = "fig_bat_data_v1"
    default_sheet_url: str = DEFAULT_SHEET_URL

    archive_lag_days: int = Field(default=7, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
