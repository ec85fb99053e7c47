"""
Domain models for the fig monitor.

Pydantic models for observations and weather. These define the canonical
schema - parsers and datasources normalize their input to these.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def new_id() -> str:
    """Generate an opaque observation identifier."""
    return uuid.uuid4().hex[:12]


# =============================================================================
# Observations
# =============================================================================


class Observation(BaseModel):
    """One day's monitoring record for the tree.

    ``bats``, ``figs`` and ``leaves`` are intensity percentages (0-100).
    The range is a convention of the entry form, not a validation rule:
    imported spreadsheets are accepted as-is after rounding.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_id, description="Opaque unique token")
    date: str = Field(..., pattern=ISO_DATE_PATTERN, description="Canonical YYYY-MM-DD")
    bats: int = Field(default=0, description="Flying-fox activity, 0-100")
    figs: int = Field(default=0, description="Ripe fruit abundance, 0-100")
    leaves: int = Field(default=0, description="Canopy coverage, 0-100")

    @property
    def year(self) -> str:
        return self.date[:4]


class ObservationWithWeather(Observation):
    """Observation joined with the same day's weather, for display only."""

    model_config = ConfigDict(populate_by_name=True)

    rain: float | None = None
    temp_max: float | None = Field(default=None, alias="tempMax")


# =============================================================================
# Weather
# =============================================================================


class WeatherData(BaseModel):
    """One day's weather summary from Open-Meteo."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(..., pattern=ISO_DATE_PATTERN)
    rain: float = Field(default=0.0, ge=0, description="Precipitation sum, mm")
    temp_max: float = Field(default=0.0, alias="tempMax", description="Max temperature, C")
