"""Open-Meteo API client constants and response parsing.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Archive: https://open-meteo.com/en/docs/historical-weather-api

The archive only serves days older than about a week; the forecast API
serves the recent past and the coming days.
"""

from __future__ import annotations

from typing import Any

from fig_monitor.schemas import WeatherData

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_HISTORICAL = "https://archive-api.open-meteo.com/v1/archive"

# Days before today that the archive is trusted to cover
ARCHIVE_LAG_DAYS = 7

# Daily variables we request from Open-Meteo
DAILY_VARS = [
    "temperature_2m_max",
    "precipitation_sum",
]


def build_params(
    start_date: str,
    end_date: str,
    lat: float,
    lon: float,
    timezone: str,
) -> dict[str, Any]:
    """Query parameters shared by both endpoints."""
    return {
        "latitude": lat,
        "longitude": lon,
        "start_date": start_date,
        "end_date": end_date,
        "daily": ",".join(DAILY_VARS),
        "timezone": timezone,
    }


def _value_at(values: list[Any] | None, index: int) -> float:
    """Series value at ``index``; missing or null readings count as 0."""
    if not values or index >= len(values) or values[index] is None:
        return 0.0
    return float(values[index])


def parse_daily(payload: dict[str, Any]) -> list[WeatherData]:
    """Convert an Open-Meteo ``daily`` block into WeatherData points.

    Returns [] when the response has no ``daily.time`` series.
    """
    daily = payload.get("daily") or {}
    times: list[str] = daily.get("time") or []
    temps = daily.get("temperature_2m_max")
    rain = daily.get("precipitation_sum")

    return [
        WeatherData(
            date=day,
            rain=_value_at(rain, i),
            temp_max=_value_at(temps, i),
        )
        for i, day in enumerate(times)
    ]
