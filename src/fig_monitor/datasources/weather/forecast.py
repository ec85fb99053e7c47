"""Recent and upcoming daily weather from Open-Meteo Forecast API."""

from __future__ import annotations

from typing import Any

from fig_monitor.config import DEFAULT_LAT, DEFAULT_LON, DEFAULT_TIMEZONE
from fig_monitor.datasources.weather.client import OPEN_METEO_API, build_params
from fig_monitor.services.http import session


def fetch_forecast_daily(
    start_date: str,
    end_date: str,
    lat: float = DEFAULT_LAT,
    lon: float = DEFAULT_LON,
    timezone: str = DEFAULT_TIMEZONE,
) -> dict[str, Any]:
    """
    Fetch daily weather for a recent/future date span.

    The forecast API covers roughly the last few months through 16 days
    ahead; we only ask it for days the archive can't serve yet.

    Args:
        start_date: ISO date string (YYYY-MM-DD).
        end_date: ISO date string (YYYY-MM-DD).
        lat: Latitude (default: Woombye, QLD).
        lon: Longitude.
        timezone: IANA timezone used to bucket days.

    Returns:
        Raw API response dict with ``daily`` key containing arrays.

    Raises:
        requests.HTTPError: If the API returns an error status.
    """
    params = build_params(start_date, end_date, lat, lon, timezone)
    resp = session.get(OPEN_METEO_API, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
