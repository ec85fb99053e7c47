"""Daily weather for an arbitrary date span, stitched from two endpoints.

The archive API lags real time by about a week, and the forecast API is
only asked for days after that lag. ``plan_weather_legs`` decides which
endpoint serves which part of the span:

    start .......... cutoff | cutoff+1 .......... end
    [------ archive ------] | [----- forecast -----]

where ``cutoff = today - ARCHIVE_LAG_DAYS``. The two legs never overlap, so
their results are concatenated archive-first with no de-duplication.

Weather is optional context. A failing leg contributes no days and is
logged; it never raises to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

import requests

from fig_monitor.config import DEFAULT_LAT, DEFAULT_LON, DEFAULT_TIMEZONE
from fig_monitor.datasources.weather import forecast, historical
from fig_monitor.datasources.weather.client import ARCHIVE_LAG_DAYS, parse_daily
from fig_monitor.schemas import WeatherData

logger = logging.getLogger(__name__)


class WeatherSource(StrEnum):
    """Which Open-Meteo endpoint serves a leg."""

    ARCHIVE = "archive"
    FORECAST = "forecast"


@dataclass(frozen=True)
class WeatherLeg:
    """One endpoint query covering ``start``..``end`` inclusive."""

    source: WeatherSource
    start: str
    end: str


def archive_cutoff(today: date | None = None, lag_days: int = ARCHIVE_LAG_DAYS) -> date:
    """Last day the archive endpoint is asked for."""
    return (today or date.today()) - timedelta(days=lag_days)


def plan_weather_legs(
    start_date: str,
    end_date: str,
    today: date | None = None,
    lag_days: int = ARCHIVE_LAG_DAYS,
) -> list[WeatherLeg]:
    """Split ``start_date``..``end_date`` between archive and forecast.

    Dates are compared as ISO strings, so spans containing impossible days
    (``2024-02-31`` from a day-first import) still plan without error.
    Callers are expected to pass ``start_date <= end_date``.
    """
    cutoff = archive_cutoff(today, lag_days)
    cutoff_iso = cutoff.isoformat()

    if start_date > cutoff_iso:
        return [WeatherLeg(WeatherSource.FORECAST, start_date, end_date)]
    if end_date <= cutoff_iso:
        return [WeatherLeg(WeatherSource.ARCHIVE, start_date, end_date)]

    legs = [WeatherLeg(WeatherSource.ARCHIVE, start_date, cutoff_iso)]
    first_recent = (cutoff + timedelta(days=1)).isoformat()
    if first_recent <= end_date:
        legs.append(WeatherLeg(WeatherSource.FORECAST, first_recent, end_date))
    return legs


def _fetcher_for(source: WeatherSource) -> Callable[..., dict[str, Any]]:
    # Resolved per call so the module-level functions can be patched.
    if source is WeatherSource.ARCHIVE:
        return historical.fetch_historical_daily
    return forecast.fetch_forecast_daily


def fetch_leg(
    leg: WeatherLeg,
    lat: float = DEFAULT_LAT,
    lon: float = DEFAULT_LON,
    timezone: str = DEFAULT_TIMEZONE,
) -> list[WeatherData]:
    """Fetch and parse one leg. Any failure yields []."""
    try:
        payload = _fetcher_for(leg.source)(leg.start, leg.end, lat, lon, timezone)
        return parse_daily(payload)
    except (requests.RequestException, ValueError, TypeError, AttributeError) as exc:
        logger.warning(
            "Weather %s leg %s..%s failed: %s", leg.source.value, leg.start, leg.end, exc
        )
        return []


def fetch_weather_range(
    start_date: str,
    end_date: str,
    *,
    lat: float = DEFAULT_LAT,
    lon: float = DEFAULT_LON,
    timezone: str = DEFAULT_TIMEZONE,
    today: date | None = None,
    lag_days: int = ARCHIVE_LAG_DAYS,
) -> list[WeatherData]:
    """
    Daily weather for ``start_date``..``end_date`` from whichever endpoints apply.

    A span straddling the archive cutoff is fetched as two concurrent
    requests; results come back archive-first. Not re-sorted: each leg is
    ascending and the legs are disjoint.

    Args:
        start_date: ISO date string (YYYY-MM-DD).
        end_date: ISO date string (YYYY-MM-DD).
        lat: Latitude (default: Woombye, QLD).
        lon: Longitude.
        timezone: IANA timezone used to bucket days.
        today: Reference day for the cutoff (default: ``date.today()``).
        lag_days: Archive lag in days.

    Returns:
        WeatherData points, or [] if nothing could be fetched.
    """
    legs = plan_weather_legs(start_date, end_date, today=today, lag_days=lag_days)

    if len(legs) == 1:
        return fetch_leg(legs[0], lat, lon, timezone)

    with ThreadPoolExecutor(max_workers=len(legs), thread_name_prefix="weather-leg") as pool:
        futures = [pool.submit(fetch_leg, leg, lat, lon, timezone) for leg in legs]
        results = [future.result() for future in futures]

    combined: list[WeatherData] = []
    for points in results:
        combined.extend(points)
    return combined
