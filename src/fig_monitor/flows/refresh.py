"""
Prefect flow that brings the local dataset and its weather up to date.

Mirrors what the dashboard does on start-up: read the stored observations,
seed them from the default Google Sheet if there are none, then fetch
weather covering the observation span.

Run locally:
    python -m fig_monitor.flows.refresh
"""

from __future__ import annotations

from typing import Any

from prefect import flow, task

from fig_monitor.analysis.observation_weather import date_span, join_weather
from fig_monitor.config import get_settings
from fig_monitor.datasources.sheets import SheetImportError, import_sheet
from fig_monitor.datasources.weather import fetch_weather_range
from fig_monitor.schemas import Observation, WeatherData
from fig_monitor.store import FileSlot, ObservationStore


def open_store() -> ObservationStore:
    """Observation store under the configured data directory."""
    settings = get_settings()
    return ObservationStore(FileSlot(settings.data_dir), key=settings.storage_key)


@task(name="load-observations")
def load_observations(store: ObservationStore) -> list[Observation]:
    """Read the stored dataset."""
    return store.list()


@task(name="seed-from-sheet")
def seed_from_sheet(store: ObservationStore, sheet_url: str) -> list[Observation]:
    """Import the sheet into an empty store. Failures leave the store empty."""
    try:
        return import_sheet(sheet_url, store)
    except SheetImportError as exc:
        print(f"Could not load default sheet: {exc}")
        return []


@task(name="fetch-weather-range")
def fetch_weather(start: str, end: str) -> list[WeatherData]:
    """Fetch archive/forecast weather for the observation span."""
    settings = get_settings()
    return fetch_weather_range(
        start,
        end,
        lat=settings.lat,
        lon=settings.lon,
        timezone=settings.timezone,
        lag_days=settings.archive_lag_days,
    )


@flow(name="refresh-data", log_prints=True)
def refresh_all(
    sheet_url: str | None = None,
    store: ObservationStore | None = None,
) -> dict[str, Any]:
    """
    Load observations and the weather around them.

    Args:
        sheet_url: Sheet used to seed an empty store (default from settings).
        store: Store to use (default: file store under ``data_dir``).

    Returns:
        Summary dict with counts, the date span and the joined rows.
    """
    store = store or open_store()
    results: dict[str, Any] = {}

    observations = load_observations(store)
    if observations:
        print(f"Loaded {len(observations)} stored observations.")
    else:
        url = sheet_url or get_settings().default_sheet_url
        print("No stored observations, importing default sheet...")
        observations = seed_from_sheet(store, url)
        print(f"Imported {len(observations)} observations.")

    results["observations"] = len(observations)
    if not observations:
        results["weather_days"] = 0
        results["span"] = None
        results["rows"] = []
        return results

    start, end = date_span(observations)
    print(f"Fetching weather for {start} to {end}...")
    weather = fetch_weather(start, end)
    if not weather:
        print("No weather data available; continuing without it.")

    results["weather_days"] = len(weather)
    results["span"] = (start, end)
    results["rows"] = join_weather(observations, weather)
    return results


if __name__ == "__main__":
    result = refresh_all()
    print(
        f"Flow complete: {result['observations']} observations, "
        f"{result['weather_days']} weather days"
    )
