"""Open-Meteo weather data source.

Fetches daily max temperature and rainfall (free, no API key).

Public API:
  - range: fetch_weather_range (archive + forecast stitched at the cutoff)
  - historical: fetch_historical_daily (archive API for past dates)
  - forecast: fetch_forecast_daily (forecast API for recent/future dates)
  - client: API URLs, shared constants, response parsing
"""

from fig_monitor.datasources.weather.client import (
    ARCHIVE_LAG_DAYS,
    OPEN_METEO_API,
    OPEN_METEO_HISTORICAL,
    parse_daily,
)
from fig_monitor.datasources.weather.forecast import fetch_forecast_daily
from fig_monitor.datasources.weather.historical import fetch_historical_daily
from fig_monitor.datasources.weather.range import (
    WeatherLeg,
    WeatherSource,
    archive_cutoff,
    fetch_weather_range,
    plan_weather_legs,
)

__all__ = [
    "ARCHIVE_LAG_DAYS",
    "OPEN_METEO_API",
    "OPEN_METEO_HISTORICAL",
    "WeatherLeg",
    "WeatherSource",
    "archive_cutoff",
    "fetch_forecast_daily",
    "fetch_historical_daily",
    "fetch_weather_range",
    "parse_daily",
    "plan_weather_legs",
]
