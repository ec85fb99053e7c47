"""Fig Monitor - fig phenology and fruit-bat activity log with weather context.

Architecture::

    parsing/       Date normalization, delimited-text records, CSV export
    store.py       Single-slot observation repository (upsert by date)
    datasources/   External sources (Open-Meteo archive/forecast, Google Sheets)
    analysis/      Observation + weather joins for display and hand-off
    flows/         Prefect orchestration (refresh loads data and weather)
    services/      Shared utilities (HTTP client with retry)

Data flow: sheet/paste -> parsing -> store; store date span -> weather -> analysis
"""

__version__ = "0.1.0"
__author__ = "Fig Monitor contributors"

from fig_monitor.config import Settings
from fig_monitor.schemas import Observation, WeatherData

__all__ = ["Observation", "Settings", "WeatherData", "__version__"]
