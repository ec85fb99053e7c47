"""Cross-datasource joins over observations and weather.

Dependency rule: analysis/ imports schemas only. It never fetches data
and never touches the store.

Modules:
  - observation_weather: date span, weather join, year filters, text log
"""

from fig_monitor.analysis.observation_weather import (
    available_years,
    context_lines,
    date_span,
    join_weather,
    records_between,
    records_for_year,
)

__all__ = [
    "available_years",
    "context_lines",
    "date_span",
    "join_weather",
    "records_between",
    "records_for_year",
]
