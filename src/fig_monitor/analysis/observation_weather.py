"""Join fig observations with daily weather by date.

Weather is attached for display only; the stored records never carry it.
"""

from __future__ import annotations

from datetime import date

from fig_monitor.schemas import Observation, ObservationWithWeather, WeatherData


def date_span(records: list[Observation], today: date | None = None) -> tuple[str, str]:
    """Earliest and latest observation dates.

    With no records, both ends are today so a weather lookup still has a
    valid span.
    """
    if not records:
        iso_today = (today or date.today()).isoformat()
        return iso_today, iso_today
    dates = [r.date for r in records]
    return min(dates), max(dates)


def join_weather(
    records: list[Observation],
    weather: list[WeatherData],
) -> list[ObservationWithWeather]:
    """Attach same-day ``rain`` and ``temp_max`` to each record.

    Records without a matching weather day get None for both. Input order
    is preserved.
    """
    by_date = {w.date: w for w in weather}
    joined: list[ObservationWithWeather] = []
    for record in records:
        match = by_date.get(record.date)
        joined.append(
            ObservationWithWeather(
                **record.model_dump(),
                rain=match.rain if match else None,
                temp_max=match.temp_max if match else None,
            )
        )
    return joined


def available_years(records: list[Observation], today: date | None = None) -> list[str]:
    """Distinct observation years plus the current year, newest first."""
    years = {r.year for r in records}
    years.add(str((today or date.today()).year))
    return sorted(years, reverse=True)


def records_for_year(records: list[Observation], year: str | int) -> list[Observation]:
    """Records from ``year`` in chronological order (chart x-axis)."""
    prefix = str(year)
    return sorted((r for r in records if r.date.startswith(prefix)), key=lambda r: r.date)


def context_lines(records: list[Observation], weather: list[WeatherData]) -> str:
    """Chronological text log of observations with same-day weather.

    One line per record, e.g.
    ``2023-10-01: Bats=10%, Figs=20%, Leaves=0% | Weather: 28.5°C, 3.2mm Rain``.
    """
    by_date = {w.date: w for w in weather}
    lines = []
    for r in sorted(records, key=lambda r: r.date):
        line = f"{r.date}: Bats={r.bats}%, Figs={r.figs}%, Leaves={r.leaves}%"
        w = by_date.get(r.date)
        if w is not None:
            line += f" | Weather: {w.temp_max:g}°C, {w.rain:g}mm Rain"
        lines.append(line)
    return "\n".join(lines)


def records_between(records: list[Observation], start: str, end: str) -> list[Observation]:
    """Records dated ``start``..``end`` inclusive, input order kept."""
    return [r for r in records if start <= r.date <= end]
