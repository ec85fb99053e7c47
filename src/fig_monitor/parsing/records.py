"""Delimited text -> Observation records, and back to CSV.

Input is whatever the user pastes from a spreadsheet or whatever a sheet
export returns: one row per line, columns ``Date, Figs, Bats[, Leaves]``.
Parsing is permissive. Rows that can't be read (headers, notes, blank
cells in the date column) are skipped rather than failing the batch.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from fig_monitor.parsing.dates import is_calendar_date, parse_date
from fig_monitor.schemas import Observation

CSV_HEADER = "Date,Figs,Bats,Leaves"

# Leading decimal literal, the way spreadsheet "20%" or "20.5 approx" reads as a number
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

_LINE_SPLIT_RE = re.compile(r"\r\n|\n")

MIN_FIELDS = 3


# =============================================================================
# Data Model
# =============================================================================


@dataclass
class SkippedRow:
    """A non-blank input line that did not become an observation."""

    line_number: int
    raw: str
    reason: str


@dataclass
class ParseReport:
    """Accepted records plus a diagnostic for every rejected row."""

    records: list[Observation] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records


# =============================================================================
# Field coercion
# =============================================================================


def coerce_number(value: str) -> float:
    """Coerce a cell to a float.

    Empty cells count as 0. Text without a leading number (a header label,
    a note) yields NaN so the caller can drop the row.
    """
    if value == "":
        return 0.0
    match = _LEADING_NUMBER_RE.match(value.lstrip())
    if not match:
        return math.nan
    number = float(match.group(0))
    return number if math.isfinite(number) else math.nan


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def detect_delimiter(lines: list[str]) -> str:
    """Tab if the first non-blank line has one, otherwise comma."""
    first = next((line for line in lines if line.strip()), "")
    return "\t" if "\t" in first else ","


# =============================================================================
# Parsing
# =============================================================================


def _parse_row(
    parts: list[str], *, strict_dates: bool
) -> tuple[Observation | None, str | None]:
    """Turn split fields into an Observation, or explain why not."""
    iso = parse_date(parts[0])
    if iso is None:
        return None, "unrecognized date"
    if strict_dates and not is_calendar_date(iso):
        return None, f"not a calendar date: {iso}"

    figs = coerce_number(parts[1])
    bats = coerce_number(parts[2])
    if math.isnan(figs):
        return None, "figs is not a number"
    if math.isnan(bats):
        return None, "bats is not a number"

    leaves = coerce_number(parts[3]) if len(parts) > MIN_FIELDS else 0.0
    if math.isnan(leaves):
        leaves = 0.0

    record = Observation(
        date=iso,
        figs=round_half_up(figs),
        bats=round_half_up(bats),
        leaves=round_half_up(leaves),
    )
    return record, None


def parse_records_with_report(text: str | None, *, strict_dates: bool = False) -> ParseReport:
    """Parse delimited text, keeping a diagnostic for each skipped row.

    Args:
        text: Pasted cells or a CSV body. Tab- or comma-delimited.
        strict_dates: Also reject day-first dates that don't exist
            (``31/02/2024``). Off by default so older data keeps loading.

    Returns:
        ParseReport with records sorted newest first.
    """
    report = ParseReport()
    if not text or not text.strip():
        return report

    lines = _LINE_SPLIT_RE.split(text.strip())
    delimiter = detect_delimiter(lines)

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue

        parts = [part.strip() for part in line.split(delimiter)]
        if len(parts) < MIN_FIELDS:
            report.skipped.append(SkippedRow(line_number, line, "fewer than 3 columns"))
            continue

        record, reason = _parse_row(parts, strict_dates=strict_dates)
        if record is None:
            report.skipped.append(SkippedRow(line_number, line, reason or "unreadable"))
            continue
        report.records.append(record)

    report.records.sort(key=lambda r: r.date, reverse=True)
    return report


def parse_records(text: str | None, *, strict_dates: bool = False) -> list[Observation]:
    """Parse delimited text into observations, newest first.

    An empty list means no usable rows were found; it is not an error.
    """
    return parse_records_with_report(text, strict_dates=strict_dates).records


# =============================================================================
# Export
# =============================================================================


def export_csv(records: list[Observation]) -> str:
    """Render records as ``Date,Figs,Bats,Leaves`` CSV (no trailing newline)."""
    rows = [f"{r.date},{r.figs},{r.bats},{r.leaves}" for r in records]
    return "\n".join([CSV_HEADER, *rows])
