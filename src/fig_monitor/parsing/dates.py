"""Normalize spreadsheet date text to canonical ``YYYY-MM-DD`` strings.

Accepted forms, tried in order (first match wins):

1. ISO-like ``YYYY-M-D`` or ``YYYY/M/D``. Must be a real calendar date.
2. Day-first ``D/M/YY``, ``D-M-YYYY`` etc. Two-digit years become ``20YY``.
   No calendar check: ``31/02/2024`` yields ``2024-02-31``.
3. Compact ``DDMMYYYY``.

A trailing time component (``2023-10-01 12:00:00``) is ignored.
"""

from __future__ import annotations

import re
from datetime import date

_ISO_RE = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})", re.ASCII)
_DAY_FIRST_RE = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{2}|\d{4})", re.ASCII)
_COMPACT_RE = re.compile(r"(\d{2})(\d{2})(\d{4})", re.ASCII)


def is_calendar_date(iso: str) -> bool:
    """True if ``iso`` (``YYYY-MM-DD``) names a day that exists."""
    try:
        date.fromisoformat(iso)
    except ValueError:
        return False
    return True


def parse_date(raw: str | None) -> str | None:
    """Parse loosely formatted date text.

    Returns:
        ``YYYY-MM-DD`` string, or None if the text matches no known form.
    """
    if not raw:
        return None
    text = raw.strip()
    if not text:
        return None

    date_part = text.split(" ")[0]

    match = _ISO_RE.fullmatch(date_part)
    if match:
        year, month, day = match.groups()
        iso = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
        return iso if is_calendar_date(iso) else None

    match = _DAY_FIRST_RE.fullmatch(date_part)
    if match:
        day, month, year = match.groups()
        if len(year) == 2:
            year = f"20{year}"
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    match = _COMPACT_RE.fullmatch(date_part)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"

    return None
