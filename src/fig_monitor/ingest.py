"""Entry points that turn user input into stored observations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fig_monitor.parsing.records import parse_records_with_report
from fig_monitor.schemas import Observation

if TYPE_CHECKING:
    from fig_monitor.store import ObservationStore

logger = logging.getLogger(__name__)

SCALE_MIN = 0
SCALE_MAX = 100


def _clamp(value: int) -> int:
    return max(SCALE_MIN, min(SCALE_MAX, value))


def new_observation(iso_date: str, *, figs: int = 0, bats: int = 0, leaves: int = 0) -> Observation:
    """Build a manually entered record, values clamped to the 0-100 scale."""
    return Observation(
        date=iso_date,
        figs=_clamp(figs),
        bats=_clamp(bats),
        leaves=_clamp(leaves),
    )


def import_text(text: str, store: ObservationStore, *, strict_dates: bool = False) -> list[Observation]:
    """Parse pasted rows and, if any were accepted, replace the stored set.

    Returns the accepted records. An empty result leaves the store untouched.
    Rejected rows are logged at DEBUG level with their line number and reason.
    """
    report = parse_records_with_report(text, strict_dates=strict_dates)
    for row in report.skipped:
        logger.debug("Skipped line %d (%s): %r", row.line_number, row.reason, row.raw)
    if report.skipped:
        logger.info("Skipped %d pasted rows", len(report.skipped))
    records = report.records
    if not records:
        logger.info("Pasted text contained no usable rows; store left unchanged")
        return []
    return store.replace_all(records)
