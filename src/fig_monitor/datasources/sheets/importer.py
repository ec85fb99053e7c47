"""Fetch a Google Sheet as CSV and turn it into observations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from fig_monitor.datasources.sheets.client import build_export_url
from fig_monitor.datasources.sheets.errors import (
    NoValidRowsError,
    SheetAccessDeniedError,
    SheetImportError,
    SheetStatusError,
)
from fig_monitor.parsing.records import parse_records
from fig_monitor.services.http import session

if TYPE_CHECKING:
    from fig_monitor.schemas import Observation
    from fig_monitor.store import ObservationStore

logger = logging.getLogger(__name__)


def fetch_sheet_csv(url: str) -> str:
    """
    Download the CSV body for a sheet URL.

    Raises:
        InvalidSheetUrlError: No spreadsheet id in ``url`` (no request is made).
        SheetAccessDeniedError: Google served an HTML page instead of CSV.
        SheetStatusError: Non-success HTTP status.
        SheetImportError: Transport failure.
    """
    export_url = build_export_url(url)
    try:
        resp = session.get(export_url)
    except requests.RequestException as exc:
        raise SheetImportError(f"Failed to fetch data: {exc}") from exc

    content_type = resp.headers.get("content-type", "")
    if "text/html" in content_type:
        raise SheetAccessDeniedError
    if not resp.ok:
        raise SheetStatusError(resp.status_code)
    return resp.text


def fetch_sheet(url: str, *, strict_dates: bool = False) -> list[Observation]:
    """Fetch a sheet and parse its rows, newest first.

    Raises:
        NoValidRowsError: The sheet had no usable rows.
        SheetImportError: Any of the failures from ``fetch_sheet_csv``.
    """
    records = parse_records(fetch_sheet_csv(url), strict_dates=strict_dates)
    if not records:
        raise NoValidRowsError
    return records


def import_sheet(url: str, store: ObservationStore, *, strict_dates: bool = False) -> list[Observation]:
    """Fetch a sheet and overwrite the stored dataset with its rows."""
    records = fetch_sheet(url, strict_dates=strict_dates)
    logger.info("Imported %d observations from sheet", len(records))
    return store.replace_all(records)
