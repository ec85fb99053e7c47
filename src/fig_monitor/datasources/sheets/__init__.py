"""Google Sheets import source.

Public API:
  - client: build_export_url (share URL -> CSV export URL)
  - importer: fetch_sheet_csv, fetch_sheet, import_sheet
  - errors: SheetImportError and its specific failure reasons
"""

from fig_monitor.datasources.sheets.client import build_export_url
from fig_monitor.datasources.sheets.errors import (
    InvalidSheetUrlError,
    NoValidRowsError,
    SheetAccessDeniedError,
    SheetImportError,
    SheetStatusError,
)
from fig_monitor.datasources.sheets.importer import fetch_sheet, fetch_sheet_csv, import_sheet

__all__ = [
    "InvalidSheetUrlError",
    "NoValidRowsError",
    "SheetAccessDeniedError",
    "SheetImportError",
    "SheetStatusError",
    "build_export_url",
    "fetch_sheet",
    "fetch_sheet_csv",
    "import_sheet",
]
