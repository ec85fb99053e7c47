"""Reasons a sheet import can fail, each with a user-facing message."""

from __future__ import annotations


class SheetImportError(Exception):
    """Base class for sheet import failures."""


class InvalidSheetUrlError(SheetImportError):
    """The URL has no ``/d/<id>`` spreadsheet identifier."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("Invalid Google Sheet URL. Could not find Spreadsheet ID.")


class SheetAccessDeniedError(SheetImportError):
    """Google answered with an HTML page (sign-in) instead of CSV."""

    def __init__(self) -> None:
        super().__init__(
            "Access denied. The sheet must be 'Published to the web' "
            "or have 'Anyone with the link' access."
        )


class SheetStatusError(SheetImportError):
    """The export endpoint returned a non-success status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Google Sheets returned status {status_code}.")


class NoValidRowsError(SheetImportError):
    """The sheet was fetched but no row parsed as an observation."""

    def __init__(self) -> None:
        super().__init__("No valid data rows found. Ensure columns are A=Date, B=Figs, C=Bats.")
