"""Google Sheets share URL -> CSV export URL."""

from __future__ import annotations

import re

from fig_monitor.datasources.sheets.errors import InvalidSheetUrlError

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"

DEFAULT_GID = "0"

_SHEET_ID_RE = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_GID_RE = re.compile(r"[#&?]gid=(\d+)")


def build_export_url(url: str) -> str:
    """
    Resolve a sheet URL to its CSV export URL.

    URLs that already ask for ``output=csv`` (published-to-web links) are
    returned unchanged. Otherwise the spreadsheet id comes from ``/d/<id>``
    and the tab from ``gid=<n>`` in the query or fragment (default tab 0).

    Raises:
        InvalidSheetUrlError: If no spreadsheet id is present.
    """
    url = url.strip()
    if "output=csv" in url:
        return url

    id_match = _SHEET_ID_RE.search(url)
    if not id_match:
        raise InvalidSheetUrlError(url)

    gid_match = _GID_RE.search(url)
    gid = gid_match.group(1) if gid_match else DEFAULT_GID
    return EXPORT_URL.format(sheet_id=id_match.group(1), gid=gid)
