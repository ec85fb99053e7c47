"""
Shared HTTP session for Open-Meteo and Google Sheets.

Both remotes are plain GETs that are safe to repeat. Transient statuses
(429 and 5xx) are retried with backoff inside the adapter, and when the
retries run out the last response is handed back as-is. Callers keep their
own status handling:

  - weather legs call ``raise_for_status`` and degrade to no data,
  - the sheet importer maps the final status to ``SheetStatusError``.

Every request gets ``DEFAULT_TIMEOUT`` unless the caller passes one.

Usage::

    from fig_monitor.services.http import session

    resp = session.get(OPEN_METEO_HISTORICAL, params=params)
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from fig_monitor import __version__

RETRY_STATUSES = (429, 500, 502, 503, 504)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"fig-monitor/{__version__}"


def build_retry(total: int = 4, backoff_factor: float = 2.0) -> Retry:
    """Retry policy for idempotent GETs; the final response is returned, not raised."""
    return Retry(
        total=total,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that fills in a timeout when the request has none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(retry: Retry | None = None, timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """Session with the retrying, timeout-enforcing adapter on both schemes."""
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or build_retry(), timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


session: requests.Session = create_session()
