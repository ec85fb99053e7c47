"""Tests for the shared HTTP session as the datasources see it.

A throwaway local server stands in for Open-Meteo and Google Sheets so the
retry adapter runs for real.
"""

from __future__ import annotations

import threading
from datetime import date
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING, Any
from unittest.mock import patch

import pytest
import requests

from fig_monitor.datasources.sheets import SheetStatusError, fetch_sheet, fetch_sheet_csv, importer
from fig_monitor.datasources.weather import fetch_weather_range, forecast, historical
from fig_monitor.services.http import (
    DEFAULT_TIMEOUT,
    TimeoutHTTPAdapter,
    build_retry,
    create_session,
    session,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

TODAY = date(2026, 10, 19)


class FakeRemote:
    """Serves a fixed status and body, counting hits per path."""

    def __init__(self) -> None:
        self.status = 200
        self.body = b""
        self.content_type = "text/plain"
        self.hits: list[str] = []
        self.base_url = ""


@pytest.fixture
def remote() -> Iterator[FakeRemote]:
    state = FakeRemote()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            state.hits.append(self.path)
            self.send_response(state.status)
            self.send_header("Content-Type", state.content_type)
            self.send_header("Content-Length", str(len(state.body)))
            self.end_headers()
            self.wfile.write(state.body)

        def log_message(self, format: str, *args: Any) -> None:
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    state.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    try:
        yield state
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def fast_session() -> requests.Session:
    """Same adapter as production, two retries and no backoff sleep."""
    return create_session(retry=build_retry(total=2, backoff_factor=0), timeout=5)


class TestSheetImportThroughSession:
    def test_exhausted_retries_surface_as_status_error(
        self, remote: FakeRemote, fast_session: requests.Session
    ) -> None:
        remote.status = 503
        url = f"{remote.base_url}/pub?output=csv"

        with patch.object(importer, "session", fast_session), pytest.raises(SheetStatusError) as exc_info:
            fetch_sheet_csv(url)

        assert exc_info.value.status_code == 503
        assert len(remote.hits) == 3

    def test_client_error_is_not_retried(
        self, remote: FakeRemote, fast_session: requests.Session
    ) -> None:
        remote.status = 403

        with patch.object(importer, "session", fast_session), pytest.raises(SheetStatusError):
            fetch_sheet_csv(f"{remote.base_url}/pub?output=csv")

        assert len(remote.hits) == 1

    def test_csv_body_is_parsed(self, remote: FakeRemote, fast_session: requests.Session) -> None:
        remote.content_type = "text/csv; charset=utf-8"
        remote.body = b"Date,Figs,Bats\n01/10/2023,20,10\n"

        with patch.object(importer, "session", fast_session):
            records = fetch_sheet(f"{remote.base_url}/pub?output=csv")

        assert [(r.date, r.figs, r.bats) for r in records] == [("2023-10-01", 20, 10)]
        assert remote.hits == ["/pub?output=csv"]


class TestWeatherThroughSession:
    @pytest.mark.parametrize("status", [429, 503])
    def test_throttled_archive_degrades_to_empty(
        self, status: int, remote: FakeRemote, fast_session: requests.Session
    ) -> None:
        remote.status = status

        with (
            patch.object(historical, "session", fast_session),
            patch.object(historical, "OPEN_METEO_HISTORICAL", f"{remote.base_url}/v1/archive"),
        ):
            points = fetch_weather_range("2026-01-01", "2026-01-31", today=TODAY)

        assert points == []
        assert len(remote.hits) == 3
        assert all(hit.startswith("/v1/archive?") for hit in remote.hits)

    def test_forecast_body_comes_back_as_points(
        self, remote: FakeRemote, fast_session: requests.Session
    ) -> None:
        remote.content_type = "application/json"
        remote.body = (
            b'{"daily": {"time": ["2026-10-18"], '
            b'"temperature_2m_max": [27.5], "precipitation_sum": [null]}}'
        )

        with (
            patch.object(forecast, "session", fast_session),
            patch.object(forecast, "OPEN_METEO_API", f"{remote.base_url}/v1/forecast"),
        ):
            points = fetch_weather_range("2026-10-18", "2026-10-18", today=TODAY)

        assert [(p.date, p.rain, p.temp_max) for p in points] == [("2026-10-18", 0.0, 27.5)]
        assert "daily=temperature_2m_max%2Cprecipitation_sum" in remote.hits[0]


class TestSessionDefaults:
    def test_timeout_filled_in_when_missing(self) -> None:
        adapter = TimeoutHTTPAdapter(timeout=42)
        prep = requests.Request("GET", "https://example.com").prepare()
        with patch.object(requests.adapters.HTTPAdapter, "send", return_value=requests.Response()) as mock_send:
            adapter.send(prep, timeout=None)
        assert mock_send.call_args.kwargs["timeout"] == 42

    def test_explicit_timeout_kept(self) -> None:
        adapter = TimeoutHTTPAdapter(timeout=42)
        prep = requests.Request("GET", "https://example.com").prepare()
        with patch.object(requests.adapters.HTTPAdapter, "send", return_value=requests.Response()) as mock_send:
            adapter.send(prep, timeout=5)
        assert mock_send.call_args.kwargs["timeout"] == 5

    def test_module_session_uses_timeout_adapter(self) -> None:
        adapter = session.get_adapter("https://archive-api.open-meteo.com")
        assert isinstance(adapter, TimeoutHTTPAdapter)
        assert adapter.timeout == DEFAULT_TIMEOUT

    def test_datasources_share_one_session(self) -> None:
        assert historical.session is session
        assert forecast.session is session
        assert importer.session is session
