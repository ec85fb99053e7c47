"""Shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fig_monitor.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point the data directory at tmp_path and reset the settings cache."""
    monkeypatch.setenv("FIG_MONITOR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
