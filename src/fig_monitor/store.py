"""Observation repository over a single key-value slot.

The whole record set lives in one slot as a JSON array and is replaced on
every write, so there are no partial updates to reconcile:

  - ``FileSlot``: one ``<key>.json`` file per slot under a base directory.
    Writes go to a temp file first and are renamed into place.
  - ``MemorySlot``: in-process dict, for tests and dry runs.

``ObservationStore`` keeps at most one record per date. Unreadable slot
contents are treated as an empty dataset.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path  # noqa: TC003 - used at runtime, not just annotations
from typing import Any, Protocol

from pydantic import ValidationError

from fig_monitor.schemas import Observation

logger = logging.getLogger(__name__)

STORAGE_KEY = "fig_bat_data_v1"


class Slot(Protocol):
    """Minimal key-value backend: read and replace one string per key."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemorySlot:
    """Dict-backed slot."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value


class FileSlot:
    """Slot backed by ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir

    def path_for(self, key: str) -> Path:
        return self.base / f"{key}.json"

    def read(self, key: str) -> str | None:
        full = self.path_for(key)
        if not full.exists():
            return None
        return full.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        full = self.path_for(key)
        full.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=full.parent, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, full)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _sort_newest_first(records: list[Observation]) -> list[Observation]:
    return sorted(records, key=lambda r: r.date, reverse=True)


class ObservationStore:
    """Upsert/delete repository for observations, keyed by date."""

    def __init__(self, slot: Slot, key: str = STORAGE_KEY) -> None:
        self.slot = slot
        self.key = key

    def list(self) -> list[Observation]:
        """All records, newest first. Missing or corrupt state yields []."""
        try:
            raw = self.slot.read(self.key)
            if not raw:
                return []
            payload: Any = json.loads(raw)
            if not isinstance(payload, list):
                raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
            records = [Observation.model_validate(item) for item in payload]
        except (OSError, ValueError, TypeError, ValidationError) as exc:
            logger.warning("Stored observations under %r are unreadable: %s", self.key, exc)
            return []
        return _sort_newest_first(records)

    def upsert(self, record: Observation) -> list[Observation]:
        """Insert ``record``, or replace the values of the record on its date.

        A replaced record keeps its original ``id``.
        """
        current = self.list()
        existing = next((r for r in current if r.date == record.date), None)
        if existing is not None:
            record = record.model_copy(update={"id": existing.id})
        updated = [r for r in current if r.date != record.date]
        updated.append(record)
        return self._save(updated)

    def delete(self, record_id: str) -> list[Observation]:
        """Remove the record with ``record_id``. Unknown ids are a no-op."""
        remaining = [r for r in self.list() if r.id != record_id]
        return self._save(remaining)

    def replace_all(self, records: list[Observation]) -> list[Observation]:
        """Overwrite the stored set with ``records``.

        Where several records share a date, the last one in ``records`` wins.
        """
        return self._save(list(records))

    def get_by_date(self, iso_date: str) -> Observation | None:
        return next((r for r in self.list() if r.date == iso_date), None)

    def _save(self, records: list[Observation]) -> list[Observation]:
        one_per_date = {r.date: r for r in records}
        ordered = _sort_newest_first(list(one_per_date.values()))
        blob = json.dumps([r.model_dump(mode="json") for r in ordered])
        self.slot.write(self.key, blob)
        return ordered
