"""Tests for the observation store and its slot backends."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from fig_monitor.schemas import Observation
from fig_monitor.store import STORAGE_KEY, FileSlot, MemorySlot, ObservationStore

if TYPE_CHECKING:
    from pathlib import Path


def _obs(date: str, figs: int = 0, bats: int = 0, leaves: int = 0, id: str | None = None) -> Observation:
    if id is None:
        return Observation(date=date, figs=figs, bats=bats, leaves=leaves)
    return Observation(id=id, date=date, figs=figs, bats=bats, leaves=leaves)


@pytest.fixture
def store() -> ObservationStore:
    return ObservationStore(MemorySlot())


class TestList:
    """Reading the stored set."""

    def test_missing_slot_is_empty(self, store: ObservationStore) -> None:
        assert store.list() == []

    def test_corrupt_json_is_empty(self) -> None:
        store = ObservationStore(MemorySlot({STORAGE_KEY: "{not json"}))
        assert store.list() == []

    def test_non_array_is_empty(self) -> None:
        store = ObservationStore(MemorySlot({STORAGE_KEY: '{"date": "2023-10-01"}'}))
        assert store.list() == []

    def test_invalid_record_is_empty(self) -> None:
        store = ObservationStore(MemorySlot({STORAGE_KEY: '[{"id": "x"}]'}))
        assert store.list() == []

    def test_sorted_newest_first(self) -> None:
        blob = json.dumps(
            [
                {"id": "a", "date": "2023-01-01", "bats": 1, "figs": 1, "leaves": 1},
                {"id": "b", "date": "2024-01-01", "bats": 2, "figs": 2, "leaves": 2},
            ]
        )
        store = ObservationStore(MemorySlot({STORAGE_KEY: blob}))
        assert [r.id for r in store.list()] == ["b", "a"]


class TestUpsert:
    """Insert-or-replace keyed by date."""

    def test_insert(self, store: ObservationStore) -> None:
        result = store.upsert(_obs("2023-10-01", figs=20, id="first"))
        assert [(r.id, r.figs) for r in result] == [("first", 20)]
        assert store.list() == result

    def test_replace_keeps_original_id(self, store: ObservationStore) -> None:
        store.upsert(_obs("2023-10-01", figs=20, bats=10, id="original"))
        result = store.upsert(_obs("2023-10-01", figs=80, bats=70, leaves=5, id="newer"))

        assert len(result) == 1
        assert result[0].id == "original"
        assert (result[0].figs, result[0].bats, result[0].leaves) == (80, 70, 5)

    def test_never_two_records_per_date(self, store: ObservationStore) -> None:
        for figs in range(5):
            store.upsert(_obs("2023-10-01", figs=figs))
        store.upsert(_obs("2023-10-02"))
        dates = [r.date for r in store.list()]
        assert sorted(dates) == ["2023-10-01", "2023-10-02"]

    def test_result_sorted_newest_first(self, store: ObservationStore) -> None:
        store.upsert(_obs("2023-10-02"))
        store.upsert(_obs("2023-10-05"))
        result = store.upsert(_obs("2023-10-03"))
        assert [r.date for r in result] == ["2023-10-05", "2023-10-03", "2023-10-02"]

    def test_persists_whole_set(self) -> None:
        slot = MemorySlot()
        store = ObservationStore(slot)
        store.upsert(_obs("2023-10-01", figs=1, id="a"))
        store.upsert(_obs("2023-10-02", figs=2, id="b"))

        payload = json.loads(slot.values[STORAGE_KEY])
        assert payload == [
            {"id": "b", "date": "2023-10-02", "bats": 0, "figs": 2, "leaves": 0},
            {"id": "a", "date": "2023-10-01", "bats": 0, "figs": 1, "leaves": 0},
        ]


class TestDelete:
    """Removal by id."""

    def test_delete_existing(self, store: ObservationStore) -> None:
        store.upsert(_obs("2023-10-01", id="a"))
        store.upsert(_obs("2023-10-02", id="b"))
        result = store.delete("a")
        assert [r.id for r in result] == ["b"]
        assert [r.id for r in store.list()] == ["b"]

    def test_delete_unknown_is_noop(self, store: ObservationStore) -> None:
        store.upsert(_obs("2023-10-01", figs=5, id="a"))
        before = store.list()
        result = store.delete("does-not-exist")
        assert result == before
        assert store.list() == before


class TestReplaceAll:
    def test_overwrites(self, store: ObservationStore) -> None:
        store.upsert(_obs("2020-01-01", id="old"))
        result = store.replace_all([_obs("2023-10-01", id="x"), _obs("2023-10-03", id="y")])
        assert [r.id for r in result] == ["y", "x"]
        assert store.get_by_date("2020-01-01") is None

    def test_repeated_dates_collapse_to_last(self, store: ObservationStore) -> None:
        result = store.replace_all(
            [_obs("2023-10-01", figs=1, id="a"), _obs("2023-10-02", id="b"), _obs("2023-10-01", figs=2, id="c")]
        )
        assert [(r.id, r.date) for r in result] == [("b", "2023-10-02"), ("c", "2023-10-01")]
        assert store.list() == result

    def test_get_by_date(self, store: ObservationStore) -> None:
        store.upsert(_obs("2023-10-01", figs=9, id="a"))
        found = store.get_by_date("2023-10-01")
        assert found is not None
        assert found.figs == 9


class TestFileSlot:
    """JSON file backend."""

    def test_read_missing(self, tmp_path: Path) -> None:
        assert FileSlot(tmp_path).read("nothing") is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        slot = FileSlot(tmp_path / "nested")
        slot.write("key", "[1, 2]")
        assert slot.read("key") == "[1, 2]"
        assert (tmp_path / "nested" / "key.json").exists()

    def test_write_replaces_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        slot = FileSlot(tmp_path)
        slot.write("key", "first")
        slot.write("key", "second")
        assert slot.read("key") == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["key.json"]

    def test_store_over_file_slot(self, tmp_path: Path) -> None:
        store = ObservationStore(FileSlot(tmp_path))
        store.upsert(_obs("2023-10-01", figs=3, id="a"))

        reopened = ObservationStore(FileSlot(tmp_path))
        assert [(r.id, r.figs) for r in reopened.list()] == [("a", 3)]

    def test_corrupt_file_is_empty(self, tmp_path: Path) -> None:
        (tmp_path / f"{STORAGE_KEY}.json").write_text("garbage")
        assert ObservationStore(FileSlot(tmp_path)).list() == []

    def test_non_utf8_file_is_empty(self, tmp_path: Path) -> None:
        (tmp_path / f"{STORAGE_KEY}.json").write_bytes(b"\xff\xfe\x00garbage")
        assert ObservationStore(FileSlot(tmp_path)).list() == []

    def test_directory_at_slot_path_is_empty(self, tmp_path: Path) -> None:
        (tmp_path / f"{STORAGE_KEY}.json").mkdir()
        assert ObservationStore(FileSlot(tmp_path)).list() == []
