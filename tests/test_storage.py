from __future__ import annotations

from pathlib import Path

import pytest

from parceltrack.models import TrackingStatus
from parceltrack.state.history import SearchHistoryStore
from parceltrack.state.storage import JsonFileStorage


def test_json_file_storage_round_trip(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "state")

    assert storage.get_item("tracking_history") is None
    storage.set_item("tracking_history", "[]")
    assert (tmp_path / "state" / "tracking_history.json").read_text(encoding="utf-8") == "[]"
    assert storage.get_item("tracking_history") == "[]"

    storage.remove_item("tracking_history")
    storage.remove_item("tracking_history")
    assert storage.get_item("tracking_history") is None


@pytest.mark.parametrize("key", ["", "../escape", ".hidden", "a/b"])
def test_json_file_storage_rejects_path_like_keys(tmp_path: Path, key: str) -> None:
    with pytest.raises(ValueError):
        JsonFileStorage(tmp_path).get_item(key)


def test_history_survives_a_new_storage_instance(tmp_path: Path) -> None:
    SearchHistoryStore(JsonFileStorage(tmp_path)).record("SND1234567890", TrackingStatus.DELIVERED)

    items = SearchHistoryStore(JsonFileStorage(tmp_path)).list()
    assert [(item.tracking_number, item.status) for item in items] == [("SND1234567890", TrackingStatus.DELIVERED)]


def test_undecodable_history_file_reads_as_empty(tmp_path: Path) -> None:
    (tmp_path / "tracking_history.json").write_bytes(b"\xff\xfe[garbage")
    storage = JsonFileStorage(tmp_path)

    assert storage.get_item("tracking_history") is None
    store = SearchHistoryStore(storage)
    assert store.list() == []

    store.record("SND1234567890", TrackingStatus.PENDING)
    assert [item.tracking_number for item in store.list()] == ["SND1234567890"]


class _UnreadableStorage:
    def get_item(self, key: str) -> str | None:
        raise PermissionError(f"cannot read {key}")

    def set_item(self, key: str, value: str) -> None:
        raise PermissionError(f"cannot write {key}")

    def remove_item(self, key: str) -> None:
        raise PermissionError(f"cannot remove {key}")


def test_unreadable_storage_reads_as_empty_history() -> None:
    assert SearchHistoryStore(_UnreadableStorage()).list() == []
