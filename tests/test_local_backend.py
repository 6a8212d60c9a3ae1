"""Tests for :mod:`chatFolders.storage.local_backend`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chatFolders.errors import (
    FolderLimitError,
    FolderNotFoundError,
    FolderRequestError,
    StorageCorruptedError,
)
from chatFolders.models.folder import Folder, FolderFlag, PeerCategory
from chatFolders.storage.local_backend import LocalFiltersBackend


def _clock() -> float:
    return 1_700_000_000.0


def test_create_assigns_ids_from_two() -> None:
    backend = LocalFiltersBackend(clock=_clock)
    first = backend.create(Folder(title="Work"))
    second = backend.create(Folder(title="Home"))
    assert (first.id, second.id) == (2, 3)
    assert first.updated_time == 1_700_000_000
    assert [folder.title for folder in backend.list_folders()] == ["Work", "Home"]


def test_create_rejects_blank_title() -> None:
    backend = LocalFiltersBackend()
    with pytest.raises(FolderRequestError) as excinfo:
        backend.create(Folder(title="   "))
    assert excinfo.value.error_type == "FILTER_TITLE_EMPTY"


def test_limit_raises_quota_error() -> None:
    backend = LocalFiltersBackend(limit=1)
    backend.create(Folder(title="One"))
    with pytest.raises(FolderLimitError) as excinfo:
        backend.create(Folder(title="Two"))
    assert excinfo.value.error_type == "DIALOG_FILTERS_TOO_MUCH"


def test_update_bumps_updated_time_and_keeps_kind() -> None:
    backend = LocalFiltersBackend(clock=_clock)
    created = backend.create(Folder(title="Work"))
    edited = created.copy()
    edited.title = "Office"
    edited.flags.add(FolderFlag.GROUPS)
    saved = backend.update(edited)
    assert saved.title == "Office"
    assert saved.updated_time == created.updated_time + 1
    assert backend.get(created.id).flags == {FolderFlag.GROUPS}


def test_update_and_delete_unknown_folder() -> None:
    backend = LocalFiltersBackend()
    with pytest.raises(FolderNotFoundError):
        backend.update(Folder(id=9, title="Ghost"))
    with pytest.raises(FolderNotFoundError):
        backend.delete(9)


def test_returned_folders_are_copies() -> None:
    backend = LocalFiltersBackend()
    created = backend.create(Folder(title="Work"))
    created.title = "Changed"
    assert backend.get(created.id).title == "Work"


def test_reload_missing_peer_ids_filters_unknown_peers() -> None:
    backend = LocalFiltersBackend(known_peers=[1, 2])
    created = backend.create(Folder(title="Work", include_peer_ids=[1, 5, 2]))
    assert backend.reload_missing_peer_ids(created.id, PeerCategory.INCLUDE) == [1, 2]
    backend.add_known_peers([5])
    assert backend.reload_missing_peer_ids(created.id, PeerCategory.INCLUDE) == [1, 5, 2]


def test_persistence_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "folders.json"
    backend = LocalFiltersBackend(path)
    created = backend.create(Folder(title="Work", pinned_peer_ids=[7]))
    backend.create(Folder(title="Home"))
    backend.delete(created.id + 1)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["schema"] == "chatFolders/store@1"
    assert document["next_id"] == 4

    reloaded = LocalFiltersBackend(path)
    assert [folder.title for folder in reloaded.list_folders()] == ["Work"]
    assert reloaded.get(created.id).pinned_peer_ids == [7]
    assert reloaded.create(Folder(title="New")).id == 4


def test_corrupted_store_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "folders.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageCorruptedError):
        LocalFiltersBackend(path)


def test_store_failing_schema_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "folders.json"
    path.write_text(json.dumps({"schema": "other", "next_id": 2, "folders": []}), encoding="utf-8")
    with pytest.raises(StorageCorruptedError):
        LocalFiltersBackend(path)


def test_schema_errors_name_the_offending_entry(tmp_path: Path) -> None:
    path = tmp_path / "folders.json"
    document = {
        "schema": "chatFolders/store@1",
        "next_id": 3,
        "folders": [{"_": "dialogFilter", "id": 2, "title": 5}],
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    with pytest.raises(StorageCorruptedError, match="folders/0/title"):
        LocalFiltersBackend(path)


def test_duplicate_folder_ids_are_reported(tmp_path: Path) -> None:
    path = tmp_path / "folders.json"
    entry = {"_": "dialogFilter", "id": 2, "title": "Work"}
    document = {"schema": "chatFolders/store@1", "next_id": 3, "folders": [entry, dict(entry)]}
    path.write_text(json.dumps(document), encoding="utf-8")
    with pytest.raises(StorageCorruptedError, match="Duplicate folder ids"):
        LocalFiltersBackend(path)
