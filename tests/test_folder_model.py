"""Tests for the folder transport representation."""

from __future__ import annotations

import pytest

from chatFolders.errors import FolderValidationError
from chatFolders.models.folder import Folder, FolderFlag, FolderKind, PeerCategory, empty_folder


def test_empty_folder_is_a_create_template() -> None:
    folder = empty_folder()
    assert folder.id == 0
    assert folder.is_created is False
    assert folder.title == ""
    assert folder.flags == set()
    assert folder.pinned_peer_ids == folder.include_peer_ids == folder.exclude_peer_ids == []


def test_dict_round_trip_preserves_fields() -> None:
    folder = Folder(
        id=3,
        title="Friends",
        flags={FolderFlag.CONTACTS, FolderFlag.EXCLUDE_READ},
        pinned_peer_ids=[10, 11],
        include_peer_ids=[12],
        exclude_peer_ids=[13],
        kind=FolderKind.CHATLIST,
        has_my_invites=True,
        updated_time=123,
        local_id=5,
    )
    payload = folder.to_dict()
    assert payload["_"] == "dialogFilterChatlist"
    assert payload["flags"] == ["contacts", "exclude_read"]
    assert Folder.from_dict(payload) == folder


def test_from_dict_rejects_unknown_flags() -> None:
    with pytest.raises(FolderValidationError):
        Folder.from_dict({"id": 2, "title": "X", "flags": ["starred"]})


def test_peer_ids_accessors() -> None:
    folder = Folder(id=2, title="X")
    folder.set_peer_ids(PeerCategory.INCLUDE, ["4", 5])
    assert folder.peer_ids(PeerCategory.INCLUDE) == [4, 5]
    assert folder.peer_ids("exclude_peers") == []
