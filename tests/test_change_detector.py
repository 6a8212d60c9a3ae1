"""Tests for :mod:`chatFolders.core.change_detector`."""

from __future__ import annotations

import pytest

from chatFolders.core.change_detector import HeaderState, is_dirty, next_header_state, semantic_view
from chatFolders.models.folder import Folder, FolderFlag, FolderKind, SessionMode


def _sample() -> Folder:
    return Folder(
        id=7,
        title="Work",
        flags={FolderFlag.GROUPS, FolderFlag.EXCLUDE_MUTED},
        pinned_peer_ids=[1, 2],
        include_peer_ids=[3],
        exclude_peer_ids=[4, 5],
        updated_time=1700000000,
        local_id=42,
    )


def test_copy_is_not_dirty() -> None:
    original = _sample()
    assert is_dirty(original, original.copy()) is False


@pytest.mark.parametrize(
    "mutate",
    [
        lambda folder: setattr(folder, "title", "Home"),
        lambda folder: folder.flags.add(FolderFlag.BOTS),
        lambda folder: folder.flags.discard(FolderFlag.GROUPS),
        lambda folder: folder.pinned_peer_ids.append(9),
        lambda folder: folder.include_peer_ids.clear(),
        lambda folder: folder.exclude_peer_ids.remove(5),
        lambda folder: setattr(folder, "kind", FolderKind.CHATLIST),
        lambda folder: setattr(folder, "has_my_invites", True),
    ],
    ids=["title", "add-flag", "drop-flag", "pinned", "include", "exclude", "kind", "invites"],
)
def test_semantic_change_is_dirty(mutate) -> None:
    original = _sample()
    working = original.copy()
    mutate(working)
    assert is_dirty(original, working) is True


def test_volatile_fields_are_ignored() -> None:
    original = _sample()
    working = original.copy()
    working.updated_time += 60
    working.local_id = 99
    assert is_dirty(original, working) is False
    assert "updated_time" not in semantic_view(working)
    assert "local_id" not in semantic_view(working)


def test_peer_order_matters() -> None:
    original = _sample()
    working = original.copy()
    working.exclude_peer_ids.reverse()
    assert is_dirty(original, working) is True


def test_mutating_copy_leaves_original_untouched() -> None:
    original = _sample()
    working = original.copy()
    working.flags.add(FolderFlag.CONTACTS)
    working.pinned_peer_ids.append(3)
    assert FolderFlag.CONTACTS not in original.flags
    assert original.pinned_peer_ids == [1, 2]


def test_create_mode_only_offers_save() -> None:
    for dirty in (False, True):
        state = next_header_state(SessionMode.CREATE, dirty, save_in_flight=False)
        assert state == HeaderState(save_visible=True, save_enabled=True, options_visible=False)


def test_edit_mode_shows_exactly_one_action() -> None:
    clean = next_header_state(SessionMode.EDIT, False, save_in_flight=False)
    dirty = next_header_state(SessionMode.EDIT, True, save_in_flight=False)
    assert (clean.save_visible, clean.options_visible) == (False, True)
    assert (dirty.save_visible, dirty.options_visible) == (True, False)


def test_save_disabled_while_in_flight() -> None:
    state = next_header_state(SessionMode.EDIT, True, save_in_flight=True)
    assert state.save_visible is True
    assert state.save_enabled is False
