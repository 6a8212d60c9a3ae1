"""Unit tests for :mod:`chatFolders.gui.ui.models.folder_edit_session`."""

from __future__ import annotations

import pytest

pytest.importorskip(
    "PySide6",
    reason="PySide6 is required for edit session tests",
    exc_type=ImportError,
)

from chatFolders.gui.ui.models.folder_edit_session import FolderEditSession, UpdateOutcome
from chatFolders.models.folder import Folder, FolderFlag, PeerCategory, SessionMode


def _loaded(title: str = "A") -> Folder:
    return Folder(id=5, title=title, flags={FolderFlag.GROUPS}, include_peer_ids=[1, 2])


def test_create_session_uses_template() -> None:
    session = FolderEditSession()
    assert session.mode() is SessionMode.CREATE
    assert session.folder_id() == 0
    assert session.working() == Folder()
    assert session.is_dirty() is False


def test_edit_session_copies_loaded_folder() -> None:
    loaded = _loaded()
    session = FolderEditSession(loaded)
    loaded.title = "mutated elsewhere"
    assert session.mode() is SessionMode.EDIT
    assert session.original().title == "A"
    assert session.working().title == "A"


def test_user_edits_toggle_dirty_without_touching_original() -> None:
    session = FolderEditSession(_loaded())
    changes: list[bool] = []
    session.dirtyChanged.connect(changes.append)

    session.set_title("B")
    assert session.is_dirty() is True
    assert session.original().title == "A"

    session.set_title("A")
    assert session.is_dirty() is False
    assert changes == [True, False]

    session.set_flag(FolderFlag.BOTS, True)
    session.set_peer_ids(PeerCategory.INCLUDE, [2, 1])
    assert session.working().flags == {FolderFlag.GROUPS, FolderFlag.BOTS}
    assert session.working().include_peer_ids == [2, 1]
    assert session.original().flags == {FolderFlag.GROUPS}


def test_title_is_bounded() -> None:
    session = FolderEditSession()
    session.set_title("A very long folder name")
    assert session.title() == "A very long "
    assert len(session.title()) == 12


def test_second_begin_save_is_dropped() -> None:
    session = FolderEditSession(_loaded())
    states: list[bool] = []
    session.saveInFlightChanged.connect(states.append)

    assert session.begin_save(close_after=False) is not None
    assert session.begin_save(close_after=True) is None
    assert session.close_after() is False
    assert states == [True]


def test_external_update_applies_immediately_when_idle() -> None:
    session = FolderEditSession(_loaded())
    session.set_title("B")

    outcome = session.receive_external_update(_loaded("C"))

    assert outcome is UpdateOutcome.APPLIED
    assert session.working().title == "C"
    assert session.original().title == "C"
    assert session.is_dirty() is False


def test_external_update_is_postponed_while_saving() -> None:
    session = FolderEditSession(_loaded())
    session.set_title("B")
    session.begin_save(close_after=False)

    assert session.receive_external_update(_loaded("C")) is UpdateOutcome.POSTPONED
    assert session.receive_external_update(_loaded("D")) is UpdateOutcome.POSTPONED
    assert session.original().title == "A"
    assert session.working().title == "B"
    assert session.postponed().title == "D"

    settlement = session.settle_save(_loaded("B"), succeeded=True)

    assert settlement.reconciled is True
    assert session.postponed() is None
    assert session.original().title == "D"
    assert session.working().title == "D"
    assert session.save_in_flight() is False


def test_successful_save_becomes_baseline() -> None:
    session = FolderEditSession(_loaded())
    session.set_title("B")
    session.begin_save(close_after=True)
    saved = _loaded("B")
    saved.updated_time = 99

    settlement = session.settle_save(saved, succeeded=True)

    assert settlement.close_after is True
    assert settlement.reconciled is False
    assert session.original().title == "B"
    assert session.is_dirty() is False


def test_failed_save_disarms_close_and_reconciles_postponed() -> None:
    session = FolderEditSession(_loaded())
    session.set_title("B")
    session.begin_save(close_after=True)
    session.receive_external_update(_loaded("C"))

    settlement = session.settle_save(None, succeeded=False)

    assert settlement.succeeded is False
    assert settlement.close_after is False
    assert settlement.reconciled is True
    assert session.working().title == "C"


def test_failed_save_keeps_edits_without_postponed_update() -> None:
    session = FolderEditSession(_loaded())
    session.set_title("B")
    session.begin_save(close_after=False)

    session.settle_save(None, succeeded=False)

    assert session.working().title == "B"
    assert session.original().title == "A"
    assert session.is_dirty() is True


def test_updates_for_other_folders_are_ignored() -> None:
    session = FolderEditSession(_loaded())
    other = Folder(id=6, title="Other")
    assert session.receive_external_update(other) is UpdateOutcome.IGNORED
    assert FolderEditSession().receive_external_update(other) is UpdateOutcome.IGNORED


def test_settle_without_save_is_an_error() -> None:
    session = FolderEditSession(_loaded())
    with pytest.raises(RuntimeError):
        session.settle_save(None, succeeded=False)
