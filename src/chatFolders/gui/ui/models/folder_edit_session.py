"""State container for a single folder create/edit session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Set

from PySide6.QtCore import QObject, Signal

from ....config import MAX_FOLDER_NAME_LENGTH
from ....core.change_detector import HeaderState, is_dirty, next_header_state
from ....models.folder import Folder, FolderFlag, PeerCategory, SessionMode, empty_folder


class UpdateOutcome(str, Enum):
    """How a pushed folder change was handled by the session."""

    APPLIED = "applied"
    POSTPONED = "postponed"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class SaveSettlement:
    """Summary of what :meth:`FolderEditSession.settle_save` did."""

    succeeded: bool
    close_after: bool
    reconciled: bool


class FolderEditSession(QObject):
    """Hold the baseline and working copies of the folder being edited.

    ``original`` is the last state known to be on the server and is only
    replaced by the initial load, a settled save or a reconciled push.  The
    working copy is what the user edits.  While a save is in flight pushed
    updates are parked in a single ``postponed`` slot and applied once the
    save settles.
    """

    workingChanged = Signal(object)
    """Emitted with a copy of the working folder after every change to it."""

    baselineReset = Signal(object)
    """Emitted when a reconciliation replaced both the baseline and the working copy."""

    dirtyChanged = Signal(bool)
    """Emitted when the working copy starts or stops differing from the baseline."""

    saveInFlightChanged = Signal(bool)

    def __init__(self, folder: Optional[Folder] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        source = folder if folder is not None else empty_folder()
        self._mode = SessionMode.EDIT if source.is_created else SessionMode.CREATE
        self._original = source.copy()
        self._working = source.copy()
        self._dirty = False
        self._save_in_flight = False
        self._close_after = False
        self._postponed: Optional[Folder] = None

    # ------------------------------------------------------------------
    # Accessors
    def mode(self) -> SessionMode:
        return self._mode

    def folder_id(self) -> int:
        return self._original.id

    def original(self) -> Folder:
        """Return a copy of the baseline snapshot."""

        return self._original.copy()

    def working(self) -> Folder:
        """Return a copy of the working folder."""

        return self._working.copy()

    def title(self) -> str:
        return self._working.title

    def flags(self) -> Set[FolderFlag]:
        return set(self._working.flags)

    def is_dirty(self) -> bool:
        return self._dirty

    def save_in_flight(self) -> bool:
        return self._save_in_flight

    def close_after(self) -> bool:
        return self._close_after

    def postponed(self) -> Optional[Folder]:
        return self._postponed.copy() if self._postponed is not None else None

    def header_state(self) -> HeaderState:
        return next_header_state(self._mode, self._dirty, self._save_in_flight)

    # ------------------------------------------------------------------
    # User edits
    def set_title(self, title: str) -> None:
        """Store *title*, truncated to the maximum folder name length."""

        bounded = title[:MAX_FOLDER_NAME_LENGTH]
        if bounded == self._working.title:
            return
        self._working.title = bounded
        self._after_user_edit()

    def set_flag(self, flag: FolderFlag, enabled: bool) -> None:
        flag = FolderFlag(flag)
        if enabled == (flag in self._working.flags):
            return
        if enabled:
            self._working.flags.add(flag)
        else:
            self._working.flags.discard(flag)
        self._after_user_edit()

    def set_peer_ids(self, category: PeerCategory, peer_ids: Iterable[int]) -> None:
        updated = [int(peer) for peer in peer_ids]
        if updated == self._working.peer_ids(category):
            return
        self._working.set_peer_ids(category, updated)
        self._after_user_edit()

    # ------------------------------------------------------------------
    # Save protocol
    def begin_save(self, close_after: bool) -> Optional[Folder]:
        """Mark a save as in flight and return the snapshot to send.

        Returns ``None`` when a save is already outstanding; the second request
        is dropped rather than queued.
        """

        if self._save_in_flight:
            return None
        self._save_in_flight = True
        self._close_after = bool(close_after)
        self._postponed = None
        self.saveInFlightChanged.emit(True)
        return self._working.copy()

    def receive_external_update(self, folder: Folder) -> UpdateOutcome:
        """Apply or park a pushed change to the folder being edited."""

        if not self._original.is_created or folder.id != self._original.id:
            return UpdateOutcome.IGNORED
        if self._save_in_flight:
            # Only the latest push matters.
            self._postponed = folder.copy()
            return UpdateOutcome.POSTPONED
        self._reconcile(folder)
        return UpdateOutcome.APPLIED

    def settle_save(self, result: Optional[Folder], *, succeeded: bool) -> SaveSettlement:
        """Finish the outstanding save and consume any postponed update."""

        if not self._save_in_flight:
            raise RuntimeError("settle_save() called without a save in flight")
        close_after = self._close_after if succeeded else False
        postponed, self._postponed = self._postponed, None
        self._close_after = False
        self._save_in_flight = False

        if succeeded and result is not None and self._mode is SessionMode.EDIT:
            self._reconcile(result)
        if postponed is not None:
            self._reconcile(postponed)

        self.saveInFlightChanged.emit(False)
        return SaveSettlement(
            succeeded=succeeded,
            close_after=close_after,
            reconciled=postponed is not None,
        )

    # ------------------------------------------------------------------
    def _reconcile(self, folder: Folder) -> None:
        self._original = folder.copy()
        self._working = folder.copy()
        self.baselineReset.emit(folder.copy())
        self.workingChanged.emit(self._working.copy())
        self._refresh_dirty()

    def _after_user_edit(self) -> None:
        self.workingChanged.emit(self._working.copy())
        self._refresh_dirty()

    def _refresh_dirty(self) -> None:
        dirty = is_dirty(self._original, self._working)
        if dirty == self._dirty:
            return
        self._dirty = dirty
        self.dirtyChanged.emit(dirty)


__all__ = ["FolderEditSession", "SaveSettlement", "UpdateOutcome"]
