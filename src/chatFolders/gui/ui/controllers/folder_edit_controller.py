"""Controller coordinating the folder edit panel with the folder service."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from ....config import FOLDERS_LIMIT_ERROR, HEADING_EDIT_FOLDER, HEADING_NEW_FOLDER
from ....errors import FolderLimitError
from ....models.folder import Folder, FolderFlag, PeerCategory, SessionMode
from ..actions.folder_actions import delete_folder
from ..models.folder_edit_session import FolderEditSession, UpdateOutcome
from .folder_edit_surface import FolderEditSurface

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ...services.filters_service import FiltersService


_LOGGER = logging.getLogger(__name__)


def _is_limit_error(error: object) -> bool:
    return isinstance(error, FolderLimitError) or getattr(error, "error_type", None) == FOLDERS_LIMIT_ERROR


class FolderEditController(QObject):
    """Own the folder edit session and synchronise the panel with it."""

    ready = Signal()
    """Emitted once the panel shows the folder and accepts input."""

    folderSaved = Signal(object)
    """Emitted with the folder returned by a successful create or update."""

    folderDeleted = Signal(int)

    closed = Signal()

    def __init__(
        self,
        service: "FiltersService",
        surface: FolderEditSurface,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._service = service
        self._surface = surface
        self._session: Optional[FolderEditSession] = None
        self._ready = False
        self._closed = False
        # ``_session_token`` changes whenever a session starts or ends so
        # lookups and deletes issued for an older session are dropped.
        self._session_token = 0
        # ``_save_job_id`` identifies the outstanding save; bumping it on
        # teardown turns any late save result into a no-op.
        self._save_job_id = 0
        self._pending_lookups: set[PeerCategory] = set()
        self._deleting = False
        self._listening = False

    # ------------------------------------------------------------------
    # Accessors
    def session(self) -> Optional[FolderEditSession]:
        return self._session

    def is_ready(self) -> bool:
        return self._ready

    def is_closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Session lifecycle
    def open_create(self) -> None:
        """Start a session for a brand new folder."""

        self._start_session(None)
        self._ready = True
        self._on_create_open()
        self.ready.emit()

    def open_edit(self, folder: Folder) -> None:
        """Start editing *folder* once its missing peers have been resolved."""

        if not folder.is_created:
            raise ValueError("open_edit() requires a folder that already exists")
        self._start_session(folder)
        token = self._session_token
        self._pending_lookups = set(PeerCategory)
        for category in PeerCategory:
            request = self._service.reload_missing_peer_ids(folder.id, category)
            request.succeeded.connect(
                lambda _result, *, cat=category, expected=token: self._on_lookup_settled(cat, expected)
            )
            request.failed.connect(
                lambda error, *, cat=category, expected=token: self._on_lookup_settled(cat, expected, error)
            )

    def close(self) -> None:
        """Destroy the session and dismiss the panel."""

        if self._closed:
            return
        self._closed = True
        self._teardown_session()
        self._surface.close()
        self.closed.emit()

    def _start_session(self, folder: Optional[Folder]) -> None:
        if self._session is not None:
            self._teardown_session()
        self._closed = False
        self._ready = False
        self._deleting = False
        self._session_token += 1

        session = FolderEditSession(folder, self)
        session.dirtyChanged.connect(lambda _dirty: self._apply_header_state())
        session.saveInFlightChanged.connect(lambda _active: self._apply_header_state())
        self._session = session

        if not self._listening:
            self._service.folderUpdated.connect(self.handle_folder_updated)
            self._listening = True

    def _teardown_session(self) -> None:
        session = self._session
        self._session = None
        self._ready = False
        self._pending_lookups.clear()
        self._session_token += 1
        self._save_job_id += 1
        if self._listening:
            self._service.folderUpdated.disconnect(self.handle_folder_updated)
            self._listening = False
        if session is not None:
            session.blockSignals(True)
            session.deleteLater()

    def _on_lookup_settled(
        self,
        category: PeerCategory,
        expected_token: int,
        error: object = None,
    ) -> None:
        if expected_token != self._session_token or self._session is None:
            _LOGGER.debug("Ignoring %s lookup for a closed edit session", category.value)
            return
        if error is not None:
            _LOGGER.warning(
                "Failed to resolve %s for folder %s: %s",
                category.value,
                self._session.folder_id(),
                error,
            )
        self._pending_lookups.discard(category)
        if self._pending_lookups or self._ready:
            return
        self._ready = True
        self._on_edit_open()
        self.ready.emit()

    def _on_create_open(self) -> None:
        surface = self._surface
        surface.set_heading(HEADING_NEW_FOLDER)
        surface.set_title("")
        surface.set_title_error(False)
        surface.render_flags(set())
        self._apply_header_state()

    def _on_edit_open(self) -> None:
        """Render the working copy into the panel."""

        session = self._session
        if session is None:
            return
        surface = self._surface
        surface.set_heading(
            HEADING_NEW_FOLDER if session.mode() is SessionMode.CREATE else HEADING_EDIT_FOLDER
        )
        surface.set_title(session.title())
        surface.set_title_error(False)
        surface.render_flags(session.flags())
        self._apply_header_state()

    def _apply_header_state(self) -> None:
        if self._session is None or not self._ready:
            return
        state = self._session.header_state()
        self._surface.set_save_visible(state.save_visible)
        self._surface.set_save_enabled(state.save_enabled)
        self._surface.set_options_visible(state.options_visible)

    # ------------------------------------------------------------------
    # User input
    def set_title(self, text: str) -> None:
        if self._session is None or not self._ready:
            return
        self._surface.set_title_error(False)
        self._session.set_title(text)

    def toggle_flag(self, flag: FolderFlag, enabled: bool) -> None:
        if self._session is None or not self._ready:
            return
        self._session.set_flag(flag, enabled)
        self._surface.render_flags(self._session.flags())

    def set_peer_ids(self, category: PeerCategory, peer_ids: Iterable[int]) -> None:
        """Store the selection returned by the peer picker for *category*."""

        if self._session is None or not self._ready:
            return
        self._session.set_peer_ids(category, peer_ids)

    # ------------------------------------------------------------------
    # Save protocol
    def confirm(self, close_after: bool = True) -> bool:
        """Save the working copy; returns ``True`` when a request was issued."""

        session = self._session
        if session is None or not self._ready:
            return False
        if session.save_in_flight():
            _LOGGER.debug("Ignoring confirm while folder %s is saving", session.folder_id())
            return False
        if self._surface.title_has_error():
            return False
        if not session.title().strip():
            self._surface.set_title_error(True)
            return False

        snapshot = session.begin_save(close_after)
        if snapshot is None:
            return False
        self._save_job_id += 1
        job_id = self._save_job_id
        self._surface.set_save_enabled(False)

        if session.mode() is SessionMode.CREATE:
            request = self._service.create_filter(snapshot)
        else:
            request = self._service.update_filter(snapshot)
        request.succeeded.connect(
            lambda result, *, expected_job=job_id: self._on_save_succeeded(result, expected_job)
        )
        request.failed.connect(
            lambda error, *, expected_job=job_id: self._on_save_failed(error, expected_job)
        )
        return True

    def _is_current_save(self, job_id: int) -> bool:
        return job_id == self._save_job_id and self._session is not None

    def _on_save_succeeded(self, result: object, job_id: int) -> None:
        if not self._is_current_save(job_id):
            _LOGGER.debug("Dropping save result for a closed edit session")
            return
        session = self._session
        saved = result if isinstance(result, Folder) else None
        # A created folder cannot turn this session into an edit session, so
        # creating always dismisses the panel.
        closing = session.close_after() or session.mode() is SessionMode.CREATE
        if closing:
            session.blockSignals(True)
        session.settle_save(saved, succeeded=True)
        if saved is not None:
            self.folderSaved.emit(saved.copy())
        if closing:
            self.close()
            return
        self._on_edit_open()
        self._surface.set_save_enabled(True)

    def _on_save_failed(self, error: object, job_id: int) -> None:
        if not self._is_current_save(job_id):
            _LOGGER.debug("Dropping save failure for a closed edit session: %s", error)
            return
        session = self._session
        settlement = session.settle_save(None, succeeded=False)
        if settlement.reconciled:
            self._on_edit_open()

        if _is_limit_error(error):
            self._surface.show_limit_notice()
        else:
            _LOGGER.error("Failed to save folder %s: %s", session.folder_id(), error)
            self._surface.show_error(str(error))

        self._apply_header_state()
        self._surface.set_save_enabled(True)

    # ------------------------------------------------------------------
    # Push reconciliation
    def handle_folder_updated(self, folder: Folder) -> None:
        """React to a folder change pushed by the service."""

        session = self._session
        if session is None:
            return
        outcome = session.receive_external_update(folder)
        if outcome is UpdateOutcome.POSTPONED:
            _LOGGER.debug("Postponed update for folder %s until the save settles", folder.id)
        elif outcome is UpdateOutcome.APPLIED and self._ready:
            self._on_edit_open()

    # ------------------------------------------------------------------
    # Deletion
    def request_delete(self) -> bool:
        """Start deleting the edited folder; returns ``True`` when a request was issued."""

        session = self._session
        if session is None or self._deleting:
            return False
        folder_id = session.folder_id()
        if not folder_id:
            return False
        self._deleting = True
        request = delete_folder(
            folder_id,
            service=self._service,
            surface=self._surface,
            known=session.original(),
        )
        if request is None:
            self._deleting = False
            return False
        token = self._session_token
        request.succeeded.connect(
            lambda _result, *, expected=token: self._on_delete_succeeded(folder_id, expected)
        )
        request.failed.connect(
            lambda error, *, expected=token: self._on_delete_failed(folder_id, error, expected)
        )
        return True

    def _on_delete_succeeded(self, folder_id: int, expected_token: int) -> None:
        self._deleting = False
        if expected_token != self._session_token:
            return
        self.folderDeleted.emit(folder_id)
        self.close()

    def _on_delete_failed(self, folder_id: int, error: object, expected_token: int) -> None:
        self._deleting = False
        if expected_token != self._session_token:
            _LOGGER.debug("Dropping delete failure for a closed edit session: %s", error)
            return
        _LOGGER.error("Failed to delete folder %s: %s", folder_id, error)
        self._surface.show_error(str(error))


__all__ = ["FolderEditController"]
