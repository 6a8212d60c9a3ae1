"""Service bridging the blocking folder backend with the Qt event loop."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QObject, QThreadPool, QTimer, Signal

from ...errors import FolderRequestError
from ...models.folder import Folder, PeerCategory
from ...storage.backend import FiltersBackend
from ..ui.tasks.folder_request_worker import FolderRequestWorker

_LOGGER = logging.getLogger(__name__)


class FolderRequest(QObject):
    """Handle for one outstanding backend request.

    Exactly one of :attr:`succeeded` or :attr:`failed` fires, once.
    """

    succeeded = Signal(object)
    """Emitted with the request result."""

    failed = Signal(object)
    """Emitted with the exception describing the failure."""

    def __init__(self, name: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.name = name
        self._finished = False

    def is_finished(self) -> bool:
        return self._finished

    def resolve(self, result: object) -> None:
        if self._finished:
            return
        self._finished = True
        self.succeeded.emit(result)

    def reject(self, error: BaseException) -> None:
        if self._finished:
            return
        self._finished = True
        self.failed.emit(error)


class FiltersService(QObject):
    """Run folder requests on the thread pool and publish folder changes.

    :attr:`folderUpdated` is the push stream edit panels listen to.  It fires
    for changes made through this service as well as for changes reported by
    the server via :meth:`apply_remote_update`.  For saves made through the
    service the push is emitted before the request resolves, the same order a
    server echoing the change back would produce.
    """

    folderUpdated = Signal(object)
    folderDeleted = Signal(int)

    def __init__(
        self,
        backend: FiltersBackend,
        *,
        thread_pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._backend = backend
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._cache: Dict[int, Folder] = {}
        # Keep Python wrappers alive until their outcome has been delivered.
        self._active_workers: set[FolderRequestWorker] = set()

    # ------------------------------------------------------------------
    # Local cache
    def folders(self) -> List[Folder]:
        return [self._cache[key].copy() for key in sorted(self._cache)]

    def get_filter(self, folder_id: int) -> Optional[Folder]:
        """Return a copy of the cached folder with *folder_id*, if known."""

        folder = self._cache.get(folder_id)
        return folder.copy() if folder is not None else None

    def apply_remote_update(self, folder: Folder) -> None:
        """Record a change pushed by the server and notify listeners."""

        self._cache[folder.id] = folder.copy()
        self.folderUpdated.emit(folder.copy())

    # ------------------------------------------------------------------
    # Requests
    def load(self) -> FolderRequest:
        """Fetch every folder from the backend into the local cache."""

        def _store(folders: List[Folder]) -> List[Folder]:
            self._cache = {folder.id: folder.copy() for folder in folders}
            return self.folders()

        return self._submit("load", self._backend.list_folders, _store)

    def create_filter(self, folder: Folder) -> FolderRequest:
        snapshot = folder.copy()
        return self._submit("create", lambda: self._backend.create(snapshot), self._remember)

    def update_filter(self, folder: Folder) -> FolderRequest:
        snapshot = folder.copy()
        return self._submit("update", lambda: self._backend.update(snapshot), self._remember)

    def delete_filter(self, folder_id: int) -> FolderRequest:
        def _forget(_result: object) -> int:
            self._cache.pop(folder_id, None)
            self.folderDeleted.emit(folder_id)
            return folder_id

        return self._submit("delete", lambda: self._backend.delete(folder_id), _forget)

    def reload_missing_peer_ids(self, folder_id: int, category: PeerCategory) -> FolderRequest:
        category = PeerCategory(category)
        return self._submit(
            f"reload:{category.value}",
            lambda: self._backend.reload_missing_peer_ids(folder_id, category),
        )

    # ------------------------------------------------------------------
    def _remember(self, folder: Folder) -> Folder:
        self._cache[folder.id] = folder.copy()
        self.folderUpdated.emit(folder.copy())
        return folder.copy()

    def _submit(
        self,
        name: str,
        operation: Callable[[], object],
        on_success: Optional[Callable[[object], object]] = None,
    ) -> FolderRequest:
        request = FolderRequest(name, self)
        worker = FolderRequestWorker(name, operation)
        self._active_workers.add(worker)

        def _handle_success(result: object, *, worker_ref=worker) -> None:
            self._active_workers.discard(worker_ref)
            if on_success is not None:
                result = on_success(result)
            request.resolve(result)
            request.deleteLater()

        def _handle_failure(error: object, *, worker_ref=worker) -> None:
            self._active_workers.discard(worker_ref)
            _LOGGER.debug("Folder request %s failed: %s", worker_ref.name, error)
            request.reject(error)
            request.deleteLater()

        worker.signals.succeeded.connect(_handle_success)
        worker.signals.failed.connect(_handle_failure)
        try:
            self._thread_pool.start(worker)
        except RuntimeError as exc:
            self._active_workers.discard(worker)
            # Defer the rejection so the caller can connect to the handle first.
            error = FolderRequestError(str(exc))

            def _reject_later() -> None:
                request.reject(error)
                request.deleteLater()

            QTimer.singleShot(0, _reject_later)
        return request


__all__ = ["FiltersService", "FolderRequest"]
