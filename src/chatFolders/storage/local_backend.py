"""Local folder backend with optional JSON persistence."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from ..config import (
    DEFAULT_FOLDER_LIMIT,
    FIRST_FOLDER_ID,
    MAX_FOLDER_NAME_LENGTH,
    STORE_SCHEMA,
)
from ..errors import FolderLimitError, FolderNotFoundError, FolderRequestError
from ..models.folder import Folder, PeerCategory
from ..schemas import validate_store
from ..utils.jsonio import read_json, write_json

_LOGGER = logging.getLogger(__name__)


class LocalFiltersBackend:
    """Store folders in memory and mirror them to *path* when one is given.

    Every method blocks and is safe to call from worker threads.  Folders are
    returned as copies so callers never share mutable state with the store.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        limit: int = DEFAULT_FOLDER_LIMIT,
        known_peers: Optional[Iterable[int]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._path = path
        self._limit = limit
        self._clock = clock
        self._lock = threading.Lock()
        self._folders: Dict[int, Folder] = {}
        self._next_id = FIRST_FOLDER_ID
        # ``None`` means every peer id resolves; a set limits resolution to those ids.
        self._known_peers: Optional[set[int]] = (
            {int(peer) for peer in known_peers} if known_peers is not None else None
        )
        if path is not None and path.exists():
            self._load(path)

    # ------------------------------------------------------------------
    # Queries
    def list_folders(self) -> List[Folder]:
        with self._lock:
            return [self._folders[key].copy() for key in sorted(self._folders)]

    def get(self, folder_id: int) -> Folder:
        with self._lock:
            return self._require(folder_id).copy()

    # ------------------------------------------------------------------
    # Mutations
    def create(self, folder: Folder) -> Folder:
        """Persist a new folder and return it with its assigned id."""

        self._check_title(folder)
        with self._lock:
            if len(self._folders) >= self._limit:
                raise FolderLimitError(f"Folder limit of {self._limit} reached")
            stored = folder.copy()
            stored.id = self._next_id
            stored.updated_time = int(self._clock())
            self._next_id += 1
            self._folders[stored.id] = stored
            self._save_locked()
            _LOGGER.debug("Created folder %s (%r)", stored.id, stored.title)
            return stored.copy()

    def update(self, folder: Folder) -> Folder:
        """Replace the stored folder carrying ``folder.id``."""

        self._check_title(folder)
        with self._lock:
            current = self._require(folder.id)
            stored = folder.copy()
            stored.kind = current.kind
            stored.has_my_invites = current.has_my_invites
            stored.updated_time = max(int(self._clock()), current.updated_time + 1)
            self._folders[stored.id] = stored
            self._save_locked()
            return stored.copy()

    def delete(self, folder_id: int) -> None:
        with self._lock:
            self._require(folder_id)
            del self._folders[folder_id]
            self._save_locked()

    def reload_missing_peer_ids(self, folder_id: int, category: PeerCategory) -> List[int]:
        """Return the peers of *category* that could be resolved for *folder_id*."""

        with self._lock:
            folder = self._require(folder_id)
            peer_ids = list(folder.peer_ids(PeerCategory(category)))
            if self._known_peers is None:
                return peer_ids
            return [peer for peer in peer_ids if peer in self._known_peers]

    def add_known_peers(self, peer_ids: Iterable[int]) -> None:
        with self._lock:
            if self._known_peers is None:
                return
            self._known_peers.update(int(peer) for peer in peer_ids)

    # ------------------------------------------------------------------
    # Helpers
    def _require(self, folder_id: int) -> Folder:
        try:
            return self._folders[int(folder_id)]
        except KeyError:
            raise FolderNotFoundError(f"Unknown folder id: {folder_id}") from None

    @staticmethod
    def _check_title(folder: Folder) -> None:
        title = folder.title.strip()
        if not title:
            raise FolderRequestError("Folder title is empty", error_type="FILTER_TITLE_EMPTY")
        if len(title) > MAX_FOLDER_NAME_LENGTH:
            raise FolderRequestError(
                f"Folder title exceeds {MAX_FOLDER_NAME_LENGTH} characters",
                error_type="FILTER_TITLE_TOO_LONG",
            )

    def _load(self, path: Path) -> None:
        document = read_json(path)
        validate_store(document)
        for payload in document["folders"]:
            folder = Folder.from_dict(payload)
            self._folders[folder.id] = folder
        self._next_id = max(
            int(document["next_id"]),
            max(self._folders, default=FIRST_FOLDER_ID - 1) + 1,
        )
        known = document.get("known_peers")
        if known is not None and self._known_peers is not None:
            self._known_peers.update(int(peer) for peer in known)

    def _save_locked(self) -> None:
        if self._path is None:
            return
        document = {
            "schema": STORE_SCHEMA,
            "next_id": self._next_id,
            "folders": [self._folders[key].to_dict() for key in sorted(self._folders)],
        }
        if self._known_peers is not None:
            document["known_peers"] = sorted(self._known_peers)
        validate_store(document)
        write_json(self._path, document)


__all__ = ["LocalFiltersBackend"]
