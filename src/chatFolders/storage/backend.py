"""Interface implemented by the blocking folder backends."""

from __future__ import annotations

from typing import List, Protocol

from ..models.folder import Folder, PeerCategory


class FiltersBackend(Protocol):
    """Blocking folder store driven from worker threads."""

    def list_folders(self) -> List[Folder]: ...

    def create(self, folder: Folder) -> Folder: ...

    def update(self, folder: Folder) -> Folder: ...

    def delete(self, folder_id: int) -> None: ...

    def reload_missing_peer_ids(self, folder_id: int, category: PeerCategory) -> List[int]: ...
