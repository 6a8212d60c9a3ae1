"""Folder data model shared by the storage layer and the edit panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Set

from ..errors import FolderValidationError


class FolderKind(str, Enum):
    """Distinguish locally owned folders from shared chat lists."""

    PLAIN = "dialogFilter"
    CHATLIST = "dialogFilterChatlist"


class FolderFlag(str, Enum):
    """Named predicates selecting chats by category."""

    CONTACTS = "contacts"
    NON_CONTACTS = "non_contacts"
    GROUPS = "groups"
    BROADCASTS = "broadcasts"
    BOTS = "bots"
    EXCLUDE_MUTED = "exclude_muted"
    EXCLUDE_ARCHIVED = "exclude_archived"
    EXCLUDE_READ = "exclude_read"


class PeerCategory(str, Enum):
    """Peer list buckets stored on a folder."""

    PINNED = "pinned_peers"
    INCLUDE = "include_peers"
    EXCLUDE = "exclude_peers"


class SessionMode(str, Enum):
    """Whether an edit session creates a new folder or edits an existing one."""

    CREATE = "create"
    EDIT = "edit"


_PEER_ATTRIBUTES: Dict[PeerCategory, str] = {
    PeerCategory.PINNED: "pinned_peer_ids",
    PeerCategory.INCLUDE: "include_peer_ids",
    PeerCategory.EXCLUDE: "exclude_peer_ids",
}

VOLATILE_FIELDS: tuple[str, ...] = ("updated_time", "local_id")
"""Bookkeeping fields that never take part in equality checks."""


@dataclass(slots=True)
class Folder:
    """A chat folder as seen by the client."""

    id: int = 0
    title: str = ""
    flags: Set[FolderFlag] = field(default_factory=set)
    pinned_peer_ids: List[int] = field(default_factory=list)
    include_peer_ids: List[int] = field(default_factory=list)
    exclude_peer_ids: List[int] = field(default_factory=list)
    kind: FolderKind = FolderKind.PLAIN
    has_my_invites: bool = False
    updated_time: int = 0
    local_id: int = 0

    @property
    def is_created(self) -> bool:
        return self.id != 0

    @property
    def is_shared(self) -> bool:
        return self.kind is FolderKind.CHATLIST

    def copy(self) -> "Folder":
        """Return an independent deep copy of the folder."""

        return Folder(
            id=self.id,
            title=self.title,
            flags=set(self.flags),
            pinned_peer_ids=list(self.pinned_peer_ids),
            include_peer_ids=list(self.include_peer_ids),
            exclude_peer_ids=list(self.exclude_peer_ids),
            kind=self.kind,
            has_my_invites=self.has_my_invites,
            updated_time=self.updated_time,
            local_id=self.local_id,
        )

    def peer_ids(self, category: PeerCategory) -> List[int]:
        """Return the live peer list stored for *category*."""

        return getattr(self, _PEER_ATTRIBUTES[PeerCategory(category)])

    def set_peer_ids(self, category: PeerCategory, peer_ids: Iterable[int]) -> None:
        setattr(self, _PEER_ATTRIBUTES[PeerCategory(category)], [int(peer) for peer in peer_ids])

    # ------------------------------------------------------------------
    # Transport representation
    def to_dict(self) -> Dict[str, Any]:
        """Serialise the folder into its transport mapping."""

        return {
            "_": self.kind.value,
            "id": self.id,
            "title": self.title,
            "flags": sorted(flag.value for flag in self.flags),
            "pinned_peers": list(self.pinned_peer_ids),
            "include_peers": list(self.include_peer_ids),
            "exclude_peers": list(self.exclude_peer_ids),
            "has_my_invites": self.has_my_invites,
            "updated_time": self.updated_time,
            "local_id": self.local_id,
        }

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "Folder":
        """Build a :class:`Folder` from a transport mapping."""

        try:
            folder_id = int(payload.get("id", 0))
            kind = FolderKind(payload.get("_", FolderKind.PLAIN.value))
            flags = {FolderFlag(value) for value in payload.get("flags", ())}
            return Folder(
                id=folder_id,
                title=str(payload.get("title", "")),
                flags=flags,
                pinned_peer_ids=[int(peer) for peer in payload.get("pinned_peers", ())],
                include_peer_ids=[int(peer) for peer in payload.get("include_peers", ())],
                exclude_peer_ids=[int(peer) for peer in payload.get("exclude_peers", ())],
                kind=kind,
                has_my_invites=bool(payload.get("has_my_invites", False)),
                updated_time=int(payload.get("updated_time", 0)),
                local_id=int(payload.get("local_id", 0)),
            )
        except (TypeError, ValueError) as exc:
            raise FolderValidationError(f"Invalid folder payload: {exc}") from exc


def empty_folder() -> Folder:
    """Return the template used when the user creates a new folder."""

    return Folder()


__all__ = [
    "Folder",
    "FolderFlag",
    "FolderKind",
    "PeerCategory",
    "SessionMode",
    "VOLATILE_FIELDS",
    "empty_folder",
]
