"""Expose Qt models used by the GUI."""

from .folder_edit_session import FolderEditSession, SaveSettlement, UpdateOutcome

__all__ = [
    "FolderEditSession",
    "SaveSettlement",
    "UpdateOutcome",
]
