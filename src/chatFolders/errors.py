"""Custom exception hierarchy for chatFolders."""

from __future__ import annotations


class ChatFoldersError(Exception):
    """Base class for all custom errors raised by chatFolders."""


class FolderValidationError(ChatFoldersError):
    """Raised when a folder payload fails validation."""


class StorageCorruptedError(ChatFoldersError):
    """Raised when the persisted folder store cannot be parsed."""


class FolderRequestError(ChatFoldersError):
    """Raised when a create, update, delete or lookup request fails.

    ``error_type`` mirrors the short machine readable code a server returns so
    callers can branch on the failure kind without parsing the message.
    """

    error_type = "REQUEST_FAILED"

    def __init__(self, message: str = "", *, error_type: str | None = None) -> None:
        super().__init__(message or self.error_type)
        if error_type is not None:
            self.error_type = error_type


class FolderLimitError(FolderRequestError):
    """Raised when the account already holds the maximum number of folders."""

    error_type = "DIALOG_FILTERS_TOO_MUCH"


class FolderNotFoundError(FolderRequestError):
    """Raised when a request targets a folder id the store does not know."""

    error_type = "FILTER_ID_INVALID"
