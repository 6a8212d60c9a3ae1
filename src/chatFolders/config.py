"""Default configuration values for chatFolders."""

from __future__ import annotations

from pathlib import Path
from typing import Final

# Folder titles are short labels rendered inside a tab strip.
MAX_FOLDER_NAME_LENGTH: Final[int] = 12

# Maximum number of folders an account may own before the server refuses new ones.
DEFAULT_FOLDER_LIMIT: Final[int] = 10

# Id ``0`` marks a folder that has not been created yet and ``1`` is the
# built-in archive, so user folders start at 2.
FIRST_FOLDER_ID: Final[int] = 2

FOLDERS_LIMIT_ERROR: Final[str] = "DIALOG_FILTERS_TOO_MUCH"

SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parent / "schemas"
STORE_FILE_NAME: Final[str] = "folders.json"
STORE_SCHEMA: Final[str] = "chatFolders/store@1"

# ---------------------------------------------------------------------------
# Edit panel strings
# ---------------------------------------------------------------------------

HEADING_NEW_FOLDER: Final[str] = "New Folder"
HEADING_EDIT_FOLDER: Final[str] = "Edit Folder"
DELETE_FOLDER_TITLE: Final[str] = "Delete Folder"
DELETE_FOLDER_MESSAGE: Final[str] = "Are you sure you want to delete this folder?"
FOLDER_LIMIT_MESSAGE: Final[str] = (
    "You have reached the maximum number of folders. Delete an existing folder to create a new one."
)
SHARED_FOLDER_DELETE_MESSAGE: Final[str] = (
    "This folder is shared with other people. Revoke its invite links before deleting it."
)
APP_TITLE: Final[str] = "Chat Folders"
