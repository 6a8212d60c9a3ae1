"""Reusable Qt widgets for the folder editor."""

from .edit_folder_panel import EditFolderPanel

__all__ = ["EditFolderPanel"]
