"""Controller helpers for the folder edit panel."""

from .folder_edit_controller import FolderEditController
from .folder_edit_surface import FolderEditSurface

__all__ = [
    "FolderEditController",
    "FolderEditSurface",
]
