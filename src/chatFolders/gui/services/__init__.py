"""Service layer bridging the edit panel with the folder backend."""

from .filters_service import FiltersService, FolderRequest

__all__ = ["FiltersService", "FolderRequest"]
