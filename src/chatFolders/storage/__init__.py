"""Folder storage backends."""

from .backend import FiltersBackend
from .local_backend import LocalFiltersBackend

__all__ = ["FiltersBackend", "LocalFiltersBackend"]
