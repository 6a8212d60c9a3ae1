"""Application-wide context helpers for the GUI layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from .storage.local_backend import LocalFiltersBackend

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .gui.services.filters_service import FiltersService


@dataclass
class AppContext:
    """Container object shared across GUI components."""

    store_path: Optional[Path] = None
    backend: LocalFiltersBackend = field(init=False)
    _service: Optional["FiltersService"] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.backend = LocalFiltersBackend(self.store_path)

    @property
    def filters(self) -> "FiltersService":
        """Return the folder service, creating it on first use."""

        if self._service is None:
            # Local import keeps Qt out of non-GUI callers of the context.
            from .gui.services.filters_service import FiltersService

            self._service = FiltersService(self.backend)
        return self._service
