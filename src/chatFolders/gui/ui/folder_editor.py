"""Factory wiring an :class:`EditFolderPanel` to a :class:`FolderEditController`."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from PySide6.QtWidgets import QWidget

from ...models.folder import Folder
from .controllers.folder_edit_controller import FolderEditController
from .widgets.edit_folder_panel import EditFolderPanel

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..services.filters_service import FiltersService


def open_folder_editor(
    service: "FiltersService",
    folder: Optional[Folder] = None,
    parent: Optional[QWidget] = None,
) -> tuple[EditFolderPanel, FolderEditController]:
    """Create a panel for *folder*, or for a new folder when it is ``None``."""

    panel = EditFolderPanel(parent)
    controller = FolderEditController(service, panel, panel)
    panel.titleEdited.connect(controller.set_title)
    panel.flagToggled.connect(controller.toggle_flag)
    panel.confirmRequested.connect(lambda: controller.confirm(close_after=True))
    panel.deleteRequested.connect(controller.request_delete)
    if folder is None:
        controller.open_create()
    else:
        controller.open_edit(folder)
    return panel, controller


__all__ = ["open_folder_editor"]
