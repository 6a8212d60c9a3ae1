"""Folder deletion helpers shared by the edit panel and folder menus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ....models.folder import Folder

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ...services.filters_service import FiltersService, FolderRequest
    from ..controllers.folder_edit_surface import FolderEditSurface


def requires_invite_dialog(folder: Folder) -> bool:
    """Return ``True`` when deleting *folder* must go through its invite dialog.

    A shared chat list the user joined without owning any invite links is left
    through the invite dialog so the other participants keep their copy.
    """

    return folder.is_shared and not folder.has_my_invites


def delete_folder(
    folder_id: int,
    *,
    service: "FiltersService",
    surface: "FolderEditSurface",
    known: Optional[Folder] = None,
) -> Optional["FolderRequest"]:
    """Ask for confirmation and issue the delete request for *folder_id*.

    *known* is the caller's copy of the folder and is used when the service
    has not cached it yet.  Returns the pending request, or ``None`` when the
    user was redirected to the invite dialog or declined the confirmation.
    """

    folder = service.get_filter(folder_id)
    if folder is None:
        folder = known
    if folder is not None and requires_invite_dialog(folder):
        surface.show_invite_dialog(folder, deleting=True)
        return None
    if not surface.confirm_delete():
        return None
    return service.delete_filter(folder_id)


__all__ = ["delete_folder", "requires_invite_dialog"]
