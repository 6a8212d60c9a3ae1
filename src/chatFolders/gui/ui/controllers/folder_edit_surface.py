"""Interface the edit controller drives to render its state."""

from __future__ import annotations

from typing import Iterable, Protocol

from ....models.folder import Folder, FolderFlag


class FolderEditSurface(Protocol):
    """Widgets and dialogs owned by the edit panel.

    The controller only calls these methods; it never renders anything itself.
    """

    def set_heading(self, text: str) -> None: ...

    def set_title(self, text: str) -> None: ...

    def set_title_error(self, error: bool) -> None: ...

    def title_has_error(self) -> bool: ...

    def set_save_visible(self, visible: bool) -> None: ...

    def set_save_enabled(self, enabled: bool) -> None: ...

    def set_options_visible(self, visible: bool) -> None: ...

    def render_flags(self, flags: Iterable[FolderFlag]) -> None: ...

    def show_limit_notice(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def confirm_delete(self) -> bool: ...

    def show_invite_dialog(self, folder: Folder, *, deleting: bool) -> None: ...

    def close(self) -> None: ...
