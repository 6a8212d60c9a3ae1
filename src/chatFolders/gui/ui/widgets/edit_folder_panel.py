"""Qt panel rendering a folder edit session."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QCheckBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenu,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ....config import (
    DELETE_FOLDER_MESSAGE,
    DELETE_FOLDER_TITLE,
    FOLDER_LIMIT_MESSAGE,
    HEADING_NEW_FOLDER,
    MAX_FOLDER_NAME_LENGTH,
)
from ....models.folder import Folder, FolderFlag
from . import dialogs

FLAG_LABELS: Dict[FolderFlag, str] = {
    FolderFlag.CONTACTS: "Contacts",
    FolderFlag.NON_CONTACTS: "Non-Contacts",
    FolderFlag.GROUPS: "Groups",
    FolderFlag.BROADCASTS: "Channels",
    FolderFlag.BOTS: "Bots",
    FolderFlag.EXCLUDE_MUTED: "Muted",
    FolderFlag.EXCLUDE_ARCHIVED: "Archived",
    FolderFlag.EXCLUDE_READ: "Read",
}

_INCLUDED_FLAGS = (
    FolderFlag.CONTACTS,
    FolderFlag.NON_CONTACTS,
    FolderFlag.GROUPS,
    FolderFlag.BROADCASTS,
    FolderFlag.BOTS,
)
_EXCLUDED_FLAGS = (
    FolderFlag.EXCLUDE_MUTED,
    FolderFlag.EXCLUDE_ARCHIVED,
    FolderFlag.EXCLUDE_READ,
)

_TITLE_ERROR_STYLE = "QLineEdit { border: 1px solid #e53935; }"


class EditFolderPanel(QWidget):
    """Header, title field and flag toggles for one folder.

    The panel only renders what :class:`FolderEditController` tells it and
    reports user input through its signals.
    """

    titleEdited = Signal(str)
    flagToggled = Signal(object, bool)
    confirmRequested = Signal()
    deleteRequested = Signal()

    inviteDialogRequested = Signal(object, bool)
    """Emitted with the folder and a *deleting* flag when the invite dialog must open."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._title_error = False

        self.heading_label = QLabel(HEADING_NEW_FOLDER, self)
        self.heading_label.setObjectName("folderHeading")

        self.confirm_button = QToolButton(self)
        self.confirm_button.setText("✓")
        self.confirm_button.setToolTip("Save")
        self.confirm_button.clicked.connect(lambda _checked=False: self.confirmRequested.emit())

        self.delete_action = QAction(DELETE_FOLDER_TITLE, self)
        self.delete_action.triggered.connect(lambda _checked=False: self.deleteRequested.emit())
        self.options_menu = QMenu(self)
        self.options_menu.addAction(self.delete_action)
        self.options_button = QToolButton(self)
        self.options_button.setText("⋮")
        self.options_button.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.options_button.setMenu(self.options_menu)

        header = QHBoxLayout()
        header.addWidget(self.heading_label)
        header.addStretch(1)
        header.addWidget(self.confirm_button)
        header.addWidget(self.options_button)

        self.title_edit = QLineEdit(self)
        self.title_edit.setPlaceholderText("Folder name")
        self.title_edit.setMaxLength(MAX_FOLDER_NAME_LENGTH)
        self.title_edit.textEdited.connect(self.titleEdited.emit)

        self.flag_boxes: Dict[FolderFlag, QCheckBox] = {}
        included = self._build_flag_group("Included chats", _INCLUDED_FLAGS)
        excluded = self._build_flag_group("Excluded chats", _EXCLUDED_FLAGS)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addWidget(self.title_edit)
        layout.addWidget(included)
        layout.addWidget(excluded)
        layout.addStretch(1)

        self.confirm_button.hide()
        self.options_button.hide()

    def _build_flag_group(self, caption: str, flags: Iterable[FolderFlag]) -> QGroupBox:
        group = QGroupBox(caption, self)
        group_layout = QVBoxLayout(group)
        for flag in flags:
            box = QCheckBox(FLAG_LABELS[flag], group)
            box.toggled.connect(lambda checked, *, value=flag: self.flagToggled.emit(value, checked))
            group_layout.addWidget(box)
            self.flag_boxes[flag] = box
        return group

    # ------------------------------------------------------------------
    # FolderEditSurface
    def set_heading(self, text: str) -> None:
        self.heading_label.setText(text)

    def set_title(self, text: str) -> None:
        if self.title_edit.text() == text:
            return
        self.title_edit.blockSignals(True)
        self.title_edit.setText(text)
        self.title_edit.blockSignals(False)

    def set_title_error(self, error: bool) -> None:
        if error == self._title_error:
            return
        self._title_error = error
        self.title_edit.setStyleSheet(_TITLE_ERROR_STYLE if error else "")
        if error:
            self.title_edit.setFocus(Qt.FocusReason.OtherFocusReason)

    def title_has_error(self) -> bool:
        return self._title_error

    def set_save_visible(self, visible: bool) -> None:
        self.confirm_button.setVisible(visible)

    def set_save_enabled(self, enabled: bool) -> None:
        self.confirm_button.setEnabled(enabled)

    def set_options_visible(self, visible: bool) -> None:
        self.options_button.setVisible(visible)

    def render_flags(self, flags: Iterable[FolderFlag]) -> None:
        active = {FolderFlag(flag) for flag in flags}
        for flag, box in self.flag_boxes.items():
            box.blockSignals(True)
            box.setChecked(flag in active)
            box.blockSignals(False)

    def show_limit_notice(self) -> None:
        dialogs.show_information(self, FOLDER_LIMIT_MESSAGE)

    def show_error(self, message: str) -> None:
        dialogs.show_error(self, message)

    def confirm_delete(self) -> bool:
        return dialogs.ask_confirmation(self, DELETE_FOLDER_MESSAGE, title=DELETE_FOLDER_TITLE)

    def show_invite_dialog(self, folder: Folder, *, deleting: bool) -> None:
        self.inviteDialogRequested.emit(folder, deleting)


__all__ = ["EditFolderPanel", "FLAG_LABELS"]
