"""Reusable dialog helpers for the folder panel."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from ....config import APP_TITLE


def ask_confirmation(parent: QWidget, message: str, *, title: str = APP_TITLE) -> bool:
    """Ask a destructive yes/no question and return ``True`` when accepted."""

    answer = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
        QMessageBox.StandardButton.Cancel,
    )
    return answer == QMessageBox.StandardButton.Yes


def show_error(parent: QWidget, message: str, *, title: str = APP_TITLE) -> None:
    """Display a blocking error message."""

    QMessageBox.critical(parent, title, message)


def show_information(parent: QWidget, message: str, *, title: str = APP_TITLE) -> None:
    """Display an informational message box."""

    QMessageBox.information(parent, title, message)
