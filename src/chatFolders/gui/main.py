"""GUI entry point for the chatFolders editor."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

if __package__ is None or __package__ == "":  # pragma: no cover - script mode
    package_root = Path(__file__).resolve().parents[2]
    if str(package_root) not in sys.path:
        sys.path.insert(0, str(package_root))
    from chatFolders.appctx import AppContext
    from chatFolders.config import APP_TITLE, SHARED_FOLDER_DELETE_MESSAGE, STORE_FILE_NAME
    from chatFolders.gui.ui.folder_editor import open_folder_editor
    from chatFolders.gui.ui.widgets import dialogs
else:  # pragma: no cover - normal package execution
    from ..appctx import AppContext
    from ..config import APP_TITLE, SHARED_FOLDER_DELETE_MESSAGE, STORE_FILE_NAME
    from .ui.folder_editor import open_folder_editor
    from .ui.widgets import dialogs


def main(argv: list[str] | None = None) -> int:
    """Open the folder editor and return the exit code.

    ``argv[1]`` optionally names the JSON store; ``argv[2]`` selects a folder
    id to edit instead of creating a new one.
    """

    arguments = list(sys.argv if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(arguments)
    store_path = Path(arguments[1]) if len(arguments) > 1 else Path.cwd() / STORE_FILE_NAME
    context = AppContext(store_path=store_path)
    service = context.filters
    folder_id = int(arguments[2]) if len(arguments) > 2 else 0

    def _show_editor(_folders: object = None) -> None:
        folder = service.get_filter(folder_id) if folder_id else None
        panel, _controller = open_folder_editor(service, folder)
        panel.inviteDialogRequested.connect(
            lambda _folder, _deleting: dialogs.show_information(panel, SHARED_FOLDER_DELETE_MESSAGE)
        )
        panel.setWindowTitle(APP_TITLE)
        panel.show()

    def _abort(error: object) -> None:
        logging.getLogger(__name__).error("Failed to load folders: %s", error)
        app.exit(1)

    request = service.load()
    request.succeeded.connect(_show_editor)
    request.failed.connect(_abort)
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
