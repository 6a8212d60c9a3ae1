"""Background worker executing a single blocking folder backend call."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QRunnable, Signal


class FolderRequestWorkerSignals(QObject):
    """Signals emitted by :class:`FolderRequestWorker`."""

    succeeded = Signal(object)
    """Emitted with the backend result once the call returned."""

    failed = Signal(object)
    """Emitted with the raised exception when the call failed."""


class FolderRequestWorker(QRunnable):
    """Run *operation* off the GUI thread and report its outcome."""

    def __init__(self, name: str, operation: Callable[[], object]) -> None:
        super().__init__()
        self.name = name
        self._operation = operation
        # The signals object is created on the GUI thread, so emissions from the
        # pool thread are queued back to receivers living there.
        self.signals = FolderRequestWorkerSignals()

    def run(self) -> None:  # type: ignore[override]
        """Perform the blocking backend call on a worker thread."""

        try:
            result = self._operation()
        except Exception as exc:
            # Hand the exception object back so the service can classify it.
            self.signals.failed.emit(exc)
            return

        self.signals.succeeded.emit(result)


__all__ = ["FolderRequestWorker", "FolderRequestWorkerSignals"]
