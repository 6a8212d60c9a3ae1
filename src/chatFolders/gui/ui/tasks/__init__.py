"""Background workers used by the folder services."""

from .folder_request_worker import FolderRequestWorker, FolderRequestWorkerSignals

__all__ = ["FolderRequestWorker", "FolderRequestWorkerSignals"]
