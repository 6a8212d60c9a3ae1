"""Qt widget package for the chatFolders GUI."""

__all__ = ["open_folder_editor"]


def __getattr__(name: str) -> object:
    if name == "open_folder_editor":
        from .folder_editor import open_folder_editor as _open_folder_editor

        return _open_folder_editor
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():  # pragma: no cover - trivial helper
    return sorted(__all__)
