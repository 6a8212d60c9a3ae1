"""chatFolders: create and edit chat folders against a server-synchronised store."""

__all__ = ["__version__"]

__version__ = "0.1.0"
