from __future__ import annotations


class GraphLoaderError(Exception):
    pass


class ArchiveNotFoundError(GraphLoaderError, FileNotFoundError):
    """The outer archive path does not exist."""


class NoInnerArchiveError(GraphLoaderError):
    """The outer archive holds no entry with the expected suffix."""


class ArchiveReadError(GraphLoaderError, OSError):
    """The outer or inner archive is corrupt or could not be read."""


class DocumentDecodeError(GraphLoaderError, ValueError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Could not decode {key}: {reason}")
        self.key = key
        self.reason = reason
