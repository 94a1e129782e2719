"""Exceptions raised by syncdir."""

from typing import Optional


class SyncDirError(Exception):
    """Base exception for all syncdir errors."""


class SyncUsageError(SyncDirError):
    """Invalid invocation detected before anything was changed.

    Raised for bad path relationships, a missing source, or a directory
    source without recursive mode.
    """


class SyncConfigError(SyncUsageError):
    """Invalid sync configuration values."""


class SyncRuntimeError(SyncDirError):
    """Filesystem failure during traversal, comparison, copy or delete."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
