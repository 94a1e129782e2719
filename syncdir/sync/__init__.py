"""Sync engine for syncdir - copy pass, mirror pass and their helpers."""

from .comparator import FileComparator, SyncAction, SyncDecision
from .config import SyncConfig
from .engine import SyncEngine
from .ignore import ExcludeMatcher, is_excluded
from .operations import SyncOperations
from .protocols import NullOutputHandler, OutputHandlerProtocol
from .safety import is_subpath, same_path, validate_sync_paths
from .scanner import DirectoryScanner, TreeEntry

__all__ = [
    "SyncEngine",
    "SyncConfig",
    "SyncOperations",
    "DirectoryScanner",
    "TreeEntry",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "ExcludeMatcher",
    "is_excluded",
    "is_subpath",
    "same_path",
    "validate_sync_paths",
    "NullOutputHandler",
    "OutputHandlerProtocol",
]
