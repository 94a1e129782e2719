"""syncdir - copy and mirror directory trees, copying only what changed."""

from .exceptions import (
    SyncConfigError,
    SyncDirError,
    SyncRuntimeError,
    SyncUsageError,
)
from .sync import SyncConfig, SyncEngine
from .utils import calculate_file_hash, format_size

__version__ = "0.2.0"

__all__ = [
    "__version__",
    "SyncConfig",
    "SyncEngine",
    "SyncConfigError",
    "SyncDirError",
    "SyncRuntimeError",
    "SyncUsageError",
    "calculate_file_hash",
    "format_size",
]
