"""Pre-flight checks on source and destination paths."""

import os

from ..exceptions import SyncUsageError


def clean_path(path: str) -> str:
    """Return the absolute, normalized form of a path."""
    return os.path.abspath(os.path.normpath(os.fspath(path)))


def _fold(path: str) -> str:
    # Case-insensitive: the primary target filesystem is NTFS.
    return clean_path(path).casefold()


def same_path(a: str, b: str) -> bool:
    """Check whether two paths denote the same location.

    Examples:
        >>> same_path("/data/src", "/data/./other/../src")
        True
        >>> same_path("/data/src", "/DATA/SRC")
        True
    """
    return _fold(a) == _fold(b)


def is_subpath(child: str, parent: str) -> bool:
    """Check whether ``child`` lies strictly inside ``parent``.

    Examples:
        >>> is_subpath("/data/src/sub", "/data/src")
        True
        >>> is_subpath("/data/src2", "/data/src")
        False
        >>> is_subpath("/data/src", "/data/src")
        False
    """
    child_folded = _fold(child)
    parent_folded = _fold(parent)
    if child_folded == parent_folded:
        return False
    prefix = parent_folded.rstrip(os.sep) + os.sep
    return child_folded.startswith(prefix)


def validate_sync_paths(source: str, destination: str) -> None:
    """Reject source/destination pairs that would lose data or recurse.

    Args:
        source: Source path
        destination: Destination path

    Raises:
        SyncUsageError: If both paths are the same location, or one lies
            inside the other
    """
    abs_source = clean_path(source)
    abs_destination = clean_path(destination)

    if same_path(abs_source, abs_destination):
        raise SyncUsageError(f"SRC and DST are the same path:\n  {abs_source}")
    if is_subpath(abs_destination, abs_source):
        raise SyncUsageError(
            "DST is inside SRC; refused to prevent recursion:\n"
            f"  DST={abs_destination} inside SRC={abs_source}"
        )
    if is_subpath(abs_source, abs_destination):
        raise SyncUsageError(
            "SRC is inside DST; refused to prevent recursion:\n"
            f"  SRC={abs_source} inside DST={abs_destination}"
        )
