"""Utility functions for syncdir."""

import hashlib
import os
from typing import Union

# =============================================================================
# Constants for file operations
# =============================================================================

# Buffer size for streaming file copies (1 MB)
DEFAULT_COPY_BUFFER_SIZE: int = 1024 * 1024

# Buffer size for hashing file contents (1 MB)
DEFAULT_HASH_BUFFER_SIZE: int = 1024 * 1024

# Allowed modification time difference between equivalent files (1 second)
MTIME_TOLERANCE_NS: int = 1_000_000_000


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Hash calculation utilities
# =============================================================================


def calculate_file_hash(
    file_path: Union[str, "os.PathLike[str]"],
    buffer_size: int = DEFAULT_HASH_BUFFER_SIZE,
) -> str:
    """Calculate the SHA-1 digest of a file's contents.

    The file is streamed in chunks so large files are never loaded into
    memory at once.

    Args:
        file_path: Path of the file to hash
        buffer_size: Number of bytes read per chunk

    Returns:
        Hex-encoded SHA-1 digest

    Raises:
        OSError: If the file cannot be opened or read
    """
    digest = hashlib.sha1()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(buffer_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def to_posix_relative(path: str) -> str:
    """Normalize a relative path to forward slashes.

    Examples:
        >>> to_posix_relative("dir\\\\sub\\\\file.txt")
        'dir/sub/file.txt'
        >>> to_posix_relative("dir/file.txt")
        'dir/file.txt'
    """
    return path.replace("\\", "/")
