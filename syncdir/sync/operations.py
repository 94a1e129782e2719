"""Filesystem operations performed by the sync engine."""

import logging
import os
import shutil
import stat
from pathlib import Path

from ..utils import DEFAULT_COPY_BUFFER_SIZE

logger = logging.getLogger(__name__)


class SyncOperations:
    """Copy, mkdir and delete primitives, each gated by dry-run."""

    def __init__(self, buffer_size: int = DEFAULT_COPY_BUFFER_SIZE):
        """Initialize sync operations.

        Args:
            buffer_size: Number of bytes copied per read
        """
        self.buffer_size = buffer_size

    def copy_file(self, source: Path, destination: Path, dry_run: bool = False) -> None:
        """Copy one file byte for byte, preserving its modification time.

        The destination is created with the source's permission bits (or
        truncated if it exists). Its access and modification times are set
        from the source once all bytes are written, so that later runs can
        compare size and mtime.

        Args:
            source: Source file
            destination: Destination file
            dry_run: If True, do nothing

        Raises:
            OSError: On any failure; the destination may be left partially
                written
        """
        if dry_run:
            logger.debug(f"Dry run: would copy {source} -> {destination}")
            return

        destination.parent.mkdir(parents=True, exist_ok=True)

        with open(source, "rb") as src:
            src_stat = os.fstat(src.fileno())
            mode = stat.S_IMODE(src_stat.st_mode)
            flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
            fd = os.open(destination, flags, mode)
            # dst is closed (and flushed) before src
            with open(fd, "wb") as dst:
                shutil.copyfileobj(src, dst, self.buffer_size)
                dst.flush()

        os.utime(destination, ns=(src_stat.st_atime_ns, src_stat.st_mtime_ns))
        logger.debug(f"Copied {source} -> {destination} ({src_stat.st_size} bytes)")

    def ensure_dir(self, directory: Path, dry_run: bool = False) -> bool:
        """Make sure a directory exists.

        Args:
            directory: Directory to create
            dry_run: If True, only report whether it would be created

        Returns:
            True if the directory was (or would be) created

        Raises:
            OSError: If the directory cannot be created, for example because
                a file of the same name is in the way
        """
        if directory.is_dir():
            return False
        if dry_run:
            return True
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created directory {directory}")
        return True

    def remove_path(self, path: Path, is_dir: bool, dry_run: bool = False) -> None:
        """Delete a file, or a directory with everything in it.

        Args:
            path: Path to delete
            is_dir: Whether the path is a directory
            dry_run: If True, do nothing

        Raises:
            OSError: If deletion fails
        """
        if dry_run:
            return
        if is_dir:
            shutil.rmtree(path)
        else:
            os.remove(path)
        logger.debug(f"Deleted {path}")
