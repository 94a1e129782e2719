"""Directory scanning utilities for sync operations."""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .ignore import ExcludeMatcher

logger = logging.getLogger(__name__)


@dataclass
class TreeEntry:
    """A file or directory found while walking a tree."""

    path: Path
    """Absolute path to the entry"""

    relative_path: str
    """Relative path from the tree root (forward slashes)"""

    is_dir: bool
    """Whether the entry is a directory"""

    size: int
    """Size in bytes"""

    mtime_ns: int
    """Last modification time in nanoseconds since the epoch"""

    is_regular_file: bool = True
    """Whether the entry is a regular file (False for dirs and specials)"""

    @classmethod
    def from_stat(
        cls, path: Path, relative_path: str, st: os.stat_result
    ) -> "TreeEntry":
        """Create a TreeEntry from a stat result."""
        return cls(
            path=path,
            relative_path=relative_path,
            is_dir=stat.S_ISDIR(st.st_mode),
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            is_regular_file=stat.S_ISREG(st.st_mode),
        )

    @classmethod
    def from_path(cls, path: Path, base_path: Path) -> "TreeEntry":
        """Create a TreeEntry by stat-ing a path.

        Args:
            path: Absolute path of the entry
            base_path: Tree root for calculating the relative path

        Returns:
            TreeEntry instance

        Raises:
            OSError: If the path cannot be stat-ed
        """
        # Use as_posix() to ensure forward slashes on all platforms
        relative_path = path.relative_to(base_path).as_posix()
        return cls.from_stat(path, relative_path, path.stat())


def lookup_entry(path: Path, relative_path: str) -> Optional[TreeEntry]:
    """Stat a path, returning None when it does not exist.

    A path whose parent is not a directory counts as missing.

    Raises:
        OSError: For any other failure
    """
    try:
        st = path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    return TreeEntry.from_stat(path, relative_path, st)


class DirectoryScanner:
    """Lists directory contents for the sync passes.

    Entries are returned in name order so both passes walk a tree
    deterministically. Symbolic links are not followed into: a link to a
    directory is reported as a non-directory entry.

    Examples:
        >>> scanner = DirectoryScanner(exclude_patterns=["*.tmp"])
        >>> for entry in scanner.list_dir(Path("/src"), Path("/src")):
        ...     print(entry.relative_path)
    """

    def __init__(self, exclude_patterns: Optional[list[str]] = None):
        """Initialize directory scanner.

        Args:
            exclude_patterns: Exclude patterns (see ``syncdir.sync.ignore``)
        """
        self.matcher = ExcludeMatcher(exclude_patterns or [])

    def should_exclude(self, entry: TreeEntry) -> bool:
        """Check if an entry is excluded by the configured patterns."""
        if self.matcher.is_excluded(entry.relative_path, is_dir=entry.is_dir):
            logger.debug(f"Excluding: {entry.relative_path}")
            return True
        return False

    def _link_entry(
        self, item: os.DirEntry, relative_path: str, link_stat: os.stat_result
    ) -> TreeEntry:
        """Describe a symlink by its target's metadata, without descending."""
        try:
            st = item.stat(follow_symlinks=True)
        except FileNotFoundError:
            # Dangling link
            st = link_stat
        return TreeEntry(
            path=Path(item.path),
            relative_path=relative_path,
            is_dir=False,
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            is_regular_file=stat.S_ISREG(st.st_mode),
        )

    def list_dir(self, directory: Path, base_path: Path) -> list[TreeEntry]:
        """List the direct children of a directory.

        Args:
            directory: Directory to list
            base_path: Tree root for calculating relative paths

        Returns:
            TreeEntry objects sorted by name

        Raises:
            OSError: If the directory or one of its entries cannot be read
        """
        entries: list[TreeEntry] = []
        with os.scandir(directory) as it:
            for item in it:
                item_path = Path(item.path)
                relative_path = item_path.relative_to(base_path).as_posix()
                st = item.stat(follow_symlinks=False)
                if stat.S_ISLNK(st.st_mode):
                    entries.append(self._link_entry(item, relative_path, st))
                else:
                    entries.append(TreeEntry.from_stat(item_path, relative_path, st))
        entries.sort(key=lambda e: e.path.name)
        return entries
