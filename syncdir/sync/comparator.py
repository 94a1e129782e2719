"""File comparison logic for sync operations."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils import MTIME_TOLERANCE_NS, calculate_file_hash
from .scanner import TreeEntry

logger = logging.getLogger(__name__)


class SyncAction(str, Enum):
    """Actions that can be taken during sync."""

    CREATE_DIR = "create_dir"
    """Create the destination directory"""

    COPY = "copy"
    """Copy the source file to the destination"""

    SKIP = "skip"
    """Skip file (destination is equivalent)"""

    EXCLUDED = "excluded"
    """Entry matches an exclude pattern"""

    KEEP = "keep"
    """Destination entry exists in the source"""

    DELETE_FILE = "delete_file"
    """Delete destination file missing from the source"""

    DELETE_DIR = "delete_dir"
    """Delete destination directory missing from the source"""


@dataclass
class SyncDecision:
    """Represents a decision about how to sync one entry."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    relative_path: str
    """Relative path of the entry"""

    source_entry: Optional[TreeEntry] = None
    """Source entry (if exists)"""

    destination_entry: Optional[TreeEntry] = None
    """Destination entry (if exists)"""


class FileComparator:
    """Decides whether a destination file must be replaced by the source.

    By default two files are equivalent when their sizes match and their
    modification times differ by at most one second. In checksum mode the
    SHA-1 digests of both files decide, whatever size and time say.
    """

    def __init__(self, use_checksum: bool = False):
        """Initialize file comparator.

        Args:
            use_checksum: Compare file contents instead of trusting
                size and modification time
        """
        self.use_checksum = use_checksum

    def are_equivalent(self, source: TreeEntry, destination: TreeEntry) -> bool:
        """Check whether a destination file needs no re-copy.

        Args:
            source: Source file
            destination: Existing destination file with the same relative path

        Returns:
            True if the files are equivalent

        Raises:
            OSError: If hashing is needed and a file cannot be read
        """
        size_equal = source.size == destination.size
        time_close = abs(source.mtime_ns - destination.mtime_ns) <= MTIME_TOLERANCE_NS

        if not self.use_checksum:
            return size_equal and time_close

        source_hash = calculate_file_hash(source.path)
        destination_hash = calculate_file_hash(destination.path)
        logger.debug(
            f"Checksums for {source.relative_path}: "
            f"{source_hash} vs {destination_hash}"
        )
        return source_hash == destination_hash

    def decide(
        self,
        relative_path: str,
        source: TreeEntry,
        destination: Optional[TreeEntry],
    ) -> SyncDecision:
        """Decide whether a source file must be copied.

        Args:
            relative_path: Relative path of the file
            source: Source file
            destination: Destination entry at the same relative path (if exists)

        Returns:
            SyncDecision with action COPY or SKIP
        """
        if destination is None:
            return SyncDecision(
                action=SyncAction.COPY,
                reason="New file",
                relative_path=relative_path,
                source_entry=source,
            )

        if not destination.is_regular_file:
            return SyncDecision(
                action=SyncAction.COPY,
                reason="Destination is not a regular file",
                relative_path=relative_path,
                source_entry=source,
                destination_entry=destination,
            )

        if self.are_equivalent(source, destination):
            reason = (
                "Files are identical (checksum)"
                if self.use_checksum
                else "Files are identical (size and mtime)"
            )
            return SyncDecision(
                action=SyncAction.SKIP,
                reason=reason,
                relative_path=relative_path,
                source_entry=source,
                destination_entry=destination,
            )

        return SyncDecision(
            action=SyncAction.COPY,
            reason="Files differ",
            relative_path=relative_path,
            source_entry=source,
            destination_entry=destination,
        )
