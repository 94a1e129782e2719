"""Sync configuration."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import SyncConfigError


@dataclass(frozen=True)
class SyncConfig:
    """Options for a single sync invocation.

    Examples:
        >>> config = SyncConfig(recursive=True, exclude_patterns=(".git",))
        >>> config.mirror
        False
    """

    recursive: bool = False
    """Allow a directory as source"""

    mirror: bool = False
    """Delete destination entries that are not present in the source"""

    dry_run: bool = False
    """Report actions without changing anything"""

    verbose: bool = False
    """Report skipped and excluded entries as well"""

    use_checksum: bool = False
    """Decide equivalence by content hash instead of size and mtime"""

    exclude_patterns: tuple[str, ...] = field(default_factory=tuple)
    """Exclude patterns in the order they were given"""

    def __post_init__(self) -> None:
        if isinstance(self.exclude_patterns, str):
            raise SyncConfigError(
                "exclude_patterns must be a sequence of patterns, not a string"
            )
        patterns = tuple(self.exclude_patterns)
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise SyncConfigError(f"Invalid exclude pattern: {pattern!r}")
        # frozen dataclass: normalize lists to tuples
        object.__setattr__(self, "exclude_patterns", patterns)

    @classmethod
    def from_options(
        cls,
        recursive: bool = False,
        mirror: bool = False,
        dry_run: bool = False,
        verbose: bool = False,
        checksum: bool = False,
        excludes: Optional[Iterable[str]] = None,
    ) -> "SyncConfig":
        """Build a config from CLI option values.

        Args:
            recursive: Value of ``-r``
            mirror: Value of ``--mirror``
            dry_run: Value of ``--dry-run``
            verbose: Value of ``--verbose``
            checksum: Value of ``--checksum``
            excludes: Values of the repeatable ``--exclude`` option

        Returns:
            SyncConfig instance
        """
        return cls(
            recursive=recursive,
            mirror=mirror,
            dry_run=dry_run,
            verbose=verbose,
            use_checksum=checksum,
            exclude_patterns=tuple(excludes or ()),
        )
