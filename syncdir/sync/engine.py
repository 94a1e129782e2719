"""Core sync engine for executing sync operations."""

import logging
import os
import stat
import time
from pathlib import Path
from typing import Optional, Union

from ..exceptions import SyncRuntimeError, SyncUsageError
from .comparator import FileComparator, SyncAction, SyncDecision
from .config import SyncConfig
from .operations import SyncOperations
from .protocols import NullOutputHandler, OutputHandlerProtocol
from .safety import clean_path, validate_sync_paths
from .scanner import DirectoryScanner, TreeEntry, lookup_entry

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class SyncEngine:
    """Makes a destination tree reflect a source tree.

    A sync runs in two passes over the live filesystem:

    1. Copy pass (source-driven): create missing directories and copy every
       file whose destination is missing or not equivalent.
    2. Mirror pass (destination-driven, mirror mode only): delete every
       destination entry that has no counterpart in the source.

    Excluded entries are invisible to both passes. The first filesystem
    error aborts the run with SyncRuntimeError; nothing is rolled back.
    """

    def __init__(
        self,
        output: Optional[OutputHandlerProtocol] = None,
        operations: Optional[SyncOperations] = None,
        record_decisions: bool = False,
    ):
        """Initialize sync engine.

        Args:
            output: Reporting surface for narrated actions (silent if omitted)
            operations: Filesystem primitives (default SyncOperations)
            record_decisions: Keep every SyncDecision of a run in
                ``decisions`` (memory grows with the size of both trees)
        """
        self.output = output or NullOutputHandler()
        self.operations = operations or SyncOperations()
        self.record_decisions = record_decisions
        # Decisions taken during the most recent run, if recorded
        self.decisions: list[SyncDecision] = []

    def sync_paths(
        self, source: PathLike, destination: PathLike, config: SyncConfig
    ) -> dict:
        """Validate a source/destination pair and sync it.

        Dispatches to sync_directory or sync_file depending on the source.

        Args:
            source: Source file or directory
            destination: Destination path
            config: Sync options

        Returns:
            Dictionary with sync statistics

        Raises:
            SyncUsageError: If the source is missing, is a directory without
                recursive mode, or the paths overlap
            SyncRuntimeError: On any filesystem failure

        Examples:
            >>> engine = SyncEngine()
            >>> stats = engine.sync_paths("src", "dst", SyncConfig(recursive=True))
            >>> print(f"Copied {stats['copies']} files")
        """
        source_path = Path(clean_path(source))
        destination_path = Path(clean_path(destination))

        try:
            source_stat = source_path.stat()
        except FileNotFoundError:
            raise SyncUsageError(f"SRC does not exist: {source_path}") from None
        except OSError as e:
            raise SyncRuntimeError(str(e), str(source_path)) from e

        source_is_dir = stat.S_ISDIR(source_stat.st_mode)
        if source_is_dir and not config.recursive:
            raise SyncUsageError("SRC is a directory; specify -r for recursive copy")

        validate_sync_paths(str(source_path), str(destination_path))

        if source_is_dir:
            return self.sync_directory(source_path, destination_path, config)
        return self.sync_file(source_path, destination_path, config)

    def sync_directory(
        self, source: PathLike, destination: PathLike, config: SyncConfig
    ) -> dict:
        """Sync a source directory tree into a destination directory.

        The caller is responsible for validating the pair first (see
        sync_paths).

        Args:
            source: Absolute source directory
            destination: Absolute destination directory
            config: Sync options

        Returns:
            Dictionary with sync statistics

        Raises:
            SyncRuntimeError: On any filesystem failure
        """
        source_root = Path(source)
        destination_root = Path(destination)
        stats = self._create_empty_stats()
        self.decisions = []

        scanner = DirectoryScanner(exclude_patterns=list(config.exclude_patterns))
        comparator = FileComparator(use_checksum=config.use_checksum)

        start_time = time.time()
        logger.debug(
            f"Syncing {source_root} -> {destination_root} "
            f"(mirror={config.mirror}, dry_run={config.dry_run}, "
            f"checksum={config.use_checksum})"
        )

        try:
            self._ensure_dir(destination_root, "", config, stats)
            self._copy_tree(
                source_root,
                source_root,
                destination_root,
                scanner,
                comparator,
                config,
                stats,
            )

            if config.mirror:
                if config.dry_run and not destination_root.is_dir():
                    # Nothing exists yet that could be deleted
                    logger.debug("Dry run: destination missing, mirror pass skipped")
                else:
                    self._mirror_tree(
                        destination_root,
                        destination_root,
                        source_root,
                        scanner,
                        config,
                        stats,
                    )
        except OSError as e:
            raise SyncRuntimeError(str(e), e.filename) from e

        logger.debug(f"Sync finished in {time.time() - start_time:.2f}s: {stats}")
        return stats

    def sync_file(
        self, source: PathLike, destination: PathLike, config: SyncConfig
    ) -> dict:
        """Sync a single source file.

        If the destination is an existing directory the file is placed
        inside it under its own name, otherwise the destination is the
        target file path.

        Args:
            source: Absolute source file
            destination: Absolute destination file or directory
            config: Sync options

        Returns:
            Dictionary with sync statistics

        Raises:
            SyncRuntimeError: On any filesystem failure
        """
        source_path = Path(source)
        destination_path = Path(destination)
        stats = self._create_empty_stats()
        self.decisions = []
        comparator = FileComparator(use_checksum=config.use_checksum)

        try:
            if destination_path.is_dir():
                destination_path = destination_path / source_path.name
            source_entry = TreeEntry.from_path(source_path, source_path.parent)
            self._sync_file_entry(
                source_entry, destination_path, comparator, config, stats
            )
        except OSError as e:
            raise SyncRuntimeError(str(e), e.filename) from e

        return stats

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary.

        Returns:
            Dictionary with zero counts for all stat categories
        """
        return {
            "dirs_created": 0,
            "copies": 0,
            "bytes_copied": 0,
            "skips": 0,
            "excluded": 0,
            "kept": 0,
            "deletes_files": 0,
            "deletes_dirs": 0,
        }

    def _record(self, decision: SyncDecision) -> None:
        if self.record_decisions:
            self.decisions.append(decision)

    def _report(
        self, config: SyncConfig, message: str, verbose_only: bool = False
    ) -> None:
        """Narrate a decision through the output handler.

        Action lines are shown in verbose and dry-run mode, skip/exclude
        lines only in verbose mode.
        """
        if verbose_only:
            if not config.verbose:
                return
        elif not (config.verbose or config.dry_run):
            return
        prefix = "[DRY-RUN] " if config.dry_run else ""
        self.output.info(f"{prefix}{message}")

    def _ensure_dir(
        self, directory: Path, relative_path: str, config: SyncConfig, stats: dict
    ) -> None:
        if not self.operations.ensure_dir(directory, dry_run=config.dry_run):
            return
        self._record(
            SyncDecision(
                action=SyncAction.CREATE_DIR,
                reason="Directory missing in destination",
                relative_path=relative_path,
            )
        )
        stats["dirs_created"] += 1
        self._report(config, f"mkdir: {relative_path or directory}")

    def _copy_tree(
        self,
        directory: Path,
        source_root: Path,
        destination_root: Path,
        scanner: DirectoryScanner,
        comparator: FileComparator,
        config: SyncConfig,
        stats: dict,
    ) -> None:
        """Copy pass over one source directory, recursing top-down."""
        for entry in scanner.list_dir(directory, source_root):
            relative_path = entry.relative_path

            if scanner.should_exclude(entry):
                self._record(
                    SyncDecision(
                        action=SyncAction.EXCLUDED,
                        reason="Matches exclude pattern",
                        relative_path=relative_path,
                        source_entry=entry,
                    )
                )
                stats["excluded"] += 1
                self._report(config, f"exclude: {relative_path}", verbose_only=True)
                continue

            destination_path = destination_root / relative_path
            if entry.is_dir:
                self._ensure_dir(destination_path, relative_path, config, stats)
                self._copy_tree(
                    entry.path,
                    source_root,
                    destination_root,
                    scanner,
                    comparator,
                    config,
                    stats,
                )
            else:
                self._sync_file_entry(
                    entry, destination_path, comparator, config, stats
                )

    def _sync_file_entry(
        self,
        entry: TreeEntry,
        destination_path: Path,
        comparator: FileComparator,
        config: SyncConfig,
        stats: dict,
    ) -> None:
        """Copy one source file unless the destination is equivalent."""
        destination_entry = lookup_entry(destination_path, entry.relative_path)
        decision = comparator.decide(entry.relative_path, entry, destination_entry)
        self._record(decision)

        if decision.action == SyncAction.SKIP:
            stats["skips"] += 1
            self._report(
                config, f"skip (same): {entry.relative_path}", verbose_only=True
            )
            return

        verb = "copy" if destination_entry is None else "update"
        self._report(config, f"{verb}: {entry.relative_path}")
        self.operations.copy_file(entry.path, destination_path, dry_run=config.dry_run)
        stats["copies"] += 1
        stats["bytes_copied"] += entry.size

    def _mirror_tree(
        self,
        directory: Path,
        destination_root: Path,
        source_root: Path,
        scanner: DirectoryScanner,
        config: SyncConfig,
        stats: dict,
    ) -> None:
        """Mirror pass over one destination directory, recursing top-down."""
        for entry in scanner.list_dir(directory, destination_root):
            relative_path = entry.relative_path

            if scanner.should_exclude(entry):
                self._record(
                    SyncDecision(
                        action=SyncAction.EXCLUDED,
                        reason="Matches exclude pattern",
                        relative_path=relative_path,
                        destination_entry=entry,
                    )
                )
                self._report(
                    config,
                    f"mirror-skip (excluded): {relative_path}",
                    verbose_only=True,
                )
                continue

            if self._exists_in_source(source_root / relative_path):
                self._record(
                    SyncDecision(
                        action=SyncAction.KEEP,
                        reason="Present in source",
                        relative_path=relative_path,
                        destination_entry=entry,
                    )
                )
                stats["kept"] += 1
                if entry.is_dir:
                    self._mirror_tree(
                        entry.path,
                        destination_root,
                        source_root,
                        scanner,
                        config,
                        stats,
                    )
                continue

            if entry.is_dir:
                action = SyncAction.DELETE_DIR
                self._report(config, f"delete dir: {relative_path}")
                stats["deletes_dirs"] += 1
            else:
                action = SyncAction.DELETE_FILE
                self._report(config, f"delete: {relative_path}")
                stats["deletes_files"] += 1
            self._record(
                SyncDecision(
                    action=action,
                    reason="Not present in source",
                    relative_path=relative_path,
                    destination_entry=entry,
                )
            )
            self.operations.remove_path(
                entry.path, is_dir=entry.is_dir, dry_run=config.dry_run
            )

    def _exists_in_source(self, source_path: Path) -> bool:
        """Existence probe for the mirror pass.

        Only "not found" (including a file where a parent directory was
        expected) means absent; any other error propagates and aborts the
        sync.
        """
        try:
            os.stat(source_path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True
