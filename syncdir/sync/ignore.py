"""Exclude pattern matching for sync operations.

A pattern excludes a relative path when any of these hold:

- it glob-matches the base name (``*.tmp`` matches ``a/b/x.tmp``)
- it equals the whole relative path
- it names a leading directory (``node_modules`` matches ``node_modules/x``)
- it names an interior directory (``.git`` matches ``pkg/.git/HEAD``)

Relative paths and patterns use forward slashes. An excluded directory
hides its whole subtree from both sync passes.
"""

import fnmatch
from collections.abc import Iterable, Sequence

from ..utils import to_posix_relative


def normalize_pattern(pattern: str) -> str:
    """Normalize a user supplied pattern.

    Examples:
        >>> normalize_pattern("build/")
        'build'
        >>> normalize_pattern("vendor\\\\cache")
        'vendor/cache'
    """
    return to_posix_relative(pattern).rstrip("/")


def matches_pattern(relative_path: str, pattern: str) -> bool:
    """Check a single pattern against a forward-slash relative path.

    Examples:
        >>> matches_pattern("foo/bar.tmp", "*.tmp")
        True
        >>> matches_pattern("node_modules/pkg/index.js", "node_modules")
        True
        >>> matches_pattern("foo/.gitignore", ".git")
        False
    """
    base_name = relative_path.rsplit("/", 1)[-1]
    if fnmatch.fnmatchcase(base_name, pattern):
        return True
    if relative_path == pattern:
        return True
    if relative_path.startswith(pattern + "/"):
        return True
    return f"/{pattern}/" in relative_path


def is_excluded(relative_path: str, is_dir: bool, patterns: Iterable[str]) -> bool:
    """Check whether a relative path is excluded by any pattern.

    Args:
        relative_path: Path relative to the tree root
        is_dir: Whether the path is a directory (the rules are the same for
            files and directories; callers use it to cut subtrees)
        patterns: Exclude patterns

    Returns:
        True if the first matching pattern excludes the path
    """
    path = to_posix_relative(relative_path).strip("/")
    if not path or path == ".":
        return False
    for pattern in patterns:
        pattern = normalize_pattern(pattern)
        if pattern and matches_pattern(path, pattern):
            return True
    return False


class ExcludeMatcher:
    """Exclude patterns bound for repeated matching during a tree walk.

    Examples:
        >>> matcher = ExcludeMatcher([".git", "*.tmp"])
        >>> matcher.is_excluded("src/.git", is_dir=True)
        True
        >>> matcher.is_excluded("src/main.py")
        False
    """

    def __init__(self, patterns: Sequence[str] = ()):
        """Initialize matcher.

        Args:
            patterns: Exclude patterns in the order given by the user
        """
        self.patterns: list[str] = [
            p for p in (normalize_pattern(p) for p in patterns) if p
        ]

    def is_excluded(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check whether a relative path is excluded."""
        if not self.patterns:
            return False
        return is_excluded(relative_path, is_dir, self.patterns)
