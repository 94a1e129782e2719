"""Tests for SyncConfig."""

import pytest

from syncdir.exceptions import SyncConfigError, SyncUsageError
from syncdir.sync.config import SyncConfig


class TestSyncConfig:
    """Tests for SyncConfig construction and validation."""

    def test_defaults(self):
        config = SyncConfig()

        assert not config.recursive
        assert not config.mirror
        assert not config.dry_run
        assert not config.verbose
        assert not config.use_checksum
        assert config.exclude_patterns == ()

    def test_patterns_are_stored_as_tuple(self):
        """Lists are normalized so the config stays hashable."""
        config = SyncConfig(exclude_patterns=[".git", "*.tmp"])

        assert config.exclude_patterns == (".git", "*.tmp")
        hash(config)

    def test_string_patterns_rejected(self):
        """A bare string would be split into characters."""
        with pytest.raises(SyncConfigError):
            SyncConfig(exclude_patterns=".git")

    def test_non_string_pattern_rejected(self):
        with pytest.raises(SyncConfigError, match="Invalid exclude pattern"):
            SyncConfig(exclude_patterns=[".git", 3])

    def test_config_error_is_usage_error(self):
        assert issubclass(SyncConfigError, SyncUsageError)

    def test_frozen(self):
        config = SyncConfig()
        with pytest.raises(AttributeError):
            config.mirror = True


class TestFromOptions:
    """Tests for SyncConfig.from_options."""

    def test_maps_cli_flags(self):
        config = SyncConfig.from_options(
            recursive=True,
            mirror=True,
            dry_run=True,
            verbose=True,
            checksum=True,
            excludes=("node_modules", "*.tmp"),
        )

        assert config.recursive
        assert config.mirror
        assert config.dry_run
        assert config.verbose
        assert config.use_checksum
        assert config.exclude_patterns == ("node_modules", "*.tmp")

    def test_no_excludes(self):
        assert SyncConfig.from_options(excludes=None).exclude_patterns == ()
