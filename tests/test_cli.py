"""Unit tests for the syncdir CLI commands."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from syncdir import __version__
from syncdir.cli import main


@pytest.fixture
def runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def source_tree(tmp_path):
    """Create a small source tree."""
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("alpha")
    (src / "sub" / "b.txt").write_text("beta")
    (src / "junk.tmp").write_text("junk")
    return src


class TestMainGroup:
    """Tests for the main CLI group."""

    def test_main_help(self, runner):
        """Test main help shows all commands."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "syncdir" in result.output
        assert "cp" in result.output
        assert "version" in result.output
        assert "help" in result.output

    def test_version_option(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert f"syncdir {__version__}" in result.output

    def test_version_command(self, runner):
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 0
        assert f"syncdir {__version__}" in result.output


class TestHelpCommand:
    """Tests for the help command."""

    def test_help_without_topic(self, runner):
        result = runner.invoke(main, ["help"])
        assert result.exit_code == 0
        assert "cp" in result.output

    def test_help_for_cp(self, runner):
        """Test help for a command shows its options."""
        result = runner.invoke(main, ["help", "cp"])
        assert result.exit_code == 0
        assert "--mirror" in result.output
        assert "--exclude" in result.output

    def test_cp_help_flag_exits_0(self, runner):
        """Test --help on a command is not a usage error."""
        result = runner.invoke(main, ["cp", "--help"])
        assert result.exit_code == 0
        assert "Copy/sync SRC to DST" in result.output

    def test_help_unknown_topic(self, runner):
        result = runner.invoke(main, ["help", "nope"])
        assert result.exit_code == 2
        assert "Unknown topic for help" in result.output


class TestCpUsageErrors:
    """Tests for invocations rejected before anything changes."""

    def test_missing_arguments(self, runner):
        result = runner.invoke(main, ["cp"])
        assert result.exit_code == 2
        assert "Missing argument" in result.output

    def test_directory_without_recursive(self, runner, source_tree, tmp_path):
        """Test a directory source requires -r."""
        dst = tmp_path / "dst"
        result = runner.invoke(main, ["cp", str(source_tree), str(dst)])
        assert result.exit_code == 2
        assert "specify -r" in result.output
        assert not dst.exists()

    def test_missing_source(self, runner, tmp_path):
        result = runner.invoke(
            main, ["cp", "-r", str(tmp_path / "missing"), str(tmp_path / "dst")]
        )
        assert result.exit_code == 2
        assert "SRC does not exist" in result.output

    def test_same_path(self, runner, source_tree):
        result = runner.invoke(main, ["cp", "-r", str(source_tree), str(source_tree)])
        assert result.exit_code == 2
        assert "same path" in result.output

    def test_destination_inside_source(self, runner, source_tree):
        """Test nested destination is refused and nothing is created."""
        dst = source_tree / "backup"
        result = runner.invoke(main, ["cp", "-r", str(source_tree), str(dst)])
        assert result.exit_code == 2
        assert "DST is inside SRC" in result.output
        assert not dst.exists()


class TestCpCommand:
    """Tests for successful cp runs."""

    def test_copy_tree(self, runner, source_tree, tmp_path):
        """Test recursive copy reports a summary."""
        dst = tmp_path / "dst"
        result = runner.invoke(main, ["cp", "-r", str(source_tree), str(dst)])

        assert result.exit_code == 0
        assert "Sync complete!" in result.output
        assert "Files copied" in result.output
        assert "Data copied" in result.output
        assert "13 B" in result.output
        assert (dst / "a.txt").read_text() == "alpha"
        assert (dst / "sub" / "b.txt").read_text() == "beta"

    def test_copy_single_file_into_directory(self, runner, source_tree, tmp_path):
        """Test a file source lands inside an existing destination directory."""
        dst = tmp_path / "dst"
        dst.mkdir()
        result = runner.invoke(main, ["cp", str(source_tree / "a.txt"), str(dst)])

        assert result.exit_code == 0
        assert (dst / "a.txt").read_text() == "alpha"

    def test_exclude_option(self, runner, source_tree, tmp_path):
        dst = tmp_path / "dst"
        result = runner.invoke(
            main,
            ["cp", "-r", "--exclude", "*.tmp", str(source_tree), str(dst)],
        )

        assert result.exit_code == 0
        assert (dst / "a.txt").exists()
        assert not (dst / "junk.tmp").exists()

    def test_exclude_from_environment(self, runner, source_tree, tmp_path):
        """Test SYNCDIR_EXCLUDE supplies whitespace separated patterns."""
        dst = tmp_path / "dst"
        result = runner.invoke(
            main,
            ["cp", "-r", str(source_tree), str(dst)],
            env={"SYNCDIR_EXCLUDE": "*.tmp sub"},
        )

        assert result.exit_code == 0
        assert (dst / "a.txt").exists()
        assert not (dst / "junk.tmp").exists()
        assert not (dst / "sub").exists()

    def test_mirror_deletes_extra_files(self, runner, source_tree, tmp_path):
        dst = tmp_path / "dst"
        (dst / "old").mkdir(parents=True)
        (dst / "old" / "stale.txt").write_text("stale")
        (dst / "extra.txt").write_text("extra")

        result = runner.invoke(
            main, ["cp", "-r", "--mirror", str(source_tree), str(dst)]
        )

        assert result.exit_code == 0
        assert "Files deleted" in result.output
        assert not (dst / "old").exists()
        assert not (dst / "extra.txt").exists()
        assert (dst / "a.txt").exists()

    def test_dry_run(self, runner, source_tree, tmp_path):
        """Test dry run narrates actions and changes nothing."""
        dst = tmp_path / "dst"
        result = runner.invoke(
            main, ["cp", "-r", "--dry-run", str(source_tree), str(dst)]
        )

        assert result.exit_code == 0
        assert "[DRY-RUN] copy: a.txt" in result.output
        assert "[DRY-RUN] copy: sub/b.txt" in result.output
        assert "Dry run complete!" in result.output
        assert "[DRY-RUN] no changes were made." in result.output
        assert not dst.exists()

    def test_verbose_reports_skips(self, runner, source_tree, tmp_path):
        dst = tmp_path / "dst"
        runner.invoke(main, ["cp", "-r", str(source_tree), str(dst)])

        result = runner.invoke(
            main, ["cp", "-r", "--verbose", str(source_tree), str(dst)]
        )

        assert result.exit_code == 0
        assert "skip (same): a.txt" in result.output
        assert "[DRY-RUN]" not in result.output

    def test_json_output(self, runner, source_tree, tmp_path):
        """Test --json prints only the statistics."""
        dst = tmp_path / "dst"
        result = runner.invoke(
            main, ["--json", "cp", "-r", str(source_tree), str(dst)]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dry_run"] is False
        assert data["copies"] == 3
        assert data["dirs_created"] == 2
        assert data["bytes_copied"] == len("alpha") + len("beta") + len("junk")

    def test_quiet_suppresses_summary(self, runner, source_tree, tmp_path):
        dst = tmp_path / "dst"
        result = runner.invoke(
            main, ["--quiet", "cp", "-r", str(source_tree), str(dst)]
        )

        assert result.exit_code == 0
        assert result.output.strip() == ""
        assert (dst / "a.txt").exists()


class TestCpRuntimeErrors:
    """Tests for failures while syncing."""

    def test_copy_failure_exits_1(self, runner, source_tree, tmp_path):
        """Test a filesystem error is reported and exits with code 1."""
        dst = tmp_path / "dst"
        with patch(
            "syncdir.sync.operations.SyncOperations.copy_file",
            side_effect=PermissionError(13, "Permission denied", "a.txt"),
        ):
            result = runner.invoke(main, ["cp", "-r", str(source_tree), str(dst)])

        assert result.exit_code == 1
        assert "error:" in result.output
        assert "Permission denied" in result.output

    def test_keyboard_interrupt(self, runner, source_tree, tmp_path):
        with patch(
            "syncdir.cli.SyncEngine.sync_paths", side_effect=KeyboardInterrupt
        ):
            result = runner.invoke(
                main, ["cp", "-r", str(source_tree), str(tmp_path / "dst")]
            )

        assert result.exit_code == 130
