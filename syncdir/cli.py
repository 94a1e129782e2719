"""CLI interface for syncdir."""

import logging
import platform
import sys
from typing import Any, Optional

import click

from . import __version__
from .exceptions import SyncRuntimeError, SyncUsageError
from .output import OutputFormatter
from .sync import SyncConfig, SyncEngine

logger = logging.getLogger(__name__)

VERSION_MESSAGE = f"%(prog)s %(version)s ({sys.platform}/{platform.machine()})"

# Exit codes
EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_USAGE = 2


def _display_summary(out: OutputFormatter, stats: dict, dry_run: bool) -> None:
    """Display sync summary.

    Args:
        out: Output formatter
        stats: Statistics dictionary returned by the sync engine
        dry_run: Whether this was a dry run
    """
    if out.json_output:
        out.output_json({"dry_run": dry_run, **stats})
        return

    if out.quiet:
        return

    out.print("")
    if dry_run:
        out.success("Dry run complete!")
    else:
        out.success("Sync complete!")

    items = [
        ("Directories created", str(stats["dirs_created"])),
        ("Files copied", str(stats["copies"])),
        ("Data copied", out.format_size(stats["bytes_copied"])),
        ("Files unchanged", str(stats["skips"])),
        ("Excluded", str(stats["excluded"])),
    ]
    deletes = stats["deletes_files"] + stats["deletes_dirs"]
    if deletes > 0:
        items.append(("Files deleted", str(stats["deletes_files"])))
        items.append(("Directories deleted", str(stats["deletes_dirs"])))
    out.print_summary("Summary", items)


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output the sync summary as JSON")
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging output",
)
@click.version_option(__version__, prog_name="syncdir", message=VERSION_MESSAGE)
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, debug: bool) -> None:
    """syncdir - simple cp -r / mirroring sync for directories.

    Copies only what changed and, with --mirror, deletes what is not in
    the source.
    """
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)

    # Configure logging based on debug flag
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("syncdir").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.argument("src", type=click.Path())
@click.argument("dst", type=click.Path())
@click.option(
    "-r",
    "recursive",
    is_flag=True,
    help="Recursive (required when SRC is a directory)",
)
@click.option(
    "--mirror",
    is_flag=True,
    help="Mirror mode (delete files/dirs not present in SRC)",
)
@click.option("--dry-run", is_flag=True, help="Show actions without changing anything")
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    metavar="PATTERN",
    envvar="SYNCDIR_EXCLUDE",
    help='Exclude pattern (can repeat) e.g. ".git", "*.tmp", "node_modules"',
)
@click.option("--verbose", is_flag=True, help="Report every decision, including skips")
@click.option(
    "--checksum",
    is_flag=True,
    help="Use SHA1 to decide copy (slower, safer)",
)
@click.pass_context
def cp(
    ctx: Any,
    src: str,
    dst: str,
    recursive: bool,
    mirror: bool,
    dry_run: bool,
    excludes: tuple[str, ...],
    verbose: bool,
    checksum: bool,
) -> None:
    """Copy/sync SRC to DST.

    Only files that are missing or differ (size, or modification time by
    more than one second) are copied. Modification times are preserved.

    Examples:

        syncdir cp -r ./project /backup/project

        syncdir cp -r --mirror ./project /backup/project

        syncdir cp -r --dry-run --exclude .git --exclude "*.tmp" ./src ./dst
    """
    out: OutputFormatter = ctx.obj["out"]

    config = SyncConfig.from_options(
        recursive=recursive,
        mirror=mirror,
        dry_run=dry_run,
        verbose=verbose,
        checksum=checksum,
        excludes=excludes,
    )
    logger.debug(f"cp {src} -> {dst} with {config}")
    engine = SyncEngine(output=out)

    try:
        stats = engine.sync_paths(src, dst, config)
    except SyncUsageError as e:
        raise click.UsageError(str(e), ctx=ctx) from e
    except SyncRuntimeError as e:
        out.error(f"error: {e}")
        ctx.exit(EXIT_RUNTIME_ERROR)
        return  # Unreachable, but helps type checker
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)  # Standard exit code for SIGINT
        return

    _display_summary(out, stats, dry_run)

    if dry_run:
        out.info("[DRY-RUN] no changes were made.")


@main.command()
def version() -> None:
    """Show version."""
    message = VERSION_MESSAGE % {
        "prog": "syncdir",
        "package": "syncdir",
        "version": __version__,
    }
    click.echo(message)


@main.command(name="help")
@click.argument("topic", required=False, default=None)
@click.pass_context
def help_command(ctx: Any, topic: Optional[str]) -> None:
    """Show help for syncdir or one of its commands."""
    parent = ctx.parent
    if topic is None:
        click.echo(parent.get_help())
        return

    command = main.get_command(parent, topic)
    if command is None:
        raise click.UsageError(f"Unknown topic for help: {topic!r}", ctx=ctx)

    sub_ctx = click.Context(command, info_name=topic, parent=parent)
    click.echo(command.get_help(sub_ctx))


if __name__ == "__main__":
    main()
