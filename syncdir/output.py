"""Output formatting for the syncdir CLI."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from .utils import format_size as _format_size


class OutputFormatter:
    """Formats and prints messages, tables and JSON for the CLI.

    Regular messages go to stdout, warnings and errors to stderr. In quiet
    mode only errors and JSON output are printed.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            json_output: Whether results should be printed as JSON
            quiet: Suppress non-essential output
            console: Console for regular output (defaults to stdout)
            err_console: Console for warnings and errors (defaults to stderr)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print(self, message: str = "") -> None:
        """Print a plain message."""
        if not self.quiet:
            self.console.print(message, markup=False, soft_wrap=True)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and not self.json_output:
            self.console.print(message, markup=False, soft_wrap=True)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        if not self.quiet and not self.json_output:
            self.console.print(message, style="green", markup=False, soft_wrap=True)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            self.err_console.print(
                message, style="yellow", markup=False, soft_wrap=True
            )

    def error(self, message: str) -> None:
        """Print an error message to stderr (never suppressed)."""
        self.err_console.print(
            message, style="bold red", markup=False, soft_wrap=True
        )

    def output_json(self, data: Any) -> None:
        """Print data as indented JSON."""
        self.console.print_json(json.dumps(data))

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: (label, value) rows
        """
        if self.quiet or self.json_output:
            return
        table = Table(title=title, show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in items:
            table.add_row(label, value)
        self.console.print(table)

    def format_size(self, size_bytes: int) -> str:
        """Format a byte count for display."""
        return _format_size(size_bytes)
