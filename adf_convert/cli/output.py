"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI status output.
Status messages go to stderr so converted documents written to stdout
stay clean. Supports verbosity levels and the --no-color flag.
"""

from collections import Counter
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..engine.diagnostics import Diagnostic


class OutputHandler:
    """Handles all terminal status output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance writing to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Converted page.json")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green (only if verbosity >= 1).

        Args:
            message: Success message to display
        """
        if self.verbosity >= 1:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_diagnostics_summary(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Display a table of the diagnostics reported during conversion.

        Only shown when verbosity >= 1; warnings are also logged as they happen.

        Args:
            diagnostics: Diagnostics in the order they were reported
        """
        if self.verbosity < 1:
            return

        if not diagnostics:
            self.console.print("[green]No diagnostics reported[/green]")
            return

        counts = Counter(
            (d.code.value, d.level_name, d.node_type or "", d.mark_type or "")
            for d in diagnostics
        )
        table = Table(title="Diagnostics")
        table.add_column("Code")
        table.add_column("Level")
        table.add_column("Node type")
        table.add_column("Mark type")
        table.add_column("Count", justify="right")
        for (code, level, node_type, mark_type), count in counts.items():
            table.add_row(code, level, escape(node_type), escape(mark_type), str(count))
        self.console.print(table)
