"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output and the slug location
table. Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table

from .models import PostLocation


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Published: Hello")
        >>> with handler.spinner("Uploading markdown..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message)

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; anything but yes means no.

        Args:
            question: Question to display

        Returns:
            True if the user answered yes
        """
        return typer.confirm(question, default=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Example:
            >>> with handler.spinner("Fetching table rows..."):
            ...     pass
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_locations(self, locations: Iterable[PostLocation]) -> None:
        """Display the slug/location table.

        Args:
            locations: Slugs in display order
        """
        locations = list(locations)
        if not locations:
            self.console.print("No slugs found in storage bucket or table.")
            return

        table = Table(show_edge=False, box=None, pad_edge=False)
        table.add_column("slug", min_width=32, no_wrap=True)
        table.add_column("location")

        styles = {"both": "green", "bucket": "yellow", "table": "yellow"}
        for entry in locations:
            table.add_row(escape(entry.slug), entry.location, style=styles[entry.location])

        self.console.print(table)
