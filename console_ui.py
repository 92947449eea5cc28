#!/usr/bin/env python3
"""
Console UI Module using Rich

Provides the console interface for Taxis: styled messages, configuration and
plan tables, progress bars and yes/no prompts.
"""

from typing import IO, Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.prompt import Confirm, InvalidResponse
from rich.table import Table

PREVIEW_LIMIT = 50


class YesNoConfirm(Confirm):
    """Confirm prompt accepting y, yes, n or no in any case, asking until answered"""

    choices = ["y", "yes", "n", "no"]
    validate_error_message = "[prompt.invalid]Please answer y, yes, n or no"

    def process_response(self, value: str) -> bool:
        value = value.strip().lower()
        if value not in self.choices:
            raise InvalidResponse(self.validate_error_message)
        return value in ("y", "yes")


class ConsoleUI:
    """Console UI handler using Rich"""

    def __init__(self, force_terminal: Optional[bool] = None, console: Optional[Console] = None):
        """Initialize console with optional terminal forcing or an existing console"""
        self.console = console or Console(force_terminal=force_terminal, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a header with optional subtitle"""
        if subtitle:
            header_text = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            header_text = f"[bold]{title}[/bold]"

        panel = Panel(header_text, box=box.ROUNDED, padding=(0, 1))
        self.console.print(panel)

    # Configuration display
    def show_configuration(self, config: dict[str, Any]):
        """Display configuration in a formatted table"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Setting", style="cyan dim", min_width=20, justify="right")
        table.add_column("Value", style="cyan", min_width=30)

        for key, value in config.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            table.add_row(key, str(value))

        self.console.print(table)

    # Progress bar
    def create_progress(self):
        """Create a Rich progress context manager for batch operations"""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )

    # File operation displays
    def show_file_operations_preview(self, operations: dict[str, str], title: str = "Transfer Plan"):
        """Show a preview of planned source -> target pairs in a table"""
        if not operations:
            self.print_info("No operations to preview")
            return

        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Source", style="white dim", min_width=30)
        table.add_column("→", justify="center", width=3)
        table.add_column("Target", style="white", min_width=30)

        for source, target in list(operations.items())[:PREVIEW_LIMIT]:
            table.add_row(escape(source), "→", escape(target))

        self.console.print(table)
        if len(operations) > PREVIEW_LIMIT:
            self.console.print(f"[white dim]  ... and {len(operations) - PREVIEW_LIMIT} more[/white dim]")
        self.console.print()

    def show_operation_summary(self, successful: list[str], failed: list[tuple[str, str]], operation_name: str):
        """Show summary of completed operations"""
        if successful:
            self.print_success(f"Successfully {operation_name} {len(successful)} files")

        if failed:
            self.print_error(f"{len(failed)} files failed:")
            for filename, error in failed:
                self.console.print(f"  • {filename}: {error}", style="red dim", markup=False)

    def show_extension_counts(self, counts: dict[str, int], title: str = "Extensions"):
        """Show file counts per extension, most common first"""
        if not counts:
            self.print_info("No files found")
            return

        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Extension", style="cyan")
        table.add_column("Files", style="white", justify="right")

        for ext, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
            table.add_row(ext or "(none)", str(count))

        self.console.print(table)

    # Interactive prompts
    def confirm(self, question: str, stream: Optional[IO[str]] = None) -> bool:
        """Ask a yes/no question, repeating until y, yes, n or no is given"""
        return YesNoConfirm.ask(f"{escape(question)} \\[y/n]", console=self.console, show_choices=False, stream=stream)
