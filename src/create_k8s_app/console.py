"""Console output for create-k8s-app."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class Reporter:
    """User-facing output on a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize reporter.

        Args:
            console: Console to print to. Defaults to stdout.
        """
        self.console = console or Console(highlight=False)

    def line(self, message: str = "") -> None:
        """Print a line of markup, or an empty line."""
        self.console.print(message)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")

    def show_exception(self, error: BaseException) -> None:
        """Print an error payload without interpreting it as markup."""
        self.console.print(escape(repr(error)))


def cyan(text: object) -> str:
    return f"[cyan]{escape(str(text))}[/cyan]"


def green(text: object) -> str:
    return f"[green]{escape(str(text))}[/green]"
