"""Console output helpers for the command-line tools."""

import functools
import sys
from typing import Any, Callable

from rich.console import Console
from rich.markup import escape

# Messages go to stderr so stdout carries only the tool's result
console = Console(stderr=True)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {escape(message)}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗[/bold red] {escape(message)}")


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Exit cleanly when the user interrupts a command."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            warning("Interrupted")
            sys.exit(130)

    return wrapper
