"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Iterable
import functools
from typing import Any, ParamSpec, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
import typer

from eimusic.application.notifications import Notification
from eimusic.config import get_logger
from eimusic.domain.errors import EiMusicError

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

NOTIFICATION_STYLES = {
    "success": ("green", "✓"),
    "info": ("blue", "ℹ"),
    "warning": ("yellow", "⚠"),
    "error": ("red", "✗"),
    "loading": ("cyan", "…"),
}


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Expected failures (``EiMusicError``: bad input, missing records, media
    errors) are logged without a traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except EiMusicError as e:
                logger.warning(f"{operation} failed: {e}")
                console.print(f"\n[bold red]✗ Erro:[/bold red] {escape(str(e))}")
                raise typer.Exit(code=1) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(
                    f"\n[bold red]✗ Erro durante {operation}:[/bold red] {escape(str(e))}"
                )
                raise typer.Exit(code=1) from e

    return wrapper


def display_notification(notification: Notification) -> None:
    """Print a notification the way the admin screens show a toast."""
    style, icon = NOTIFICATION_STYLES[notification.level]
    line = f"[bold {style}]{icon} {escape(notification.title)}[/bold {style}]"
    if notification.message:
        line += f" [dim]{escape(notification.message)}[/dim]"
    console.print(line)


def display_key_values(
    title: str,
    rows: Iterable[tuple[str, Any]],
    border_style: str = "blue",
) -> None:
    """Two-column summary panel (label, value).

    Plain values are shown literally; pass a ``Text`` to keep styling.
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column(style="green bold")
    for label, value in rows:
        if value is None or value == "":
            cell: Text | str = "-"
        elif isinstance(value, Text):
            cell = value
        else:
            cell = escape(str(value))
        table.add_row(label, cell)
    console.print(
        Panel(
            table,
            title=f"[bold]{title}[/bold]",
            border_style=border_style,
            expand=False,
        )
    )


def parse_assignments(pairs: Iterable[str], option: str = "--set") -> dict[str, str]:
    """Parse ``key=value`` strings from repeated CLI options.

    Raises:
        typer.BadParameter: For an item without ``=`` or with an empty key
    """
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(
                f"Expected key=value, got {pair!r}", param_hint=option
            )
        values[key] = value.strip()
    return values
