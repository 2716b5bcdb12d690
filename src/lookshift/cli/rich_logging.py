"""Rich logging utilities for CLI output."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

LOOKSHIFT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# Diagnostics go to stderr so exported content can be piped from stdout
console = Console(theme=LOOKSHIFT_THEME, stderr=True)


def configure_rich_logging(
    level: int = logging.WARNING,
    show_time: bool = True,
    show_path: bool = False,
    enable_link_path: bool = False,
) -> None:
    """Configure rich logging handler for log output.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.)
        show_time: Show timestamp in log output
        show_path: Show file path in log output
        enable_link_path: Enable clickable file paths in log output
    """
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        enable_link_path=enable_link_path,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logging.basicConfig(
        level=level,
        handlers=[rich_handler],
        force=True,
    )


def log_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def print_error(message: str, console_obj: Console | None = None) -> None:
    """Print error message in red.

    Args:
        message: Error message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[bold red]✗ {escape(message)}[/bold red]", highlight=False)
