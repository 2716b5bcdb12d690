"""Operator-facing messages (warnings, errors, confirmations)."""

from rich.console import Console
from rich.markup import escape


class Messenger:
    """Writes operator messages to a Rich console.

    Every method takes an optional ``console`` that overrides the default
    output for that single message. Styles are literal colors so any console
    can render them, themed or not.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _print(self, text: str, console: Console | None) -> None:
        (console or self.console).print(text, highlight=False)

    def warn(self, message: str, console: Console | None = None) -> None:
        self._print(f"[yellow]⚠ {escape(message)}[/yellow]", console)

    def error(self, message: str, console: Console | None = None) -> None:
        self._print(f"[bold red]✗ {escape(message)}[/bold red]", console)

    def ok(self, message: str, console: Console | None = None) -> None:
        self._print(f"[bold green]✓ {escape(message)}[/bold green]", console)

    def info(self, message: str, console: Console | None = None) -> None:
        self._print(f"[cyan]{escape(message)}[/cyan]", console)
