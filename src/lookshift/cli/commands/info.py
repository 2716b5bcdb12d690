"""Info command implementation for Looker instance information."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from lookshift.cli.rich_logging import LOOKSHIFT_THEME, console, print_error
from lookshift.config.loader import load_config
from lookshift.config.models import ConnectionStatus
from lookshift.exceptions import ConfigError
from lookshift.looker.client import LookerClient


def status_table(status: ConnectionStatus) -> Table:
    """Two-column summary of a successful connection."""
    table = Table(title="Looker instance", show_header=False, title_justify="left")
    table.add_column(style="bold")
    table.add_column()
    table.add_row("URL", status.instance_url or "-")
    table.add_row("Version", status.looker_version or "-")
    table.add_row("API", status.api_version or "-")
    if status.user_email:
        table.add_row("User", f"{status.user_email} ({status.user_id})")
    else:
        table.add_row("User", status.user_id or "-")
    table.add_row("Status", "[success]connected[/success]")
    return table


def show_status(status: ConnectionStatus, output: str) -> None:
    """Write the connection status to stdout as JSON or as a table."""
    if output == "json":
        # Use print() for JSON to ensure it goes to stdout
        print(status.model_dump_json(indent=2))
        return

    if not status.connected:
        print_error(f"Could not connect: {status.error_message}")
        console.print("  - Verify LOOKSHIFT_CLIENT_ID and LOOKSHIFT_CLIENT_SECRET are set")
        console.print("  - Ensure api_url points at the instance's API port")
        return

    Console(theme=LOOKSHIFT_THEME).print(status_table(status))


def run(config: Path | None, output: str) -> None:
    """
    Connect to Looker instance and display information.

    Args:
        config: Optional path to config file
        output: Output format ("table" or "json")
    """
    try:
        try:
            cfg = load_config(config)
        except ConfigError as e:
            print_error(f"Configuration error: {e}")
            console.print("\n[bold]Troubleshooting:[/bold]")
            console.print("  - Check that config file exists and is valid TOML")
            console.print("  - Ensure api_url is a valid HTTPS URL")
            raise typer.Exit(2) from None

        if not cfg.looker.client_id or not cfg.looker.client_secret:
            print_error(
                "Missing credentials - set LOOKSHIFT_CLIENT_ID and LOOKSHIFT_CLIENT_SECRET"
            )
            raise typer.Exit(3)

        status = LookerClient.from_config(cfg.looker).test_connection()
        show_status(status, output)

        if status.connected and status.authenticated:
            raise typer.Exit(0)
        raise typer.Exit(4)

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise typer.Exit(130) from None
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(1) from None
