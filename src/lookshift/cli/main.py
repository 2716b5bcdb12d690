"""Main Typer application for lookshift CLI."""

from pathlib import Path
from typing import Annotated

import typer

from lookshift import __version__
from lookshift.export.serializer import FileFormat

app = typer.Typer(
    help="lookshift - Export and import Looker looks between instances",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"lookshift version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """lookshift CLI main callback."""
    pass


@app.command()
def info(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help='Output format: "table" or "json"'),
    ] = "table",
) -> None:
    """Display Looker instance information."""
    from .commands import info as info_module

    info_module.run(config, output)


# Look command group
look_app = typer.Typer(
    help="Export, import and delete looks",
    no_args_is_help=True,
)
app.add_typer(look_app, name="look")


@look_app.command("cat")
def look_cat_cmd(
    look_id: Annotated[
        str,
        typer.Argument(help="ID of the look to export"),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", help="Directory to write the export file to (default: stdout)"),
    ] = None,
    plans: Annotated[
        bool,
        typer.Option("--plans", help="Include the look's scheduled plans"),
    ] = False,
    trim: Annotated[
        bool,
        typer.Option("--trim", help="Keep only the fields needed to import the look again"),
    ] = False,
    file_format: Annotated[
        FileFormat,
        typer.Option("--format", "-f", help="Export file format"),
    ] = FileFormat.JSON,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Export a look as JSON or YAML."""
    from .commands import look as look_module

    look_module.cat(look_id, config, directory, plans, trim, file_format, verbose, debug)


@look_app.command("import")
def look_import_cmd(
    file: Annotated[
        Path,
        typer.Argument(help="Export file to import (.json, .yaml or .yml)", exists=True),
    ],
    folder_id: Annotated[
        str,
        typer.Argument(help="ID of the destination folder"),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite a matching look in the folder"),
    ] = False,
    plans: Annotated[
        bool,
        typer.Option("--plans", help="Also import the look's scheduled plans"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would happen without making changes"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Import a look into a folder, updating a matching look when --force is given."""
    from .commands import look as look_module

    look_module.import_(file, folder_id, config, force, plans, dry_run, verbose, debug)


@look_app.command("rm")
def look_rm_cmd(
    look_id: Annotated[
        str,
        typer.Argument(help="ID of the look to delete"),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Delete a look (it moves to the trash)."""
    from .commands import look as look_module

    look_module.rm(look_id, config, verbose, debug)


if __name__ == "__main__":
    app()
