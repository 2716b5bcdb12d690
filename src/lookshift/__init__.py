"""lookshift - Export and import Looker looks between instances."""

__version__ = "0.1.0"


def main() -> None:
    """Main entry point for the CLI."""
    from lookshift.cli.main import app

    app()
