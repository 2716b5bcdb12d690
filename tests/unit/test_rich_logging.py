"""Unit tests for CLI logging helpers."""

import logging

from rich.console import Console

from lookshift.cli.rich_logging import LOOKSHIFT_THEME, log_level, print_error


def test_log_level() -> None:
    assert log_level(verbose=False, debug=False) == logging.WARNING
    assert log_level(verbose=True, debug=False) == logging.INFO
    assert log_level(verbose=True, debug=True) == logging.DEBUG
    assert log_level(verbose=False, debug=True) == logging.DEBUG


def test_print_error_escapes_markup() -> None:
    out = Console(theme=LOOKSHIFT_THEME, record=True, width=120)

    print_error("bad [bold]value[/bold]", console_obj=out)

    assert "✗ bad [bold]value[/bold]" in out.export_text()
