"""Look commands: cat (export), import and rm."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from lookshift.cli.rich_logging import configure_rich_logging, console, log_level, print_error
from lookshift.config.loader import load_config
from lookshift.content.looks import ImportAction, LookService, trim_look
from lookshift.content.palettes import ColorPaletteRewriter
from lookshift.content.reconciler import LookReconciler
from lookshift.content.resolver import IdentityResolver, MatchPolicy
from lookshift.exceptions import (
    ConfigError,
    ConflictError,
    NotFoundError,
    RemoteError,
    SerializationError,
    ValidationError,
)
from lookshift.export.path_utils import look_file_name
from lookshift.export.serializer import ContentSerializer, FileFormat, format_for_path
from lookshift.looker.client import LookerClient
from lookshift.looker.store import LookStore
from lookshift.messenger import Messenger

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_VALIDATION_ERROR = 3
EXIT_API_ERROR = 4
EXIT_INTERRUPTED = 130


def build_service(config: Path | None, messenger: Messenger | None = None) -> LookService:
    """Wire a LookService against the instance described by the configuration.

    Raises:
        ConfigError: If the configuration is invalid or credentials are missing
    """
    cfg = load_config(config)
    if not cfg.looker.client_id or not cfg.looker.client_secret:
        raise ConfigError(
            "Missing credentials - set LOOKSHIFT_CLIENT_ID and LOOKSHIFT_CLIENT_SECRET"
        )

    store = LookStore(LookerClient.from_config(cfg.looker))
    messenger = messenger or Messenger()
    rewriter = ColorPaletteRewriter(store)
    resolver = IdentityResolver(store, MatchPolicy(cfg.imports.match_policy))
    reconciler = LookReconciler(store, resolver, rewriter, messenger)
    return LookService(store, rewriter, reconciler, messenger)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Translate lookshift exceptions into CLI exit codes."""
    try:
        yield
    except typer.Exit:
        raise
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(EXIT_GENERAL_ERROR) from None
    except NotFoundError as e:
        print_error(str(e))
        raise typer.Exit(EXIT_NOT_FOUND) from None
    except (ConflictError, ValidationError, SerializationError) as e:
        print_error(str(e))
        raise typer.Exit(EXIT_VALIDATION_ERROR) from None
    except RemoteError as e:
        print_error(f"Looker API error: {e}")
        raise typer.Exit(EXIT_API_ERROR) from None
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise typer.Exit(EXIT_INTERRUPTED) from None
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(EXIT_GENERAL_ERROR) from None


def cat(
    look_id: str,
    config: Path | None = None,
    directory: Path | None = None,
    plans: bool = False,
    trim: bool = False,
    file_format: FileFormat = FileFormat.JSON,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Export a look to stdout or to a file in ``directory``.

    Exit codes:
        0: Success
        1: General or configuration error
        2: Look not found
        3: Output could not be written
        4: Looker API error
    """
    configure_rich_logging(level=log_level(verbose, debug), show_time=debug, show_path=debug)

    with exit_on_error():
        service = build_service(config)
        data = service.cat_look(look_id, plans=plans)
        if trim:
            data = trim_look(data)

        serializer = ContentSerializer(file_format)
        if directory is None:
            # Use print() so the export goes to stdout
            print(serializer.dumps(data), end="")
            return

        directory.mkdir(parents=True, exist_ok=True)
        path = directory / look_file_name(data, serializer.extension)
        serializer.write(path, data)
        console.print(f"Wrote look {data.get('id')} to {path}", markup=False, highlight=False)


def import_(
    file: Path,
    folder_id: str,
    config: Path | None = None,
    force: bool = False,
    plans: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Import a look from an export file into a folder.

    Exit codes:
        0: Success
        1: General or configuration error
        2: Folder or look not found
        3: Invalid file or conflicting content
        4: Looker API error
    """
    configure_rich_logging(level=log_level(verbose, debug), show_time=debug, show_path=debug)

    with exit_on_error():
        source = ContentSerializer(format_for_path(file)).read(file)
        messenger = Messenger()
        service = build_service(config, messenger)

        if dry_run:
            plan = service.plan_import(source, folder_id, force=force)
            messenger.info(plan.describe())
            if plan.action is ImportAction.CONFLICT:
                raise typer.Exit(EXIT_VALIDATION_ERROR)
            return

        service.import_look(source, folder_id, force=force, plans=plans)


def rm(
    look_id: str,
    config: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Delete a look."""
    configure_rich_logging(level=log_level(verbose, debug), show_time=debug, show_path=debug)

    with exit_on_error():
        messenger = Messenger()
        service = build_service(config, messenger)
        service.store.delete_look(look_id)
        messenger.ok(f"Deleted look {look_id}")
