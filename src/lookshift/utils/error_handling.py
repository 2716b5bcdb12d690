"""Error handling utilities for common exception patterns."""

import inspect
from collections.abc import Callable
from functools import wraps
from logging import getLogger
from typing import Any, TypeVar

from looker_sdk import error as looker_error

from lookshift.exceptions import NotFoundError, RemoteError, RemoteQueryError

logger = getLogger(__name__)

T = TypeVar("T")


def is_not_found(exc: Exception) -> bool:
    """Check whether an SDK error is an HTTP 404."""
    error_str = str(exc)
    return "404" in error_str or "Not Found" in error_str


def remote_call(
    description: str,
    error_class: type[RemoteError] = RemoteQueryError,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator that turns Looker SDK failures into lookshift exceptions.

    The failure is logged and re-raised, chained to the SDK error. A 404 becomes
    NotFoundError; anything else becomes ``error_class``. Nothing is retried.

    Args:
        description: Message template, formatted with the call's bound arguments
        error_class: Exception raised for non-404 failures

    Returns:
        Decorated function

    Example:
        @remote_call("look({look_id})")
        def look(self, look_id: str) -> dict[str, Any]:
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except looker_error.SDKError as e:
                bound = signature.bind(*args, **kwargs)
                bound.apply_defaults()
                what = description.format(**bound.arguments)
                if is_not_found(e):
                    logger.error(f"{what} not found: {e}")
                    raise NotFoundError(f"{what} not found") from e
                logger.error(f"Error calling {what}: {e}")
                raise error_class(f"Error calling {what}: {e}") from e

        return wrapper

    return decorator
