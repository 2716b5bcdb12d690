"""Shared utility functions for lookshift."""

from lookshift.utils.error_handling import is_not_found, remote_call
from lookshift.utils.paths import MISSING, get_path, is_missing

__all__ = [
    "MISSING",
    "get_path",
    "is_missing",
    "is_not_found",
    "remote_call",
]
