"""Optional-path access into nested API payloads."""

from collections.abc import Mapping
from typing import Any, Final


class _Missing:
    """Marker for a path step that is not present."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def get_path(obj: Any, *keys: str) -> Any:
    """Walk ``keys`` into nested mappings.

    Returns MISSING as soon as a step is absent or the current value is not a
    mapping. A key holding ``None`` counts as absent.

    Example:
        >>> get_path({"query": {"vis_config": {"type": "line"}}}, "query", "vis_config", "type")
        'line'
        >>> get_path({"query": 12}, "query", "vis_config")
        MISSING
    """
    current = obj
    for key in keys:
        if not isinstance(current, Mapping):
            return MISSING
        current = current.get(key)
        if current is None:
            return MISSING
    return current


def is_missing(value: Any) -> bool:
    return value is MISSING
