"""File naming for exported looks."""

from __future__ import annotations

import unicodedata
from typing import Any

from pathvalidate import Platform, sanitize_filename


def look_file_name(data: dict[str, Any], extension: str = "json", max_length: int = 255) -> str:
    """Build the export file name ``Look_<id>_<title>.<extension>``.

    Characters that are invalid on any platform are replaced with underscores.

    Args:
        data: Look as returned by the API
        extension: File extension without the dot
        max_length: Maximum length of the result

    Returns:
        Sanitized file name
    """
    normalized = unicodedata.normalize("NFC", f"Look_{data.get('id')}_{data.get('title') or ''}")
    stem = sanitize_filename(
        normalized,
        platform=Platform.WINDOWS,
        max_len=max_length - len(extension) - 1,
        replacement_text="_",
    )
    return f"{stem}.{extension}"
