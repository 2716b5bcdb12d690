"""Serialization of exported looks to JSON or YAML.

JSON is the default and uses the standard library. YAML uses ruamel.yaml in
block style so exported files stay readable and diff well.
"""

from __future__ import annotations

import io
import json
from enum import StrEnum
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from lookshift.exceptions import SerializationError


class FileFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"


_SUFFIXES = {
    ".json": FileFormat.JSON,
    ".yaml": FileFormat.YAML,
    ".yml": FileFormat.YAML,
}


def format_for_path(path: Path | str) -> FileFormat:
    """Pick the file format from a path's extension.

    Raises:
        SerializationError: If the extension is not .json, .yaml or .yml
    """
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIXES[suffix]
    except KeyError:
        raise SerializationError(
            f"Unsupported file extension '{suffix}' for {path}; use .json, .yaml or .yml"
        ) from None


class ContentSerializer:
    """Converts between look dicts and JSON or YAML text."""

    def __init__(self, file_format: FileFormat | str = FileFormat.JSON) -> None:
        self.file_format = FileFormat(file_format)
        self.yaml = YAML(typ="safe", pure=True)
        self.yaml.default_flow_style = False
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 100

    @property
    def extension(self) -> str:
        return self.file_format.value

    def dumps(self, data: dict[str, Any]) -> str:
        """Serialize a dict.

        Raises:
            SerializationError: If data is not a dict or cannot be serialized
        """
        if not isinstance(data, dict):
            raise SerializationError(f"Expected dict, got {type(data).__name__}")

        if self.file_format is FileFormat.JSON:
            try:
                return json.dumps(data, indent=2, default=str) + "\n"
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Failed to serialize data to JSON: {e}") from e

        try:
            stream = io.StringIO()
            self.yaml.dump(data, stream)
            return stream.getvalue()
        except YAMLError as e:
            raise SerializationError(f"Failed to serialize data to YAML: {e}") from e

    def loads(self, text: str) -> dict[str, Any]:
        """Parse text into a dict.

        Raises:
            SerializationError: If the text is malformed or not a mapping
        """
        try:
            if self.file_format is FileFormat.JSON:
                data = json.loads(text)
            else:
                data = self.yaml.load(text)
        except (json.JSONDecodeError, YAMLError) as e:
            raise SerializationError(f"Failed to parse {self.file_format.value}: {e}") from e

        if not isinstance(data, dict):
            raise SerializationError(
                f"{self.file_format.value} must contain a mapping, got {type(data).__name__}"
            )
        return data

    def read(self, path: Path) -> dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SerializationError(f"Cannot read {path}: {e}") from e
        return self.loads(text)

    def write(self, path: Path, data: dict[str, Any]) -> None:
        text = self.dumps(data)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SerializationError(f"Cannot write {path}: {e}") from e
