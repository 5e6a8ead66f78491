"""
JSON validator for settings content.

Pure checks over raw bytes: the content must parse under the standard JSON
grammar and, for the settings file, be a JSON object at the top level.
Nothing below the top level is inspected.
"""

import json
from pathlib import Path
from typing import Any

from settings_switch.core.exceptions import (
    InvalidJSONError,
    NotAnObjectError,
    SourceNotFoundError,
    StorageError,
)

_JSON_TYPE_NAMES = {
    type(None): "null",
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity, which are not part of the JSON grammar
    raise ValueError(f"non-standard constant {name}")


def validate_json_syntax(data: bytes, *, source: str | None = None) -> Any:
    """
    Parse content as JSON and return the decoded value.

    Raises:
        InvalidJSONError: If the content is not valid JSON
    """
    try:
        # JSON text is UTF-8 without a byte-order mark; a BOM survives the
        # decode as U+FEFF and is rejected by the parser
        text = data.decode("utf-8")
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise InvalidJSONError(source=source, reason=str(e)) from e
    except RecursionError as e:
        raise InvalidJSONError(source=source, reason="nesting too deep") from e


def validate_settings(data: bytes, *, source: str | None = None) -> dict[str, Any]:
    """
    Validate that content is a JSON object.

    Args:
        data: Raw file content
        source: Label used in error details

    Returns:
        The decoded object

    Raises:
        InvalidJSONError: If the content is not valid JSON
        NotAnObjectError: If the top-level value is null, an array or a scalar
    """
    value = validate_json_syntax(data, source=source)
    if not isinstance(value, dict):
        raise NotAnObjectError(
            source=source,
            actual_type=_JSON_TYPE_NAMES.get(type(value), type(value).__name__),
        )
    return value


def validate_settings_file(path: Path) -> dict[str, Any]:
    """
    Read a file and validate it as settings content.

    Raises:
        SourceNotFoundError: If the file does not exist
        StorageError: If the file cannot be read
        InvalidJSONError, NotAnObjectError: As validate_settings
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise SourceNotFoundError(path=str(path)) from e
    except OSError as e:
        raise StorageError(
            f"Failed to read file: {e.strerror or e}", path=str(path), operation="read"
        ) from e
    return validate_settings(data, source=str(path))


def is_valid_json(data: bytes) -> bool:
    """Check JSON syntax without raising."""
    try:
        validate_json_syntax(data)
    except InvalidJSONError:
        return False
    return True
