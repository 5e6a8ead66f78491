"""Tests for the JSON settings validator."""

import codecs
from pathlib import Path

import pytest

from settings_switch.core.exceptions import (
    InvalidJSONError,
    NotAnObjectError,
    SourceNotFoundError,
    ValidationError,
)
from settings_switch.validation import (
    is_valid_json,
    validate_json_syntax,
    validate_settings,
    validate_settings_file,
)


class TestValidateSettings:
    """Tests for validate_settings."""

    @pytest.mark.parametrize(
        "data",
        [b"{}", b'{"theme": "dark"}', b'  {"nested": {"a": [1, 2, null]}}\n', '{"k": "é"}'.encode()],
    )
    def test_objects_pass(self, data: bytes) -> None:
        """JSON objects are accepted and returned decoded."""
        assert isinstance(validate_settings(data), dict)

    @pytest.mark.parametrize(
        "data, actual_type",
        [
            (b"[]", "array"),
            (b'"x"', "string"),
            (b"42", "number"),
            (b"null", "null"),
            (b"true", "boolean"),
        ],
    )
    def test_non_objects_fail(self, data: bytes, actual_type: str) -> None:
        """Valid JSON that is not an object raises NotAnObjectError."""
        with pytest.raises(NotAnObjectError) as exc_info:
            validate_settings(data)
        assert exc_info.value.actual_type == actual_type

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b"",
            b"{",
            b'{"a": 1,}',
            b"{'a': 1}",
            b"\xff\xfe\x00",
            codecs.BOM_UTF8 + b"{}",
            '{"a": 1}'.encode("utf-16"),
            '{"a": 1}'.encode("utf-32"),
        ],
    )
    def test_malformed_fails(self, data: bytes) -> None:
        """Malformed content raises InvalidJSONError."""
        with pytest.raises(InvalidJSONError):
            validate_settings(data)

    def test_non_utf8_rejected(self) -> None:
        """Only UTF-8 without a byte-order mark is accepted."""
        with pytest.raises(InvalidJSONError):
            validate_settings('{"name": "caf\u00e9"}'.encode("latin-1"))
        assert validate_settings('{"name": "caf\u00e9"}'.encode("utf-8")) == {"name": "caf\u00e9"}

    def test_deep_nesting_rejected(self) -> None:
        """Nesting past the parser's limit is reported as invalid JSON."""
        data = b'{"a": ' + b"[" * 100000 + b"]" * 100000 + b"}"
        with pytest.raises(InvalidJSONError) as exc_info:
            validate_settings(data, source="deep.json")
        assert exc_info.value.reason == "nesting too deep"
        assert exc_info.value.details["source"] == "deep.json"

    def test_non_standard_constants_rejected(self) -> None:
        """NaN and Infinity are not standard JSON."""
        with pytest.raises(InvalidJSONError):
            validate_settings(b'{"x": NaN}')
        with pytest.raises(InvalidJSONError):
            validate_settings(b'{"x": -Infinity}')

    def test_errors_share_base(self) -> None:
        """Both failure kinds are ValidationErrors carrying the source."""
        with pytest.raises(ValidationError) as exc_info:
            validate_settings(b"[]", source="snapshot.json")
        assert exc_info.value.details["source"] == "snapshot.json"


class TestValidateJsonSyntax:
    """Tests for syntax-only validation."""

    def test_any_json_value_passes(self) -> None:
        """Arrays and scalars are valid JSON."""
        assert validate_json_syntax(b"[1, 2]") == [1, 2]
        assert validate_json_syntax(b"null") is None

    def test_is_valid_json(self) -> None:
        """is_valid_json never raises."""
        assert is_valid_json(b"{}") is True
        assert is_valid_json(b"{oops") is False
        assert is_valid_json(b"[" * 100000) is False


class TestValidateSettingsFile:
    """Tests for file-based validation."""

    def test_valid_file(self, temp_dir: Path) -> None:
        """A file holding an object validates."""
        path = temp_dir / "settings.json"
        path.write_bytes(b'{"a": 1}')
        assert validate_settings_file(path) == {"a": 1}

    def test_missing_file(self, temp_dir: Path) -> None:
        """A missing file raises SourceNotFoundError."""
        with pytest.raises(SourceNotFoundError):
            validate_settings_file(temp_dir / "missing.json")

    def test_invalid_file_names_path(self, temp_dir: Path) -> None:
        """Errors identify the offending file."""
        path = temp_dir / "bad.json"
        path.write_bytes(b"nope")
        with pytest.raises(InvalidJSONError) as exc_info:
            validate_settings_file(path)
        assert exc_info.value.source == str(path)
