"""
Settings Switch Core Module.

Provides the record model, result types, settings and exception hierarchy.
"""

__all__ = [
    "ConfigurationRecord",
    "ApplyResult",
    "RemoveResult",
    "ValidationFailure",
    "SwitchSettings",
    "get_settings",
    # Exceptions
    "SettingsSwitchError",
    "ValidationError",
    "InvalidJSONError",
    "NotAnObjectError",
    "RegistryError",
    "EmptyNameError",
    "DuplicateNameError",
    "ConfigNotFoundError",
    "CorruptMetadataError",
    "ApplyError",
    "StorageError",
    "SourceNotFoundError",
    "ConfigurationError",
    "EditorError",
    "EditorNotFoundError",
    "EditorFailedError",
    "format_exception",
]

from settings_switch.core.exceptions import (
    ApplyError,
    ConfigNotFoundError,
    ConfigurationError,
    CorruptMetadataError,
    DuplicateNameError,
    EditorError,
    EditorFailedError,
    EditorNotFoundError,
    EmptyNameError,
    InvalidJSONError,
    NotAnObjectError,
    RegistryError,
    SettingsSwitchError,
    SourceNotFoundError,
    StorageError,
    ValidationError,
    format_exception,
)
from settings_switch.core.models import (
    ApplyResult,
    ConfigurationRecord,
    RemoveResult,
    ValidationFailure,
)
from settings_switch.core.settings import SwitchSettings, get_settings
