"""
Settings Switch Validation Module.

Gates every write that becomes, or already is, a target-file candidate.
"""

__all__ = [
    "validate_json_syntax",
    "validate_settings",
    "validate_settings_file",
    "is_valid_json",
]

from settings_switch.validation.validator import (
    is_valid_json,
    validate_json_syntax,
    validate_settings,
    validate_settings_file,
)
