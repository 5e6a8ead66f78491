"""
Settings Switch runtime settings.

Resolved from SSW_* environment variables. Only the CLI reads these; the
registry is always constructed with explicit paths.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from settings_switch.core.exceptions import ConfigurationError

DEFAULT_HOME_DIR = "~/.settings-switch"
DEFAULT_TARGET_PATH = "~/.claude/settings.json"
DEFAULT_BACKUP_SUFFIX = ".backup"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean value '{value}'",
        env_var=name,
        details={"expected": "true/false"},
    )


class SwitchSettings(BaseModel):
    """Filesystem layout and behaviour switches for one installation."""

    home_dir: Path = Field(description="Directory holding metadata and stored configs")
    target_path: Path = Field(description="Settings file that apply overwrites")
    backup_suffix: str = Field(default=DEFAULT_BACKUP_SUFFIX)
    require_target_dir: bool = Field(
        default=True,
        description="Refuse add/apply when the target's directory is missing",
    )

    @classmethod
    def from_env(cls) -> "SwitchSettings":
        """
        Build settings from the environment.

        Environment variables:
            SSW_HOME: storage directory (default ~/.settings-switch)
            SSW_TARGET: target settings file (default ~/.claude/settings.json)
            SSW_BACKUP_SUFFIX: suffix appended to the target for its backup
            SSW_REQUIRE_TARGET_DIR: true/false

        Raises:
            ConfigurationError: If a value cannot be interpreted
        """
        from settings_switch.storage.files import TEMP_SUFFIX

        suffix = _env_str("SSW_BACKUP_SUFFIX", DEFAULT_BACKUP_SUFFIX)
        if "/" in suffix or os.sep in suffix:
            raise ConfigurationError(
                "Backup suffix must not contain a path separator",
                env_var="SSW_BACKUP_SUFFIX",
            )
        if suffix == TEMP_SUFFIX:
            raise ConfigurationError(
                f"Backup suffix must not be {TEMP_SUFFIX}, which atomic writes use",
                env_var="SSW_BACKUP_SUFFIX",
            )

        return cls(
            home_dir=Path(_env_str("SSW_HOME", DEFAULT_HOME_DIR)).expanduser(),
            target_path=Path(_env_str("SSW_TARGET", DEFAULT_TARGET_PATH)).expanduser(),
            backup_suffix=suffix,
            require_target_dir=_env_bool("SSW_REQUIRE_TARGET_DIR", True),
        )


@lru_cache(maxsize=1)
def get_settings() -> SwitchSettings:
    """Get the process-wide settings (cached)."""
    return SwitchSettings.from_env()
