"""
Core data models for Settings Switch.

The persisted record schema and the result types returned by registry
operations.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from settings_switch.core.exceptions import SettingsSwitchError


class ConfigurationRecord(BaseModel):
    """One named snapshot of the target settings file."""

    id: str = Field(..., description="Immutable unique identity")
    name: str = Field(..., description="Unique human name")
    description: str = ""
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    file_path: str = Field(..., description="Absolute path to the stored content")

    @property
    def stored_path(self) -> Path:
        """Path of the stored content file."""
        return Path(self.file_path)

    @property
    def short_id(self) -> str:
        """First eight characters of the identity."""
        return self.id[:8]

    def created_display(self, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Format the creation timestamp, falling back to the raw string."""
        try:
            return datetime.fromisoformat(self.created_at).strftime(fmt)
        except ValueError:
            return self.created_at


@dataclass
class ApplyResult:
    """Result of applying a configuration to the target file."""

    record: ConfigurationRecord
    target_path: Path
    backup_path: Path | None = None

    @property
    def backed_up(self) -> bool:
        return self.backup_path is not None


@dataclass
class RemoveResult:
    """Result of removing a configuration."""

    record: ConfigurationRecord
    orphaned_file: Path | None = None  # stored file that could not be deleted


@dataclass
class ValidationFailure:
    """A record paired with the error its stored content failed on."""

    record: ConfigurationRecord
    error: SettingsSwitchError

    def __str__(self) -> str:
        return f"config '{self.record.name}' ({self.record.id}): {self.error}"
