"""
Configuration Registry - named snapshots of the target settings file.

Manages the storage home directory with:
- config.json (metadata document: JSON array of records)
- configs/{id}.json (stored content, one file per record)

and applies records onto the external target file, keeping a single-slot
backup of whatever the target held before.
"""

import json
import logging
import uuid
from pathlib import Path

from settings_switch.core.exceptions import (
    ApplyError,
    ConfigNotFoundError,
    ConfigurationError,
    CorruptMetadataError,
    DuplicateNameError,
    EmptyNameError,
    SettingsSwitchError,
)
from settings_switch.core.models import (
    ApplyResult,
    ConfigurationRecord,
    RemoveResult,
    ValidationFailure,
)
from settings_switch.storage import (
    TEMP_SUFFIX,
    atomic_write,
    ensure_dir,
    file_exists,
    read_bytes,
    safe_copy,
)
from settings_switch.validation import validate_settings

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """
    Registry of configuration records.

    The whole collection lives in memory after open() and is re-serialized
    on every add and remove. The registry does not track which record is
    active; active_records() infers it by comparing content.
    """

    METADATA_FILE = "config.json"
    CONFIGS_DIR = "configs"
    DEFAULT_BACKUP_SUFFIX = ".backup"

    def __init__(
        self,
        home_dir: Path,
        target_path: Path,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
    ):
        """
        Initialize registry paths. Nothing is touched until open().

        Raises:
            ConfigurationError: If the backup suffix is empty, contains a path
                separator or clashes with the atomic-write temp suffix
        """
        if not backup_suffix or backup_suffix == TEMP_SUFFIX or "/" in backup_suffix:
            raise ConfigurationError(
                f"Invalid backup suffix '{backup_suffix}'",
                details={"reserved": TEMP_SUFFIX},
            )

        self._home_dir = home_dir
        self._configs_dir = home_dir / self.CONFIGS_DIR
        self._metadata_path = home_dir / self.METADATA_FILE
        self._target_path = target_path
        self._backup_path = target_path.with_name(target_path.name + backup_suffix)
        self._records: list[ConfigurationRecord] = []

    @property
    def home_dir(self) -> Path:
        return self._home_dir

    @property
    def configs_dir(self) -> Path:
        return self._configs_dir

    @property
    def metadata_path(self) -> Path:
        return self._metadata_path

    @property
    def target_path(self) -> Path:
        return self._target_path

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    def __len__(self) -> int:
        return len(self._records)

    def open(self) -> "ConfigRegistry":
        """
        Create the storage directories and load the metadata document.

        Raises:
            CorruptMetadataError: If the document exists but cannot be parsed
            StorageError: If a directory cannot be created or the document read
        """
        ensure_dir(self._home_dir)
        ensure_dir(self._configs_dir)
        self._records = self._load_records()
        logger.debug(f"Loaded {len(self._records)} configurations from {self._metadata_path}")
        return self

    def _load_records(self) -> list[ConfigurationRecord]:
        """Load records from disk, or start empty when no document exists."""
        if not file_exists(self._metadata_path):
            return []

        raw = read_bytes(self._metadata_path)
        try:
            data = json.loads(raw.decode("utf-8"))
            if data is None:
                return []
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [ConfigurationRecord.model_validate(item) for item in data]
        except ValueError as e:
            raise CorruptMetadataError(
                metadata_path=str(self._metadata_path),
                reason=str(e).splitlines()[0],
            ) from e
        except RecursionError as e:
            raise CorruptMetadataError(
                metadata_path=str(self._metadata_path),
                reason="nesting too deep",
            ) from e

    def _save_records(self) -> None:
        """Persist the whole collection atomically."""
        payload = json.dumps(
            [record.model_dump() for record in self._records],
            indent=2,
            ensure_ascii=False,
        )
        atomic_write(self._metadata_path, payload.encode("utf-8"))

    def _stored_path_for(self, config_id: str) -> Path:
        return (self._configs_dir / f"{config_id}.json").absolute()

    def add(self, source: Path, name: str, description: str = "") -> ConfigurationRecord:
        """
        Add a configuration from a file.

        Raises:
            SourceNotFoundError: If source does not exist
            See add_bytes for the remaining errors
        """
        return self.add_bytes(read_bytes(source), name, description, source=str(source))

    def add_bytes(
        self,
        content: bytes,
        name: str,
        description: str = "",
        *,
        source: str | None = None,
    ) -> ConfigurationRecord:
        """
        Add a configuration from raw content.

        Raises:
            EmptyNameError: If name is blank
            DuplicateNameError: If a record already has this name
            InvalidJSONError, NotAnObjectError: If content is not a JSON object
            StorageError: If the content or metadata cannot be written
        """
        name = name.strip()
        if not name:
            raise EmptyNameError()

        if any(record.name == name for record in self._records):
            raise DuplicateNameError(
                f"Configuration with name '{name}' already exists",
                config_name=name,
            )

        validate_settings(content, source=source or name)

        config_id = str(uuid.uuid4())
        record = ConfigurationRecord(
            id=config_id,
            name=name,
            description=description.strip(),
            file_path=str(self._stored_path_for(config_id)),
        )

        atomic_write(record.stored_path, content)
        self._records.append(record)

        try:
            self._save_records()
        except Exception:
            # Roll back to the pre-call state
            self._records.pop()
            record.stored_path.unlink(missing_ok=True)
            raise

        logger.info(f"Added configuration '{record.name}' ({record.id})")
        return record

    def get(self, identifier: str) -> ConfigurationRecord:
        """
        Resolve a record by identity, then by name.

        Raises:
            ConfigNotFoundError: If nothing matches
        """
        for record in self._records:
            if record.id == identifier:
                return record
        for record in self._records:
            if record.name == identifier:
                return record
        raise ConfigNotFoundError(
            f"Configuration not found: {identifier}",
            identifier=identifier,
        )

    def list_all(self) -> list[ConfigurationRecord]:
        """Return all records in insertion order."""
        return list(self._records)

    def names(self) -> list[str]:
        """Return all record names."""
        return [record.name for record in self._records]

    def read_content(self, identifier: str) -> bytes:
        """Return a record's stored bytes."""
        return read_bytes(self.get(identifier).stored_path)

    def remove(self, identifier: str) -> RemoveResult:
        """
        Remove a configuration.

        Metadata is persisted before the stored file is deleted, so the
        document never lists a record whose file was already removed.

        Raises:
            ConfigNotFoundError: If nothing matches
            StorageError: If the metadata cannot be written (nothing changes)
        """
        record = self.get(identifier)
        index = next(i for i, r in enumerate(self._records) if r.id == record.id)

        del self._records[index]
        try:
            self._save_records()
        except Exception:
            self._records.insert(index, record)
            raise

        orphaned_file = None
        try:
            record.stored_path.unlink(missing_ok=True)
        except OSError as e:
            orphaned_file = record.stored_path
            logger.warning(
                f"Removed '{record.name}' from metadata but could not delete {orphaned_file}: {e}"
            )

        logger.info(f"Removed configuration '{record.name}' ({record.id})")
        return RemoveResult(record=record, orphaned_file=orphaned_file)

    def apply(self, identifier: str) -> ApplyResult:
        """
        Copy a configuration onto the target file.

        The stored content is re-validated first. An existing target is
        copied to the backup slot before being overwritten; if the copy-in
        fails, the backup taken by this call is restored best-effort.

        Raises:
            ConfigNotFoundError: If nothing matches
            InvalidJSONError, NotAnObjectError: If stored content is no longer valid
            SourceNotFoundError: If the stored file is missing
            ApplyError: If the backup or the copy-in fails
        """
        record = self.get(identifier)
        content = read_bytes(record.stored_path)
        validate_settings(content, source=record.file_path)

        backup_path = None
        if file_exists(self._target_path):
            try:
                safe_copy(self._target_path, self._backup_path)
            except SettingsSwitchError as e:
                raise ApplyError(
                    f"Failed to create backup: {e}",
                    config_id=record.id,
                    config_name=record.name,
                ) from e
            backup_path = self._backup_path
            logger.debug(f"Backed up {self._target_path} to {backup_path}")

        try:
            atomic_write(self._target_path, content)
        except SettingsSwitchError as e:
            restore_error = None
            if backup_path is not None:
                try:
                    safe_copy(backup_path, self._target_path)
                except SettingsSwitchError as restore_exc:
                    restore_error = str(restore_exc)
                    logger.warning(f"Failed to restore {self._target_path} from backup: {restore_exc}")
            raise ApplyError(
                f"Failed to apply configuration: {e}",
                config_id=record.id,
                config_name=record.name,
                restore_error=restore_error,
            ) from e

        logger.info(f"Applied configuration '{record.name}' to {self._target_path}")
        return ApplyResult(record=record, target_path=self._target_path, backup_path=backup_path)

    def _validate_record(self, record: ConfigurationRecord) -> None:
        validate_settings(read_bytes(record.stored_path), source=record.file_path)

    def validate(self, identifier: str) -> ConfigurationRecord:
        """
        Validate a record's stored content without changing anything.

        Raises:
            ConfigNotFoundError: If nothing matches
            InvalidJSONError, NotAnObjectError: If the content is invalid
            SourceNotFoundError: If the stored file is missing
        """
        record = self.get(identifier)
        self._validate_record(record)
        return record

    def validate_all(self) -> list[ValidationFailure]:
        """Validate every record, collecting all failures."""
        failures = []
        for record in self._records:
            try:
                self._validate_record(record)
            except SettingsSwitchError as e:
                failures.append(ValidationFailure(record=record, error=e))
        return failures

    def active_records(self) -> list[ConfigurationRecord]:
        """
        Records whose stored content equals the current target content.

        More than one record can match when snapshots share identical bytes.
        """
        if not file_exists(self._target_path):
            return []

        current = read_bytes(self._target_path)
        matches = []
        for record in self._records:
            try:
                if read_bytes(record.stored_path) == current:
                    matches.append(record)
            except SettingsSwitchError as e:
                logger.debug(f"Skipping '{record.name}' in active check: {e}")
        return matches
