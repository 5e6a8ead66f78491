"""
Settings Switch Exception Hierarchy.

Defines all custom exceptions raised by the validator, storage primitives,
registry and editor bridge. Every exception carries structured details so
the CLI can name the offending record or path.
"""

from typing import Any


class SettingsSwitchError(Exception):
    """
    Base exception for all Settings Switch errors.

    All custom exceptions inherit from this class, allowing
    generic catch blocks and consistent error handling.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        """
        Initialize a SettingsSwitchError.

        Args:
            message: Human-readable error message
            details: Optional structured data for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details."""
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(SettingsSwitchError):
    """
    Errors raised by the JSON validator.

    Raised when content is about to be stored or applied and:
    - It does not parse as standard JSON
    - Its top-level value is not a JSON object
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a ValidationError.

        Args:
            message: Human-readable error message
            source: File path or label of the validated content
            details: Optional structured data for debugging
        """
        details = details or {}
        if source:
            details["source"] = source

        super().__init__(message, details=details)
        self.source = source


class InvalidJSONError(ValidationError):
    """Raised when content is not syntactically valid JSON."""

    def __init__(
        self,
        message: str = "Invalid JSON format",
        *,
        source: str | None = None,
        reason: str | None = None,
    ):
        details = {}
        if reason:
            details["reason"] = reason
        super().__init__(message, source=source, details=details)
        self.reason = reason


class NotAnObjectError(ValidationError):
    """Raised when valid JSON has a top-level value other than an object."""

    def __init__(
        self,
        message: str = "Settings must contain a JSON object",
        *,
        source: str | None = None,
        actual_type: str | None = None,
    ):
        details = {}
        if actual_type:
            details["actual_type"] = actual_type
        super().__init__(message, source=source, details=details)
        self.actual_type = actual_type


class RegistryError(SettingsSwitchError):
    """
    Errors in registry operations.

    Raised when registry operations fail, including:
    - Configuration not found
    - Duplicate or empty names
    - Metadata corruption
    - Apply failures
    """

    def __init__(
        self,
        message: str,
        *,
        config_id: str | None = None,
        config_name: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a RegistryError.

        Args:
            message: Human-readable error message
            config_id: Identity of the configuration involved
            config_name: Name of the configuration involved
            operation: Operation being performed
            details: Optional structured data for debugging
        """
        details = details or {}
        if config_id:
            details["config_id"] = config_id
        if config_name:
            details["config_name"] = config_name
        if operation:
            details["operation"] = operation

        super().__init__(message, details=details)
        self.config_id = config_id
        self.config_name = config_name
        self.operation = operation


class EmptyNameError(RegistryError):
    """Raised when a configuration name is blank after trimming."""

    def __init__(self, message: str = "Configuration name cannot be empty"):
        super().__init__(message, operation="add")


class DuplicateNameError(RegistryError):
    """Raised when adding a configuration whose name is already taken."""

    def __init__(
        self,
        message: str = "Configuration name already exists",
        *,
        config_name: str | None = None,
    ):
        super().__init__(message, config_name=config_name, operation="add")


class ConfigNotFoundError(RegistryError):
    """Raised when no configuration matches an identity or name."""

    def __init__(
        self,
        message: str = "Configuration not found",
        *,
        identifier: str | None = None,
    ):
        details = {}
        if identifier:
            details["identifier"] = identifier
        super().__init__(message, operation="get", details=details)
        self.identifier = identifier


class CorruptMetadataError(RegistryError):
    """Raised when the persisted metadata document cannot be parsed."""

    def __init__(
        self,
        message: str = "Failed to parse configuration metadata",
        *,
        metadata_path: str | None = None,
        reason: str | None = None,
    ):
        details = {}
        if metadata_path:
            details["metadata_path"] = metadata_path
        if reason:
            details["reason"] = reason
        super().__init__(message, operation="open", details=details)
        self.metadata_path = metadata_path
        self.reason = reason


class ApplyError(RegistryError):
    """
    Raised when copying a configuration onto the target file fails.

    The original failure is the chained cause. When restoring the target
    from its backup also failed, that failure is kept in restore_error.
    """

    def __init__(
        self,
        message: str = "Failed to apply configuration",
        *,
        config_id: str | None = None,
        config_name: str | None = None,
        restore_error: str | None = None,
    ):
        details = {}
        if restore_error:
            details["restore_error"] = restore_error
        super().__init__(
            message,
            config_id=config_id,
            config_name=config_name,
            operation="apply",
            details=details,
        )
        self.restore_error = restore_error


class StorageError(SettingsSwitchError):
    """
    Errors in filesystem operations.

    Raised when reading, writing, renaming, copying or deleting a file fails.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a StorageError.

        Args:
            message: Human-readable error message
            path: File path involved
            operation: Filesystem operation being performed
            details: Optional structured data for debugging
        """
        details = details or {}
        if path:
            details["path"] = path
        if operation:
            details["operation"] = operation

        super().__init__(message, details=details)
        self.path = path
        self.operation = operation


class SourceNotFoundError(StorageError):
    """Raised when the source of a copy or read does not exist."""

    def __init__(
        self,
        message: str = "Source file does not exist",
        *,
        path: str | None = None,
    ):
        super().__init__(message, path=path, operation="read")


class ConfigurationError(SettingsSwitchError):
    """
    Errors in settings loading.

    Raised when an environment variable holds a value that cannot be used.
    """

    def __init__(
        self,
        message: str,
        *,
        env_var: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if env_var:
            details["env_var"] = env_var

        super().__init__(message, details=details)
        self.env_var = env_var


class EditorError(SettingsSwitchError):
    """Errors from the external editor bridge."""


class EditorNotFoundError(EditorError):
    """Raised when no editor program can be resolved."""

    def __init__(
        self,
        message: str = "No editor found. Set $EDITOR or install a default editor",
    ):
        super().__init__(message)


class EditorFailedError(EditorError):
    """Raised when the editor process exits with a non-zero status."""

    def __init__(
        self,
        message: str = "Editor exited with failure",
        *,
        editor: str | None = None,
        returncode: int | None = None,
    ):
        details: dict[str, Any] = {}
        if editor:
            details["editor"] = editor
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(message, details=details)
        self.editor = editor
        self.returncode = returncode


def format_exception(error: Exception) -> str:
    """
    Format an exception for user-friendly display.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, SettingsSwitchError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
