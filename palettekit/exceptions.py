"""Custom exception hierarchy for palettekit.

Exceptions are raised only at the edges of the package: tree loaders, hotkey
parsing, configuration and recency stores. The palette controller and its
subsystems contain these failures and never raise them to the embedder.

Exception Hierarchy:
    PaletteError (base)
    ├── CommandTreeError - malformed command trees
    ├── HotkeyParseError - unparseable hotkey descriptors
    ├── ConfigurationError - settings/configuration issues
    └── StorageError - recency store operations
        ├── StorageReadError
        └── StorageWriteError

Usage:
    from palettekit.exceptions import StorageReadError

    try:
        raw = path.read_text()
    except OSError as e:
        raise StorageReadError("Failed to read recents", path=str(path)) from e
"""

from typing import Any, Optional


class PaletteError(Exception):
    """Base exception for all palettekit errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., ids, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class CommandTreeError(PaletteError):
    """A command tree is malformed (missing fields, duplicate sibling ids)."""

    def __init__(
        self,
        message: str = "Invalid command tree",
        *,
        command_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id is not None:
            context["command_id"] = command_id
        super().__init__(message, **context)


class HotkeyParseError(PaletteError):
    """A hotkey descriptor string could not be parsed."""

    def __init__(
        self,
        message: str = "Invalid hotkey",
        *,
        hotkey: Optional[str] = None,
        **context: Any,
    ) -> None:
        if hotkey is not None:
            context["hotkey"] = hotkey
        super().__init__(message, **context)


class ConfigurationError(PaletteError):
    """Configuration is invalid or missing."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        config_key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if config_key:
            context["config_key"] = config_key
        super().__init__(message, **context)


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(PaletteError):
    """Base exception for recency store operations."""

    pass


class StorageReadError(StorageError):
    """Reading from the recency store failed or returned corrupt data."""

    def __init__(
        self,
        message: str = "Failed to read recent commands",
        *,
        storage_key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if storage_key:
            context["storage_key"] = storage_key
        super().__init__(message, **context)


class StorageWriteError(StorageError):
    """Writing to the recency store failed."""

    def __init__(
        self,
        message: str = "Failed to write recent commands",
        *,
        storage_key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if storage_key:
            context["storage_key"] = storage_key
        super().__init__(message, **context)
