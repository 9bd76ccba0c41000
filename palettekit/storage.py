"""
Key-value persistence boundary for recent commands.

Stores raise ``StorageError`` subclasses; callers decide how much a failure
matters. The recency tracker treats every failure as non-fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from .config.constants import RECENT_FILE_NAME
from .config.settings import get_config_dir
from .exceptions import CommandTreeError, StorageReadError, StorageWriteError
from .models import Command

logger = logging.getLogger(__name__)


@runtime_checkable
class RecentStore(Protocol):
    """What the recency tracker needs from a store."""

    def read(self, key: str) -> list[Command]: ...

    def write(self, key: str, commands: Sequence[Command]) -> None: ...


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self) -> None:
        self._data: dict[str, list[Command]] = {}

    def read(self, key: str) -> list[Command]:
        return list(self._data.get(key, []))

    def write(self, key: str, commands: Sequence[Command]) -> None:
        self._data[key] = list(commands)


class JsonFileStore:
    """
    Stores every key in one JSON document.

    File layout: ``{"<storage key>": [<command dict>, ...], ...}``
    """

    def __init__(self, path: Path | None = None):
        self.path = path or get_config_dir() / RECENT_FILE_NAME

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise StorageReadError(f"Could not load {self.path}: {e}", path=str(self.path)) from e
        if not isinstance(document, dict):
            raise StorageReadError("Recent file is not a JSON object", path=str(self.path))
        return document

    def read(self, key: str) -> list[Command]:
        entries = self._load().get(key, [])
        if not isinstance(entries, list):
            raise StorageReadError("Stored recents are not a list", storage_key=key)
        try:
            return [Command.from_dict(entry) for entry in entries]
        except CommandTreeError as e:
            raise StorageReadError(f"Corrupt recent entry: {e}", storage_key=key) from e

    def write(self, key: str, commands: Sequence[Command]) -> None:
        try:
            document = self._load()
        except StorageReadError:
            logger.warning(f"Overwriting unreadable recent file {self.path}")
            document = {}
        document[key] = [command.to_dict() for command in commands]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2, default=str) + "\n")
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Could not save {self.path}: {e}", storage_key=key) from e
