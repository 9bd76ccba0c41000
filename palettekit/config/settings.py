"""
Palette configuration.

Defaults can be set in ``~/.config/palettekit/palette.yaml``::

    hotkeys: ["mod+k", "ctrl+shift+p"]
    animation_duration_ms: 150
    close_on_select: true
    default_open: false
    recent:
      enabled: true
      max: 5
      storage_key: palettekit-recent

Explicit arguments passed to the controller always win over the file.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ..exceptions import ConfigurationError, HotkeyParseError
from ..keybindings.hotkeys import parse_hotkey
from .constants import (
    CONFIG_DIR_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_ANIMATION_DURATION_MS,
    DEFAULT_CLOSE_ON_SELECT,
    DEFAULT_HOTKEY,
    DEFAULT_OPEN,
    DEFAULT_RECENT_ENABLED,
    DEFAULT_RECENT_MAX,
    DEFAULT_RECENT_STORAGE_KEY,
    PALETTE_CONFIG_DIR,
)

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the config directory, respecting PALETTEKIT_CONFIG_DIR.

    Tests set PALETTEKIT_CONFIG_DIR to a temp directory so they never touch
    the real user configuration.
    """
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override)
    return PALETTE_CONFIG_DIR


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


@dataclass(frozen=True)
class RecentOptions:
    """Most-recently-used list settings."""

    enabled: bool = DEFAULT_RECENT_ENABLED
    max: int = DEFAULT_RECENT_MAX
    storage_key: str = DEFAULT_RECENT_STORAGE_KEY

    def __post_init__(self) -> None:
        if isinstance(self.max, bool) or not isinstance(self.max, int) or self.max < 1:
            raise ConfigurationError("recent.max must be a positive integer", config_key="recent.max")
        if not self.storage_key:
            raise ConfigurationError("recent.storage_key must not be empty", config_key="recent.storage_key")


@dataclass(frozen=True)
class PaletteConfig:
    """Everything an embedder can tune without writing code."""

    hotkeys: Tuple[str, ...] = (DEFAULT_HOTKEY,)
    animation_duration_ms: int = DEFAULT_ANIMATION_DURATION_MS
    close_on_select: bool = DEFAULT_CLOSE_ON_SELECT
    default_open: bool = DEFAULT_OPEN
    recent: RecentOptions = field(default_factory=RecentOptions)

    def __post_init__(self) -> None:
        if isinstance(self.hotkeys, str):
            object.__setattr__(self, "hotkeys", (self.hotkeys,))
        elif not isinstance(self.hotkeys, tuple):
            object.__setattr__(self, "hotkeys", tuple(self.hotkeys))

        for hotkey in self.hotkeys:
            try:
                parse_hotkey(hotkey)
            except HotkeyParseError as e:
                raise ConfigurationError(str(e), config_key="hotkeys") from e

        duration = self.animation_duration_ms
        if isinstance(duration, bool) or not isinstance(duration, (int, float)) or duration < 0:
            raise ConfigurationError(
                "animation_duration_ms must be a non-negative number",
                config_key="animation_duration_ms",
            )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PaletteConfig":
        """
        Build a config from a parsed YAML mapping.

        Raises:
            ConfigurationError: If any value is invalid
        """
        if not isinstance(raw, dict):
            raise ConfigurationError("Palette config must be a mapping")

        recent_raw = raw.get("recent") or {}
        if not isinstance(recent_raw, dict):
            raise ConfigurationError("recent must be a mapping", config_key="recent")

        hotkeys = raw.get("hotkeys", raw.get("hotkey", DEFAULT_HOTKEY))
        if not isinstance(hotkeys, (str, list, tuple)):
            raise ConfigurationError("hotkeys must be a string or list", config_key="hotkeys")

        return cls(
            hotkeys=hotkeys,
            animation_duration_ms=raw.get("animation_duration_ms", DEFAULT_ANIMATION_DURATION_MS),
            close_on_select=bool(raw.get("close_on_select", DEFAULT_CLOSE_ON_SELECT)),
            default_open=bool(raw.get("default_open", DEFAULT_OPEN)),
            recent=RecentOptions(
                enabled=bool(recent_raw.get("enabled", DEFAULT_RECENT_ENABLED)),
                max=recent_raw.get("max", DEFAULT_RECENT_MAX),
                storage_key=recent_raw.get("storage_key", DEFAULT_RECENT_STORAGE_KEY),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display/serialization."""
        return {
            "hotkeys": list(self.hotkeys),
            "animation_duration_ms": self.animation_duration_ms,
            "close_on_select": self.close_on_select,
            "default_open": self.default_open,
            "recent": {
                "enabled": self.recent.enabled,
                "max": self.recent.max,
                "storage_key": self.recent.storage_key,
            },
        }


def load_palette_config(path: Optional[Path] = None) -> PaletteConfig:
    """
    Load palette configuration from YAML.

    Returns:
        The parsed config, or defaults if the file is missing or invalid
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return PaletteConfig()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load palette config {config_path}: {e}")
        return PaletteConfig()

    if raw is None:
        return PaletteConfig()

    try:
        return PaletteConfig.from_dict(raw)
    except ConfigurationError as e:
        logger.error(f"Invalid palette config {config_path}: {e}")
        return PaletteConfig()
