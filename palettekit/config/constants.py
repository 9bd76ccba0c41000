"""
Centralized constants for palettekit.

Defaults, identifiers and announcement strings live here so the engine
modules carry no magic values.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

PALETTE_CONFIG_DIR = Path.home() / ".config" / "palettekit"
CONFIG_DIR_ENV_VAR = "PALETTEKIT_CONFIG_DIR"
CONFIG_FILE_NAME = "palette.yaml"
RECENT_FILE_NAME = "recent.json"

# =============================================================================
# PALETTE DEFAULTS
# =============================================================================

DEFAULT_HOTKEY = "mod+k"
DEFAULT_ANIMATION_DURATION_MS = 0  # 0 disables animation
DEFAULT_CLOSE_ON_SELECT = True
DEFAULT_OPEN = False

# Recent commands
DEFAULT_RECENT_ENABLED = False
DEFAULT_RECENT_MAX = 5
DEFAULT_RECENT_STORAGE_KEY = "palettekit-recent"

# =============================================================================
# ELEMENT IDENTITIES (for the rendering layer)
# =============================================================================

LIST_ID = "cmd-palette-list"
ITEM_ID_PREFIX = "cmd-palette-item"
CONTAINER_LABEL = "Command palette"

# =============================================================================
# ANNOUNCEMENTS (assistive technology live region)
# =============================================================================

ANNOUNCE_OPEN = "Command palette open"
ANNOUNCE_SELECTED = "{label} selected"
ANNOUNCE_RESULT = "{count} result"
ANNOUNCE_RESULTS = "{count} results"
