"""Configuration for palettekit."""

from .settings import (
    PaletteConfig,
    RecentOptions,
    get_config_dir,
    get_config_path,
    load_palette_config,
)

__all__ = [
    "PaletteConfig",
    "RecentOptions",
    "get_config_dir",
    "get_config_path",
    "load_palette_config",
]
