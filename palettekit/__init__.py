"""
palettekit - headless command palette engine
"""

from .engine import (
    FilterEngine,
    PageStack,
    PaletteController,
    PaletteSnapshot,
    RecencyTracker,
    default_filter,
    fuzzy_score,
)
from .models import AnimationState, Command, FilterResult, GroupedCommands
from .registry import CommandRegistry

__version__ = "0.1.0"

__all__ = [
    "AnimationState",
    "Command",
    "CommandRegistry",
    "FilterEngine",
    "FilterResult",
    "GroupedCommands",
    "PageStack",
    "PaletteController",
    "PaletteSnapshot",
    "RecencyTracker",
    "default_filter",
    "fuzzy_score",
]
