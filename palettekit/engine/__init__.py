"""
Palette engine - headless interaction logic for a command palette.

Provides:
- PaletteController: the surface an embedding application talks to
- FilterEngine: sync/async filtering with stale-result protection
- PageStack, RecencyTracker, AnimationLifecycle: supporting state machines
"""

from .animation import AnimationLifecycle, AsyncioScheduler, Scheduler
from .controller import PaletteController, PaletteSnapshot
from .descriptors import (
    ContainerDescriptor,
    InputDescriptor,
    ItemDescriptor,
    ListDescriptor,
    LiveRegionDescriptor,
    item_element_id,
)
from .filtering import CancellationToken, FilterEngine, FilterRequest
from .focus import FocusTracker
from .pages import PageStack
from .recent import RecencyTracker
from .scoring import best_score, default_filter, fuzzy_score, group_commands

__all__ = [
    "AnimationLifecycle",
    "AsyncioScheduler",
    "CancellationToken",
    "ContainerDescriptor",
    "FilterEngine",
    "FilterRequest",
    "FocusTracker",
    "InputDescriptor",
    "ItemDescriptor",
    "ListDescriptor",
    "LiveRegionDescriptor",
    "PageStack",
    "PaletteController",
    "PaletteSnapshot",
    "RecencyTracker",
    "Scheduler",
    "best_score",
    "default_filter",
    "fuzzy_score",
    "group_commands",
    "item_element_id",
]
