"""
Binding descriptors for the rendering layer.

Plain records the renderer reads and attaches to its own widgets. Callbacks
are ordinary function values; nothing here knows how anything is drawn.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ..config.constants import CONTAINER_LABEL, ITEM_ID_PREFIX, LIST_ID
from ..keybindings.hotkeys import KeyEvent
from ..models import Command


def item_element_id(command: Command) -> str:
    """Identity used for active-descendant and scroll-into-view targeting."""
    return f"{ITEM_ID_PREFIX}-{command.id}"


@dataclass(frozen=True)
class ContainerDescriptor:
    """Modal dialog semantics for the overlay container."""

    role: str = "dialog"
    modal: bool = True
    label: str = CONTAINER_LABEL


@dataclass(frozen=True)
class ListDescriptor:
    """Listbox semantics for the result list."""

    role: str = "listbox"
    id: str = LIST_ID


@dataclass(frozen=True)
class ItemDescriptor:
    """Selectable-option semantics for one result row."""

    id: str
    index: int
    command: Command
    selected: bool
    disabled: bool
    on_click: Callable[[], None]
    on_hover: Callable[[], None]
    role: str = "option"


@dataclass(frozen=True)
class InputDescriptor:
    """Live-search combobox semantics for the query input."""

    value: str
    expanded: bool
    active_descendant: Optional[str]
    on_change: Callable[[str], None]
    on_key_down: Callable[[KeyEvent], bool]
    controls: str = LIST_ID
    role: str = "combobox"
    autocomplete: str = "off"


@dataclass(frozen=True)
class LiveRegionDescriptor:
    """Polite live region carrying the latest announcement."""

    text: str
    live: str = "polite"
    atomic: bool = True
    visually_hidden: bool = True
