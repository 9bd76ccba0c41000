"""
Palette controller.

Composes filtering, page navigation, keyboard handling, recents and the
animation lifecycle into the single surface an embedding application talks
to. The controller owns all palette state; the subsystems only compute
derived values or request transitions through its actions.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from ..config.constants import (
    ANNOUNCE_OPEN,
    ANNOUNCE_RESULT,
    ANNOUNCE_RESULTS,
    ANNOUNCE_SELECTED,
    DEFAULT_ANIMATION_DURATION_MS,
    DEFAULT_CLOSE_ON_SELECT,
    DEFAULT_HOTKEY,
)
from ..config.settings import PaletteConfig, RecentOptions
from ..keybindings.hotkeys import HotkeyListener, KeyEvent
from ..keybindings.keyboard import KeyboardController
from ..models import AnimationState, Command, FilterResult, GroupedCommands
from ..storage import JsonFileStore, RecentStore
from .animation import AnimationLifecycle, Scheduler
from .descriptors import (
    ContainerDescriptor,
    InputDescriptor,
    ItemDescriptor,
    ListDescriptor,
    LiveRegionDescriptor,
    item_element_id,
)
from .filtering import FilterEngine, FilterFn
from .focus import FocusManager, FocusTracker
from .pages import PageStack
from .recent import RecencyTracker
from .scoring import group_commands

logger = logging.getLogger(__name__)


@dataclass
class PaletteSnapshot:
    """Everything the rendering layer needs to draw one frame."""

    is_open: bool = False
    is_mounted: bool = False
    animation_state: AnimationState = AnimationState.EXITED
    query: str = ""
    filtered: list[Command] = field(default_factory=list)
    grouped: list[GroupedCommands] = field(default_factory=list)
    highlighted_index: int = 0
    is_loading: bool = False
    recent: list[Command] = field(default_factory=list)
    current_page: Optional[Command] = None
    breadcrumb: list[Command] = field(default_factory=list)
    can_go_back: bool = False
    announcement: str = ""


class PaletteController:
    """
    Drives open/query/select/navigate/announce for one palette.

    Open state is uncontrolled by default. Passing ``is_open`` switches to
    controlled mode: ``open``/``close``/``toggle`` then only report the
    desired value through ``on_open_change`` and the embedder feeds the new
    value back with ``set_open_flag``.
    """

    def __init__(
        self,
        items: Sequence[Command],
        on_select: Callable[[Command], None],
        *,
        filter_fn: Optional[FilterFn] = None,
        default_open: bool = False,
        is_open: Optional[bool] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
        hotkeys: Union[str, Sequence[str]] = DEFAULT_HOTKEY,
        close_on_select: bool = DEFAULT_CLOSE_ON_SELECT,
        animation_duration_ms: float = DEFAULT_ANIMATION_DURATION_MS,
        recent: Optional[RecentOptions] = None,
        recent_store: Optional[RecentStore] = None,
        scheduler: Optional[Scheduler] = None,
        focus: Optional[FocusManager] = None,
        on_state_change: Optional[Callable[[PaletteSnapshot], None]] = None,
        is_mac: Optional[bool] = None,
    ):
        self.on_select = on_select
        self.on_open_change = on_open_change
        self.on_state_change = on_state_change
        self.close_on_select = close_on_select
        self.focus = focus or FocusTracker()

        self._controlled = is_open is not None
        self._controlled_open = bool(is_open)
        self._internal_open = default_open
        self._query = ""
        self._highlighted_index = 0
        self._announcement = ""
        self._silent_generation = 0

        recent = recent or RecentOptions()
        self.recency = RecencyTracker(
            recent_store,
            enabled=recent.enabled,
            max_items=recent.max,
            storage_key=recent.storage_key,
        )
        self.pages = PageStack(items)
        self.animation = AnimationLifecycle(
            animation_duration_ms,
            initially_open=self.is_open,
            scheduler=scheduler,
            on_change=self._on_animation_change,
        )
        self.keyboard = KeyboardController(
            get_count=lambda: len(self.filtered_commands),
            get_index=lambda: self._highlighted_index,
            on_highlight=self.highlight,
            on_confirm=self._confirm_index,
            on_dismiss=self.close,
        )
        self.hotkey_listener = HotkeyListener(hotkeys, on_trigger=self.toggle, is_mac=is_mac)
        self.filter_engine = FilterEngine(filter_fn, on_change=self._on_filter_change)

        self._refilter(announce=False)

    @classmethod
    def from_config(
        cls,
        items: Sequence[Command],
        on_select: Callable[[Command], None],
        config: Optional[PaletteConfig] = None,
        **overrides,
    ) -> "PaletteController":
        """
        Build a controller from a ``PaletteConfig``; keyword overrides win.

        With recents enabled and no ``recent_store`` override, recents persist
        to ``recent.json`` in the config directory.
        """
        config = config or PaletteConfig()
        options = {
            "hotkeys": config.hotkeys,
            "animation_duration_ms": config.animation_duration_ms,
            "close_on_select": config.close_on_select,
            "default_open": config.default_open,
            "recent": config.recent,
        }
        options.update(overrides)
        recent = options["recent"]
        if recent is not None and recent.enabled and options.get("recent_store") is None:
            options["recent_store"] = JsonFileStore()
        return cls(items, on_select, **options)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_controlled(self) -> bool:
        return self._controlled

    @property
    def is_open(self) -> bool:
        return self._controlled_open if self._controlled else self._internal_open

    @property
    def is_mounted(self) -> bool:
        return self.animation.is_mounted

    @property
    def animation_state(self) -> AnimationState:
        return self.animation.state

    @property
    def query(self) -> str:
        return self._query

    @property
    def highlighted_index(self) -> int:
        return self._highlighted_index

    @property
    def filtered_commands(self) -> list[Command]:
        return self.filter_engine.commands

    @property
    def grouped_commands(self) -> list[GroupedCommands]:
        return group_commands(self.filter_engine.commands)

    @property
    def highlighted_command(self) -> Optional[Command]:
        commands = self.filter_engine.commands
        if 0 <= self._highlighted_index < len(commands):
            return commands[self._highlighted_index]
        return None

    @property
    def is_loading(self) -> bool:
        return self.filter_engine.is_loading

    @property
    def recent_commands(self) -> list[Command]:
        """Recents, shown only at the root page with an empty query."""
        if self.pages.can_go_back or self._query:
            return []
        return self.recency.items

    @property
    def current_page(self) -> Optional[Command]:
        return self.pages.current_page

    @property
    def breadcrumb(self) -> list[Command]:
        return self.pages.breadcrumb

    @property
    def can_go_back(self) -> bool:
        return self.pages.can_go_back

    @property
    def announcement(self) -> str:
        return self._announcement

    @property
    def state(self) -> PaletteSnapshot:
        commands = list(self.filter_engine.commands)
        return PaletteSnapshot(
            is_open=self.is_open,
            is_mounted=self.is_mounted,
            animation_state=self.animation_state,
            query=self._query,
            filtered=commands,
            grouped=group_commands(commands),
            highlighted_index=self._highlighted_index,
            is_loading=self.is_loading,
            recent=self.recent_commands,
            current_page=self.current_page,
            breadcrumb=self.breadcrumb,
            can_go_back=self.can_go_back,
            announcement=self._announcement,
        )

    def _notify(self) -> None:
        if self.on_state_change:
            self.on_state_change(self.state)

    # ------------------------------------------------------------------
    # Internal transitions
    # ------------------------------------------------------------------

    def _refilter(self, announce: bool = True) -> FilterResult:
        if not announce:
            # Checked when the result settles, which may be after this returns
            self._silent_generation = self.filter_engine.generation + 1
        return self.filter_engine.filter(self.pages.current_items, self._query)

    def _on_filter_change(self, result: FilterResult) -> None:
        if result.is_loading:
            self._notify()
            return

        # A settled result is a new list; indices into the old one mean nothing
        self._highlighted_index = 0
        if self.is_open and self.filter_engine.generation != self._silent_generation:
            count = len(result.commands)
            template = ANNOUNCE_RESULT if count == 1 else ANNOUNCE_RESULTS
            self._announcement = template.format(count=count)
        self._notify()

    def _on_animation_change(self, state: AnimationState) -> None:
        self._notify()

    def _apply_open(self, value: bool) -> None:
        was_open = self.is_open
        if self._controlled:
            self._controlled_open = value
        else:
            self._internal_open = value
        if value == was_open:
            return

        logger.debug(f"Palette {'opened' if value else 'closed'}")
        if value:
            self._announcement = ANNOUNCE_OPEN
        self.animation.transition(value)
        self._notify()

    def _set_open(self, value: bool) -> None:
        if self._controlled:
            if self.on_open_change:
                self.on_open_change(value)
            return
        self._apply_open(value)

    def _confirm_index(self, index: int) -> None:
        commands = self.filter_engine.commands
        if 0 <= index < len(commands) and not commands[index].disabled:
            self.select(commands[index])

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def set_open_flag(self, is_open: bool) -> None:
        """Feed the externally controlled open flag back in."""
        self._apply_open(is_open)

    def open(self) -> None:
        if not self.is_open:
            self.focus.save()
        self._set_open(True)

    def close(self) -> None:
        self._query = ""
        self._highlighted_index = 0
        self.pages.reset()
        self._refilter(announce=False)
        self.focus.restore()
        self._set_open(False)
        self._notify()

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def set_query(self, text: str) -> None:
        self._query = text
        self._highlighted_index = 0
        self._refilter()
        self._notify()

    def highlight(self, index: int) -> None:
        """Highlight ``index``; out-of-range indices are ignored."""
        if not 0 <= index < len(self.filter_engine.commands):
            return
        self._highlighted_index = index
        self._notify()

    def select(self, command: Command) -> bool:
        """
        Select a command.

        Branches navigate into their children and never reach ``on_select``.
        Leaves are recorded as recent, passed to ``on_select`` and, unless
        ``close_on_select`` is off, close the palette.

        Returns:
            False when nothing happened (disabled command)
        """
        if command.disabled:
            logger.debug(f"Ignoring selection of disabled command {command.id!r}")
            return False

        if command.is_branch:
            return self.go_to_page(command)

        self._announcement = ANNOUNCE_SELECTED.format(label=command.label)
        self.recency.add(command)
        self.on_select(command)

        if self.close_on_select:
            self.close()
        else:
            self._notify()
        return True

    def go_to_page(self, command: Command) -> bool:
        """Enter a branch; returns False for commands without children."""
        if not self.pages.push_page(command):
            return False
        self._query = ""
        self._highlighted_index = 0
        self._refilter()
        self._notify()
        return True

    def go_back(self) -> bool:
        if not self.pages.pop_page():
            return False
        self._highlighted_index = 0
        self._refilter()
        self._notify()
        return True

    def set_items(self, items: Sequence[Command]) -> None:
        """Replace the root command list (e.g. from a registry update)."""
        self.pages.root_items = list(items)
        self._highlighted_index = 0
        self._refilter()
        self._notify()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> bool:
        """Handle a key typed into the palette input; True if consumed."""
        return self.keyboard.handle_key(event) is not None

    def handle_global_key(self, event: KeyEvent) -> bool:
        """Handle a key anywhere in the host; True if it toggled the palette."""
        return self.hotkey_listener.handle(event)

    async def wait_for_filter(self) -> None:
        """Wait for pending asynchronous filtering to settle."""
        await self.filter_engine.wait_settled()

    def dispose(self) -> None:
        """Cancel pending timers; call when the host tears the palette down."""
        self.animation.cancel()

    # ------------------------------------------------------------------
    # Binding descriptors
    # ------------------------------------------------------------------

    def container_descriptor(self) -> ContainerDescriptor:
        return ContainerDescriptor()

    def list_descriptor(self) -> ListDescriptor:
        return ListDescriptor()

    def item_descriptor(self, index: int, command: Command) -> ItemDescriptor:
        return ItemDescriptor(
            id=item_element_id(command),
            index=index,
            command=command,
            selected=index == self._highlighted_index,
            disabled=command.disabled,
            on_click=lambda: self.select(command),
            on_hover=lambda: self.highlight(index),
        )

    def input_descriptor(self) -> InputDescriptor:
        highlighted = self.highlighted_command
        return InputDescriptor(
            value=self._query,
            expanded=self.is_open,
            active_descendant=item_element_id(highlighted) if highlighted else None,
            on_change=self.set_query,
            on_key_down=self.handle_key,
        )

    def live_region_descriptor(self) -> LiveRegionDescriptor:
        return LiveRegionDescriptor(text=self._announcement)
