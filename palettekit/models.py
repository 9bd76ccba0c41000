"""
Data model for the palette engine.

Commands form a possibly-nested tree. Only the direct children of the active
level are ever shown at once; nothing here flattens across levels.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import CommandTreeError

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = {"id", "label", "keywords", "group", "disabled", "children", "data"}


@dataclass(frozen=True)
class Command:
    """A selectable (leaf) or navigable (branch) node in the command tree."""

    id: str  # Unique among siblings, stable across sessions
    label: str  # Display string and default search field
    keywords: tuple[str, ...] = ()  # Extra search terms
    group: Optional[str] = None  # Display clustering only
    disabled: bool = False  # Shown but never selectable
    children: tuple["Command", ...] = ()  # Non-empty makes this a branch
    data: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        # Accept lists from callers; store tuples so commands stay hashable
        if not isinstance(self.keywords, tuple):
            object.__setattr__(self, "keywords", tuple(self.keywords))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_branch(self) -> bool:
        return len(self.children) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary (children included)."""
        result: dict[str, Any] = {"id": self.id, "label": self.label}
        if self.keywords:
            result["keywords"] = list(self.keywords)
        if self.group is not None:
            result["group"] = self.group
        if self.disabled:
            result["disabled"] = True
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.data:
            result["data"] = dict(self.data)
        return result

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Command":
        """
        Build a command (and its subtree) from a mapping.

        Keys other than the known fields are kept in ``data`` so that
        embedder payloads survive a round trip through storage.

        Raises:
            CommandTreeError: If required fields are missing or malformed
        """
        if not isinstance(raw, Mapping):
            raise CommandTreeError(f"Expected a mapping, got {type(raw).__name__}")

        command_id = raw.get("id")
        label = raw.get("label")
        if not isinstance(command_id, str) or not command_id:
            raise CommandTreeError("Command is missing a string 'id'", label=label)
        if not isinstance(label, str):
            raise CommandTreeError("Command is missing a string 'label'", command_id=command_id)

        keywords = raw.get("keywords") or ()
        if not isinstance(keywords, (list, tuple)) or not all(isinstance(k, str) for k in keywords):
            raise CommandTreeError("'keywords' must be a list of strings", command_id=command_id)

        group = raw.get("group")
        if group is not None and not isinstance(group, str):
            raise CommandTreeError("'group' must be a string", command_id=command_id)

        children_raw = raw.get("children") or ()
        if not isinstance(children_raw, (list, tuple)):
            raise CommandTreeError("'children' must be a list", command_id=command_id)

        data = dict(raw.get("data") or {})
        data.update({k: v for k, v in raw.items() if k not in _KNOWN_FIELDS})

        return cls(
            id=command_id,
            label=label,
            keywords=tuple(keywords),
            group=group,
            disabled=bool(raw.get("disabled", False)),
            children=tuple(cls.from_dict(child) for child in children_raw),
            data=data,
        )


@dataclass(frozen=True)
class PageFrame:
    """One level of drill-down: the branch and the children it exposes."""

    command: Command
    items: tuple[Command, ...]


@dataclass(frozen=True)
class GroupedCommands:
    """A display cluster of commands sharing the same group (None = ungrouped)."""

    group: Optional[str]
    commands: list[Command]


@dataclass
class FilterResult:
    """Visible, relevance-ordered commands plus the loading flag."""

    commands: list[Command] = field(default_factory=list)
    is_loading: bool = False


class AnimationState(str, Enum):
    """Mount/transition states of the overlay."""

    ENTERING = "entering"
    ENTERED = "entered"
    EXITING = "exiting"
    EXITED = "exited"

    @property
    def is_mounted(self) -> bool:
        return self is not AnimationState.EXITED


def commands_from_list(raw: Iterable[Mapping[str, Any]]) -> list[Command]:
    """Build and validate a root command list from raw mappings."""
    commands = [Command.from_dict(item) for item in raw]
    validate_tree(commands)
    return commands


def validate_tree(commands: Sequence[Command], parent: Optional[Command] = None) -> None:
    """
    Check that ids are unique among siblings at every level.

    Raises:
        CommandTreeError: On the first duplicate sibling id found
    """
    seen: set[str] = set()
    for command in commands:
        if command.id in seen:
            raise CommandTreeError(
                "Duplicate command id among siblings",
                command_id=command.id,
                parent=parent.id if parent else None,
            )
        seen.add(command.id)
        if command.children:
            validate_tree(command.children, parent=command)
