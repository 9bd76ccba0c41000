"""Load command trees from YAML or JSON files."""

import json
import logging
from pathlib import Path
from typing import Sequence

import yaml

from .exceptions import CommandTreeError
from .models import Command, commands_from_list

logger = logging.getLogger(__name__)


def load_command_tree(path: Path) -> list[Command]:
    """
    Load and validate a root command list.

    The file holds either a list of commands or a mapping with a
    ``commands`` list. ``.json`` files are parsed as JSON, anything else as
    YAML.

    Raises:
        CommandTreeError: If the file cannot be read or the tree is invalid
    """
    try:
        text = path.read_text()
    except OSError as e:
        raise CommandTreeError(f"Could not read {path}: {e}", path=str(path)) from e

    try:
        raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CommandTreeError(f"Could not parse {path}: {e}", path=str(path)) from e

    if isinstance(raw, dict):
        raw = raw.get("commands")
    if not isinstance(raw, list):
        raise CommandTreeError("Expected a list of commands", path=str(path))

    commands = commands_from_list(raw)
    logger.debug(f"Loaded {len(commands)} root command(s) from {path}")
    return commands


def resolve_page(commands: Sequence[Command], path: Sequence[str]) -> list[Command]:
    """
    Follow branch ids from the root and return the branches visited.

    Raises:
        CommandTreeError: If an id is missing at its level or is not a branch
    """
    visited: list[Command] = []
    level = list(commands)
    for command_id in path:
        match = next((c for c in level if c.id == command_id), None)
        if match is None:
            raise CommandTreeError("No such command at this level", command_id=command_id)
        if not match.is_branch:
            raise CommandTreeError("Command has no children", command_id=command_id)
        visited.append(match)
        level = list(match.children)
    return visited
