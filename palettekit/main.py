#!/usr/bin/env python3
"""
CLI entry point for palettekit.

Developer tooling for inspecting command trees and ranking behaviour
without a host application.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from palettekit import __version__
from palettekit.config import get_config_path, load_palette_config
from palettekit.engine.scoring import best_score, default_filter
from palettekit.exceptions import CommandTreeError
from palettekit.models import Command
from palettekit.tree import load_command_tree, resolve_page
from palettekit.utils.logging import setup_logging
from palettekit.utils.output import console

app = typer.Typer(help="Inspect palettekit command trees and rankings")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"palettekit version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
):
    """
    palettekit - headless command palette engine

    [bold]Examples:[/bold]

    Show a command tree:
        [cyan]palettekit tree commands.yaml[/cyan]

    Rank commands for a query:
        [cyan]palettekit rank commands.yaml "open"[/cyan]

    Rank inside a nested page:
        [cyan]palettekit rank commands.yaml "dark" --page theme[/cyan]
    """
    setup_logging(verbose)


def _load_or_exit(path: Path) -> list[Command]:
    try:
        return load_command_tree(path)
    except CommandTreeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _add_branch(node: Tree, commands: list[Command]) -> None:
    for command in commands:
        label = f"{command.label} [dim]({command.id})[/dim]"
        if command.group:
            label += f" [cyan]{command.group}[/cyan]"
        if command.disabled:
            label = f"[dim strike]{command.label}[/dim strike] [dim]({command.id}, disabled)[/dim]"
        child = node.add(label)
        if command.children:
            _add_branch(child, list(command.children))


@app.command()
def tree(
    path: Path = typer.Argument(..., help="YAML or JSON command tree"),
):
    """Validate and print a command tree."""
    commands = _load_or_exit(path)
    root = Tree(f"[bold]{path.name}[/bold]")
    _add_branch(root, commands)
    console.print(root)


@app.command()
def rank(
    path: Path = typer.Argument(..., help="YAML or JSON command tree"),
    query: str = typer.Argument("", help="Search query"),
    page: Optional[List[str]] = typer.Option(
        None, "--page", "-p", help="Branch id to enter (repeat for deeper pages)"
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows to show"),
):
    """Rank the commands on a page against a query with the default filter."""
    commands = _load_or_exit(path)
    try:
        visited = resolve_page(commands, page or [])
    except CommandTreeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    items = list(visited[-1].children) if visited else commands
    results = default_filter(items, query)

    location = " › ".join(c.label for c in visited) or "root"
    if not results:
        console.print(f"[yellow]No matches for {query!r} on {location}[/yellow]")
        return

    table = Table(title=f"{location}: {query!r}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Group", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Kind", style="dim")

    for position, command in enumerate(results[:limit]):
        score = best_score(command, query)
        table.add_row(
            str(position),
            command.id,
            f"[dim]{command.label}[/dim]" if command.disabled else command.label,
            command.group or "",
            f"{score:g}" if score is not None else "-",
            "branch" if command.is_branch else "leaf",
        )

    console.print(table)
    if len(results) > limit:
        console.print(f"[dim]{len(results) - limit} more not shown[/dim]")


@app.command("config")
def show_config():
    """Show the effective palette configuration."""
    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "defaults"
    console.print(f"[bold]Config:[/bold] {source}")
    console.print_json(data=load_palette_config().to_dict())


if __name__ == "__main__":
    app()
