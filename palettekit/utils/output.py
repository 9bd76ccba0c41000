"""Shared console output utilities."""

from rich.console import Console

# Shared console instance for all CLI output
console = Console()
