"""Shared Rich consoles for the CLI."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)
