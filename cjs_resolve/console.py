"""Shared Rich consoles for CLI output."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)

__all__ = ["console", "err_console"]
