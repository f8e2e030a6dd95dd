"""CLI adapter for store management commands."""

from .commands import CLICommandHandler

__all__ = ["CLICommandHandler"]
