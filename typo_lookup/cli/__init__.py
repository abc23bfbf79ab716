"""Interactive shell for typo_lookup."""

from .cli import CLI, main

__all__ = ["CLI", "main"]
