"""Shared Rich Console instances for clusterwiz CLI output.

Rich styles output in terminals and falls back to plain text when piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console"]

console = Console()
