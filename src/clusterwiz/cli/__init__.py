"""CLI utilities for clusterwiz."""

from __future__ import annotations

from clusterwiz.cli.context import CLIContext, ExitCode, async_command

__all__ = [
    "CLIContext",
    "ExitCode",
    "async_command",
]
