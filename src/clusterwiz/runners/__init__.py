"""Async subprocess execution for the cloud CLIs."""

from __future__ import annotations

from clusterwiz.runners.command import CommandRunner
from clusterwiz.runners.models import CommandResult

__all__ = [
    "CommandResult",
    "CommandRunner",
]
