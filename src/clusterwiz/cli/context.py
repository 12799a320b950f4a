"""CLI context and utilities for clusterwiz.

Exit codes, the per-invocation context object, and the bridge from Click's
synchronous commands to the async adapter functions.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

from clusterwiz.config import ClusterWizConfig

__all__ = [
    "CLIContext",
    "ExitCode",
    "async_command",
]


class ExitCode(IntEnum):
    """Exit codes for the clusterwiz CLI.

    - 0 for success
    - 1 for failure
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration for one CLI invocation.

    Attributes:
        config: Loaded clusterwiz configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: ClusterWizConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Run an async Click command with asyncio.run().

    Example:
        >>> @google.command()
        >>> @async_command
        >>> async def projects(ctx: click.Context) -> None:
        >>>     await list_projects(context)
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]
