from __future__ import annotations

from pathlib import Path

from clusterwiz.exceptions.base import ClusterWizError


class RunnerError(ClusterWizError):
    """Base exception for command runner failures."""

    pass


class WorkingDirectoryError(RunnerError):
    """Working directory does not exist or is not a directory.

    Attributes:
        message: Human-readable error message.
        path: The path that was rejected.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class CommandNotFoundError(RunnerError):
    """Executable not found in PATH.

    Attributes:
        message: Human-readable error message.
        executable: The executable that was not found.
    """

    def __init__(self, message: str, executable: str | None = None) -> None:
        self.executable = executable
        super().__init__(message)
