"""Shell collaborator used by the cluster adapters.

Adapters depend only on the :class:`Shell` protocol, so tests can hand them
a mock and the CLI can hand them a :class:`CommandShell`.
"""

from __future__ import annotations

import shutil
import sys
from typing import Protocol, runtime_checkable

from clusterwiz.exceptions import CommandNotFoundError
from clusterwiz.logging import get_logger
from clusterwiz.runners.command import CommandRunner
from clusterwiz.runners.models import CommandResult

__all__ = ["CommandShell", "Shell"]

logger = get_logger(__name__)


@runtime_checkable
class Shell(Protocol):
    """Executes command lines on behalf of an adapter."""

    async def exec(self, command_line: str) -> CommandResult:
        """Run ``command_line`` through the platform shell.

        Note:
            Failures are reported through the returned CommandResult, not by
            raising. An ``OSError`` means the shell itself could not start.
        """
        ...

    def is_unix(self) -> bool:
        """True when the shell follows POSIX quoting rules."""
        ...


class CommandShell:
    """Shell backed by :class:`CommandRunner`.

    Args:
        runner: Pre-configured runner. One with a 120s timeout is created if
            not provided.
        platform: Platform string used for :meth:`is_unix`. Defaults to
            ``sys.platform``.
        max_retries: Extra attempts for a command that fails transiently
            (timeout, connection reset, rate limit).
        retry_delay: Initial delay between those attempts, doubled each time.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        platform: str | None = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ) -> None:
        self._runner = runner or CommandRunner()
        self._platform = platform or sys.platform
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    async def exec(self, command_line: str) -> CommandResult:
        logger.debug("shell_exec", command_line=command_line)
        result = await self._runner.run_shell(
            command_line,
            max_retries=self._max_retries,
            retry_delay=self._retry_delay,
        )
        logger.debug(
            "shell_exec_finished",
            returncode=result.returncode,
            duration_ms=result.duration_ms,
            has_stderr=bool(result.stderr),
        )
        return result

    def is_unix(self) -> bool:
        return self._platform != "win32"

    def require(self, executable: str) -> str:
        """Resolve ``executable`` on PATH.

        Returns:
            Absolute path of the executable.

        Raises:
            CommandNotFoundError: If the executable cannot be found.
        """
        path = shutil.which(executable)
        if path is None:
            raise CommandNotFoundError(
                f"'{executable}' was not found on PATH", executable=executable
            )
        return path
