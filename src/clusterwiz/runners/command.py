"""Command runner for safe async subprocess execution.

This module provides the CommandRunner class used by the shell collaborator
to invoke ``gcloud`` and ``az``. It handles timeouts with graceful
termination, environment merging and retries of transient failures.
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path

from tenacity import (
    AsyncRetrying,
    RetryError,
    stop_after_attempt,
    wait_exponential,
)

from clusterwiz.exceptions import WorkingDirectoryError
from clusterwiz.logging import get_logger
from clusterwiz.runners.models import CommandResult

__all__ = ["CommandRunner", "RetryableCommandError"]

logger = get_logger(__name__)

TERMINATION_GRACE_PERIOD: float = 2.0

# Substrings of stderr that indicate a transient failure worth retrying
TRANSIENT_STDERR_MARKERS: tuple[str, ...] = (
    "connection reset",
    "rate limit",
    "temporarily unavailable",
)


class RetryableCommandError(Exception):
    """Raised inside the retry loop to request another attempt.

    Carries the CommandResult so it can be returned once retries run out.
    """

    def __init__(self, result: CommandResult, message: str = "Command failed") -> None:
        super().__init__(message)
        self.result = result


class CommandRunner:
    """Execute command lines with timeout and environment control.

    Command lines are interpreted by the platform shell, since the cloud CLI
    templates carry shell quoting.

    Attributes:
        cwd: Working directory for command execution.
        timeout: Default timeout in seconds (None for no timeout).

    Example:
        ```python
        runner = CommandRunner(timeout=60.0)
        result = await runner.run_shell('gcloud config set project "demo"')
        if result.success:
            print(result.stdout)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = 120.0,
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. If None, uses current directory.
            timeout: Default timeout in seconds. Use None for no timeout.
            env: Additional environment variables to merge with os.environ.
        """
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = env or {}

    @property
    def cwd(self) -> Path | None:
        """Working directory for command execution."""
        return self._cwd

    @property
    def timeout(self) -> float | None:
        """Default timeout in seconds."""
        return self._timeout

    def _validate_cwd(self) -> None:
        if self._cwd is not None and not self._cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {self._cwd}",
                path=self._cwd,
            )

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        return env

    def is_retryable(self, result: CommandResult) -> bool:
        """Determine if a command failure should be retried.

        Args:
            result: The result of a command execution.

        Returns:
            True for timeouts and for stderr that looks transient.
        """
        if result.timed_out:
            return True
        stderr = result.stderr.lower()
        return any(marker in stderr for marker in TRANSIENT_STDERR_MARKERS)

    async def run_shell(
        self,
        command_line: str,
        *,
        timeout: float | None = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ) -> CommandResult:
        """Execute a command line through the platform shell.

        Args:
            command_line: Full command line, quoted for the platform shell.
            timeout: Override timeout. Use 0 or negative for no timeout.
            max_retries: Maximum number of retry attempts (default 0 = no retries).
            retry_delay: Initial delay between retries in seconds. Doubles on
                each retry.

        Returns:
            CommandResult with returncode, stdout, stderr, duration_ms, timed_out.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
        """
        self._validate_cwd()

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        env = self._build_env()

        # stop_after_attempt(1) = no retries, so attempts = max_retries + 1
        last_result: CommandResult | None = None
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_retries + 1),
                wait=wait_exponential(multiplier=retry_delay, min=retry_delay, max=10),
                reraise=True,
            ):
                with attempt:
                    result = await self._execute_once(
                        command_line, effective_timeout, env
                    )
                    last_result = result

                    if result.success or not self.is_retryable(result):
                        return result

                    logger.debug(
                        "command_retrying",
                        command=_describe(command_line),
                        returncode=result.returncode,
                        timed_out=result.timed_out,
                    )
                    raise RetryableCommandError(result, "Command failed, retrying...")
        except RetryError as e:
            if last_result is not None:
                return last_result
            raise RuntimeError("Retry exhausted with no result") from e
        except RetryableCommandError:
            # reraise=True surfaces the last attempt's error once retries run out
            if last_result is not None:
                return last_result
            raise

        assert last_result is not None
        return last_result

    async def _execute_once(
        self,
        command_line: str,
        timeout: float | None,
        env: dict[str, str],
    ) -> CommandResult:
        """Execute a command line once without retries."""
        start_time = time.monotonic()
        timed_out = False
        returncode = 0
        stdout_str = ""
        stderr_str = ""

        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
                env=env,
            )

            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(),
                    timeout=timeout,
                )
                returncode = process.returncode or 0
                stdout_str = stdout_bytes.decode("utf-8", errors="replace")
                stderr_str = stderr_bytes.decode("utf-8", errors="replace")

            except TimeoutError:
                # SIGTERM first, SIGKILL after the grace period
                timed_out = True
                process.terminate()
                try:
                    await asyncio.wait_for(
                        process.wait(), timeout=TERMINATION_GRACE_PERIOD
                    )
                except TimeoutError:
                    process.kill()
                    await process.wait()

                returncode = -1
                stderr_str = f"Command timed out after {timeout}s"

        except FileNotFoundError:
            returncode = 127
            stderr_str = f"Command not found: {_describe(command_line)}"
        except PermissionError:
            returncode = 126
            stderr_str = f"Permission denied: {_describe(command_line)}"

        duration_ms = int((time.monotonic() - start_time) * 1000)

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )


def _describe(command_line: str) -> str:
    """Name of the program being run, for logs and error text."""
    parts = command_line.split(maxsplit=1)
    return parts[0] if parts else command_line
