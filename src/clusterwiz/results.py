"""Result values returned by the cluster adapters.

Adapter operations never raise for CLI failures. They return an
:data:`Errorable`, either :class:`Succeeded` or :class:`Failed`. Operations
that back a user-facing step wrap it in an :class:`ActionResult` that also
records which step was attempted.

The ``from_shell_*`` helpers turn a :class:`CommandResult` into an
Errorable with one of three success rules:

- ``from_shell_json``: exit code 0, stdout parsed as JSON
- ``from_shell_exit_code_and_standard_error``: exit code 0 and empty stderr
- ``from_shell_exit_code_only``: exit code 0, stderr ignored
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeGuard, TypeVar

from pydantic import ValidationError

from clusterwiz.logging import get_logger
from clusterwiz.runners.models import CommandResult

__all__ = [
    "ActionResult",
    "Diagnostic",
    "Errorable",
    "Failed",
    "Succeeded",
    "failed",
    "from_shell_exit_code_and_standard_error",
    "from_shell_exit_code_only",
    "from_shell_json",
    "succeeded",
]

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")

#: Appended to the error prefix when stdout is not the expected JSON shape
UNEXPECTED_OUTPUT = "unexpected output"


@dataclass(frozen=True, slots=True)
class Succeeded(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failed(Generic[T]):
    """Failed outcome carrying an error message.

    Attributes:
        error: Human-readable error, usually ``"<prefix>: <stderr>"``.
        partial: Payload assembled before the failure, if any.
    """

    error: str
    partial: T | None = None

    @property
    def succeeded(self) -> bool:
        return False


Errorable: TypeAlias = Succeeded[T] | Failed[T]


def succeeded(result: Errorable[T]) -> TypeGuard[Succeeded[T]]:
    """Narrow an Errorable to :class:`Succeeded`."""
    return isinstance(result, Succeeded)


def failed(result: Errorable[T]) -> TypeGuard[Failed[T]]:
    """Narrow an Errorable to :class:`Failed`."""
    return isinstance(result, Failed)


@dataclass(frozen=True, slots=True)
class ActionResult(Generic[T]):
    """Outcome of a user-facing step, labelled for display.

    ``description`` names the step that actually produced ``result``. When an
    operation fails during a preliminary step, the description reports that
    step rather than the one the caller asked for.
    """

    description: str
    result: Errorable[T]

    @property
    def succeeded(self) -> bool:
        return self.result.succeeded


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Success value of a command that has no payload.

    Attributes:
        output: Raw stdout of the command, kept for display only.
    """

    output: str = ""


def _shell_error(result: CommandResult | None, error_message: str) -> str:
    if result is None:
        return error_message
    detail = result.stderr.strip() or f"exited with status {result.returncode}"
    return f"{error_message}: {detail}"


def from_shell_json(
    result: CommandResult | None,
    error_message: str,
    process: Callable[[Any], U] | None = None,
) -> Errorable[U]:
    """Parse the stdout of a successful command as JSON.

    Args:
        result: Command result, or None if the command could not be run.
        error_message: Prefix for the error text on failure.
        process: Optional function that shapes the decoded JSON. It may raise
            ``ValueError``, ``TypeError``, ``KeyError`` or a pydantic
            ``ValidationError`` to reject the shape.

    Returns:
        Succeeded with the (processed) JSON value, or Failed.
    """
    if result is None or result.returncode != 0:
        return Failed(_shell_error(result, error_message))

    try:
        raw = json.loads(result.stdout)
        value = process(raw) if process is not None else raw
    except (ValueError, TypeError, KeyError, ValidationError) as e:
        logger.debug("shell_output_unparseable", error=str(e), prefix=error_message)
        return Failed(f"{error_message}: {UNEXPECTED_OUTPUT}")

    return Succeeded(value)


def from_shell_exit_code_and_standard_error(
    result: CommandResult | None,
    error_message: str,
) -> Errorable[Diagnostic]:
    """Succeed only on exit code 0 with nothing written to stderr."""
    if result is not None and result.clean:
        return Succeeded(Diagnostic(output=result.stdout))
    return Failed(_shell_error(result, error_message))


def from_shell_exit_code_only(
    result: CommandResult | None,
    error_message: str,
) -> Errorable[Diagnostic]:
    """Succeed on exit code 0 regardless of stderr."""
    if result is not None and result.returncode == 0:
        return Succeeded(Diagnostic(output=result.stdout))
    return Failed(_shell_error(result, error_message))
