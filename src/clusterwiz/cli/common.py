from __future__ import annotations

import contextlib
from collections.abc import Generator
from typing import TypeVar

import click

from clusterwiz.cli.context import ExitCode
from clusterwiz.cli.output import format_error
from clusterwiz.exceptions import ClusterWizError, ConfigError
from clusterwiz.logging import get_logger
from clusterwiz.results import ActionResult, Errorable, failed

__all__ = ["cli_error_handler", "unwrap"]

T = TypeVar("T")


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Translate clusterwiz exceptions into CLI exit codes.

    - KeyboardInterrupt: exit 130
    - ConfigError: error with the offending field
    - ClusterWizError: error with its message

    Example:
        >>> with cli_error_handler():
        >>>     shell.require("gcloud")
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except ConfigError as e:
        details = [f"Field: {e.field}"] if e.field else None
        click.echo(format_error(e.message, details=details), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except ClusterWizError as e:
        logger.debug("cli_command_failed", error=e.message)
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e


def unwrap(outcome: ActionResult[T] | Errorable[T], description: str) -> T:
    """Return the value of a successful outcome or exit with its error.

    Args:
        outcome: Adapter result. For an ActionResult, its own description
            replaces ``description`` since it names the step that ran.
        description: Step to report when ``outcome`` carries none.

    Raises:
        SystemExit: With ExitCode.FAILURE if the outcome failed.
    """
    if isinstance(outcome, ActionResult):
        description = outcome.description
        result = outcome.result
    else:
        result = outcome

    if failed(result):
        message = format_error(result.error, details=[f"While {description}"])
        click.echo(message, err=True)
        raise SystemExit(ExitCode.FAILURE)
    return result.value
