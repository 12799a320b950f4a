"""CLI entry point for clusterwiz.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from clusterwiz import __version__
from clusterwiz.cli.commands.config import config
from clusterwiz.cli.commands.google import google
from clusterwiz.cli.common import cli_error_handler
from clusterwiz.cli.context import CLIContext
from clusterwiz.config import load_config
from clusterwiz.logging import clear_context, configure_logging

# CLUSTERWIZ_* values in ./.env are read before the config is loaded
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group()
@click.version_option(version=__version__, prog_name="clusterwiz")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./clusterwiz.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """clusterwiz - create and inspect managed Kubernetes clusters."""
    ctx.ensure_object(dict)
    clear_context()

    config_path = Path(config_file) if config_file else None
    with cli_error_handler():
        loaded = load_config(config_path)

    ctx.obj["cli_ctx"] = CLIContext(
        config=loaded,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(loaded.verbosity, logging.WARNING)

    configure_logging(level=level)


cli.add_command(config)
cli.add_command(google)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
