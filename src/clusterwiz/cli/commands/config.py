from __future__ import annotations

import click

from clusterwiz.cli.context import CLIContext
from clusterwiz.cli.output import format_json
from clusterwiz.config import PROJECT_CONFIG_NAME, get_user_config_path


@click.group()
def config() -> None:
    """Inspect clusterwiz configuration."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as JSON.

    Values are merged from defaults, the user config file, the project
    config file and CLUSTERWIZ_* environment variables.
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    click.echo(format_json(cli_ctx.config.model_dump(mode="json")))


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Print the config files that are consulted, in priority order."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    if cli_ctx.config_path is not None:
        click.echo(str(cli_ctx.config_path))
    else:
        click.echo(f"./{PROJECT_CONFIG_NAME}")
    click.echo(str(get_user_config_path()))
