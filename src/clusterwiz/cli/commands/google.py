"""``clusterwiz google`` commands.

Each command builds an adapter :class:`Context` from the loaded
configuration, runs one adapter operation and prints the value, either as a
table or as JSON with ``--json``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import click
from rich.table import Table

from clusterwiz.cli.common import cli_error_handler, unwrap
from clusterwiz.cli.console import console
from clusterwiz.cli.context import CLIContext, async_command
from clusterwiz.cli.output import format_json, format_success, format_table
from clusterwiz.config import GoogleProviderConfig
from clusterwiz.google import adapter
from clusterwiz.google.models import (
    ClusterMetadata,
    Context,
    CreateClusterOptions,
)
from clusterwiz.google.tools import COMMANDS, Operation
from clusterwiz.logging import bind_context
from clusterwiz.runners.command import CommandRunner
from clusterwiz.shell import CommandShell, Shell

json_option = click.option(
    "--json", "as_json", is_flag=True, default=False, help="Print JSON output."
)


def _settings(ctx: click.Context) -> GoogleProviderConfig:
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx.config.google


def _build_context(ctx: click.Context, *operations: Operation) -> Context:
    """Create the adapter context, checking the CLIs ``operations`` need.

    A shell placed in ``ctx.obj["shell"]`` is used as-is and not checked.
    """
    bind_context(command=ctx.info_name)
    settings = _settings(ctx)
    shell: Shell | None = ctx.obj.get("shell")
    if shell is None:
        command_shell = CommandShell(
            CommandRunner(
                timeout=settings.command_timeout,
                env={"CLOUDSDK_CORE_DISABLE_PROMPTS": "1"},
            ),
            max_retries=settings.command_retries,
        )
        with cli_error_handler():
            for tool in {COMMANDS[op].tool for op in operations}:
                command_shell.require(tool.executable(settings))
        shell = command_shell
    return Context(shell=shell, settings=settings)


def _emit(
    data: Any, as_json: bool, headers: list[str], rows: Iterable[list[str]]
) -> None:
    """Print JSON, a plain table when piped, or a rich table on a terminal."""
    if as_json:
        click.echo(format_json(data))
        return
    if not console.is_terminal:
        click.echo(format_table(headers, list(rows)))
        return
    table = Table(show_header=True, show_lines=False)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*row)
    console.print(table)


@click.group()
def google() -> None:
    """Manage Google clusters through the gcloud and az CLIs."""
    pass


@google.command("projects")
@json_option
@click.pass_context
@async_command
async def projects(ctx: click.Context, as_json: bool) -> None:
    """List projects visible to the active gcloud account."""
    context = _build_context(ctx, Operation.LIST_PROJECTS)
    ids = unwrap(await adapter.list_projects(context), "listing projects")
    _emit(ids, as_json, ["Project"], ([p] for p in ids))


@google.command("use-project")
@click.argument("project")
@click.pass_context
@async_command
async def use_project(ctx: click.Context, project: str) -> None:
    """Make PROJECT the active gcloud project."""
    context = _build_context(ctx, Operation.SET_PROJECT)
    unwrap(await adapter.set_project(context, project), "logging into project")
    console.print(format_success(f"Active project is {project}"))


@google.command("clusters")
@click.option("--project", "-p", required=True, help="Project to list clusters in.")
@json_option
@click.pass_context
@async_command
async def clusters(ctx: click.Context, project: str, as_json: bool) -> None:
    """List clusters in a project."""
    context = _build_context(ctx, Operation.SET_PROJECT, Operation.LIST_CLUSTERS)
    found = unwrap(await adapter.list_clusters(context, project), "listing clusters")
    _emit(
        [c.model_dump(by_alias=True) for c in found],
        as_json,
        ["Name", "Resource group"],
        ([c.name, c.resource_group] for c in found),
    )


@google.command("regions")
@json_option
@click.pass_context
@async_command
async def regions(ctx: click.Context, as_json: bool) -> None:
    """List region names and their display names."""
    context = _build_context(ctx, Operation.LIST_LOCATIONS)
    mapping = unwrap(await adapter.list_regions(context), "listing regions")
    _emit(
        mapping,
        as_json,
        ["Name", "Display name"],
        ([name, display] for name, display in mapping.items()),
    )


@google.command("locations")
@json_option
@click.pass_context
@async_command
async def locations(ctx: click.Context, as_json: bool) -> None:
    """List regions offered for managed clusters."""
    context = _build_context(ctx, Operation.LIST_LOCATIONS)
    found = unwrap(await adapter.list_gke_locations(context), "listing locations")
    _emit(
        [loc.model_dump(mode="json") for loc in found],
        as_json,
        ["Display name", "Preview"],
        ([loc.display_name or "-", "yes" if loc.is_preview else "no"] for loc in found),
    )


@google.command("vm-sizes")
@click.option("--location", "-l", required=True, help="Region to list sizes for.")
@json_option
@click.pass_context
@async_command
async def vm_sizes(ctx: click.Context, location: str, as_json: bool) -> None:
    """List VM sizes available for cluster nodes."""
    context = _build_context(ctx, Operation.LIST_VM_SIZES)
    sizes = unwrap(await adapter.list_vm_sizes(context, location), "listing VM sizes")
    _emit(sizes, as_json, ["Size"], ([s] for s in sizes))


@google.command("create")
@click.option("--project", "-p", required=True, help="Project for the cluster.")
@click.option("--name", "-n", "cluster_name", required=True, help="Cluster name.")
@click.option("--location", "-l", required=True, help="Zone for the cluster.")
@click.pass_context
@async_command
async def create(
    ctx: click.Context, project: str, cluster_name: str, location: str
) -> None:
    """Request creation of a cluster. Returns once the request is accepted."""
    context = _build_context(ctx, Operation.SET_PROJECT, Operation.CREATE_CLUSTER)
    options = CreateClusterOptions(
        project=project,
        metadata=ClusterMetadata(cluster_name=cluster_name, location=location),
    )
    unwrap(await adapter.create_cluster(context, options), "creating cluster")
    console.print(format_success(f"Creation of {cluster_name} requested"))


@google.command("wait")
@click.argument("cluster_name")
@json_option
@click.pass_context
@async_command
async def wait(ctx: click.Context, cluster_name: str, as_json: bool) -> None:
    """Pause for the configured cluster start-up period."""
    context = _build_context(ctx)
    waited = unwrap(
        await adapter.wait_for_cluster(context, cluster_name), "waiting for cluster"
    )
    _emit(
        waited.model_dump(mode="json"),
        as_json,
        ["Still waiting", "Readiness"],
        [["yes" if waited.still_waiting else "no", waited.readiness.value]],
    )


@google.command("configure")
@click.argument("cluster_name")
@click.option("--cluster-type", default="gke", show_default=True, help="Cluster label.")
@json_option
@click.pass_context
@async_command
async def configure(
    ctx: click.Context, cluster_name: str, cluster_type: str, as_json: bool
) -> None:
    """Fetch credentials for a cluster so kubectl can reach it."""
    context = _build_context(ctx, Operation.GET_CREDENTIALS)
    configured = unwrap(
        await adapter.configure_cluster(context, cluster_type, cluster_name),
        "configuring Kubernetes",
    )
    if as_json:
        click.echo(format_json(configured.model_dump(mode="json")))
    else:
        console.print(format_success(f"Credentials for {cluster_name} configured"))
