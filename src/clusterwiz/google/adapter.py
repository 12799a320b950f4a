"""Google cluster adapter.

Translates cluster-lifecycle requests into ``gcloud``/``az`` invocations and
typed results. Every operation takes a :class:`Context`, renders a command
from :mod:`clusterwiz.google.tools`, runs it through ``context.shell`` and
interprets the outcome with the ``from_shell_*`` helpers.

No operation raises for a CLI failure: errors come back as ``Failed``
values, wrapped in an :class:`ActionResult` for the user-facing steps.

Example:
    ```python
    context = Context(shell=CommandShell())
    listing = await list_clusters(context, "demo-project")
    if listing.succeeded:
        for cluster in listing.result.value:
            print(cluster.name)
    else:
        print(f"Error while {listing.description}: {listing.result.error}")
    ```
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from clusterwiz.exceptions import RunnerError
from clusterwiz.google.models import (
    ClusterInfo,
    ConfigureResult,
    Context,
    CreateClusterOptions,
    LocationResponse,
    ServiceLocation,
    VMSizeResponse,
    WaitResult,
)
from clusterwiz.google.regions import PREVIEW_REGIONS, PRODUCTION_REGIONS
from clusterwiz.google.tools import LOCATIONS_QUERY, Operation, render
from clusterwiz.logging import get_logger
from clusterwiz.results import (
    ActionResult,
    Diagnostic,
    Errorable,
    Failed,
    Succeeded,
    failed,
    from_shell_exit_code_and_standard_error,
    from_shell_exit_code_only,
    from_shell_json,
    succeeded,
)
from clusterwiz.runners.models import CommandResult

__all__ = [
    "BASIC_VM_SIZE_PREFIX",
    "configure_cluster",
    "create_cluster",
    "get_credentials",
    "list_clusters",
    "list_gke_locations",
    "list_projects",
    "list_regions",
    "list_vm_sizes",
    "set_project",
    "wait_for_cluster",
]

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

#: VM sizes with this prefix are not offered for cluster nodes
BASIC_VM_SIZE_PREFIX = "Basic_"

INVOKE_FAILED_MESSAGE = "Unable to invoke gcloud CLI"

_CLUSTERS = TypeAdapter(list[ClusterInfo])
_LOCATIONS = TypeAdapter(list[LocationResponse])
_VM_SIZES = TypeAdapter(list[VMSizeResponse])


async def _exec(context: Context, command_line: str) -> CommandResult | None:
    """Run a command line, returning None if the shell could not start it."""
    try:
        return await context.shell.exec(command_line)
    except (OSError, RunnerError) as e:
        logger.warning("shell_invoke_failed", command_line=command_line, error=str(e))
        return None


# =============================================================================
# Projects
# =============================================================================


def _project_ids(raw: Any) -> list[str]:
    """Accept plain project ids or ``gcloud`` project objects."""
    if not isinstance(raw, list):
        raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
    ids: list[str] = []
    for item in raw:
        if isinstance(item, str):
            ids.append(item)
        elif isinstance(item, dict) and isinstance(item.get("projectId"), str):
            ids.append(item["projectId"])
        else:
            raise TypeError(f"unexpected project entry: {item!r}")
    return ids


async def list_projects(context: Context) -> ActionResult[list[str]]:
    """List the projects visible to the active ``gcloud`` account."""
    sr = await _exec(context, render(Operation.LIST_PROJECTS, context.settings))
    projects = from_shell_json(sr, "Unable to list Google projects", _project_ids)
    if succeeded(projects):
        logger.debug("projects_listed", count=len(projects.value))
    return ActionResult(description="listing projects", result=projects)


async def set_project(context: Context, project_id: str) -> Errorable[Diagnostic]:
    """Make ``project_id`` the active ``gcloud`` project.

    Succeeds only when the command exits 0 *and* writes nothing to stderr.
    """
    sr = await _exec(
        context, render(Operation.SET_PROJECT, context.settings, project=project_id)
    )
    result = from_shell_exit_code_and_standard_error(
        sr, "Unable to set gcloud CLI project"
    )
    if result.succeeded:
        logger.info("project_set", project=project_id)
    else:
        logger.warning("project_set_failed", project=project_id)
    return result


# =============================================================================
# Clusters
# =============================================================================


async def list_clusters(
    context: Context, project_id: str
) -> ActionResult[list[ClusterInfo]]:
    """List clusters in ``project_id``.

    The project is made active first. If that fails the listing is never
    attempted and the result is described as ``"logging into project"``.
    """
    login = await set_project(context, project_id)
    if failed(login):
        return ActionResult(
            description="logging into project",
            result=Failed(login.error),
        )

    sr = await _exec(context, render(Operation.LIST_CLUSTERS, context.settings))
    clusters = from_shell_json(
        sr, "Unable to list Kubernetes clusters", _CLUSTERS.validate_python
    )
    if succeeded(clusters):
        logger.debug("clusters_listed", project=project_id, count=len(clusters.value))
    return ActionResult(description="listing clusters", result=clusters)


async def create_cluster(
    context: Context, options: CreateClusterOptions
) -> ActionResult[Diagnostic]:
    """Request creation of a cluster.

    The create command is issued with ``--async``: success means the
    provider accepted the request, not that the cluster is ready. Only the
    exit code is checked, since ``gcloud`` reports progress on stderr.
    """
    login = await set_project(context, options.project)
    if failed(login):
        return ActionResult(description="logging into project", result=login)

    sr = await _exec(
        context,
        render(
            Operation.CREATE_CLUSTER,
            context.settings,
            cluster_name=options.metadata.cluster_name,
            location=options.metadata.location,
        ),
    )
    created = from_shell_exit_code_only(
        sr, "Unable to call Gcloud CLI to create cluster"
    )
    if created.succeeded:
        logger.info(
            "cluster_create_requested",
            project=options.project,
            cluster_name=options.metadata.cluster_name,
            location=options.metadata.location,
        )
    return ActionResult(description="creating cluster", result=created)


async def wait_for_cluster(
    context: Context,
    cluster_name: str,
    *,
    sleep: Sleep | None = None,
) -> Errorable[WaitResult]:
    """Wait a fixed period for a newly requested cluster.

    Cluster state is not polled. The result always reports
    ``ReadinessCheck.NOT_IMPLEMENTED`` so callers can tell that nothing was
    verified.
    """
    delay = context.settings.cluster_wait_seconds
    logger.info("cluster_wait_placeholder", cluster_name=cluster_name, seconds=delay)
    await (sleep or asyncio.sleep)(delay)
    return Succeeded(WaitResult(still_waiting=False))


# =============================================================================
# Credentials
# =============================================================================


async def configure_cluster(
    context: Context,
    cluster_type: str,
    cluster_name: str,
    *,
    sleep: Sleep | None = None,
) -> ActionResult[ConfigureResult]:
    """Fetch credentials for ``cluster_name`` so kubectl can reach it.

    The ConfigureResult is returned in both outcomes; on failure it is the
    ``partial`` of the Failed value.
    """
    creds = await get_credentials(
        context, cluster_name, context.settings.credential_attempts, sleep=sleep
    )
    configured = ConfigureResult(
        cluster_type=cluster_type,
        got_credentials=creds.succeeded,
        credentials_error=creds.error if failed(creds) else None,
    )
    result: Errorable[ConfigureResult]
    if failed(creds):
        result = Failed(creds.error, partial=configured)
    else:
        result = Succeeded(configured)
    return ActionResult(description="configuring Kubernetes", result=result)


def _credentials_pending(sr: CommandResult | None) -> bool:
    return sr is None or not sr.clean


async def get_credentials(
    context: Context,
    cluster_name: str,
    max_attempts: int,
    *,
    sleep: Sleep | None = None,
) -> Errorable[Diagnostic]:
    """Fetch cluster credentials, retrying until they are available.

    A freshly created cluster rejects ``get-credentials`` until it is up, so
    the command is repeated at a fixed interval. Attempts stop at the first
    clean result (exit 0, empty stderr) or after ``max_attempts``.

    Args:
        context: Adapter context.
        cluster_name: Cluster to fetch credentials for.
        max_attempts: Total number of attempts, at least 1.
        sleep: Awaitable sleep used between attempts. Defaults to asyncio.sleep.

    Returns:
        Succeeded on the first clean attempt; otherwise Failed with the last
        stderr text, or a fixed message if the CLI could not be started.
    """
    command_line = render(
        Operation.GET_CREDENTIALS, context.settings, cluster_name=cluster_name
    )
    log = logger.bind(cluster_name=cluster_name)

    def log_retry(state: RetryCallState) -> None:
        sr = state.outcome.result() if state.outcome else None
        log.info(
            "credentials_attempt_failed",
            attempt=state.attempt_number,
            max_attempts=max_attempts,
            stderr=sr.stderr.strip() if sr else None,
        )

    retrying = AsyncRetrying(
        sleep=sleep or asyncio.sleep,
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_fixed(context.settings.credential_retry_interval),
        retry=retry_if_result(_credentials_pending),
        before_sleep=log_retry,
        retry_error_callback=lambda state: state.outcome.result(),
    )
    sr = await retrying(_exec, context, command_line)

    if sr is None:
        return Failed(INVOKE_FAILED_MESSAGE)
    if not sr.clean:
        log.warning("credentials_unavailable", returncode=sr.returncode)
        return Failed(
            sr.stderr.strip() or f"gcloud exited with status {sr.returncode}"
        )

    log.info("credentials_fetched")
    return Succeeded(Diagnostic(output=sr.stdout))


# =============================================================================
# Regions and VM sizes
# =============================================================================


def _location_names(raw: Any) -> dict[str, str]:
    return {item.name: item.display_name for item in _LOCATIONS.validate_python(raw)}


async def list_regions(context: Context) -> Errorable[dict[str, str]]:
    """Map region names to display names.

    The JMESPath query is single-quoted on POSIX shells; ``cmd.exe`` treats
    single quotes literally, so it is passed bare there.
    """
    query = LOCATIONS_QUERY
    if context.shell.is_unix():
        query = f"'{query}'"
    sr = await _exec(
        context, render(Operation.LIST_LOCATIONS, context.settings, query=query)
    )
    return from_shell_json(sr, "Unable to list Google regions", _location_names)


def _service_locations(
    names: Iterable[str], preview: bool, locations: Mapping[str, str]
) -> list[ServiceLocation]:
    return [
        ServiceLocation(display_name=locations.get(name), is_preview=preview)
        for name in names
    ]


async def list_gke_locations(
    context: Context,
    production: Iterable[str] = PRODUCTION_REGIONS,
    preview: Iterable[str] = PREVIEW_REGIONS,
) -> Errorable[list[ServiceLocation]]:
    """List the regions offered for managed clusters.

    Production regions come first, then preview regions. A region absent
    from the lookup still yields an entry, with ``display_name=None``.
    """
    regions = await list_regions(context)
    if failed(regions):
        return Failed(regions.error)
    locations = regions.value
    return Succeeded(
        _service_locations(production, False, locations)
        + _service_locations(preview, True, locations)
    )


def _vm_size_names(raw: Any) -> list[str]:
    return [
        size.name
        for size in _VM_SIZES.validate_python(raw)
        if not size.name.startswith(BASIC_VM_SIZE_PREFIX)
    ]


async def list_vm_sizes(context: Context, location: str) -> Errorable[list[str]]:
    """List VM sizes available in ``location``, excluding Basic tier sizes."""
    sr = await _exec(
        context, render(Operation.LIST_VM_SIZES, context.settings, location=location)
    )
    return from_shell_json(sr, "Unable to list VM sizes", _vm_size_names)
