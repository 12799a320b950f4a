"""Google cluster provider.

Lists projects, regions, VM sizes and clusters, creates clusters and fetches
their credentials by driving the ``gcloud`` and ``az`` CLIs.
"""

from __future__ import annotations

from clusterwiz.google.adapter import (
    configure_cluster,
    create_cluster,
    get_credentials,
    list_clusters,
    list_gke_locations,
    list_projects,
    list_regions,
    list_vm_sizes,
    set_project,
    wait_for_cluster,
)
from clusterwiz.google.models import (
    ClusterInfo,
    ClusterMetadata,
    ConfigureResult,
    Context,
    CreateClusterOptions,
    ReadinessCheck,
    ServiceLocation,
    WaitResult,
)
from clusterwiz.google.tools import COMMANDS, CloudTool, Operation, ToolCommand

__all__ = [
    # Models
    "ClusterInfo",
    "ClusterMetadata",
    "ConfigureResult",
    "Context",
    "CreateClusterOptions",
    "ReadinessCheck",
    "ServiceLocation",
    "WaitResult",
    # Tool registry
    "COMMANDS",
    "CloudTool",
    "Operation",
    "ToolCommand",
    # Operations
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
