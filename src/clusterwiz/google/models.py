"""Data models for the Google cluster adapter.

Frozen Pydantic models describe the values the adapter returns and the
options it accepts. The response models at the bottom parse raw CLI JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clusterwiz.config import GoogleProviderConfig
from clusterwiz.fs import FS, LocalFS
from clusterwiz.shell import Shell

__all__ = [
    "ClusterInfo",
    "ClusterMetadata",
    "ConfigureResult",
    "Context",
    "CreateClusterOptions",
    "LocationResponse",
    "ReadinessCheck",
    "ServiceLocation",
    "VMSizeResponse",
    "WaitResult",
]


@dataclass(frozen=True, slots=True)
class Context:
    """Collaborators and settings shared by every adapter call.

    Attributes:
        shell: Executes CLI command lines.
        fs: Filesystem access. No current operation reads from it.
        settings: Executable names and timings for the adapter.
    """

    shell: Shell
    fs: FS = field(default_factory=LocalFS)
    settings: GoogleProviderConfig = field(default_factory=GoogleProviderConfig)


class ServiceLocation(BaseModel):
    """A region in which a managed cluster can be created.

    Attributes:
        display_name: Human-readable region name. None when the region was
            missing from the lookup.
        is_preview: True for regions where the service is in preview.
    """

    display_name: str | None = Field(description="Region display name")
    is_preview: bool = Field(default=False, description="Preview-only region")

    model_config = ConfigDict(frozen=True)


class ClusterInfo(BaseModel):
    """A cluster as listed by the container-cluster CLI.

    Attributes:
        name: Cluster name.
        resource_group: Owning resource group; empty when the CLI omits it.
    """

    name: str = Field(description="Cluster name")
    resource_group: str = Field(
        default="", alias="resourceGroup", description="Resource group"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ClusterMetadata(BaseModel):
    """Identity and placement of a cluster to create.

    Attributes:
        cluster_name: Name for the new cluster.
        location: Zone the cluster is created in.
    """

    cluster_name: str = Field(min_length=1, description="Cluster name")
    location: str = Field(min_length=1, description="Zone")

    model_config = ConfigDict(frozen=True)


class CreateClusterOptions(BaseModel):
    """Options for ``create_cluster``.

    Attributes:
        project: Project the cluster is created in; made active first.
        metadata: Name and location of the cluster.
    """

    project: str = Field(min_length=1, description="Project ID")
    metadata: ClusterMetadata

    model_config = ConfigDict(frozen=True)


class ConfigureResult(BaseModel):
    """Outcome of configuring local access to a new cluster.

    Attributes:
        cluster_type: Label of the kind of cluster being configured.
        got_credentials: True if cluster credentials were fetched.
        credentials_error: Error from the last credential attempt, if any.
    """

    cluster_type: str
    got_credentials: bool
    credentials_error: str | None = None

    model_config = ConfigDict(frozen=True)


class ReadinessCheck(str, Enum):
    """How cluster readiness was established by ``wait_for_cluster``.

    Attributes:
        NOT_IMPLEMENTED: No readiness check ran; only a fixed pause elapsed.
    """

    NOT_IMPLEMENTED = "not_implemented"


class WaitResult(BaseModel):
    """Result of waiting for a cluster.

    Attributes:
        still_waiting: True if the cluster is known to still be provisioning.
        readiness: How readiness was determined.
    """

    still_waiting: bool = False
    readiness: ReadinessCheck = ReadinessCheck.NOT_IMPLEMENTED

    model_config = ConfigDict(frozen=True)


class LocationResponse(BaseModel):
    """Item of ``az account list-locations`` output."""

    name: str
    display_name: str = Field(alias="displayName")


class VMSizeResponse(BaseModel):
    """Item of ``az vm list-sizes`` output."""

    name: str
