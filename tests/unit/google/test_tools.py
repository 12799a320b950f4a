"""Tests for the external-tool registry."""

from __future__ import annotations

import pytest

from clusterwiz.config import GoogleProviderConfig
from clusterwiz.google.tools import (
    COMMANDS,
    LOCATIONS_QUERY,
    CloudTool,
    Operation,
    render,
)


def test_every_operation_is_registered() -> None:
    assert set(COMMANDS) == set(Operation)


@pytest.mark.parametrize(
    ("operation", "tool"),
    [
        (Operation.LIST_PROJECTS, CloudTool.GCLOUD),
        (Operation.SET_PROJECT, CloudTool.GCLOUD),
        (Operation.LIST_CLUSTERS, CloudTool.GCLOUD),
        (Operation.CREATE_CLUSTER, CloudTool.GCLOUD),
        (Operation.GET_CREDENTIALS, CloudTool.GCLOUD),
        (Operation.LIST_LOCATIONS, CloudTool.AZ),
        (Operation.LIST_VM_SIZES, CloudTool.AZ),
    ],
)
def test_vendor_per_operation(operation: Operation, tool: CloudTool) -> None:
    assert COMMANDS[operation].tool is tool


def test_parameters_exclude_tool() -> None:
    assert COMMANDS[Operation.CREATE_CLUSTER].parameters == {
        "cluster_name",
        "location",
    }
    assert COMMANDS[Operation.LIST_PROJECTS].parameters == frozenset()


def test_render_with_default_executables() -> None:
    settings = GoogleProviderConfig()

    assert (
        render(Operation.SET_PROJECT, settings, project="demo")
        == 'gcloud config set project "demo"'
    )
    assert (
        render(Operation.CREATE_CLUSTER, settings, cluster_name="c1", location="z1")
        == 'gcloud container clusters create "c1" --zone "z1" --async'
    )
    assert (
        render(Operation.LIST_VM_SIZES, settings, location="eastus")
        == 'az vm list-sizes -l "eastus" -ojson'
    )


def test_render_uses_configured_executables() -> None:
    settings = GoogleProviderConfig(
        gcloud_path="/opt/google/bin/gcloud", az_path="/opt/az/bin/az"
    )

    assert render(Operation.LIST_CLUSTERS, settings).startswith(
        "/opt/google/bin/gcloud container clusters list"
    )
    assert render(Operation.LIST_LOCATIONS, settings, query="q").startswith(
        "/opt/az/bin/az account list-locations"
    )


def test_render_rejects_missing_parameter() -> None:
    with pytest.raises(ValueError, match="get_credentials"):
        render(Operation.GET_CREDENTIALS, GoogleProviderConfig())


def test_render_rejects_unexpected_parameter() -> None:
    with pytest.raises(ValueError):
        render(Operation.LIST_PROJECTS, GoogleProviderConfig(), project="demo")


def test_locations_query() -> None:
    assert LOCATIONS_QUERY == "[].{name:name,displayName:displayName}"


@pytest.mark.parametrize(
    "operation", [Operation.CREATE_CLUSTER, Operation.GET_CREDENTIALS]
)
def test_cluster_name_is_quoted(operation: Operation) -> None:
    params = {"cluster_name": "my cluster"}
    if operation is Operation.CREATE_CLUSTER:
        params["location"] = "us-east1-b"

    line = render(operation, GoogleProviderConfig(), **params)

    assert '"my cluster"' in line
