"""Tests for the Google adapter data models."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from clusterwiz.config import GoogleProviderConfig
from clusterwiz.fs import LocalFS
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
from clusterwiz.google.regions import PREVIEW_REGIONS, PRODUCTION_REGIONS


class TestClusterInfo:
    def test_parses_cli_json(self) -> None:
        info = ClusterInfo.model_validate({"name": "c1", "resourceGroup": "rg"})
        assert info.name == "c1"
        assert info.resource_group == "rg"

    def test_resource_group_defaults_to_empty(self) -> None:
        info = ClusterInfo.model_validate({"name": "c1", "location": "us-east1-b"})
        assert info.resource_group == ""

    def test_accepts_field_name(self) -> None:
        assert ClusterInfo(name="c1", resource_group="rg").resource_group == "rg"

    def test_is_frozen(self) -> None:
        info = ClusterInfo(name="c1")
        with pytest.raises(ValidationError):
            info.name = "c2"  # type: ignore[misc]


class TestCreateClusterOptions:
    def test_valid(self) -> None:
        options = CreateClusterOptions(
            project="demo",
            metadata=ClusterMetadata(cluster_name="c1", location="us-east1-b"),
        )
        assert options.metadata.cluster_name == "c1"

    @pytest.mark.parametrize("field", ["cluster_name", "location"])
    def test_empty_metadata_rejected(self, field: str) -> None:
        values = {"cluster_name": "c1", "location": "us-east1-b", field: ""}
        with pytest.raises(ValidationError):
            ClusterMetadata(**values)

    def test_empty_project_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateClusterOptions(
                project="",
                metadata=ClusterMetadata(cluster_name="c1", location="z"),
            )


class TestResultModels:
    def test_wait_result_defaults(self) -> None:
        result = WaitResult()
        assert result.still_waiting is False
        assert result.readiness is ReadinessCheck.NOT_IMPLEMENTED

    def test_configure_result_serializes(self) -> None:
        result = ConfigureResult(
            cluster_type="gke", got_credentials=False, credentials_error="denied"
        )
        assert result.model_dump() == {
            "cluster_type": "gke",
            "got_credentials": False,
            "credentials_error": "denied",
        }

    def test_service_location_allows_missing_display_name(self) -> None:
        location = ServiceLocation(display_name=None)
        assert location.display_name is None
        assert location.is_preview is False


class TestContext:
    def test_defaults(self) -> None:
        context = Context(shell=MagicMock())
        assert isinstance(context.fs, LocalFS)
        assert context.settings == GoogleProviderConfig()


class TestRegions:
    def test_production_regions(self) -> None:
        assert len(PRODUCTION_REGIONS) == 19
        assert "eastus" in PRODUCTION_REGIONS
        assert len(set(PRODUCTION_REGIONS)) == len(PRODUCTION_REGIONS)

    def test_no_preview_regions(self) -> None:
        assert PREVIEW_REGIONS == ()
