"""Unit tests for CLI output formatting utilities."""

from __future__ import annotations

import json

import pytest

from clusterwiz.cli.output import (
    format_error,
    format_json,
    format_success,
    format_table,
)


class TestFormatError:
    def test_message_only(self) -> None:
        assert format_error("Unable to list VM sizes") == (
            "Error: Unable to list VM sizes"
        )

    def test_details_and_suggestion(self) -> None:
        text = format_error(
            "Unable to set gcloud CLI project",
            details=["While logging into project"],
            suggestion="Run 'gcloud auth login'",
        )
        assert text.splitlines() == [
            "Error: Unable to set gcloud CLI project",
            "  While logging into project",
            "Suggestion: Run 'gcloud auth login'",
        ]


def test_format_success() -> None:
    assert format_success("Cluster creation requested") == (
        "Success: Cluster creation requested"
    )


class TestFormatJson:
    def test_round_trips(self) -> None:
        data = {"eastus": "East US", "nested": [1, None]}
        assert json.loads(format_json(data)) == data

    def test_rejects_unserializable(self) -> None:
        with pytest.raises(TypeError):
            format_json({"value": object()})


class TestFormatTable:
    def test_aligns_columns(self) -> None:
        table = format_table(["Name", "Group"], [["dev", ""], ["prod", "ops"]])
        assert table.splitlines() == [
            "Name | Group",
            "dev  |",
            "prod | ops",
        ]

    def test_no_headers(self) -> None:
        assert format_table([], [["x"]]) == ""

    def test_headers_only(self) -> None:
        assert format_table(["Project"], []) == "Project"
