"""Tests for the CommandResult model."""

from __future__ import annotations

import dataclasses

import pytest

from clusterwiz.runners.models import CommandResult


class TestCommandResult:
    def test_success_requires_zero_exit(self) -> None:
        assert CommandResult(returncode=0, stdout="", stderr="").success
        assert not CommandResult(returncode=2, stdout="", stderr="").success

    def test_timeout_is_not_success(self) -> None:
        result = CommandResult(returncode=0, stdout="", stderr="", timed_out=True)
        assert not result.success

    def test_clean_rejects_stderr_even_on_zero_exit(self) -> None:
        warned = CommandResult(
            returncode=0, stdout="", stderr="WARNING: Property validation skipped"
        )
        assert warned.success
        assert not warned.clean
        assert CommandResult(returncode=0, stdout="done", stderr="").clean

    def test_is_frozen(self) -> None:
        result = CommandResult(returncode=0, stdout="", stderr="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.returncode = 1  # type: ignore[misc]
