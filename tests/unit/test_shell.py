"""Tests for the shell collaborator."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from clusterwiz.exceptions import CommandNotFoundError
from clusterwiz.runners.command import CommandRunner
from clusterwiz.runners.models import CommandResult
from clusterwiz.shell import CommandShell, Shell


class TestCommandShell:
    @pytest.mark.asyncio
    async def test_exec_runs_through_platform_shell(self) -> None:
        runner = MagicMock()
        expected = CommandResult(returncode=0, stdout="[]", stderr="")
        runner.run_shell = AsyncMock(return_value=expected)

        shell = CommandShell(runner=runner)
        result = await shell.exec("gcloud projects list --format=json")

        assert result is expected
        runner.run_shell.assert_awaited_once_with(
            "gcloud projects list --format=json", max_retries=0, retry_delay=1.0
        )

    @pytest.mark.asyncio
    async def test_exec_retries_transient_failure(self) -> None:
        reset = MagicMock(returncode=1)
        reset.communicate = AsyncMock(return_value=(b"", b"connection reset by peer"))
        ok = MagicMock(returncode=0)
        ok.communicate = AsyncMock(return_value=(b"[]", b""))

        shell = CommandShell(CommandRunner(), max_retries=1, retry_delay=0.01)
        with patch(
            "asyncio.create_subprocess_shell", AsyncMock(side_effect=[reset, ok])
        ) as create:
            result = await shell.exec("gcloud projects list --format=json")

        assert create.call_count == 2
        assert result.success
        assert result.stdout == "[]"

    @pytest.mark.asyncio
    async def test_exec_without_retries_returns_first_failure(self) -> None:
        reset = MagicMock(returncode=1)
        reset.communicate = AsyncMock(return_value=(b"", b"connection reset by peer"))

        with patch(
            "asyncio.create_subprocess_shell", AsyncMock(return_value=reset)
        ) as create:
            result = await CommandShell(CommandRunner()).exec("az account show")

        assert create.call_count == 1
        assert result.returncode == 1

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [("linux", True), ("darwin", True), ("win32", False)],
    )
    def test_is_unix(self, platform: str, expected: bool) -> None:
        assert CommandShell(platform=platform).is_unix() is expected

    def test_satisfies_protocol(self) -> None:
        assert isinstance(CommandShell(), Shell)

    def test_require_returns_resolved_path(self) -> None:
        with patch("shutil.which", return_value="/usr/bin/gcloud"):
            assert CommandShell().require("gcloud") == "/usr/bin/gcloud"

    def test_require_missing_executable(self) -> None:
        with patch("shutil.which", return_value=None):
            with pytest.raises(CommandNotFoundError) as exc_info:
                CommandShell().require("az")

        assert exc_info.value.executable == "az"
        assert "az" in exc_info.value.message
