from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from clusterwiz.config import GoogleProviderConfig
from clusterwiz.fs import LocalFS
from clusterwiz.google.models import Context
from clusterwiz.runners.models import CommandResult


def _make_result(
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
    timed_out: bool = False,
) -> CommandResult:
    """Build a CommandResult as the shell would return it."""
    return CommandResult(
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        duration_ms=10,
        timed_out=timed_out,
    )


@pytest.fixture
def make_result() -> Callable[..., CommandResult]:
    """Factory for CommandResult values returned by a mock shell."""
    return _make_result


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Send structlog output to stderr at WARNING level for every test."""
    from clusterwiz.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory, restoring the cwd afterwards."""
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all CLUSTERWIZ_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("CLUSTERWIZ_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point Path.home() at an empty directory so no user config is read."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def mock_shell() -> MagicMock:
    """Shell whose exec() succeeds with empty output on a POSIX platform."""
    shell = MagicMock()
    shell.exec = AsyncMock(return_value=_make_result(stdout="[]"))
    shell.is_unix = MagicMock(return_value=True)
    return shell


@pytest.fixture
def settings() -> GoogleProviderConfig:
    """Provider settings with the default attempt count and no real waiting."""
    return GoogleProviderConfig(
        credential_retry_interval=15.0,
        cluster_wait_seconds=300.0,
    )


@pytest.fixture
def context(mock_shell: MagicMock, settings: GoogleProviderConfig) -> Context:
    """Adapter context over the mock shell."""
    return Context(shell=mock_shell, fs=LocalFS(), settings=settings)


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Stand-in for asyncio.sleep that records the requested delays."""
    return AsyncMock(return_value=None)
