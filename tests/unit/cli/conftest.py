from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(clean_env: None, temp_dir: Path, isolated_home: Path) -> Path:
    """Working directory whose clusterwiz.yaml removes all waiting."""
    os.chdir(temp_dir)
    (temp_dir / "clusterwiz.yaml").write_text(
        """
google:
  credential_attempts: 3
  credential_retry_interval: 0
  cluster_wait_seconds: 0
"""
    )
    return temp_dir
