"""clusterwiz exception hierarchy.

All exceptions can be imported from this package:
    from clusterwiz.exceptions import ConfigError, RunnerError
"""

from __future__ import annotations

from clusterwiz.exceptions.base import ClusterWizError
from clusterwiz.exceptions.config import ConfigError
from clusterwiz.exceptions.runner import (
    CommandNotFoundError,
    RunnerError,
    WorkingDirectoryError,
)

__all__ = [
    "ClusterWizError",
    "ConfigError",
    "RunnerError",
    "WorkingDirectoryError",
    "CommandNotFoundError",
]
