"""clusterwiz: typed adapters over cloud cluster CLIs."""

from __future__ import annotations

__version__ = "0.1.0"
