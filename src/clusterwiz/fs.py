"""Filesystem collaborator carried in the adapter context."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = ["FS", "LocalFS"]


@runtime_checkable
class FS(Protocol):
    """Minimal filesystem surface available to adapters."""

    def exists(self, path: Path | str) -> bool: ...

    def read_text(self, path: Path | str) -> str: ...

    def write_text(self, path: Path | str, text: str) -> None: ...

    def home_dir(self) -> Path: ...


class LocalFS:
    """FS implementation over the local disk."""

    def exists(self, path: Path | str) -> bool:
        return Path(path).exists()

    def read_text(self, path: Path | str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: Path | str, text: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    def home_dir(self) -> Path:
        return Path.home()
