"""Output formatting utilities for the clusterwiz CLI."""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "format_error",
    "format_json",
    "format_success",
    "format_table",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error(
        ...     "Unable to set gcloud CLI project",
        ...     details=["while logging into project"],
        ...     suggestion="Run 'gcloud auth login'",
        ... ))
        Error: Unable to set gcloud CLI project
          while logging into project
        Suggestion: Run 'gcloud auth login'
    """
    lines = [f"Error: {message}"]
    if details:
        lines.extend(f"  {detail}" for detail in details)
    if suggestion:
        lines.append(f"Suggestion: {suggestion}")
    return "\n".join(lines)


def format_success(message: str) -> str:
    """Format a success message.

    Example:
        >>> format_success("Cluster creation requested")
        'Success: Cluster creation requested'
    """
    return f"Success: {message}"


def format_json(data: Any) -> str:
    """Format data as indented JSON.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    return json.dumps(data, indent=2)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a simple text table with pipe separators.

    Example:
        >>> print(format_table(["Name", "Group"], [["dev", ""], ["prod", "ops"]]))
        Name | Group
        dev  |
        prod | ops
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(cell))

    def _line(cells: list[str]) -> str:
        parts = [
            cell.ljust(col_widths[i]) if i < len(col_widths) else cell
            for i, cell in enumerate(cells)
        ]
        return " | ".join(parts).rstrip()

    return "\n".join([_line(headers), *(_line(row) for row in rows)])
