"""Plain-text formatting helpers for CLI messages."""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "format_error",
    "format_success",
    "format_warning",
    "format_json",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error with optional indented details and a suggestion.

    Example:
        >>> print(format_error("Cannot read workflow", details=["Line: 3"]))
        Error: Cannot read workflow
          Line: 3
    """
    lines = [f"Error: {message}"]
    lines.extend(f"  {detail}" for detail in details or [])
    if suggestion:
        lines.append(f"Suggestion: {suggestion}")
    return "\n".join(lines)


def format_success(message: str) -> str:
    return f"Success: {message}"


def format_warning(message: str) -> str:
    return f"Warning: {message}"


def format_json(data: Any) -> str:
    """Indented JSON; values JSON cannot represent are stringified."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)
