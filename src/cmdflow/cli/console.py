"""Shared Rich console for CLI output.

Rich detects whether it is writing to a terminal and drops styling when
output is piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console"]

console = Console(highlight=False)
