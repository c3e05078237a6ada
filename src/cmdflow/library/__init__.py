"""Workflow definitions shipped with cmdflow."""

from __future__ import annotations

from pathlib import Path

__all__ = ["BUILTIN_WORKFLOWS_DIR"]

BUILTIN_WORKFLOWS_DIR: Path = Path(__file__).parent / "workflows"
