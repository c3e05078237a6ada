"""Browsing workflows: loading definition directories and querying them."""

from __future__ import annotations

from cmdflow.catalog.library import (
    LoadResult,
    SkippedWorkflow,
    WorkflowLibrary,
    scan_directory,
)
from cmdflow.catalog.query import (
    SortKey,
    WorkflowQuery,
    collect_shells,
    collect_tags,
    filter_workflows,
)

__all__ = [
    "LoadResult",
    "SkippedWorkflow",
    "WorkflowLibrary",
    "scan_directory",
    "SortKey",
    "WorkflowQuery",
    "collect_shells",
    "collect_tags",
    "filter_workflows",
]
