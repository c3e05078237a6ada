"""Searching, filtering and sorting a collection of workflows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from cmdflow.templates.schema import ParsedWorkflow
from cmdflow.templates.types import Shell

__all__ = [
    "SortKey",
    "WorkflowQuery",
    "filter_workflows",
    "collect_tags",
    "collect_shells",
]


class SortKey(str, Enum):
    """Ordering for listed workflows.

    NAME sorts alphabetically; CREATED and UPDATED put the newest first.
    """

    NAME = "name"
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class WorkflowQuery:
    """Criteria for :func:`filter_workflows`.

    Attributes:
        search: Case-insensitive text matched against name, description,
            command and tags. Empty matches everything.
        tags: Every listed tag must be present on the workflow.
        shell: Keep workflows that declare this shell or declare none.
        sort: Result ordering.
    """

    search: str = ""
    tags: tuple[str, ...] = ()
    shell: Shell | None = None
    sort: SortKey = SortKey.UPDATED

    def matches(self, workflow: ParsedWorkflow) -> bool:
        return (
            self._matches_search(workflow)
            and self._matches_tags(workflow)
            and (self.shell is None or workflow.supports_shell(self.shell))
        )

    def _matches_search(self, workflow: ParsedWorkflow) -> bool:
        needle = self.search.lower()
        if not needle:
            return True
        haystacks = [workflow.name, workflow.description or "", workflow.command]
        haystacks.extend(workflow.tags or [])
        return any(needle in text.lower() for text in haystacks)

    def _matches_tags(self, workflow: ParsedWorkflow) -> bool:
        present = set(workflow.tags or [])
        return all(tag in present for tag in self.tags)


def filter_workflows(
    workflows: Iterable[ParsedWorkflow], query: WorkflowQuery | None = None
) -> list[ParsedWorkflow]:
    """Return the workflows matching ``query``, in the order it asks for."""
    query = query or WorkflowQuery()
    selected = [workflow for workflow in workflows if query.matches(workflow)]

    if query.sort is SortKey.NAME:
        selected.sort(key=lambda wf: wf.name.casefold())
    elif query.sort is SortKey.CREATED:
        selected.sort(key=lambda wf: wf.created_at, reverse=True)
    else:
        selected.sort(key=lambda wf: wf.updated_at, reverse=True)
    return selected


def collect_tags(workflows: Iterable[ParsedWorkflow]) -> list[str]:
    """All tags in use, each once, in first-seen order."""
    seen: dict[str, None] = {}
    for workflow in workflows:
        for tag in workflow.tags or []:
            seen.setdefault(tag, None)
    return list(seen)


def collect_shells(workflows: Iterable[ParsedWorkflow]) -> list[str]:
    """All declared shells, each once, in first-seen order."""
    seen: dict[str, None] = {}
    for workflow in workflows:
        for shell in workflow.shells or []:
            seen.setdefault(shell, None)
    return list(seen)
