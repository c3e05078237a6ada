"""Pydantic models for workflow definitions and validation results.

This module defines:
- WorkflowArgument: metadata for one named placeholder
- Workflow: a reusable command template
- ParsedWorkflow: a Workflow with identity and audit timestamps
- ValidationIssue / ValidationResult: what the validator reports

Models are frozen. The parser and callers building workflows from form
input construct them; the validator and placeholder engine only read them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmdflow.templates.types import VALID_SHELLS, IssueKind, Shell

__all__ = [
    "WORKFLOW_FIELD_ORDER",
    "WorkflowArgument",
    "Workflow",
    "ParsedWorkflow",
    "ValidationIssue",
    "ValidationResult",
]

#: Top-level definition keys, in the order they are written out.
WORKFLOW_FIELD_ORDER: tuple[str, ...] = (
    "name",
    "command",
    "tags",
    "description",
    "source_url",
    "author",
    "author_url",
    "shells",
    "arguments",
)


class WorkflowArgument(BaseModel):
    """A declared argument that a ``{{name}}`` placeholder may reference."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    description: str | None = None
    default_value: str | None = None

    @field_validator("description", "default_value", mode="before")
    @classmethod
    def scalar_as_text(cls, v: Any) -> Any:
        """Read YAML scalars such as ``8080`` or ``no`` as text.

        Booleans are written the way YAML spells them (``true``/``false``).
        Mappings and lists are left for type validation to reject.
        """
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, int | float):
            return str(v)
        if isinstance(v, date):
            return v.isoformat()
        return v


class Workflow(BaseModel):
    """A named, reusable shell-command template.

    ``name`` and ``command`` default to empty strings so that half-filled
    form input can still be handed to the validator, which reports them.
    ``shells`` keeps the raw strings it was given; an entry outside
    ``zsh``/``bash``/``fish`` is reported, never silently dropped.

    Keys not listed here are kept in ``model_extra`` and written back out
    by the serializer.

    Freezing is shallow: fields cannot be reassigned, but the lists they
    hold are ordinary lists. Build a new Workflow (``model_copy(update=...)``)
    instead of mutating ``tags``, ``shells`` or ``arguments`` in place.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = ""
    command: str = ""
    tags: list[str] | None = None
    description: str | None = None
    source_url: str | None = None
    author: str | None = None
    author_url: str | None = None
    shells: list[str] | None = None
    arguments: list[WorkflowArgument] | None = None

    @property
    def placeholders(self) -> list[str]:
        """Distinct placeholder names used in ``command``."""
        from cmdflow.templates.placeholders import extract_placeholders

        return extract_placeholders(self.command)

    @property
    def argument_names(self) -> list[str]:
        return [argument.name for argument in self.arguments or []]

    def argument(self, name: str) -> WorkflowArgument | None:
        """Return the first declared argument called ``name``, if any."""
        for argument in self.arguments or []:
            if argument.name == name:
                return argument
        return None

    def shell_enums(self) -> list[Shell]:
        """Declared shells as ``Shell`` members, skipping invalid entries."""
        return [Shell(shell) for shell in self.shells or [] if shell in VALID_SHELLS]

    def supports_shell(self, shell: Shell | str) -> bool:
        """True when the workflow declares ``shell`` or has no restriction."""
        if not self.shells:
            return True
        value = shell.value if isinstance(shell, Shell) else shell
        return value in self.shells

    def to_yaml(self) -> str:
        from cmdflow.templates.writer import WorkflowWriter

        return WorkflowWriter().to_yaml(self)

    @classmethod
    def from_yaml(cls, text: str) -> Workflow:
        from cmdflow.templates.parser import parse_workflow

        return parse_workflow(text)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ParsedWorkflow(Workflow):
    """A Workflow that has been given an identity by its owner.

    ``id`` is assigned externally. Edits replace the whole value through
    :meth:`replace_with`; there is no partial update.
    """

    id: str = Field(..., min_length=1)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_workflow(
        cls,
        workflow: Workflow,
        *,
        id: str,
        timestamp: datetime | None = None,
    ) -> ParsedWorkflow:
        """Attach identity to ``workflow``.

        Args:
            workflow: The definition to wrap.
            id: Identifier assigned by the caller.
            timestamp: Creation time; defaults to now (UTC).
        """
        moment = timestamp or _utcnow()
        return cls(
            **_definition_fields(workflow),
            id=id,
            created_at=moment,
            updated_at=moment,
        )

    def replace_with(
        self, workflow: Workflow, *, timestamp: datetime | None = None
    ) -> ParsedWorkflow:
        """Return ``workflow`` under this identity, with a new ``updated_at``."""
        return type(self)(
            **_definition_fields(workflow),
            id=self.id,
            created_at=self.created_at,
            updated_at=timestamp or _utcnow(),
        )

    def definition(self) -> Workflow:
        """Strip identity and timestamps, returning the bare Workflow."""
        return Workflow(**_definition_fields(self))


_IDENTITY_FIELDS = ("id", "created_at", "updated_at")


def _definition_fields(workflow: Workflow) -> dict[str, Any]:
    data = workflow.model_dump()
    for key in _IDENTITY_FIELDS:
        data.pop(key, None)
    return data


# =============================================================================
# Validation Result Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One problem found by the validator.

    Fields:
        kind: Category of the problem.
        message: Human-readable message, shown to the editor as-is.
        field: Workflow field the problem belongs to (e.g. "shells").
    """

    kind: IssueKind
    message: str
    field: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Everything the validator found, in check order.

    Errors make the workflow unusable; warnings are advisory.
    """

    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        """Error messages only, in the order the checks ran."""
        return [issue.message for issue in self.errors]
