"""Serialize workflows back to definition text.

The output is meant to be read, hand-edited and diffed, so:
- keys come out in a fixed order (see ``WORKFLOW_FIELD_ORDER``), followed
  by any unknown keys in the order they were read
- ``None`` values and empty lists are left out
- sequences keep their element order; nothing is sorted

Empty lists are indistinguishable from absent ones after a round trip.
Serialization is idempotent on its own output but is not expected to
reproduce arbitrary hand-written input byte for byte.

Usage:
    writer = WorkflowWriter()
    text = writer.to_yaml(workflow)
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from cmdflow.templates.schema import (
    WORKFLOW_FIELD_ORDER,
    Workflow,
    WorkflowArgument,
)

__all__ = ["WorkflowWriter", "serialize_workflow"]

_ARGUMENT_FIELD_ORDER = ("name", "description", "default_value")


def _omitted(value: Any) -> bool:
    return value is None or (isinstance(value, list) and not value)


class WorkflowWriter:
    """Converts Workflow models to dict, YAML and JSON."""

    def to_dict(self, workflow: Workflow) -> dict[str, Any]:
        """Build an ordered plain dict with empty values removed.

        Identity fields of a ParsedWorkflow are not part of the definition
        and are never written.
        """
        result: dict[str, Any] = {}
        for key in WORKFLOW_FIELD_ORDER:
            value = getattr(workflow, key)
            if _omitted(value):
                continue
            if key == "arguments":
                value = [self._serialize_argument(arg) for arg in value]
            elif key in ("tags", "shells"):
                value = list(value)
            result[key] = value

        for key, value in (workflow.model_extra or {}).items():
            if not _omitted(value):
                result[key] = value
        return result

    def to_yaml(self, workflow: Workflow) -> str:
        """Render the workflow as block-style YAML, without line wrapping."""
        text: str = yaml.safe_dump(
            self.to_dict(workflow),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
            width=float("inf"),
        )
        return text

    def to_json(self, workflow: Workflow, indent: int | None = 2) -> str:
        return json.dumps(
            self.to_dict(workflow), indent=indent, ensure_ascii=False, default=str
        )

    def _serialize_argument(self, argument: WorkflowArgument) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key in _ARGUMENT_FIELD_ORDER:
            value = getattr(argument, key)
            if value is not None:
                result[key] = value
        for key, value in (argument.model_extra or {}).items():
            if not _omitted(value):
                result[key] = value
        return result


def serialize_workflow(workflow: Workflow) -> str:
    """Return the YAML definition text for ``workflow``."""
    return WorkflowWriter().to_yaml(workflow)
