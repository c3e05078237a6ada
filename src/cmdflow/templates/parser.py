"""Workflow definition parser.

Turns YAML definition text into a validated :class:`Workflow`:

- parse_yaml: YAML text to a mapping (WorkflowParseError on bad syntax)
- check_required_fields: ``name`` and ``command`` must be present
- check_shells: every shell must be one of zsh, bash, fish
- validate_schema: build the pydantic model (field types)
- parse_workflow: all of the above, raising on the first failure
- try_parse_workflow: same, but returns Ok/Err instead of raising
- load_workflow_file: read a definition file from disk and parse it

Parsing stops at the first problem. The validator in
``cmdflow.templates.validation`` is the one that reports everything at once.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cmdflow.exceptions import (
    TemplateError,
    WorkflowParseError,
    WorkflowValidationError,
)
from cmdflow.logging import get_logger
from cmdflow.templates.results import Err, Ok, Result
from cmdflow.templates.schema import Workflow
from cmdflow.templates.types import VALID_SHELLS, invalid_shells

__all__ = [
    "parse_yaml",
    "check_required_fields",
    "check_shells",
    "validate_schema",
    "parse_workflow",
    "try_parse_workflow",
    "load_workflow_file",
]

logger = get_logger(__name__)


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse definition text into a mapping.

    An empty document yields an empty mapping, which then fails the
    required-field check rather than the syntax check.

    Raises:
        WorkflowParseError: If the YAML is malformed or its top level is
            not a mapping.

    Examples:
        >>> parse_yaml("name: Test\\ncommand: echo {{msg}}")
        {'name': 'Test', 'command': 'echo {{msg}}'}
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        line_number = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line_number = mark.line + 1
        raise WorkflowParseError(
            f"Invalid YAML: {e}",
            line_number=line_number,
            parse_error=e,
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise WorkflowParseError(
            f"Invalid YAML: workflow definition must be a mapping, "
            f"got {type(data).__name__}"
        )
    return data


def check_required_fields(data: dict[str, Any]) -> None:
    """Reject definitions without a name or a command.

    Raises:
        WorkflowValidationError: Naming the first missing field.
    """
    if not data.get("name"):
        raise WorkflowValidationError(
            "Workflow name is required", field="name", value=data.get("name")
        )
    if not data.get("command"):
        raise WorkflowValidationError(
            "Workflow command is required",
            field="command",
            value=data.get("command"),
        )


def check_shells(data: dict[str, Any]) -> None:
    """Reject shell values outside the supported set.

    A ``shells`` value that is not a list is left to schema validation.

    Raises:
        WorkflowValidationError: Listing every invalid value and the valid set.
    """
    shells = data.get("shells")
    if not isinstance(shells, list):
        return
    bad = invalid_shells(shells)
    if bad:
        raise WorkflowValidationError(
            f"Invalid shells: {', '.join(bad)}. "
            f"Valid shells are: {', '.join(VALID_SHELLS)}",
            field="shells",
            value=bad,
        )


def validate_schema(data: dict[str, Any]) -> Workflow:
    """Build a Workflow, turning pydantic errors into WorkflowValidationError."""
    try:
        return Workflow.model_validate(data)
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(part) for part in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        first_field = str(e.errors()[0]["loc"][0]) if e.errors() else None
        raise WorkflowValidationError(
            f"Schema validation failed: {'; '.join(details)}",
            field=first_field,
        ) from e


def parse_workflow(text: str) -> Workflow:
    """Parse definition text into a Workflow.

    Field values are kept exactly as written; nothing is trimmed or
    re-cased. Unknown top-level keys are carried along untouched.

    Raises:
        WorkflowParseError: Malformed YAML.
        WorkflowValidationError: Missing name/command, invalid shells or
            wrongly typed fields.

    Examples:
        >>> wf = parse_workflow("name: Test\\ncommand: echo {{msg}}")
        >>> wf.name, wf.command
        ('Test', 'echo {{msg}}')
    """
    data = parse_yaml(text)
    check_required_fields(data)
    check_shells(data)
    workflow = validate_schema(data)
    logger.debug(
        "workflow_parsed",
        workflow=workflow.name,
        arguments=len(workflow.arguments or []),
    )
    return workflow


def try_parse_workflow(
    text: str,
) -> Result[Workflow, WorkflowParseError | WorkflowValidationError]:
    """Parse definition text without raising.

    Returns:
        ``Ok(workflow)`` on success, otherwise ``Err(error)`` holding the
        WorkflowParseError or WorkflowValidationError ``parse_workflow``
        would have raised.
    """
    try:
        return Ok(parse_workflow(text))
    except (WorkflowParseError, WorkflowValidationError) as e:
        logger.debug("workflow_parse_failed", error=e.message)
        return Err(e)


def load_workflow_file(path: Path) -> Workflow:
    """Read and parse a UTF-8 definition file.

    Raises:
        WorkflowParseError: Malformed YAML, or the file cannot be decoded.
        WorkflowValidationError: As for :func:`parse_workflow`.
        OSError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise WorkflowParseError(
            f"Invalid YAML: {path} is not valid UTF-8",
            file_path=str(path),
            parse_error=e,
        ) from e

    try:
        return parse_workflow(text)
    except TemplateError as e:
        e.file_path = str(path)
        raise
