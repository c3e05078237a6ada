"""Workflow template engine.

Parses YAML workflow definitions, writes them back out, finds and fills
``{{name}}`` placeholders in commands, and checks that every placeholder
has a declared argument.

Example definition:
    name: Git Status and Push
    command: git add {{files}} && git commit -m "{{message}}"
    tags: [git]
    shells: [bash, zsh]
    arguments:
      - name: files
        default_value: .
      - name: message

The engine never executes commands and keeps no state between calls.
"""

from __future__ import annotations

from cmdflow.exceptions import WorkflowParseError, WorkflowValidationError
from cmdflow.templates.parser import (
    load_workflow_file,
    parse_workflow,
    parse_yaml,
    try_parse_workflow,
)
from cmdflow.templates.placeholders import (
    PlaceholderToken,
    default_values,
    extract_placeholders,
    missing_values,
    render_workflow,
    scan_placeholders,
    substitute,
)
from cmdflow.templates.results import Err, Ok, Result
from cmdflow.templates.schema import (
    ParsedWorkflow,
    ValidationIssue,
    ValidationResult,
    Workflow,
    WorkflowArgument,
)
from cmdflow.templates.types import VALID_SHELLS, IssueKind, Shell
from cmdflow.templates.validation import WorkflowValidator, validate_workflow
from cmdflow.templates.writer import WorkflowWriter, serialize_workflow

__all__ = [
    # Model
    "Shell",
    "VALID_SHELLS",
    "Workflow",
    "WorkflowArgument",
    "ParsedWorkflow",
    # Parse / serialize
    "parse_yaml",
    "parse_workflow",
    "try_parse_workflow",
    "load_workflow_file",
    "WorkflowWriter",
    "serialize_workflow",
    "Ok",
    "Err",
    "Result",
    # Placeholders
    "PlaceholderToken",
    "scan_placeholders",
    "extract_placeholders",
    "substitute",
    "default_values",
    "missing_values",
    "render_workflow",
    # Validation
    "IssueKind",
    "ValidationIssue",
    "ValidationResult",
    "WorkflowValidator",
    "validate_workflow",
    # Errors
    "WorkflowParseError",
    "WorkflowValidationError",
]
