"""Errors raised while turning definition text into a Workflow.

Hierarchy:
    TemplateError
    ├── WorkflowParseError       (the YAML itself is unreadable)
    └── WorkflowValidationError  (readable YAML, unusable workflow)

The validator and the placeholder engine never raise; they report.
"""

from __future__ import annotations

from typing import Any

from cmdflow.exceptions.base import CmdflowError


class TemplateError(CmdflowError):
    """Base class for workflow definition errors.

    Attributes:
        message: Human-readable error message.
        file_path: Definition file the error came from, when loaded from disk.
    """

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        super().__init__(message)


class WorkflowParseError(TemplateError):
    """Definition text is not well-formed YAML (or not a mapping).

    Attributes:
        line_number: 1-indexed line reported by the YAML library, if any.
        parse_error: The underlying library exception.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line_number: int | None = None,
        parse_error: Exception | None = None,
    ) -> None:
        self.line_number = line_number
        self.parse_error = parse_error
        super().__init__(message, file_path=file_path)


class WorkflowValidationError(TemplateError):
    """Definition parsed, but a required field or shell value is invalid.

    Named to avoid clashing with ``pydantic.ValidationError``.

    Attributes:
        field: Name of the offending workflow field (``"name"``, ``"shells"``).
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        file_path: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message, file_path=file_path)
