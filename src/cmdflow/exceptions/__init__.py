"""cmdflow exception hierarchy.

All exceptions can be imported from this package:
    from cmdflow.exceptions import CmdflowError, WorkflowParseError
"""

from __future__ import annotations

from cmdflow.exceptions.base import CmdflowError
from cmdflow.exceptions.config import ConfigError
from cmdflow.exceptions.templates import (
    TemplateError,
    WorkflowParseError,
    WorkflowValidationError,
)

__all__ = [
    "CmdflowError",
    "ConfigError",
    "TemplateError",
    "WorkflowParseError",
    "WorkflowValidationError",
]
