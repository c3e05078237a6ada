"""Consistency checks for workflows.

Unlike the parser, the validator never raises and never stops early: it
runs every check and returns everything it found, so an editor can show
all problems at once.

Errors, in the order they are reported:
1. blank ``name``                       -> "Name is required"
2. blank ``command``                    -> "Command is required"
3. shells outside zsh/bash/fish         -> "Invalid shells: <values>"
4. placeholders with no declared argument
                                        -> "Undefined arguments in command: <names>"

Warnings (advisory, never make a workflow invalid):
- an argument declared more than once
- an argument the command never uses
- an argument with a blank name
"""

from __future__ import annotations

from collections import Counter

from cmdflow.templates.placeholders import extract_placeholders
from cmdflow.templates.schema import ValidationIssue, ValidationResult, Workflow
from cmdflow.templates.types import IssueKind, invalid_shells

__all__ = ["WorkflowValidator", "validate_workflow"]


class WorkflowValidator:
    """Runs every workflow check and collects the results.

    Example:
        ```python
        result = WorkflowValidator().validate(workflow)
        if not result.valid:
            for issue in result.errors:
                print(f"{issue.field}: {issue.message}")
        ```
    """

    def validate(self, workflow: Workflow) -> ValidationResult:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        errors.extend(self._check_required(workflow))
        errors.extend(self._check_shells(workflow))
        errors.extend(self._check_undefined_arguments(workflow))

        warnings.extend(self._check_argument_declarations(workflow))

        return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))

    def _check_required(self, workflow: Workflow) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if not workflow.name.strip():
            issues.append(
                ValidationIssue(IssueKind.MISSING_NAME, "Name is required", "name")
            )
        if not workflow.command.strip():
            issues.append(
                ValidationIssue(
                    IssueKind.MISSING_COMMAND, "Command is required", "command"
                )
            )
        return issues

    def _check_shells(self, workflow: Workflow) -> list[ValidationIssue]:
        bad = invalid_shells(workflow.shells)
        if not bad:
            return []
        return [
            ValidationIssue(
                IssueKind.INVALID_SHELLS,
                f"Invalid shells: {', '.join(bad)}",
                "shells",
            )
        ]

    def _check_undefined_arguments(
        self, workflow: Workflow
    ) -> list[ValidationIssue]:
        declared = set(workflow.argument_names)
        undefined = [
            name
            for name in extract_placeholders(workflow.command)
            if name not in declared
        ]
        if not undefined:
            return []
        return [
            ValidationIssue(
                IssueKind.UNDEFINED_ARGUMENTS,
                f"Undefined arguments in command: {', '.join(undefined)}",
                "command",
            )
        ]

    def _check_argument_declarations(
        self, workflow: Workflow
    ) -> list[ValidationIssue]:
        names = workflow.argument_names
        if not names:
            return []

        issues: list[ValidationIssue] = []
        if any(not name.strip() for name in names):
            issues.append(
                ValidationIssue(
                    IssueKind.BLANK_ARGUMENT_NAME,
                    "Argument name is empty",
                    "arguments",
                )
            )

        counts = Counter(names)
        duplicates = [name for name in counts if counts[name] > 1]
        if duplicates:
            issues.append(
                ValidationIssue(
                    IssueKind.DUPLICATE_ARGUMENT,
                    f"Duplicate argument names: {', '.join(duplicates)}",
                    "arguments",
                )
            )

        used = set(extract_placeholders(workflow.command))
        for name in counts:
            if name.strip() and name not in used:
                issues.append(
                    ValidationIssue(
                        IssueKind.UNUSED_ARGUMENT,
                        f"Argument '{name}' is not used in the command",
                        "arguments",
                    )
                )
        return issues


def validate_workflow(workflow: Workflow) -> list[str]:
    """Return every error message for ``workflow``; empty means valid.

    Warnings are not included. Use :class:`WorkflowValidator` for the
    typed issues and the warnings.

    Examples:
        >>> validate_workflow(Workflow(name="Test", command="echo {{msg}}"))
        ['Undefined arguments in command: msg']
    """
    return WorkflowValidator().validate(workflow).messages
