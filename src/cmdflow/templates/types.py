"""Enumerations shared by the workflow template engine."""

from __future__ import annotations

from enum import Enum


class Shell(str, Enum):
    """Command interpreters a workflow can declare compatibility with.

    The set is closed: anything else is rejected by the parser and
    reported by the validator.
    """

    ZSH = "zsh"
    BASH = "bash"
    FISH = "fish"


#: Valid shell identifiers in the order used in error messages.
VALID_SHELLS: tuple[str, ...] = tuple(shell.value for shell in Shell)


class IssueKind(str, Enum):
    """Category of a problem reported by the validator."""

    MISSING_NAME = "missing_name"
    MISSING_COMMAND = "missing_command"
    INVALID_SHELLS = "invalid_shells"
    UNDEFINED_ARGUMENTS = "undefined_arguments"
    # Warnings only
    UNUSED_ARGUMENT = "unused_argument"
    DUPLICATE_ARGUMENT = "duplicate_argument"
    BLANK_ARGUMENT_NAME = "blank_argument_name"


def invalid_shells(shells: list[object] | None) -> list[str]:
    """Return the entries of ``shells`` that are not valid shell identifiers.

    Entries are returned as strings, in their original order.
    """
    if not shells:
        return []
    return [str(shell) for shell in shells if shell not in VALID_SHELLS]
