"""Placeholder scanning and substitution for workflow commands.

A placeholder is ``{{`` followed by one or more characters other than
``}``, closed by ``}}``::

    git commit -m "{{message}}"      -> message
    docker rm {{container}}          -> container

There is no escaping and no nesting. Text that does not fit the grammar
(``{{}}``, an unclosed ``{{name``, ``{{a}b}}``) is left alone.

Both operations are implemented as a left-to-right scan rather than with
regular expressions, and neither raises: partial or malformed commands
come straight from an editor while the user is still typing.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdflow.templates.schema import Workflow

__all__ = [
    "PlaceholderToken",
    "scan_placeholders",
    "extract_placeholders",
    "substitute",
    "default_values",
    "missing_values",
    "render_workflow",
]

_OPEN = "{{"
_CLOSE = "}}"


@dataclass(frozen=True, slots=True)
class PlaceholderToken:
    """A placeholder found in a command.

    Attributes:
        name: Text between the braces, verbatim (no trimming).
        start: Index of the first ``{``.
        end: Index just past the final ``}``.
    """

    name: str
    start: int
    end: int

    @property
    def raw(self) -> str:
        return f"{_OPEN}{self.name}{_CLOSE}"


def _token_at(command: str, index: int) -> PlaceholderToken | None:
    """Return the placeholder starting at ``index``, if there is one.

    The name runs up to the first ``}``; the token only exists when that
    brace is immediately followed by a second one and the name is non-empty.
    """
    if not command.startswith(_OPEN, index):
        return None
    name_start = index + len(_OPEN)
    cursor = name_start
    length = len(command)
    while cursor < length and command[cursor] != "}":
        cursor += 1
    if cursor == name_start or not command.startswith(_CLOSE, cursor):
        return None
    return PlaceholderToken(
        name=command[name_start:cursor],
        start=index,
        end=cursor + len(_CLOSE),
    )


def scan_placeholders(command: str) -> Iterator[PlaceholderToken]:
    """Yield every placeholder in ``command`` from left to right.

    After a token the scan resumes past its closing braces; anywhere else
    it advances one character, so ``{{{a}}`` yields the token ``{a``.
    """
    index = 0
    length = len(command)
    while index < length:
        token = _token_at(command, index)
        if token is None:
            index += 1
            continue
        yield token
        index = token.end


def extract_placeholders(command: str) -> list[str]:
    """Return the distinct placeholder names in order of first occurrence.

    Examples:
        >>> extract_placeholders('git add {{files}} && git commit -m "{{message}}"')
        ['files', 'message']
        >>> extract_placeholders("echo {{a}} {{a}}")
        ['a']
        >>> extract_placeholders("ls -la")
        []
    """
    if not command:
        return []
    seen: dict[str, None] = {}
    for token in scan_placeholders(command):
        seen.setdefault(token.name, None)
    return list(seen)


def substitute(command: str, values: Mapping[str, str]) -> str:
    """Replace each ``{{name}}`` whose name is in ``values``.

    Every occurrence of a supplied name is replaced in one pass. Inserted
    values are copied literally and never scanned again, so the order of
    names in ``values`` cannot change the result. Names missing from
    ``values`` stay in the output as ``{{name}}``; names in ``values`` that
    the command does not use are ignored.

    Examples:
        >>> substitute("echo {{a}} {{a}}", {"a": "hi"})
        'echo hi hi'
        >>> substitute("cp {{src}} {{dst}}", {"src": "a.txt"})
        'cp a.txt {{dst}}'
    """
    if not command or not values:
        return command

    parts: list[str] = []
    index = 0
    copied_from = 0
    length = len(command)
    while index < length:
        if command.startswith(_OPEN, index):
            close = command.find(_CLOSE, index + len(_OPEN))
            if close != -1:
                name = command[index + len(_OPEN) : close]
                if name and name in values:
                    parts.append(command[copied_from:index])
                    parts.append(str(values[name]))
                    index = close + len(_CLOSE)
                    copied_from = index
                    continue
        index += 1
    parts.append(command[copied_from:])
    return "".join(parts)


def default_values(workflow: Workflow) -> dict[str, str]:
    """Map argument name to its default, for arguments that declare one.

    Empty defaults are skipped so the placeholder stays visible. When an
    argument name is declared twice, the first declaration wins.
    """
    defaults: dict[str, str] = {}
    for argument in workflow.arguments or []:
        if argument.default_value and argument.name not in defaults:
            defaults[argument.name] = argument.default_value
    return defaults


def missing_values(workflow: Workflow, values: Mapping[str, str]) -> list[str]:
    """Placeholders in the command that ``values`` does not fill."""
    return [name for name in workflow.placeholders if name not in values]


def render_workflow(
    workflow: Workflow,
    values: Mapping[str, str] | None = None,
    *,
    use_defaults: bool = True,
) -> str:
    """Produce the command a user would copy, with values filled in.

    Explicit ``values`` take precedence over argument defaults. The result
    is only a string; nothing is executed.
    """
    merged: dict[str, str] = default_values(workflow) if use_defaults else {}
    merged.update(values or {})
    return substitute(workflow.command, merged)
