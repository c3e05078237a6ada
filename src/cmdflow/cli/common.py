"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click

from cmdflow.catalog import LoadResult, WorkflowLibrary
from cmdflow.cli.context import ExitCode, get_cli_context
from cmdflow.cli.output import format_error
from cmdflow.exceptions import TemplateError, WorkflowParseError
from cmdflow.templates import Workflow, load_workflow_file

__all__ = [
    "load_library",
    "resolve_workflow",
    "parse_assignments",
    "fail",
    "template_error_details",
]


def fail(message: str, details: list[str] | None = None) -> NoReturn:
    """Print an error to stderr and exit with ExitCode.FAILURE."""
    click.echo(format_error(message, details=details), err=True)
    raise SystemExit(ExitCode.FAILURE)


def template_error_details(error: TemplateError) -> list[str]:
    details: list[str] = []
    if error.file_path:
        details.append(f"File: {error.file_path}")
    if isinstance(error, WorkflowParseError) and error.line_number:
        details.append(f"Line: {error.line_number}")
    return details


def load_library(ctx: click.Context, extra_paths: tuple[Path, ...] = ()) -> LoadResult:
    """Load the configured library plus any ``extra_paths``."""
    config = get_cli_context(ctx).config
    library = WorkflowLibrary.from_config(config.library)
    if extra_paths:
        library = WorkflowLibrary((*library.directories, *extra_paths))
    return library.load()


def resolve_workflow(ctx: click.Context, ref: str) -> Workflow:
    """Load a workflow from a file path, or find it in the library.

    ``ref`` is treated as a path when such a file exists; otherwise it is
    looked up by id (file stem) and then by name.
    """
    path = Path(ref)
    if path.is_file():
        try:
            return load_workflow_file(path)
        except TemplateError as e:
            fail(e.message, details=template_error_details(e))
        except OSError as e:
            fail(f"Cannot read {path}: {e}")

    workflow = load_library(ctx).get(ref)
    if workflow is None:
        fail(
            f"No workflow file or library entry named '{ref}'",
            details=["Run 'cmdflow list' to see available workflows"],
        )
    return workflow


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    """Turn ``name=value`` strings into a dict. Values may contain ``=``.

    Raises:
        click.BadParameter: If an assignment has no ``=`` or an empty name.
    """
    values: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"expected NAME=VALUE, got '{assignment}'", param_hint="--arg"
            )
        values[name] = value
    return values
