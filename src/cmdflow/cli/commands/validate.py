"""``cmdflow validate``: check definition files."""

from __future__ import annotations

from pathlib import Path

import click

from cmdflow.cli.context import ExitCode
from cmdflow.exceptions import TemplateError
from cmdflow.logging import bind_context, clear_context, get_logger
from cmdflow.templates import WorkflowValidator, load_workflow_file

logger = get_logger(__name__)

_OK = "✓"
_BAD = "✗"


@click.command("validate")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--fail-on-warning",
    is_flag=True,
    default=False,
    help="Treat warnings (unused or duplicate arguments) as failures.",
)
def validate(files: tuple[Path, ...], fail_on_warning: bool) -> None:
    """Parse and validate workflow definition FILES.

    Every problem in a file is reported, not just the first one.

    Examples:
        cmdflow validate git-push.yaml
        cmdflow validate workflows/*.yaml --fail-on-warning
    """
    validator = WorkflowValidator()
    failures = 0

    for path in files:
        clear_context()
        bind_context(file_path=str(path))
        try:
            workflow = load_workflow_file(path)
        except TemplateError as e:
            failures += 1
            click.echo(f"{click.style(_BAD, fg='red', bold=True)} {path}")
            click.echo(f"    {e.message}")
            continue
        except OSError as e:
            failures += 1
            click.echo(f"{click.style(_BAD, fg='red', bold=True)} {path}")
            click.echo(f"    Cannot read file: {e}")
            continue

        result = validator.validate(workflow)
        failed = not result.valid or (fail_on_warning and bool(result.warnings))
        if failed:
            failures += 1
        mark = (
            click.style(_BAD, fg="red", bold=True)
            if failed
            else click.style(_OK, fg="green", bold=True)
        )
        click.echo(f"{mark} {path} ({workflow.name or 'unnamed'})")
        for issue in result.errors:
            click.echo(f"    error: {issue.message}")
        for issue in result.warnings:
            click.echo(f"    warning: {issue.message}")
        logger.debug(
            "workflow_validated",
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
    clear_context()

    if len(files) > 1:
        click.echo()
        click.echo(f"{len(files) - failures} valid, {failures} invalid")

    raise SystemExit(ExitCode.FAILURE if failures else ExitCode.SUCCESS)
