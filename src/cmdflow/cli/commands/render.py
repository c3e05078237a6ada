"""``cmdflow render``: fill in a workflow's placeholders.

The command is printed, never run.
"""

from __future__ import annotations

import click

from cmdflow.cli.common import parse_assignments, resolve_workflow
from cmdflow.cli.context import ExitCode, get_cli_context
from cmdflow.cli.output import format_error
from cmdflow.templates import default_values, missing_values, render_workflow


@click.command("render")
@click.argument("workflow_ref", metavar="WORKFLOW")
@click.option(
    "-a",
    "--arg",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Value for a placeholder. Repeatable.",
)
@click.option(
    "--defaults/--no-defaults",
    "use_defaults",
    default=None,
    help="Fill unset placeholders from argument defaults.",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail if any placeholder is left unfilled.",
)
@click.pass_context
def render(
    ctx: click.Context,
    workflow_ref: str,
    assignments: tuple[str, ...],
    use_defaults: bool | None,
    strict: bool | None,
) -> None:
    """Print WORKFLOW's command with placeholder values substituted.

    Placeholders without a value are left as {{name}}.

    Examples:
        cmdflow render git-status-and-push -a message="fix typo"
        cmdflow render deploy.yaml -a env=prod --strict
    """
    render_config = get_cli_context(ctx).config.render
    if use_defaults is None:
        use_defaults = render_config.use_defaults
    if strict is None:
        strict = render_config.strict

    workflow = resolve_workflow(ctx, workflow_ref)
    values = parse_assignments(assignments)
    command = render_workflow(workflow, values, use_defaults=use_defaults)

    if strict:
        filled = dict(values)
        if use_defaults:
            filled = {**default_values(workflow), **filled}
        missing = missing_values(workflow, filled)
        if missing:
            click.echo(
                format_error(
                    f"Missing values for: {', '.join(missing)}",
                    suggestion="Pass them with --arg NAME=VALUE",
                ),
                err=True,
            )
            raise SystemExit(ExitCode.FAILURE)

    click.echo(command)
