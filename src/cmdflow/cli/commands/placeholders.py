"""``cmdflow placeholders``: list the placeholders a command uses."""

from __future__ import annotations

import click

from cmdflow.cli.common import resolve_workflow
from cmdflow.cli.output import format_json
from cmdflow.templates import extract_placeholders


@click.command("placeholders")
@click.argument("workflow_ref", metavar="WORKFLOW")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array.")
@click.pass_context
def placeholders(ctx: click.Context, workflow_ref: str, as_json: bool) -> None:
    """Print the placeholder names in WORKFLOW's command, one per line.

    WORKFLOW is a definition file or the id/name of a library workflow.
    """
    workflow = resolve_workflow(ctx, workflow_ref)
    names = extract_placeholders(workflow.command)
    if as_json:
        click.echo(format_json(names))
        return
    for name in names:
        click.echo(name)
