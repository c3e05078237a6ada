"""``cmdflow show``: describe a workflow."""

from __future__ import annotations

import click
from rich.table import Table
from rich.text import Text

from cmdflow.cli.common import resolve_workflow
from cmdflow.cli.console import console
from cmdflow.templates import Workflow, WorkflowValidator


def _arguments_table(workflow: Workflow) -> Table:
    table = Table(title="Arguments", title_justify="left", show_lines=False)
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    table.add_column("Default", no_wrap=True)
    used = set(workflow.placeholders)
    for argument in workflow.arguments or []:
        name = Text(argument.name)
        if argument.name not in used:
            name.append(" (unused)", style="dim")
        table.add_row(
            name,
            Text(argument.description or ""),
            Text(argument.default_value or "", style="cyan"),
        )
    return table


@click.command("show")
@click.argument("workflow_ref", metavar="WORKFLOW")
@click.pass_context
def show(ctx: click.Context, workflow_ref: str) -> None:
    """Show WORKFLOW's details, arguments and validation status.

    WORKFLOW is a definition file or the id/name of a library workflow.
    """
    workflow = resolve_workflow(ctx, workflow_ref)

    console.print(Text(workflow.name, style="bold"))
    if workflow.description:
        console.print(Text(workflow.description))
    console.print()
    console.print(Text(workflow.command, style="green"), soft_wrap=True)
    console.print()

    fields = [
        ("Shells", ", ".join(workflow.shells or []) or "any"),
        ("Tags", ", ".join(workflow.tags or []) or "-"),
    ]
    if workflow.author:
        author = workflow.author
        if workflow.author_url:
            author = f"{author} <{workflow.author_url}>"
        fields.append(("Author", author))
    if workflow.source_url:
        fields.append(("Source", workflow.source_url))
    for label, value in fields:
        console.print(Text.assemble((f"{label}: ", "bold"), value))

    if workflow.arguments:
        console.print()
        console.print(_arguments_table(workflow))

    result = WorkflowValidator().validate(workflow)
    for issue in result.errors:
        console.print(Text(f"error: {issue.message}", style="red"))
    for issue in result.warnings:
        console.print(Text(f"warning: {issue.message}", style="yellow"))
