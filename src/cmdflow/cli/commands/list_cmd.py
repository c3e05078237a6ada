"""``cmdflow list``: browse the workflow library."""

from __future__ import annotations

from pathlib import Path

import click

from cmdflow.catalog import SortKey, WorkflowQuery, collect_tags, filter_workflows
from cmdflow.cli.common import load_library
from cmdflow.cli.output import format_json, format_warning
from cmdflow.templates import VALID_SHELLS, Shell, WorkflowWriter


@click.command("list")
@click.option(
    "-s", "--search", default="", help="Match name, description, command or tag."
)
@click.option(
    "-t", "--tag", "tags", multiple=True, help="Require a tag. Repeatable."
)
@click.option(
    "--shell",
    type=click.Choice(VALID_SHELLS),
    default=None,
    help="Only workflows usable in this shell.",
)
@click.option(
    "--sort",
    type=click.Choice([key.value for key in SortKey]),
    default=SortKey.UPDATED.value,
    show_default=True,
    help="Result order.",
)
@click.option(
    "-p",
    "--path",
    "paths",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Extra directory of definitions. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@click.pass_context
def list_workflows(
    ctx: click.Context,
    search: str,
    tags: tuple[str, ...],
    shell: str | None,
    sort: str,
    paths: tuple[Path, ...],
    as_json: bool,
) -> None:
    """List workflows from the built-in library and configured directories.

    Examples:
        cmdflow list
        cmdflow list --tag git --shell fish
        cmdflow list --search docker --sort name
    """
    result = load_library(ctx, paths)
    query = WorkflowQuery(
        search=search,
        tags=tags,
        shell=Shell(shell) if shell else None,
        sort=SortKey(sort),
    )
    workflows = filter_workflows(result.workflows, query)

    for skipped in result.skipped:
        click.echo(
            format_warning(f"skipped {skipped.file_path}: {skipped.reason}"),
            err=True,
        )

    if as_json:
        writer = WorkflowWriter()
        click.echo(
            format_json(
                [
                    {
                        "id": workflow.id,
                        **writer.to_dict(workflow),
                        "updated_at": workflow.updated_at.isoformat(),
                    }
                    for workflow in workflows
                ]
            )
        )
        return

    if not workflows:
        click.echo("No workflows match the given filters.")
        known_tags = collect_tags(result.workflows)
        if tags and known_tags:
            click.echo(f"Known tags: {', '.join(known_tags)}")
        return

    for workflow in workflows:
        tags_text = f" [{', '.join(workflow.tags)}]" if workflow.tags else ""
        label = click.style(workflow.id, bold=True)
        click.echo(f"{label}  {workflow.name}{tags_text}")
        if workflow.description:
            click.echo(f"    {workflow.description}")
    count = len(workflows)
    click.echo()
    click.echo(f"{count} workflow{'s' if count != 1 else ''} found")
