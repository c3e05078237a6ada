"""``cmdflow fmt``: rewrite a definition in canonical form."""

from __future__ import annotations

from pathlib import Path

import click

from cmdflow.cli.common import fail, template_error_details
from cmdflow.cli.output import format_success
from cmdflow.exceptions import TemplateError
from cmdflow.logging import get_logger
from cmdflow.templates import WorkflowWriter, load_workflow_file

logger = get_logger(__name__)


@click.command("fmt")
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-w",
    "--write",
    is_flag=True,
    default=False,
    help="Rewrite FILE in place instead of printing.",
)
@click.option(
    "--json", "as_json", is_flag=True, default=False, help="Print JSON instead."
)
def fmt(file: Path, write: bool, as_json: bool) -> None:
    """Print FILE with keys in canonical order and empty fields removed.

    Examples:
        cmdflow fmt deploy.yaml
        cmdflow fmt deploy.yaml --write
    """
    if write and as_json:
        raise click.UsageError("--write and --json cannot be combined")

    try:
        workflow = load_workflow_file(file)
    except TemplateError as e:
        fail(e.message, details=template_error_details(e))

    writer = WorkflowWriter()
    if as_json:
        click.echo(writer.to_json(workflow))
        return

    text = writer.to_yaml(workflow)
    if not write:
        click.echo(text, nl=False)
        return

    if file.read_text(encoding="utf-8") == text:
        click.echo(f"{file} already formatted")
        return
    file.write_text(text, encoding="utf-8")
    logger.info("workflow_formatted", file_path=str(file))
    click.echo(format_success(f"formatted {file}"))
