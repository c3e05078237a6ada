"""CLI entry point for cmdflow."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from cmdflow import __version__
from cmdflow.cli.commands.fmt import fmt
from cmdflow.cli.commands.list_cmd import list_workflows
from cmdflow.cli.commands.placeholders import placeholders
from cmdflow.cli.commands.render import render
from cmdflow.cli.commands.show import show
from cmdflow.cli.commands.validate import validate
from cmdflow.cli.context import CLIContext, ExitCode
from cmdflow.config import load_config
from cmdflow.exceptions import ConfigError
from cmdflow.logging import configure_logging

# CMDFLOW_* settings may live in a project .env file.
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group()
@click.version_option(version=__version__, prog_name="cmdflow")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Project config file (default: ./cmdflow.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Only log errors.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Path | None,
    verbose: int,
    quiet: bool,
) -> None:
    """cmdflow - browse, check and fill in reusable shell-command workflows."""
    ctx.ensure_object(dict)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        lines = [f"Error: {e.message}"]
        if e.field:
            lines.append(f"  Field: {e.field}")
        if e.value is not None:
            lines.append(f"  Value: {e.value}")
        click.echo("\n".join(lines), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_file,
        verbosity=verbose,
        quiet=quiet,
    )

    # quiet > -v flags > config file
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)


cli.add_command(validate)
cli.add_command(show)
cli.add_command(placeholders)
cli.add_command(render)
cli.add_command(fmt)
cli.add_command(list_workflows)


if __name__ == "__main__":
    cli()
