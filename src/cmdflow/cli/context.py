"""CLI context object and exit codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

import click

from cmdflow.config import CmdflowConfig

__all__ = ["ExitCode", "CLIContext", "get_cli_context"]


class ExitCode(IntEnum):
    """Process exit codes.

    - 0 success
    - 1 failure (invalid workflow, unreadable file)
    - 2 usage error (Click's own code for bad options)
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by all commands.

    Attributes:
        config: Loaded configuration.
        config_path: Config file given with ``--config``, if any.
        verbosity: Number of ``-v`` flags.
        quiet: ``--quiet`` was given.
    """

    config: CmdflowConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the CLIContext stored by the root group.

    Falls back to defaults when a command is invoked on its own, which
    happens in tests.
    """
    obj = ctx.find_root().obj or {}
    cli_ctx = obj.get("cli_ctx")
    if isinstance(cli_ctx, CLIContext):
        return cli_ctx
    return CLIContext(config=CmdflowConfig())
