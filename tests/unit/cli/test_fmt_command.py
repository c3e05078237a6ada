"""Tests for ``cmdflow fmt``."""

from __future__ import annotations

import json

from click.testing import CliRunner

from cmdflow.cli.context import ExitCode
from cmdflow.main import cli

MESSY_YAML = """\
arguments:
  - description: Directory
    name: d
tags: []
command: ls {{d}}
name: x
"""

CANONICAL_YAML = """\
name: x
command: ls {{d}}
arguments:
- name: d
  description: Directory
"""


def test_prints_canonical_form(
    cli_runner: CliRunner, clean_env: None, write_workflow
) -> None:
    path = write_workflow("messy.yaml", MESSY_YAML)

    result = cli_runner.invoke(cli, ["fmt", str(path)])

    assert result.exit_code == ExitCode.SUCCESS
    assert result.output == CANONICAL_YAML
    assert path.read_text() == MESSY_YAML


def test_write_rewrites_once(
    cli_runner: CliRunner, clean_env: None, write_workflow
) -> None:
    path = write_workflow("messy.yaml", MESSY_YAML)

    first = cli_runner.invoke(cli, ["fmt", "--write", str(path)])
    second = cli_runner.invoke(cli, ["fmt", "-w", str(path)])

    assert first.exit_code == ExitCode.SUCCESS
    assert f"Success: formatted {path}" in first.output
    assert path.read_text() == CANONICAL_YAML
    assert second.exit_code == ExitCode.SUCCESS
    assert "already formatted" in second.output


def test_json(cli_runner: CliRunner, clean_env: None, write_workflow) -> None:
    path = write_workflow("messy.yaml", MESSY_YAML)

    result = cli_runner.invoke(cli, ["fmt", "--json", str(path)])

    assert result.exit_code == ExitCode.SUCCESS
    assert json.loads(result.output) == {
        "name": "x",
        "command": "ls {{d}}",
        "arguments": [{"name": "d", "description": "Directory"}],
    }


def test_write_and_json_conflict(
    cli_runner: CliRunner, clean_env: None, write_workflow
) -> None:
    path = write_workflow("messy.yaml", MESSY_YAML)

    result = cli_runner.invoke(cli, ["fmt", "--write", "--json", str(path)])

    assert result.exit_code == ExitCode.USAGE
    assert path.read_text() == MESSY_YAML


def test_invalid_file_is_left_alone(
    cli_runner: CliRunner, clean_env: None, write_workflow
) -> None:
    path = write_workflow("bad.yaml", "name: [\n")

    result = cli_runner.invoke(cli, ["fmt", "--write", str(path)])

    assert result.exit_code == ExitCode.FAILURE
    assert "Error: Invalid YAML" in result.output
    assert "Line:" in result.output
    assert path.read_text() == "name: [\n"
