"""Tests for ``cmdflow render`` and ``cmdflow placeholders``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cmdflow.cli.context import ExitCode
from cmdflow.main import cli

DEPLOY_YAML = """\
name: Deploy
command: deploy --env {{env}} --tag {{tag}}
arguments:
  - name: env
    default_value: staging
  - name: tag
"""


@pytest.fixture
def deploy_file(write_workflow) -> Path:
    path: Path = write_workflow("deploy.yaml", DEPLOY_YAML)
    return path


class TestRender:
    def test_library_workflow_with_defaults(
        self, cli_runner: CliRunner, clean_env: None
    ) -> None:
        result = cli_runner.invoke(
            cli, ["render", "git-status-and-push", "-a", "message=fix typo"]
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == (
            'git status && git add . && git commit -m "fix typo" && git push\n'
        )

    def test_lookup_by_name(self, cli_runner: CliRunner, clean_env: None) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "render",
                "Docker Container Cleanup",
                "-a",
                "container=web",
                "-a",
                "image=app",
            ],
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "docker stop web && docker rm web && docker rmi app\n"

    def test_file_without_defaults(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["render", str(deploy_file), "--no-defaults", "--arg", "tag=v1"]
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "deploy --env {{env}} --tag v1\n"

    def test_explicit_value_beats_default(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["render", str(deploy_file), "-a", "env=prod", "-a", "tag=v2"]
        )
        assert result.output == "deploy --env prod --tag v2\n"

    def test_value_may_contain_equals(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["render", str(deploy_file), "-a", "tag=a=b"])
        assert result.output == "deploy --env staging --tag a=b\n"

    def test_strict_reports_missing_values(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["render", str(deploy_file), "--strict"])

        assert result.exit_code == ExitCode.FAILURE
        assert "Error: Missing values for: tag" in result.output

    def test_strict_from_config(
        self,
        cli_runner: CliRunner,
        clean_env: None,
        temp_dir: Path,
        deploy_file: Path,
    ) -> None:
        (temp_dir / "cmdflow.yaml").write_text("render:\n  strict: true\n")

        strict = cli_runner.invoke(cli, ["render", str(deploy_file)])
        lenient = cli_runner.invoke(cli, ["render", str(deploy_file), "--no-strict"])

        assert strict.exit_code == ExitCode.FAILURE
        assert lenient.exit_code == ExitCode.SUCCESS
        assert lenient.output == "deploy --env staging --tag {{tag}}\n"

    def test_malformed_assignment(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["render", str(deploy_file), "-a", "novalue"])

        assert result.exit_code == ExitCode.USAGE
        assert "expected NAME=VALUE" in result.output

    def test_unknown_workflow(self, cli_runner: CliRunner, clean_env: None) -> None:
        result = cli_runner.invoke(cli, ["render", "no-such-workflow"])

        assert result.exit_code == ExitCode.FAILURE
        assert "No workflow file or library entry named 'no-such-workflow'" in (
            result.output
        )

    def test_invalid_file(
        self, cli_runner: CliRunner, clean_env: None, write_workflow
    ) -> None:
        path = write_workflow("broken.yaml", "command: ls\n")

        result = cli_runner.invoke(cli, ["render", str(path)])

        assert result.exit_code == ExitCode.FAILURE
        assert "Error: Workflow name is required" in result.output
        assert f"File: {path}" in result.output


class TestPlaceholders:
    def test_one_per_line(
        self, cli_runner: CliRunner, clean_env: None, deploy_file: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["placeholders", str(deploy_file)])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "env\ntag\n"

    def test_json(self, cli_runner: CliRunner, clean_env: None) -> None:
        result = cli_runner.invoke(
            cli, ["placeholders", "create-react-component", "--json"]
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.output) == ["component_name"]

    def test_no_placeholders(
        self, cli_runner: CliRunner, clean_env: None, write_workflow
    ) -> None:
        path = write_workflow("ls.yaml", "name: ls\ncommand: ls -la\n")

        result = cli_runner.invoke(cli, ["placeholders", str(path)])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == ""
