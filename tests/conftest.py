from __future__ import annotations

import logging
import os
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from cmdflow.templates import Workflow, WorkflowArgument


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Send structlog output to stderr at WARNING so tests stay quiet."""
    from cmdflow.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Iterator[Path]:
    """A temporary directory; restores the working directory afterwards."""
    original_cwd = os.getcwd()
    yield tmp_path
    os.chdir(original_cwd)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Remove CMDFLOW_* variables and isolate cwd and home from the host."""
    for key in list(os.environ):
        if key.startswith("CMDFLOW_"):
            monkeypatch.delenv(key)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(temp_dir)


@pytest.fixture
def git_push_yaml() -> str:
    return """\
name: Git Status and Push
command: git status && git add {{files}} && git commit -m "{{message}}" && git push
tags:
  - git
  - version-control
description: Stage, commit and push
shells:
  - bash
  - zsh
arguments:
  - name: files
    description: Files to stage
    default_value: .
  - name: message
    description: Commit message
"""


@pytest.fixture
def git_push_workflow() -> Workflow:
    return Workflow(
        name="Git Status and Push",
        command='git add {{files}} && git commit -m "{{message}}"',
        tags=["git", "version-control"],
        shells=["bash", "zsh"],
        arguments=[
            WorkflowArgument(name="files", default_value="."),
            WorkflowArgument(name="message", description="Commit message"),
        ],
    )


@pytest.fixture
def write_workflow(temp_dir: Path):
    """Write definition text to ``<temp_dir>/<name>`` and return the path."""

    def _write(name: str, text: str, directory: Path | None = None) -> Path:
        target_dir = directory or temp_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
