"""Tests for the workflow definition parser.

Covers:
- YAML syntax failures (WorkflowParseError)
- required name/command checks and shell checks (WorkflowValidationError)
- schema type errors
- the Ok/Err variant and file loading
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cmdflow.exceptions import WorkflowParseError, WorkflowValidationError
from cmdflow.templates import (
    Err,
    Ok,
    Workflow,
    WorkflowArgument,
    load_workflow_file,
    parse_workflow,
    parse_yaml,
    try_parse_workflow,
    validate_workflow,
)

# =============================================================================
# parse_yaml
# =============================================================================


def test_parse_yaml_returns_mapping() -> None:
    assert parse_yaml("name: Test\ncommand: echo {{msg}}") == {
        "name": "Test",
        "command": "echo {{msg}}",
    }


def test_parse_yaml_empty_document_is_empty_mapping() -> None:
    assert parse_yaml("") == {}
    assert parse_yaml("# only a comment\n") == {}


def test_parse_yaml_syntax_error_is_prefixed() -> None:
    with pytest.raises(WorkflowParseError) as exc_info:
        parse_yaml("name: [unclosed\ncommand: ls")

    error = exc_info.value
    assert error.message.startswith("Invalid YAML: ")
    assert error.parse_error is not None
    assert error.line_number is not None


def test_parse_yaml_rejects_non_mapping() -> None:
    with pytest.raises(WorkflowParseError, match="must be a mapping, got list"):
        parse_yaml("- name: a\n- name: b\n")


# =============================================================================
# parse_workflow
# =============================================================================


def test_parse_minimal_workflow() -> None:
    workflow = parse_workflow("name: Test\ncommand: echo {{msg}}")

    assert workflow.name == "Test"
    assert workflow.command == "echo {{msg}}"
    assert workflow.tags is None
    assert workflow.arguments is None
    assert validate_workflow(workflow) == ["Undefined arguments in command: msg"]


def test_parse_full_workflow(git_push_yaml: str) -> None:
    workflow = parse_workflow(git_push_yaml)

    assert workflow.name == "Git Status and Push"
    assert workflow.tags == ["git", "version-control"]
    assert workflow.shells == ["bash", "zsh"]
    assert workflow.arguments == [
        WorkflowArgument(
            name="files", description="Files to stage", default_value="."
        ),
        WorkflowArgument(name="message", description="Commit message"),
    ]
    assert workflow.placeholders == ["files", "message"]
    assert validate_workflow(workflow) == []


def test_parse_keeps_values_verbatim() -> None:
    text = 'name: "  Padded Name "\ncommand: "  LS -LA  "\ntags: [B, a, B]\n'
    workflow = parse_workflow(text)

    assert workflow.name == "  Padded Name "
    assert workflow.command == "  LS -LA  "
    assert workflow.tags == ["B", "a", "B"]


def test_parse_keeps_unknown_keys() -> None:
    workflow = parse_workflow("name: a\ncommand: ls\nversion: 2\nicon: rocket\n")
    assert workflow.model_extra == {"version": 2, "icon": "rocket"}


@pytest.mark.parametrize(
    ("text", "message", "field"),
    [
        ("command: ls", "Workflow name is required", "name"),
        ("name: ''\ncommand: ls", "Workflow name is required", "name"),
        ("name: a", "Workflow command is required", "command"),
        ("name: a\ncommand: ''", "Workflow command is required", "command"),
        ("", "Workflow name is required", "name"),
    ],
)
def test_parse_requires_name_and_command(text: str, message: str, field: str) -> None:
    with pytest.raises(WorkflowValidationError) as exc_info:
        parse_workflow(text)
    assert exc_info.value.message == message
    assert exc_info.value.field == field


def test_parse_checks_name_before_command() -> None:
    with pytest.raises(WorkflowValidationError, match="name is required"):
        parse_workflow("tags: [x]")


def test_parse_rejects_invalid_shells() -> None:
    text = "name: a\ncommand: ls\nshells: [bash, powershell]\n"
    with pytest.raises(WorkflowValidationError) as exc_info:
        parse_workflow(text)

    error = exc_info.value
    assert error.message == (
        "Invalid shells: powershell. Valid shells are: zsh, bash, fish"
    )
    assert error.field == "shells"
    assert error.value == ["powershell"]


def test_parse_lists_every_invalid_shell() -> None:
    text = "name: a\ncommand: ls\nshells: [cmd, zsh, pwsh, Bash]\n"
    with pytest.raises(
        WorkflowValidationError, match="Invalid shells: cmd, pwsh, Bash"
    ):
        parse_workflow(text)


def test_parse_accepts_empty_shells() -> None:
    workflow = parse_workflow("name: a\ncommand: ls\nshells: []\n")
    assert workflow.shells == []
    assert workflow.supports_shell("fish")


def test_parse_reports_wrong_field_types() -> None:
    with pytest.raises(WorkflowValidationError) as exc_info:
        parse_workflow("name: a\ncommand: ls\ntags: 3\n")
    assert exc_info.value.message.startswith("Schema validation failed: tags")
    assert exc_info.value.field == "tags"


def test_parse_reports_argument_without_name() -> None:
    text = "name: a\ncommand: ls\narguments:\n  - description: no name\n"
    with pytest.raises(WorkflowValidationError, match="arguments.0.name"):
        parse_workflow(text)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("8080", "8080"), ("no", "false"), ("2.5", "2.5"), ("'no'", "no")],
)
def test_parse_keeps_scalar_defaults_as_text(raw: str, expected: str) -> None:
    text = (
        "name: Serve\n"
        "command: serve --port {{port}}\n"
        "arguments:\n"
        "  - name: port\n"
        f"    default_value: {raw}\n"
    )
    workflow = parse_workflow(text)

    assert workflow.arguments is not None
    assert workflow.arguments[0].default_value == expected
    assert validate_workflow(workflow) == []


def test_parse_rejects_structured_default() -> None:
    text = (
        "name: a\ncommand: ls {{d}}\narguments:\n"
        "  - name: d\n    default_value: [1, 2]\n"
    )
    with pytest.raises(WorkflowValidationError, match="arguments.0.default_value"):
        parse_workflow(text)


def test_parse_syntax_error_propagates() -> None:
    with pytest.raises(WorkflowParseError, match="^Invalid YAML"):
        parse_workflow("name: a: b\ncommand: ls\n")


def test_from_yaml_classmethod() -> None:
    workflow = Workflow.from_yaml("name: a\ncommand: ls")
    assert workflow == Workflow(name="a", command="ls")


# =============================================================================
# try_parse_workflow
# =============================================================================


def test_try_parse_ok() -> None:
    result = try_parse_workflow("name: a\ncommand: ls")

    assert isinstance(result, Ok)
    assert result.is_ok()
    assert result.unwrap().command == "ls"


def test_try_parse_validation_err() -> None:
    result = try_parse_workflow("name: a")

    assert isinstance(result, Err)
    assert not result.is_ok()
    assert isinstance(result.error, WorkflowValidationError)
    with pytest.raises(WorkflowValidationError):
        result.unwrap()


def test_try_parse_syntax_err() -> None:
    result = try_parse_workflow("name: [")
    assert isinstance(result, Err)
    assert isinstance(result.error, WorkflowParseError)


# =============================================================================
# load_workflow_file
# =============================================================================


def test_load_workflow_file(write_workflow, git_push_yaml: str) -> None:
    path = write_workflow("git-push.yaml", git_push_yaml)
    assert load_workflow_file(path).name == "Git Status and Push"


def test_load_workflow_file_attaches_path(write_workflow) -> None:
    path: Path = write_workflow("broken.yaml", "name: a\n")

    with pytest.raises(WorkflowValidationError) as exc_info:
        load_workflow_file(path)
    assert exc_info.value.file_path == str(path)


def test_load_workflow_file_rejects_non_utf8(temp_dir: Path) -> None:
    path = temp_dir / "latin1.yaml"
    path.write_bytes("name: caf\xe9\ncommand: ls\n".encode("latin-1"))

    with pytest.raises(WorkflowParseError, match="not valid UTF-8"):
        load_workflow_file(path)
