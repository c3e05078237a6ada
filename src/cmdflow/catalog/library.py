"""Loading workflow definition files from directories.

Directories are scanned in order: the built-in library first (unless
disabled), then each configured path. A file whose stem or workflow name
matches one loaded earlier replaces it, so project definitions can
override the shipped ones. Ids are therefore unique within a load.

Each file becomes a :class:`ParsedWorkflow` whose ``id`` is the file stem
and whose timestamps come from the file's modification time. Files that
fail to parse or validate are skipped and reported, never fatal.

Example:
    ```python
    library = WorkflowLibrary.from_config(config.library)
    result = library.load()
    for workflow in result.workflows:
        print(workflow.id, workflow.name)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from cmdflow.exceptions import TemplateError
from cmdflow.library import BUILTIN_WORKFLOWS_DIR
from cmdflow.logging import get_logger
from cmdflow.templates.parser import load_workflow_file
from cmdflow.templates.schema import ParsedWorkflow
from cmdflow.templates.validation import WorkflowValidator

if TYPE_CHECKING:
    from cmdflow.config import LibraryConfig

__all__ = [
    "DEFINITION_SUFFIXES",
    "SkippedWorkflow",
    "LoadResult",
    "WorkflowLibrary",
    "scan_directory",
]

logger = get_logger(__name__)

DEFINITION_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")


@dataclass(frozen=True, slots=True)
class SkippedWorkflow:
    """A definition file that could not be loaded.

    Attributes:
        file_path: The file that was skipped.
        reason: Why, as a human-readable message.
    """

    file_path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Everything found while loading the library."""

    workflows: tuple[ParsedWorkflow, ...] = ()
    skipped: tuple[SkippedWorkflow, ...] = ()
    #: Definition file of each loaded workflow, keyed by id.
    sources: dict[str, Path] = field(default_factory=dict)

    def get(self, key: str) -> ParsedWorkflow | None:
        """Look a workflow up by id, then by exact name."""
        for workflow in self.workflows:
            if workflow.id == key:
                return workflow
        for workflow in self.workflows:
            if workflow.name == key:
                return workflow
        return None


def scan_directory(directory: Path) -> list[Path]:
    """Return definition files directly inside ``directory``, sorted by name.

    Missing or unreadable directories yield an empty list and a warning.
    """
    if not directory.is_dir():
        logger.warning("workflow_directory_missing", path=str(directory))
        return []
    try:
        files = [
            path
            for path in directory.iterdir()
            if path.suffix in DEFINITION_SUFFIXES and path.is_file()
        ]
    except OSError as e:
        logger.warning(
            "workflow_directory_unreadable", path=str(directory), error=str(e)
        )
        return []
    return sorted(files)


class WorkflowLibrary:
    """Read-only view over one or more directories of definition files."""

    def __init__(self, directories: Iterable[Path]) -> None:
        self.directories = tuple(directories)

    @classmethod
    def from_config(cls, config: LibraryConfig) -> WorkflowLibrary:
        directories: list[Path] = []
        if config.include_builtin:
            directories.append(BUILTIN_WORKFLOWS_DIR)
        directories.extend(path.expanduser() for path in config.paths)
        return cls(directories)

    def load(self) -> LoadResult:
        """Load every definition file, later directories overriding earlier."""
        by_id: dict[str, ParsedWorkflow] = {}
        sources: dict[str, Path] = {}
        skipped: list[SkippedWorkflow] = []
        validator = WorkflowValidator()

        for directory in self.directories:
            for path in scan_directory(directory):
                try:
                    workflow = load_workflow_file(path)
                except (TemplateError, OSError) as e:
                    reason = getattr(e, "message", str(e))
                    logger.warning(
                        "workflow_skipped", file_path=str(path), reason=reason
                    )
                    skipped.append(SkippedWorkflow(path, reason))
                    continue

                result = validator.validate(workflow)
                if not result.valid:
                    reason = "; ".join(result.messages)
                    logger.warning(
                        "workflow_skipped", file_path=str(path), reason=reason
                    )
                    skipped.append(SkippedWorkflow(path, reason))
                    continue

                workflow_id = path.stem
                displaced = [
                    key
                    for key, loaded in by_id.items()
                    if key == workflow_id or loaded.name == workflow.name
                ]
                for key in displaced:
                    logger.debug(
                        "workflow_overridden",
                        workflow=by_id[key].name,
                        previous=str(sources[key]),
                        file_path=str(path),
                    )
                    del by_id[key]
                    del sources[key]

                modified = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
                by_id[workflow_id] = ParsedWorkflow.from_workflow(
                    workflow, id=workflow_id, timestamp=modified
                )
                sources[workflow_id] = path

        logger.debug("library_loaded", workflows=len(by_id), skipped=len(skipped))
        return LoadResult(
            workflows=tuple(by_id.values()),
            skipped=tuple(skipped),
            sources=sources,
        )
