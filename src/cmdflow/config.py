"""Configuration for the cmdflow CLI.

Settings are merged from, highest priority first:
1. Environment variables (``CMDFLOW_*``, nested with ``__``)
2. Project config (``./cmdflow.yaml`` or the path given to ``load_config``)
3. User config (``~/.config/cmdflow/config.yaml``)
4. Defaults

Example cmdflow.yaml:
    library:
      include_builtin: true
      paths:
        - ./workflows
    render:
      use_defaults: true
      strict: false
    verbosity: info
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cmdflow.exceptions import ConfigError
from cmdflow.logging import get_logger

__all__ = [
    "CmdflowConfig",
    "LibraryConfig",
    "RenderConfig",
    "get_user_config_path",
    "get_project_config_path",
    "load_config",
]

logger = get_logger(__name__)

PROJECT_CONFIG_NAME = "cmdflow.yaml"


class LibraryConfig(BaseModel):
    """Where workflow definition files are loaded from.

    Attributes:
        include_builtin: Load the workflows shipped with cmdflow.
        paths: Extra directories, scanned in order. A workflow in a later
            directory replaces a same-named one from an earlier directory.
    """

    include_builtin: bool = True
    paths: list[Path] = Field(default_factory=list)


class RenderConfig(BaseModel):
    """Defaults for ``cmdflow render``."""

    use_defaults: bool = True
    strict: bool = False


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by a single YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._data: dict[str, Any] = {}
        if yaml_file is None or not yaml_file.exists():
            return
        try:
            with open(yaml_file, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {yaml_file}: {e}") from e
        if loaded is None:
            logger.warning("config_file_empty", path=str(yaml_file))
        elif not isinstance(loaded, dict):
            raise ConfigError(
                f"Config file {yaml_file} must contain a mapping",
                value=loaded,
            )
        else:
            self._data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class CmdflowConfig(BaseSettings):
    """Root configuration object."""

    model_config = SettingsConfigDict(
        env_prefix="CMDFLOW_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    library: LibraryConfig = Field(default_factory=LibraryConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def project_config_path(cls) -> Path:
        return get_project_config_path()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win.
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, cls.project_config_path()),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Return ``~/.config/cmdflow/config.yaml``."""
    return Path.home() / ".config" / "cmdflow" / "config.yaml"


def get_project_config_path() -> Path:
    return Path.cwd() / PROJECT_CONFIG_NAME


def load_config(config_path: Path | None = None) -> CmdflowConfig:
    """Load configuration: defaults -> user -> project -> environment.

    Args:
        config_path: Project config file to use instead of ./cmdflow.yaml.

    Raises:
        ConfigError: If a config file is malformed or a value is invalid.
    """
    settings_cls: type[CmdflowConfig] = CmdflowConfig
    if config_path is not None:
        explicit_path = config_path

        class _ExplicitPathConfig(CmdflowConfig):
            @classmethod
            def project_config_path(cls) -> Path:
                return explicit_path

        settings_cls = _ExplicitPathConfig

    path = settings_cls.project_config_path()
    if not path.exists():
        logger.debug("project_config_missing", path=str(path))

    try:
        return settings_cls()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
