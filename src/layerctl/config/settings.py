"""LayerSettings — one frozen object built from flags, env, and layerctl.toml.

Sources, highest priority first:

1. keyword arguments (the CLI flags)
2. ``LAYERCTL_*`` environment variables, nested with ``__``
   (``LAYERCTL_SCAN__WORKERS=4``)
3. the ``layerctl.toml`` chosen by :func:`find_config`
4. defaults in :mod:`layerctl.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from layerctl.config.discovery import find_config
from layerctl.config.models import PluginsConfig, ScaffoldConfig, ScanConfig

# Set by from_cli() for the duration of one construction.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class LayerSettings(BaseSettings):
    """Effective configuration for one CLI invocation.

    Attributes:
        project_root: Directory of the config file in use, else the working
            directory. Local plugins and template overrides resolve from here.
        config_path: The ``layerctl.toml`` that was read, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="LAYERCTL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    scan: ScanConfig = Field(default_factory=ScanConfig)
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        **overrides: Any,
    ) -> LayerSettings:
        """Build settings for a CLI run.

        Without *config_path* the config file is found by walking up from
        *project_root* (or the working directory).

        Raises:
            click.ClickException: the config file is not valid TOML.
        """
        toml_path = Path(config_path) if config_path else find_config(project_root)
        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **overrides)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)
