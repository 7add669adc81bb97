"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``STREAMSPIKE_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``streamspike.toml`` (``--config`` or walk-up discovery)
  4. Code defaults — baked into the section models

The TOML layer is pydantic-settings' own :class:`TomlConfigSettingsSource`;
which file it reads is decided per construction in :meth:`SpikeSettings.from_cli`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from streamspike.config.discovery import find_config
from streamspike.config.models import HttpConfig, PipelineConfig

# Config file chosen by from_cli(), read by settings_customise_sources().
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class SpikeSettings(BaseSettings):
    """Everything a streamspike invocation needs to know, frozen.

    Attributes:
        work_root: Directory that relative resource paths resolve against
            (parent of ``streamspike.toml``, or CWD if no config found).
        config_path: The config file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STREAMSPIKE_",
        "env_nested_delimiter": "__",
    }

    work_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init kwargs, then env vars, then the active TOML file (if any)."""
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        work_root: Path | None = None,
        **cli_flags: Any,
    ) -> SpikeSettings:
        """Construct settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored, as is a
        missing discovered file; defaults and env vars still apply.
        *work_root* defaults to the config file's directory, else CWD.

        Raises:
            click.ClickException: the config file is not valid TOML.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(work_root)

        if work_root is None:
            work_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(work_root=work_root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            import click

            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_toml.reset(token)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a resource path against :attr:`work_root` unless absolute."""
        p = Path(path).expanduser()
        if p.is_absolute():
            return p
        return self.work_root / p
