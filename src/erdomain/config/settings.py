"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ERDOMAIN_*`` prefix (``ERDOMAIN_DOMAIN__NAME=...``)
  3. TOML file    — ``erdomain.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from erdomain.config.discovery import find_config
from erdomain.config.models import DomainConfig
from erdomain.domain.types import LinkTypeOptions


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed the sections of a discovered ``erdomain.toml`` to pydantic."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path cannot travel through __init__ kwargs (they would become
# fields), so it is handed to settings_customise_sources per thread.
_tls = threading.local()


class ErdSettings(BaseSettings):
    """Frozen settings for the erdomain CLI and for building domains.

    Attributes:
        root: Directory the config was resolved from (parent of
            ``erdomain.toml``, or CWD if none was found).
        config_path: The config file in use, or None.
        link_types: Link types pre-registered on every built domain.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ERDOMAIN_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    domain: DomainConfig = Field(default_factory=DomainConfig)
    link_types: dict[str, LinkTypeOptions] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> ErdSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that does not exist means "no config";
        otherwise ``erdomain.toml`` is discovered from *root* (or CWD).
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
