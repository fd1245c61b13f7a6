"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SVCCTL_*`` prefix
  3. TOML file    — ``svcctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`svcctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from svcctl.config.discovery import find_config
from svcctl.config.models import BackendConfig, WaitConfig


class ConfigError(click.ClickException):
    """Raised when a config file cannot be read or parsed."""


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``svcctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except (OSError, tomllib.TOMLDecodeError) as exc:
                msg = f"Invalid config file {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class SvcSettings(BaseSettings):
    """Unified settings for the svcctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        verbose: Narrate progress to stderr at DEBUG level.
        log_json: Emit log lines as JSON instead of console text.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SVCCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    backend: BackendConfig = Field(default_factory=BackendConfig)
    wait: WaitConfig = Field(default_factory=WaitConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        backend: str | None = None,
        user_scope: bool = False,
        **cli_flags: Any,
    ) -> SvcSettings:
        """Construct settings from a CLI invocation.

        Discovers ``svcctl.toml`` via walk-up from *start* (or uses the
        explicit *config_path*). Only flags that were actually set are
        applied, so an unset ``--verbose`` does not mask ``SVCCTL_VERBOSE``.
        """
        toml_path: Path | None = None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise ConfigError(msg)
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v}

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

        backend_update: dict[str, Any] = {}
        if backend:
            backend_update["name"] = backend
        if user_scope:
            backend_update["user_scope"] = True
        if backend_update:
            settings = settings.model_copy(
                update={"backend": settings.backend.model_copy(update=backend_update)}
            )
        return settings
