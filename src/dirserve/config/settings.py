"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs    — CLI flags passed by Click
  2. Prefixed env   — ``DIRSERVE_*``
  3. Bare env       — ``PORT`` / ``DIST_DIR``, as set by container platforms
  4. TOML file      — ``dirserve.toml`` found by walking up from the CWD
  5. Code defaults  — baked into the section models

Every source keys its values by field name, so pydantic-settings merges
them without alias conflicts.  Empty env values count as unset.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from dirserve.config.models import ServeConfig

CONFIG_FILENAME = "dirserve.toml"
CONFIG_ENV_VAR = "DIRSERVE_CONFIG"

# field name -> unprefixed env var honored for it
BARE_ENV_VARS: dict[str, str] = {"port": "PORT", "dist_dir": "DIST_DIR"}


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for a run started in *start* (default: CWD).

    ``DIRSERVE_CONFIG`` short-circuits the search; if it names a missing
    file there is no config.  Otherwise the nearest ``dirserve.toml`` in
    *start* or any of its parents wins.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Values from ``dirserve.toml``.

    A relative ``dist_dir`` is anchored to the file's directory, so the
    config means the same thing wherever the command is run from.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        dist_dir = self._data.get("dist_dir")
        if isinstance(dist_dir, str) and dist_dir:
            self._data["dist_dir"] = toml_path.parent / dist_dir

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class BareEnvSettingsSource(PydanticBaseSettingsSource):
    """``PORT`` and ``DIST_DIR`` without the ``DIRSERVE_`` prefix.

    A relative ``DIST_DIR`` is taken against the CWD at startup.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        env_name = BARE_ENV_VARS.get(field_name)
        value = os.environ.get(env_name, "") if env_name else ""
        return (value or None), field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for field_name in BARE_ENV_VARS:
            value, _, _ = self.get_field_value(None, field_name)
            if value is None:
                continue
            data[field_name] = Path.cwd() / value if field_name == "dist_dir" else value
        return data


# TOML path for the settings object under construction.
_tls = threading.local()


class DirserveSettings(BaseSettings):
    """Unified settings for the dirserve CLI.

    Resolved once per process and stored on the Click context.

    Attributes:
        base_dir: Anchor for ``[serve]`` candidates and layout directories
            (parent of ``dirserve.toml``, or CWD if no config found).
        config_path: The config file in use, or None.
        dist_dir: Explicit directory to serve; skips candidate search.
            Relative values from the CLI or env are taken against the CWD.
        port: Listen port.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DIRSERVE_",
        "env_nested_delimiter": "__",
        "env_ignore_empty": True,
    }

    base_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    dist_dir: Path | None = None
    port: int = Field(default=8080, ge=0, le=65535)

    # --- CLI flags ---
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    serve: ServeConfig = Field(default_factory=ServeConfig)

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
            BareEnvSettingsSource(settings_cls),
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        base_dir: Path | None = None,
        **cli_flags: Any,
    ) -> DirserveSettings:
        """Construct settings from CLI invocation.

        Flags left at ``None`` are omitted so env and TOML values still apply.

        Raises:
            click.ClickException: Invalid TOML or invalid values.
        """
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(base_dir)

        if base_dir is None:
            base_dir = toml_path.parent if toml_path else Path.cwd()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(base_dir=base_dir, config_path=toml_path, **overrides)
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None

    def with_overrides(self, **overrides: Any) -> DirserveSettings:
        """Copy with per-command overrides applied; ``None`` values are skipped.

        Keys naming ``serve`` fields update the ``[serve]`` section.
        """
        top: dict[str, Any] = {}
        section: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key in ServeConfig.model_fields:
                section[key] = value
            else:
                top[key] = value
        if section:
            top["serve"] = self.serve.model_copy(update=section)
        return self.model_copy(update=top)
