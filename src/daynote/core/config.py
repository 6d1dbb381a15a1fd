"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (DAYNOTE_* prefix, plus NB_DEFAULT_EXTENSION)
    - Default values

Key components:
    - DaynoteConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal
from unittest.mock import patch

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from daynote.core.paths import resolve_extension
from daynote.core.result import ConfigurationError

CONFIG_ENV_VAR = "DAYNOTE_CONFIG"
GLOBAL_EXTENSION_ENV_VAR = "NB_DEFAULT_EXTENSION"
DEFAULT_DATE_PATTERN = "%Y-%m-%d"


def _default_editor() -> str:
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"


class DaynoteConfig(BaseSettings):
    """Settings for one invocation; read once and never mutated."""

    model_config = SettingsConfigDict(
        env_prefix="DAYNOTE_",
        extra="ignore",
        frozen=True,
    )

    date_cmd: str = Field(default="date", description="date(1) executable to invoke.")
    filename_pattern: str = Field(
        default=DEFAULT_DATE_PATTERN, description="date(1) format for the filename fragment."
    )
    title_pattern: str = Field(
        default=DEFAULT_DATE_PATTERN, description="date(1) format for the note heading."
    )
    file_path: str = Field(default="", description="Sub-path inside the notebook for dated notes.")
    file_ext: str | None = Field(default=None, description="Extension for dated notes.")
    default_extension: str | None = Field(
        default=None,
        validation_alias=AliasChoices("default_extension", GLOBAL_EXTENSION_ENV_VAR),
        description="Global default extension shared with the notebook tool.",
    )
    backend: Literal["local", "nb"] = Field(
        default="local", description="Notebook backend: plain files or the nb CLI."
    )
    notebook_dir: Path = Field(
        default_factory=lambda: Path.home() / ".nb" / "home",
        description="Notebook root used by the local backend.",
    )
    editor: str = Field(
        default_factory=_default_editor, description="Editor command used by the local backend."
    )
    nb_cmd: str = Field(default="nb", description="nb executable used by the nb backend.")
    log_level: str = Field(default="WARNING", description="Log level for daynote output.")

    @field_validator("date_cmd", "editor", "nb_cmd")
    @classmethod
    def reject_blank_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("command must not be blank")
        return v.strip()

    @property
    def extension(self) -> str:
        return resolve_extension(self.file_ext, self.default_extension)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None
    ignored_fields: set[str] = field(default_factory=set)


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    candidate = (
        config_path
        or env_vars.get(CONFIG_ENV_VAR)
        or (Path.home() / ".config" / "daynote" / "config.toml")
    )
    return Path(candidate).expanduser()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

    parser = json.loads if path.suffix.lower() == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Detect which fields are overridden by environment variables."""
    prefix = DaynoteConfig.model_config.get("env_prefix", "")
    upper_keys = {key.upper() for key in env_vars}
    overrides: set[str] = set()

    for name in DaynoteConfig.model_fields:
        if f"{prefix}{name}".upper() in upper_keys:
            overrides.add(name)

    if GLOBAL_EXTENSION_ENV_VAR in upper_keys:
        overrides.add("default_extension")

    return overrides


def _invalid_fields(exc: ValidationError) -> set[str] | None:
    """Map validation errors back to field names, or None if one cannot be placed."""
    fields: set[str] = set()
    for err in exc.errors():
        loc = str(err["loc"][0]) if err["loc"] else ""
        if loc in DaynoteConfig.model_fields:
            fields.add(loc)
        elif loc.upper() == GLOBAL_EXTENSION_ENV_VAR:
            fields.add("default_extension")
        else:
            return None
    return fields


def _without_fields(env_vars: Mapping[str, str], fields: set[str]) -> dict[str, str]:
    prefix = DaynoteConfig.model_config.get("env_prefix", "")
    dropped = {f"{prefix}{name}".upper() for name in fields}
    if "default_extension" in fields:
        dropped.add(GLOBAL_EXTENSION_ENV_VAR)
    return {key: value for key, value in env_vars.items() if key.upper() not in dropped}


def _build_config(file_data: dict[str, Any]) -> tuple[DaynoteConfig, str | None, set[str]]:
    """Validate settings, dropping only the invalid ones when validation fails."""
    try:
        return DaynoteConfig(**file_data), None, set()
    except ValidationError as exc:
        error = str(exc)
        fields = _invalid_fields(exc)

    if fields:
        kept = {key: value for key, value in file_data.items() if key not in fields}
        with patch.dict(os.environ, _without_fields(os.environ, fields), clear=True):
            try:
                return DaynoteConfig(**kept), error, fields
            except ValidationError as retry_exc:
                error = f"{error}\n{retry_exc}"

    return DaynoteConfig.model_construct(), error, set(DaynoteConfig.model_fields)


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[DaynoteConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    Invalid settings are dropped and reported; everything else still applies.
    If the file cannot be read or parsed, only defaults and env are used.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(config_path, env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigurationError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    with context_manager:
        config, validation_error, ignored_fields = _build_config(file_data)
    error = validation_error or error

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
        ignored_fields=ignored_fields,
    )

    return config, load_result
