"""Configuration models and enums for sandpath.

Sandbox roots are computed from fixed sources (home directory, platform temp
directory) and are never read from the config file or environment. Settings
only cover how validation behaves and how it logs.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sandpath.paths import (
    claude_projects_dir,
    cursor_chats_dir,
    get_sandpath_home,
    home_dir,
    upload_staging_dir,
)


class Provider(str, Enum):
    CLAUDE = "claude"
    CURSOR = "cursor"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _normalize_root(value: Path | str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        raise ValueError(f"root '{value}' must be an absolute path")
    return Path(os.path.normpath(path))


class SandboxRoots(BaseModel):
    """Immutable set of sandbox boundaries established at startup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    allowed_roots: tuple[Path, ...]
    provider_roots: dict[Provider, Path] = Field(default_factory=dict)

    @field_validator("allowed_roots")
    @classmethod
    def _validate_allowed(cls, value: tuple[Path, ...]) -> tuple[Path, ...]:
        if not value:
            raise ValueError("allowed_roots must not be empty")
        normalized = tuple(_normalize_root(root) for root in value)
        if len(set(normalized)) != len(normalized):
            raise ValueError("allowed_roots entries must be unique")
        return normalized

    @field_validator("provider_roots")
    @classmethod
    def _validate_providers(cls, value: dict[Provider, Path]) -> dict[Provider, Path]:
        return {provider: _normalize_root(root) for provider, root in value.items()}

    def provider_root(self, provider: Provider | str) -> Path | None:
        try:
            key = Provider(provider)
        except ValueError:
            return None
        return self.provider_roots.get(key)


def default_roots(home: Path | str | None = None, temp_dir: Path | str | None = None) -> SandboxRoots:
    """Build the process-wide roots from the home and temp directories."""

    base_home = Path(home) if home is not None else home_dir()
    return SandboxRoots(
        allowed_roots=(base_home, upload_staging_dir(temp_dir)),
        provider_roots={
            Provider.CLAUDE: claude_projects_dir(base_home),
            Provider.CURSOR: cursor_chats_dir(base_home),
        },
    )


class Settings(BaseModel):
    """Resolved sandpath settings."""

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    log_level: LogLevel = LogLevel.WARNING
    resolve_symlinks: bool = True


def default_config_path() -> Path:
    return get_sandpath_home() / "config.toml"


def load_settings(
    cli_overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | str | None = None,
) -> Settings:
    env = env if env is not None else os.environ
    cli_overrides = cli_overrides or {}
    path = Path(config_path) if config_path else default_config_path()

    config_data: dict[str, Any] = {}
    if path.exists():
        config_data = _read_toml(path)

    defaults = Settings()

    log_level = _first_value(
        _clean_str(cli_overrides.get("log_level")),
        _clean_str(env.get("SANDPATH_LOG_LEVEL")),
        _clean_str(_get_config_value(config_data, "logging", "log_level")),
        defaults.log_level,
    )

    resolve_symlinks = _first_value(
        cli_overrides.get("resolve_symlinks"),
        _get_config_value(config_data, "validation", "resolve_symlinks"),
        defaults.resolve_symlinks,
    )
    if not isinstance(resolve_symlinks, bool):
        resolve_symlinks = defaults.resolve_symlinks

    log_level_enum = _coerce_enum(log_level, LogLevel, defaults.log_level)
    return Settings(
        log_level=cast(LogLevel, log_level_enum),
        resolve_symlinks=resolve_symlinks,
    )


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_config_value(config: Mapping[str, Any], section: str, key: str) -> Any:
    section_data = config.get(section)
    if not isinstance(section_data, dict):
        return None
    return section_data.get(key)


def _clean_str(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


def _first_value(*candidates: Any) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _coerce_enum(value: Any, enum_cls: type[Enum], default: Enum | None = None) -> Enum | None:
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.lower())
        except ValueError:
            return default
    return default


__all__ = [
    "Provider",
    "LogLevel",
    "SandboxRoots",
    "Settings",
    "default_roots",
    "default_config_path",
    "load_settings",
]
