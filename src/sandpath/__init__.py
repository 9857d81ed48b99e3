"""Path sandboxing for untrusted path and project-name strings.

The module-level functions operate on a default validator whose roots are
computed once from the user's home directory and the platform temp directory.
Applications needing other roots build ``SandboxRoots``, ``PathValidator`` and
``SafeIO`` themselves.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from sandpath.boundary import ValidatedPath
from sandpath.config import Provider, SandboxRoots, default_roots
from sandpath.errors import (
    EncodingError,
    InvalidInputError,
    NameValidationError,
    OutOfBoundsError,
    PathSecurityError,
    ReservedNameError,
    ResolutionError,
    SuspiciousPatternError,
    UnknownProviderError,
)
from sandpath.names import ProjectName
from sandpath.safe_io import SafeIO
from sandpath.storage import LocalStorage
from sandpath.validator import PathValidator

__version__ = "0.1.0"


@lru_cache(maxsize=1)
def default_safe_io() -> SafeIO:
    """Return the process-wide facade built from the fixed default roots."""

    storage = LocalStorage()
    validator = PathValidator(default_roots(), realpath=storage.realpath)
    return SafeIO(validator, storage)


def default_validator() -> PathValidator:
    return default_safe_io().validator


def validate_and_sanitize_path(raw_path: object, expected_base_dir: str | os.PathLike[str] | None = None) -> ValidatedPath:
    return default_validator().validate_and_sanitize_path(raw_path, expected_base_dir)


def safe_join(base_dir: str | os.PathLike[str], relative_path: str | ProjectName) -> ValidatedPath:
    return default_validator().safe_join(base_dir, relative_path)


def validate_project_name(project_name: object) -> ProjectName:
    return default_validator().validate_project_name(project_name)


def get_claude_projects_dir() -> Path:
    return default_validator().get_claude_projects_dir()


def get_cursor_chats_dir() -> Path:
    return default_validator().get_cursor_chats_dir()


def get_project_dir(project_name: object, provider: Provider | str = Provider.CLAUDE) -> ValidatedPath:
    return default_validator().get_project_dir(project_name, provider)


async def safe_file_exists(file_path: object, expected_base_dir: str | os.PathLike[str] | None = None) -> bool:
    return await default_safe_io().exists(file_path, expected_base_dir)


async def safe_read_file(
    file_path: object,
    expected_base_dir: str | os.PathLike[str] | None = None,
    encoding: str | None = "utf-8",
) -> str | bytes:
    return await default_safe_io().read_file(file_path, expected_base_dir, encoding)


async def safe_write_file(
    file_path: object,
    content: str | bytes,
    expected_base_dir: str | os.PathLike[str] | None = None,
    encoding: str | None = "utf-8",
) -> None:
    await default_safe_io().write_file(file_path, content, expected_base_dir, encoding)


async def safe_mkdir(
    dir_path: object,
    expected_base_dir: str | os.PathLike[str] | None = None,
    *,
    recursive: bool = True,
) -> None:
    await default_safe_io().mkdir(dir_path, expected_base_dir, recursive=recursive)


__all__ = [
    "__version__",
    "EncodingError",
    "InvalidInputError",
    "NameValidationError",
    "OutOfBoundsError",
    "PathSecurityError",
    "PathValidator",
    "ProjectName",
    "Provider",
    "ReservedNameError",
    "ResolutionError",
    "SafeIO",
    "SandboxRoots",
    "SuspiciousPatternError",
    "UnknownProviderError",
    "ValidatedPath",
    "default_safe_io",
    "default_validator",
    "get_claude_projects_dir",
    "get_cursor_chats_dir",
    "get_project_dir",
    "safe_file_exists",
    "safe_join",
    "safe_mkdir",
    "safe_read_file",
    "safe_write_file",
    "validate_and_sanitize_path",
    "validate_project_name",
]
