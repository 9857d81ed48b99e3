"""Validation of opaque identifiers used as a single path segment."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sandpath.errors import NameValidationError, ReservedNameError

MAX_NAME_LENGTH = 255

RESERVED_NAMES = frozenset(
    ["con", "prn", "aux", "nul"]
    + [f"com{i}" for i in range(1, 10)]
    + [f"lpt{i}" for i in range(1, 10)]
)

_INVALID_CHARS = re.compile(r'[<>:"|?*\x00/\\]')
_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")


@dataclass(frozen=True, slots=True)
class ProjectName:
    """Identifier proven unable to escape a single path segment."""

    value: str

    def __str__(self) -> str:
        return self.value


def validate_project_name(name: object) -> ProjectName:
    if isinstance(name, ProjectName):
        name = name.value
    if not isinstance(name, str) or not name:
        raise NameValidationError("project name must be a non-empty string")
    if _INVALID_CHARS.search(name):
        raise NameValidationError("project name contains invalid characters")
    if name in (".", ".."):
        raise NameValidationError("project name contains invalid characters")
    if _PERCENT_ESCAPE.search(name):
        raise NameValidationError("project name contains percent-encoded characters")
    if len(name) > MAX_NAME_LENGTH:
        raise NameValidationError(f"project name too long (max {MAX_NAME_LENGTH} characters)")
    if name.lower() in RESERVED_NAMES:
        raise ReservedNameError(f"project name is reserved ({name})")
    return ProjectName(name)


__all__ = ["MAX_NAME_LENGTH", "RESERVED_NAMES", "ProjectName", "validate_project_name"]
