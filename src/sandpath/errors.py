"""Error taxonomy for path and name validation.

Every validation failure derives from ``PathSecurityError``. Storage failures
raised by the I/O facade are plain ``OSError`` subclasses and are never
converted into one of these.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PathSecurityError(Exception):
    """Base class for all validation rejections."""


class InvalidInputError(PathSecurityError, ValueError):
    """Input is missing, empty, or of the wrong shape."""


class UnknownProviderError(InvalidInputError):
    """Provider tag does not map to a configured root."""

    def __init__(self, provider: object) -> None:
        super().__init__(f"unknown provider: {provider}")
        self.provider = provider


class EncodingError(PathSecurityError):
    """Percent-decoding of the raw input failed."""


class SuspiciousPatternError(PathSecurityError):
    """Input matched a forbidden traversal or invalid-character pattern."""

    def __init__(self, pattern_name: str, pattern: str) -> None:
        super().__init__(f"path contains suspicious pattern {pattern_name} ({pattern})")
        self.pattern_name = pattern_name
        self.pattern = pattern


class ResolutionError(PathSecurityError):
    """Canonicalization could not produce an absolute path."""


class OutOfBoundsError(PathSecurityError):
    """Canonical path lies outside every permitted root."""

    def __init__(self, path: Path, roots: Sequence[Path]) -> None:
        if len(roots) == 1:
            message = f"path '{path}' is outside of allowed directory ({roots[0]})"
        else:
            message = f"path '{path}' is outside of allowed directories"
        super().__init__(message)
        self.path = path
        self.roots = tuple(roots)


class NameValidationError(PathSecurityError, ValueError):
    """Identifier failed the structural checks for a single path segment."""


class ReservedNameError(NameValidationError):
    """Identifier matches a platform-reserved device name."""


__all__ = [
    "PathSecurityError",
    "InvalidInputError",
    "UnknownProviderError",
    "EncodingError",
    "SuspiciousPatternError",
    "ResolutionError",
    "OutOfBoundsError",
    "NameValidationError",
    "ReservedNameError",
]
