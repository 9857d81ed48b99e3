"""Directory-aware containment checks against sandbox roots."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from sandpath.errors import OutOfBoundsError


@dataclass(frozen=True, slots=True)
class ValidatedPath:
    """Canonical path that passed the boundary check against ``root``."""

    path: Path
    root: Path

    def __str__(self) -> str:
        return str(self.path)

    def __fspath__(self) -> str:
        return os.fspath(self.path)


def is_within(candidate: Path, root: Path) -> bool:
    """Return True if ``candidate`` equals ``root`` or lies beneath it.

    Both arguments must already be canonical. The root is treated as a
    directory boundary: ``/home/alice2`` is not within ``/home/alice``.
    """

    candidate_str = os.fspath(candidate)
    root_str = os.fspath(root)
    if candidate_str == root_str:
        return True
    prefix = root_str if root_str.endswith(os.sep) else root_str + os.sep
    return candidate_str.startswith(prefix)


def check_boundary(candidate: Path, roots: Sequence[Path]) -> ValidatedPath:
    """Return a ``ValidatedPath`` for the first root containing ``candidate``."""

    for root in roots:
        if is_within(candidate, root):
            return ValidatedPath(path=candidate, root=root)
    raise OutOfBoundsError(candidate, roots)


__all__ = ["ValidatedPath", "is_within", "check_boundary"]
