"""Resolve screened path strings to absolute canonical paths."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from sandpath.errors import ResolutionError

RealPath = Callable[[str], str]


def canonicalize(
    decoded: str,
    *,
    cwd: Path | str | None = None,
    resolve_links: bool = True,
    realpath: RealPath | None = None,
) -> Path:
    """Return the absolute, normalized form of ``decoded``.

    Relative input is anchored at ``cwd`` (the process working directory by
    default). With ``resolve_links`` the result is passed through ``realpath``
    so that symlinks are followed to their target before any boundary check.
    """

    try:
        base = os.fspath(cwd) if cwd is not None else os.getcwd()
        joined = decoded if os.path.isabs(decoded) else os.path.join(base, decoded)
        normalized = os.path.normpath(joined)
        if resolve_links:
            normalized = os.path.normpath((realpath or os.path.realpath)(normalized))
    except (ValueError, OSError, RuntimeError) as exc:
        raise ResolutionError(f"failed to resolve path ({exc})") from exc

    if not os.path.isabs(normalized):
        raise ResolutionError(f"failed to resolve path to an absolute location ({normalized})")
    return Path(normalized)


__all__ = ["RealPath", "canonicalize"]
