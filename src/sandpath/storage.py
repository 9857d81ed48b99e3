"""Storage capability used by canonicalization and the safe I/O facade.

``Storage`` is deliberately narrow so tests can swap in an in-memory
implementation. ``LocalStorage`` runs blocking filesystem calls in a worker
thread and lets ``OSError`` subclasses propagate unchanged.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    def realpath(self, path: str) -> str:
        """Return ``path`` with symlinks resolved."""

    async def stat(self, path: Path) -> object:
        """Raise ``OSError`` if ``path`` is not accessible."""

    async def read(self, path: Path, encoding: str | None) -> str | bytes: ...

    async def write(self, path: Path, content: str | bytes, encoding: str | None) -> None: ...

    async def mkdir(self, path: Path, *, recursive: bool) -> None: ...


class LocalStorage:
    """Storage backed by the local filesystem."""

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)

    async def stat(self, path: Path) -> os.stat_result:
        return await asyncio.to_thread(os.stat, path)

    async def read(self, path: Path, encoding: str | None) -> str | bytes:
        if encoding is None:
            return await asyncio.to_thread(path.read_bytes)
        return await asyncio.to_thread(path.read_text, encoding=encoding)

    async def write(self, path: Path, content: str | bytes, encoding: str | None) -> None:
        if isinstance(content, bytes):
            await asyncio.to_thread(path.write_bytes, content)
            return
        await asyncio.to_thread(path.write_text, content, encoding=encoding or "utf-8")

    async def mkdir(self, path: Path, *, recursive: bool) -> None:
        await asyncio.to_thread(path.mkdir, parents=recursive, exist_ok=recursive)


__all__ = ["Storage", "LocalStorage"]
