"""Validate-then-delegate wrappers over storage operations.

Validation errors and storage errors are kept apart: a rejected path raises a
``PathSecurityError`` and never reaches storage, while storage failures come
back as the original ``OSError``. ``exists`` is the only operation that turns
either kind of failure into a plain ``False``.
"""

from __future__ import annotations

import asyncio
import logging
import os

from sandpath.boundary import ValidatedPath
from sandpath.errors import PathSecurityError
from sandpath.storage import LocalStorage, Storage
from sandpath.validator import PathValidator

BaseDir = str | os.PathLike[str] | None


class SafeIO:
    """Async file operations confined to the validator's sandbox."""

    def __init__(
        self,
        validator: PathValidator,
        storage: Storage | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.validator = validator
        self.storage = storage or LocalStorage()
        self.logger = logger or logging.getLogger("sandpath.safe_io")

    async def _validate(self, path: object, expected_base_dir: BaseDir) -> ValidatedPath:
        # Symlink resolution hits the filesystem, so keep it off the event loop.
        return await asyncio.to_thread(self.validator.validate_and_sanitize_path, path, expected_base_dir)

    async def exists(self, path: object, expected_base_dir: BaseDir = None) -> bool:
        try:
            validated = await self._validate(path, expected_base_dir)
        except PathSecurityError:
            return False
        try:
            await self.storage.stat(validated.path)
        except OSError as exc:
            self.logger.debug("exists check failed for %s: %s", validated, exc)
            return False
        return True

    async def read_file(
        self, path: object, expected_base_dir: BaseDir = None, encoding: str | None = "utf-8"
    ) -> str | bytes:
        validated = await self._validate(path, expected_base_dir)
        return await self.storage.read(validated.path, encoding)

    async def write_file(
        self,
        path: object,
        content: str | bytes,
        expected_base_dir: BaseDir = None,
        encoding: str | None = "utf-8",
    ) -> None:
        validated = await self._validate(path, expected_base_dir)
        await self.storage.write(validated.path, content, encoding)
        self.logger.debug("wrote %s", validated)

    async def mkdir(self, path: object, expected_base_dir: BaseDir = None, *, recursive: bool = True) -> None:
        validated = await self._validate(path, expected_base_dir)
        await self.storage.mkdir(validated.path, recursive=recursive)
        self.logger.debug("created directory %s", validated)


__all__ = ["SafeIO"]
