"""Path validation pipeline and project directory resolution.

``PathValidator`` wires the screener, canonicalizer and boundary checker
together around an immutable ``SandboxRoots``. Every rejection is logged once
and re-raised; nothing in here touches storage beyond symlink resolution.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sandpath.boundary import ValidatedPath, check_boundary
from sandpath.canonical import RealPath, canonicalize
from sandpath.config import Provider, SandboxRoots
from sandpath.errors import InvalidInputError, NameValidationError, PathSecurityError, UnknownProviderError
from sandpath.names import ProjectName, validate_project_name
from sandpath.screening import screen


class PathValidator:
    """Validate untrusted path and name strings against fixed sandbox roots."""

    def __init__(
        self,
        roots: SandboxRoots,
        *,
        resolve_symlinks: bool = True,
        realpath: RealPath | None = None,
        cwd: Path | str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.roots = roots
        self.resolve_symlinks = resolve_symlinks
        self._realpath = realpath or os.path.realpath
        self._cwd = cwd
        self.logger = logger or logging.getLogger("sandpath.validator")
        self._allowed_roots = tuple(self._canonical_root(root) for root in roots.allowed_roots)

    @property
    def allowed_roots(self) -> tuple[Path, ...]:
        """Canonical form of the configured allowed roots."""

        return self._allowed_roots

    def validate_and_sanitize_path(
        self, raw_path: object, expected_base_dir: str | os.PathLike[str] | None = None
    ) -> ValidatedPath:
        """Return the canonical path for ``raw_path`` if it stays inside the sandbox.

        With ``expected_base_dir`` only that directory is accepted as a root;
        otherwise any configured allowed root will do.
        """

        try:
            if expected_base_dir is not None:
                roots = (self._canonical_root(self._require_absolute(expected_base_dir)),)
            else:
                roots = self._allowed_roots
            decoded = screen(raw_path)
            candidate = canonicalize(
                decoded,
                cwd=self._cwd,
                resolve_links=self.resolve_symlinks,
                realpath=self._realpath,
            )
            validated = check_boundary(candidate, roots)
        except PathSecurityError as exc:
            self._log_rejection(raw_path, exc)
            raise
        self.logger.debug("accepted path %r -> %s", raw_path, validated)
        return validated

    def safe_join(self, base_dir: str | os.PathLike[str], relative_path: str | ProjectName) -> ValidatedPath:
        """Join ``relative_path`` onto an absolute ``base_dir`` and validate the result."""

        try:
            base = self._require_absolute(base_dir)
            if isinstance(relative_path, ProjectName):
                relative_path = relative_path.value
            if not isinstance(relative_path, str) or not relative_path:
                raise InvalidInputError("relative path must be a non-empty string")
        except PathSecurityError as exc:
            self._log_rejection(relative_path, exc)
            raise

        joined = os.path.normpath(os.path.join(base, relative_path))
        return self.validate_and_sanitize_path(joined, base)

    def validate_project_name(self, project_name: object) -> ProjectName:
        try:
            return validate_project_name(project_name)
        except PathSecurityError as exc:
            self._log_rejection(project_name, exc)
            raise

    def provider_root(self, provider: Provider | str) -> Path:
        root = self.roots.provider_root(provider)
        if root is None:
            exc = UnknownProviderError(getattr(provider, "value", provider))
            self._log_rejection(provider, exc)
            raise exc
        return root

    def get_claude_projects_dir(self) -> Path:
        return self.provider_root(Provider.CLAUDE)

    def get_cursor_chats_dir(self) -> Path:
        return self.provider_root(Provider.CURSOR)

    def get_project_dir(self, project_name: object, provider: Provider | str = Provider.CLAUDE) -> ValidatedPath:
        name = self.validate_project_name(project_name)
        root = self.provider_root(provider)
        validated = self.safe_join(root, name)
        if validated.path != self._canonical_root(os.path.join(root, name.value)):
            exc = NameValidationError(f"project name does not map to a single directory ({name})")
            self._log_rejection(project_name, exc)
            raise exc
        return validated

    def _canonical_root(self, root: str | os.PathLike[str]) -> Path:
        return canonicalize(
            os.fspath(root),
            resolve_links=self.resolve_symlinks,
            realpath=self._realpath,
        )

    @staticmethod
    def _require_absolute(path: object) -> str:
        if not isinstance(path, str | os.PathLike):
            raise InvalidInputError("base directory must be an absolute path")
        value = os.fspath(path)
        if not isinstance(value, str) or not value or not os.path.isabs(value):
            raise InvalidInputError("base directory must be an absolute path")
        return value

    def _log_rejection(self, raw: object, exc: PathSecurityError) -> None:
        self.logger.warning("rejected %r: %s: %s", raw, type(exc).__name__, exc)


__all__ = ["PathValidator"]
