"""Common path utilities for sandpath."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

UPLOAD_DIR_NAME = "claude-ui-uploads"


def get_sandpath_home() -> Path:
    """Return the base sandpath directory, honoring SANDPATH_HOME if set."""

    env_path = os.environ.get("SANDPATH_HOME")
    return Path(env_path).expanduser() if env_path else Path.home() / ".sandpath"


def home_dir() -> Path:
    return Path.home()


def upload_staging_dir(temp_dir: Path | str | None = None) -> Path:
    """Return the upload staging directory beneath the platform temp dir."""

    base = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
    return base / UPLOAD_DIR_NAME


def claude_projects_dir(home: Path | str | None = None) -> Path:
    base = Path(home) if home is not None else home_dir()
    return base / ".claude" / "projects"


def cursor_chats_dir(home: Path | str | None = None) -> Path:
    base = Path(home) if home is not None else home_dir()
    return base / ".cursor" / "chats"


__all__ = [
    "UPLOAD_DIR_NAME",
    "get_sandpath_home",
    "home_dir",
    "upload_staging_dir",
    "claude_projects_dir",
    "cursor_chats_dir",
]
