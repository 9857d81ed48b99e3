import logging
import os
import pathlib
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

# Ensure src/ is importable when running tests without installing the package.
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sandpath.config import SandboxRoots, default_roots  # noqa: E402
from sandpath.safe_io import SafeIO  # noqa: E402
from sandpath.storage import LocalStorage  # noqa: E402
from sandpath.validator import PathValidator  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_sandpath_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point SANDPATH_HOME at a per-test directory so config is never read from the real home."""

    monkeypatch.setenv("SANDPATH_HOME", str(tmp_path / ".sandpath"))
    monkeypatch.delenv("SANDPATH_LOG_LEVEL", raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_sandpath_logger():
    """Undo handler/propagation changes made by configure_logging."""

    yield
    logger = logging.getLogger("sandpath")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sandbox(tmp_path: Path) -> Path:
    """Real directory tree standing in for a user's home and temp dirs."""

    base = tmp_path.resolve()
    (base / "home" / ".claude" / "projects").mkdir(parents=True)
    (base / "home" / ".cursor" / "chats").mkdir(parents=True)
    (base / "tmp" / "claude-ui-uploads").mkdir(parents=True)
    return base


@pytest.fixture
def sandbox_roots(sandbox: Path) -> SandboxRoots:
    return default_roots(home=sandbox / "home", temp_dir=sandbox / "tmp")


@pytest.fixture
def validator(sandbox: Path, sandbox_roots: SandboxRoots) -> PathValidator:
    return PathValidator(sandbox_roots, cwd=sandbox / "home")


@pytest.fixture
def alice_validator() -> PathValidator:
    """Purely lexical validator for a home of /home/alice; never touches the disk."""

    return PathValidator(
        default_roots(home="/home/alice", temp_dir="/tmp"),
        resolve_symlinks=False,
        cwd="/home/alice",
    )


class MemoryStorage:
    """In-memory Storage fake that records every call it receives."""

    def __init__(self, dirs: list[Path] | None = None) -> None:
        self.files: dict[Path, bytes] = {}
        self.dirs: set[Path] = {Path("/")}
        for directory in dirs or []:
            self._add_dir_tree(Path(directory))
        self.calls: list[tuple[str, Path]] = []

    def _add_dir_tree(self, path: Path) -> None:
        self.dirs.add(path)
        self.dirs.update(path.parents)

    def realpath(self, path: str) -> str:
        return os.path.normpath(path)

    async def stat(self, path: Path) -> Any:
        self.calls.append(("stat", path))
        if path in self.files or path in self.dirs:
            return object()
        raise FileNotFoundError(str(path))

    async def read(self, path: Path, encoding: str | None) -> str | bytes:
        self.calls.append(("read", path))
        if path in self.dirs:
            raise IsADirectoryError(str(path))
        if path not in self.files:
            raise FileNotFoundError(str(path))
        data = self.files[path]
        return data if encoding is None else data.decode(encoding)

    async def write(self, path: Path, content: str | bytes, encoding: str | None) -> None:
        self.calls.append(("write", path))
        if path.parent not in self.dirs:
            raise FileNotFoundError(str(path.parent))
        if path in self.dirs:
            raise IsADirectoryError(str(path))
        self.files[path] = content if isinstance(content, bytes) else content.encode(encoding or "utf-8")

    async def mkdir(self, path: Path, *, recursive: bool) -> None:
        self.calls.append(("mkdir", path))
        if recursive:
            self._add_dir_tree(path)
            return
        if path in self.dirs or path in self.files:
            raise FileExistsError(str(path))
        if path.parent not in self.dirs:
            raise FileNotFoundError(str(path.parent))
        self.dirs.add(path)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage(dirs=[Path("/sandbox/home"), Path("/sandbox/tmp/claude-ui-uploads")])


@pytest.fixture
def memory_io(memory_storage: MemoryStorage) -> SafeIO:
    roots = default_roots(home="/sandbox/home", temp_dir="/sandbox/tmp")
    validator = PathValidator(roots, realpath=memory_storage.realpath, cwd="/sandbox/home")
    return SafeIO(validator, memory_storage)


@pytest.fixture
def local_io(validator: PathValidator) -> SafeIO:
    return SafeIO(validator, LocalStorage())
