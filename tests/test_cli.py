import json
from pathlib import Path

import pytest

from sandpath import __version__, cli
from sandpath.config import default_roots


@pytest.fixture
def cli_home(monkeypatch: pytest.MonkeyPatch, sandbox: Path) -> Path:
    """Run the CLI against sandbox roots and keep it away from the root logger."""

    home = sandbox / "home"
    monkeypatch.setattr(cli, "default_roots", lambda: default_roots(home=home, temp_dir=sandbox / "tmp"))
    monkeypatch.setattr(cli, "_configure_base_logging", lambda **kwargs: None)
    return home


def test_version_constant() -> None:
    assert __version__ == "0.1.0"


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_check_accepts_path_in_home(cli_home: Path, capsys) -> None:
    code = cli.main(["check", str(cli_home / "docs" / "readme.md")])

    assert code == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == str(cli_home / "docs" / "readme.md")


def test_check_rejects_traversal(cli_home: Path, capsys) -> None:
    code = cli.main(["check", "../../etc/passwd"])

    assert code == cli.EXIT_REJECTED
    assert "SuspiciousPatternError" in capsys.readouterr().err


def test_check_with_base(cli_home: Path, capsys) -> None:
    code = cli.main(["check", str(cli_home / "notes.txt"), "--base", str(cli_home / ".claude" / "projects")])

    assert code == cli.EXIT_REJECTED
    assert "outside of allowed directory" in capsys.readouterr().err


def test_join(cli_home: Path, capsys) -> None:
    base = cli_home / ".claude" / "projects"
    code = cli.main(["join", str(base), "demo"])

    assert code == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == str(base / "demo")


def test_name_rejects_reserved(cli_home: Path, capsys) -> None:
    code = cli.main(["name", "COM1"])

    assert code == cli.EXIT_REJECTED
    assert "ReservedNameError" in capsys.readouterr().err


def test_name_accepts_valid(cli_home: Path, capsys) -> None:
    assert cli.main(["name", "my-project_1"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "my-project_1"


def test_project_for_cursor(cli_home: Path, capsys) -> None:
    code = cli.main(["project", "demo", "--provider", "cursor"])

    assert code == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == str(cli_home / ".cursor" / "chats" / "demo")


def test_project_unknown_provider(cli_home: Path, capsys) -> None:
    code = cli.main(["project", "demo", "--provider", "unknown-provider"])

    assert code == cli.EXIT_REJECTED
    assert "unknown provider: unknown-provider" in capsys.readouterr().err


def test_roots(cli_home: Path, sandbox: Path, capsys) -> None:
    assert cli.main(["roots"]) == cli.EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert payload["allowed_roots"] == [str(cli_home), str(sandbox / "tmp" / "claude-ui-uploads")]
    assert payload["provider_roots"]["claude"] == str(cli_home / ".claude" / "projects")


def test_config_path(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("SANDPATH_HOME", str(tmp_path / "home"))
    monkeypatch.setattr(cli, "_configure_base_logging", lambda **kwargs: None)

    code = cli.main(["config", "path"])

    assert code == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "home" / "config.toml")


def test_config_print_reflects_overrides(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "_configure_base_logging", lambda **kwargs: None)

    code = cli.main(["--log-level", "info", "--no-resolve-symlinks", "config", "print"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"log_level": "info", "resolve_symlinks": False}


def test_debug_flag_forces_debug_level(monkeypatch, capsys) -> None:
    seen = {}

    def fake_configure(**kwargs):
        seen.update(kwargs)

    monkeypatch.setattr(cli, "_configure_base_logging", fake_configure)

    cli.main(["--debug", "config", "print"])

    assert seen["debug_enabled"] is True
    assert json.loads(capsys.readouterr().out)["log_level"] == "debug"


def test_log_file_receives_rejections(sandbox: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli, "default_roots", lambda: default_roots(home=sandbox / "home", temp_dir=sandbox / "tmp"))
    log_file = sandbox / "cli.log"

    code = cli.main(["--log-file", str(log_file), "check", "/etc/passwd"])

    assert code == cli.EXIT_REJECTED
    assert "OutOfBoundsError" in log_file.read_text(encoding="utf-8")
