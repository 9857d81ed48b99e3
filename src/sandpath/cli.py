"""Console entrypoint for sandpath.

Lets operators check how a raw path, a join, or a project name would be
judged by the sandbox without writing any code. Exit status is 0 when the
input is accepted, 2 when it is rejected, and 1 for any other failure.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from sandpath import __version__
from sandpath.config import LogLevel, Provider, Settings, default_config_path, default_roots, load_settings
from sandpath.errors import PathSecurityError
from sandpath.logging import configure_logging
from sandpath.storage import LocalStorage
from sandpath.validator import PathValidator

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sandpath",
        description="Check untrusted paths and project names against the sandbox roots",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    parser.add_argument(
        "--log-level",
        choices=[e.value for e in LogLevel],
        dest="log_level",
        help="Log level override",
    )
    parser.add_argument(
        "--no-resolve-symlinks",
        action="store_false",
        dest="resolve_symlinks",
        default=None,
        help="Compare lexical paths only instead of following symlinks.",
    )
    parser.add_argument("--log-file", dest="log_file", help="Also write sandpath log records to this file")
    parser.add_argument("--config-path", dest="config_path", help="Path to config.toml")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Validate a raw path")
    check_parser.add_argument("path", help="Raw path to validate")
    check_parser.add_argument("--base", dest="base_dir", help="Expected absolute base directory")

    join_parser = subparsers.add_parser("join", help="Safely join a relative path onto a base directory")
    join_parser.add_argument("base_dir", help="Absolute base directory")
    join_parser.add_argument("relative_path", help="Relative path to append")

    name_parser = subparsers.add_parser("name", help="Validate a project name")
    name_parser.add_argument("project_name", help="Project name")

    project_parser = subparsers.add_parser("project", help="Resolve a project directory for a provider")
    project_parser.add_argument("project_name", help="Project name")
    project_parser.add_argument(
        "--provider",
        default=Provider.CLAUDE.value,
        help="Provider whose root the project lives under (claude or cursor)",
    )

    subparsers.add_parser("roots", help="Print allowed and provider roots")

    config_parser = subparsers.add_parser("config", help="Config helpers")
    config_sub = config_parser.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("path", help="Print config path")
    config_sub.add_parser("print", help="Print resolved settings")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = _collect_overrides(args)
    settings = load_settings(cli_overrides=overrides, config_path=args.config_path)
    _configure_base_logging(debug_enabled=args.debug, sandpath_level=settings.log_level, log_file=args.log_file)

    if args.command == "config":
        return _run_config(settings, args)

    storage = LocalStorage()
    validator = PathValidator(
        default_roots(),
        resolve_symlinks=settings.resolve_symlinks,
        realpath=storage.realpath,
    )

    if args.command == "roots":
        return _run_roots(validator)

    try:
        if args.command == "check":
            result = validator.validate_and_sanitize_path(args.path, args.base_dir)
        elif args.command == "join":
            result = validator.safe_join(args.base_dir, args.relative_path)
        elif args.command == "name":
            result = validator.validate_project_name(args.project_name)
        elif args.command == "project":
            result = validator.get_project_dir(args.project_name, args.provider)
        else:
            parser.error(f"unknown command {args.command}")
            return EXIT_ERROR
    except PathSecurityError as exc:
        print(f"rejected: {type(exc).__name__}: {exc}", file=sys.stderr)
        return EXIT_REJECTED

    print(result)
    return EXIT_OK


def _run_roots(validator: PathValidator) -> int:
    payload = {
        "allowed_roots": [str(root) for root in validator.allowed_roots],
        "provider_roots": {provider.value: str(root) for provider, root in validator.roots.provider_roots.items()},
    }
    print(json.dumps(payload, indent=2))
    return EXIT_OK


def _run_config(settings: Settings, args: argparse.Namespace) -> int:
    if args.config_cmd == "path":
        print(args.config_path or default_config_path())
        return EXIT_OK
    if args.config_cmd == "print":
        print(json.dumps(settings.model_dump(mode="json"), indent=2))
        return EXIT_OK
    return EXIT_ERROR


def _collect_overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.debug:
        overrides["log_level"] = LogLevel.DEBUG.value
    if args.resolve_symlinks is not None:
        overrides["resolve_symlinks"] = args.resolve_symlinks
    return overrides


def _configure_base_logging(
    *, debug_enabled: bool, sandpath_level: LogLevel | str, log_file: str | None = None
) -> None:
    root_level = logging.INFO if debug_enabled else logging.WARNING

    logging.basicConfig(
        level=root_level,
        stream=sys.__stderr__,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )

    configure_logging(sandpath_level, log_file=log_file)


if __name__ == "__main__":
    sys.exit(main())
