#!/usr/bin/env python3
"""`wsver update` and `wsver check` subcommands."""

from __future__ import annotations

import argparse
from pathlib import Path

from wsver.version_sync import cli as sync_cli


def _common_argv(args: argparse.Namespace) -> list[str]:
    argv: list[str] = ["--root", str(args.root)]
    if getattr(args, "json_report", None):
        argv += ["--json-report", str(args.json_report)]
    if getattr(args, "quiet", False):
        argv += ["--quiet"]
    return argv


def cmd_update(args: argparse.Namespace) -> int:
    return int(sync_cli(_common_argv(args) + ["--update", str(args.newver)]))


def cmd_check(args: argparse.Namespace) -> int:
    return int(sync_cli(_common_argv(args) + ["--check", str(args.newver)]))


def add_location_args(p: argparse.ArgumentParser, *, default=None) -> None:
    """Add --root and --json-report.

    The top level parser owns the defaults; subcommands pass
    ``argparse.SUPPRESS`` so an option given after the subcommand name wins
    and an omitted one keeps the top level value.
    """
    p.add_argument(
        "--root",
        type=Path,
        default=Path(".") if default is None else default,
        help="Workspace root containing the top level Cargo.toml (default: .)",
    )
    p.add_argument(
        "--json-report",
        type=Path,
        default=default,
        help="Write machine-readable JSON report to this path",
    )


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("newver", help="Target version (a leading 'v' is ignored)")
    add_location_args(p, default=argparse.SUPPRESS)


def register(sub: argparse._SubParsersAction) -> None:
    p_update = sub.add_parser(
        "update", help="Set every workspace version to the given version"
    )
    _add_common(p_update)
    p_update.set_defaults(func=cmd_update)

    p_check = sub.add_parser(
        "check", help="Fail if any workspace version differs from the given version"
    )
    _add_common(p_check)
    p_check.set_defaults(func=cmd_check)
