#!/usr/bin/env python3
"""wsver command line interface.

Keeps every package of a Cargo workspace on one version:

    wsver update 1.4.0     # rewrite every version field to 1.4.0
    wsver check v1.4.0     # exit non-zero if anything differs

Installed as ``cargo-wsver`` it also runs as ``cargo wsver ...``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from wsver import __version__
from wsver import wsver_cli_util as u
from wsver import wsver_cmd_sync


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsver",
        description="Update or check the version of every package in a Cargo workspace",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help=f"Don't print anything but errors (also via ${u.QUIET_ENV}=1)",
    )
    wsver_cmd_sync.add_location_args(parser)
    parser.add_argument("--version", action="version", version=f"wsver {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)
    wsver_cmd_sync.register(sub)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


def cargo_main(argv: Optional[list[str]] = None) -> int:
    """Entry point for ``cargo-wsver``.

    Cargo invokes external subcommands as ``cargo-wsver wsver <args>``; the
    repeated subcommand name is dropped before parsing.
    """
    if argv is None:
        argv = sys.argv[1:]
    if argv and argv[0] == u.CARGO_SUBCOMMAND:
        argv = argv[1:]
    return main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
