#!/usr/bin/env python3
"""Shared utilities for the wsver CLI.

It hosts:
- constants (manifest file name, environment overrides)
- run options passed down from the CLI
- manifest loading/saving that keeps every byte tomlkit does not touch
- console notices and JSON report writing
"""

from __future__ import annotations

import argparse
import json
import os
import os.path
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from wsver.errors import ManifestIOError, ManifestParseError


MANIFEST_NAME = "Cargo.toml"

QUIET_ENV = "WSVER_QUIET"

# Cargo passes the subcommand name as the first argument to `cargo-<name>`.
CARGO_SUBCOMMAND = "wsver"

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


@dataclass(frozen=True)
class SyncOptions:
    root: Path
    version: str
    write: bool
    quiet: bool = False


@dataclass(frozen=True)
class Notices:
    quiet: bool = False

    def info(self, msg: str) -> None:
        if not self.quiet:
            print(msg)

    def error(self, msg: str) -> None:
        # Errors are never silenced.
        print(f"ERROR: {msg}", file=sys.stderr)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def relpath(from_dir: Path, to_path: Path) -> str:
    try:
        return os.path.relpath(os.fspath(to_path), start=os.fspath(from_dir))
    except Exception:
        return os.fspath(to_path)


def quiet_requested(args: argparse.Namespace) -> bool:
    if os.environ.get(QUIET_ENV):
        return True
    return bool(getattr(args, "quiet", False))


def member_manifest_path(root: Path, member: str) -> Path:
    return root / member / MANIFEST_NAME


def load_manifest(path: Path) -> TOMLDocument:
    """Parse a manifest, keeping line endings exactly as stored."""
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestIOError(path, f"can't read manifest ({exc})") from exc
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ManifestParseError(path, f"invalid TOML ({exc})") from exc


def save_manifest(path: Path, document: TOMLDocument) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(tomlkit.dumps(document))
    except OSError as exc:
        raise ManifestIOError(path, f"can't write manifest ({exc})") from exc


def write_json_report(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8"
    )
