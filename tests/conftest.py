"""Shared fixtures: small Cargo workspaces written under tmp_path."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


ROOT_MANIFEST = """\
# workspace root
[workspace]
members = ["a", "b"]
resolver = "2"
"""

A_MANIFEST = """\
[package]
name = "a"
version = "{version}"  # released together with b
edition = "2021"

[dependencies]
serde = "1.0"
"""

B_MANIFEST = """\
[package]
name = "b"
version = '{version}'
edition = "2021"

[dependencies]
a = {{ path = "../a", version = "{version}" }}
anyhow = {{ version = "{version}", default-features = false }}
log = "{version}"
"""


WriteWorkspace = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_workspace(tmp_path: Path) -> WriteWorkspace:
    """Return a helper writing ``{relative path: text}`` under tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(text.encode("utf-8"))
        return tmp_path

    return _write


def scenario_files(version: str) -> dict[str, str]:
    return {
        "Cargo.toml": ROOT_MANIFEST,
        "a/Cargo.toml": A_MANIFEST.format(version=version),
        "b/Cargo.toml": B_MANIFEST.format(version=version),
    }


def snapshot(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*.toml"))
    }
