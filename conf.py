"""Sphinx configuration for the wsver documentation (repo root)."""

from __future__ import annotations

import os
import re
from pathlib import Path


# -- Project information -----------------------------------------------------
project = "wsver"
copyright = "2025, wsver Contributors"
author = "wsver Team"


def _read_project_version() -> str | None:
    """Extract the wsver version from pyproject.toml without extra dependencies.

    Reads the PEP 621 ``[project]`` table only.
    """

    pyproject = Path(__file__).with_name("pyproject.toml")
    if not pyproject.is_file():
        return None

    text = pyproject.read_text(encoding="utf-8")

    start = text.find("[project]")
    if start == -1:
        return None
    rest = text[start + len("[project]") :]
    next_section = rest.find("\n[")
    section = rest if next_section == -1 else rest[:next_section]
    m = re.search(r'^\s*version\s*=\s*"([^"]+)"\s*$', section, flags=re.MULTILINE)
    return m.group(1) if m else None


# Sphinx version string (shown by themes that display it).
release = _read_project_version() or "0.0.0"
version = ".".join(release.split(".")[:2])


# -- General configuration ---------------------------------------------------
extensions: list[str] = []

exclude_patterns = [
    "_build",
    ".venv",
    ".venv/**",
    "tests/**",
]


# -- Theme configuration -----------------------------------------------------
# Default to furo, but keep it overridable.
html_theme = os.environ.get("WSVER_SPHINX_THEME", "furo")

# Keep indices tidy: this is not an API reference.
html_use_index = False
html_domain_indices = False
html_use_modindex = False
