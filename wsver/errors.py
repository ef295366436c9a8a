"""Errors raised while synchronizing workspace versions.

All of them are fatal: the first one aborts the pass before anything is
written. Messages always name the manifest and, where there is one, the field.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SyncError(Exception):
    """Base class for every fatal synchronization error."""

    def __init__(self, path: Path, message: str, *, field: Optional[str] = None) -> None:
        self.path = path
        self.field = field
        location = f"{path} [{field}]" if field else str(path)
        super().__init__(f"{location}: {message}")


class MissingSection(SyncError):
    """A required table ([workspace] or [package]) is absent."""


class MissingField(SyncError):
    """A required key (members or version) is absent."""


class SchemaMismatch(SyncError):
    """A key exists but holds a value of the wrong shape."""


class ManifestIOError(SyncError):
    """A manifest could not be read or written."""


class ManifestParseError(SyncError):
    """A manifest is not valid TOML."""
