#!/usr/bin/env python3
"""Locate, classify, compare and rewrite single version fields.

A version field is one of three shapes:

- a literal string, e.g. ``version = "0.1.0"``
- an inheritance marker, e.g. ``version.workspace = true`` or
  ``version = { workspace = true }``, meaning "use [workspace.package] version"
- anything else, which is a schema error

Rewrites go through tomlkit and replace only the scalar: quote style, trailing
comments and everything around the value stay as they were.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import tomlkit
from tomlkit.container import OutOfOrderTableProxy
from tomlkit.items import InlineTable, Item, String, StringType, Table

from wsver.errors import SchemaMismatch
from wsver.wsver_cli_util import Notices, SyncOptions


class FieldShape(Enum):
    LITERAL = "literal"
    INHERITED = "inherited"
    INVALID = "invalid"


@dataclass(frozen=True)
class Mismatch:
    file: str
    field: str
    found: str
    expected: str


def canonical_version(version: str) -> str:
    """Strip exactly one leading ``v``."""
    return version[1:] if version.startswith("v") else version


# tomlkit hands back a proxy for tables split by another table, and for
# dotted keys such as `a.path = "..."` / `a.version = "..."`.
TABLE_TYPES = (Table, InlineTable, OutOfOrderTableProxy)


def is_table(value: Any) -> bool:
    return isinstance(value, TABLE_TYPES)


def is_workspace_true(value: Any) -> bool:
    """Return True for a table carrying ``workspace = true``."""
    if not is_table(value):
        return False
    flag = value.get("workspace")
    if isinstance(flag, Item):
        flag = flag.unwrap()
    return flag is True


def classify(value: Any) -> FieldShape:
    if isinstance(value, str):
        return FieldShape.LITERAL
    if is_workspace_true(value):
        return FieldShape.INHERITED
    return FieldShape.INVALID


@dataclass
class VersionField:
    """A ``version`` key inside one table of one manifest."""

    container: Any
    key: str
    manifest: Path
    display: str
    field: str

    @property
    def value(self) -> Any:
        return self.container[self.key]

    @property
    def shape(self) -> FieldShape:
        return classify(self.value)

    def replace(self, version: str) -> None:
        self.container[self.key] = _string_like(self.value, version)


def _string_like(old: Any, version: str) -> Item:
    if isinstance(old, String):
        return tomlkit.string(
            version,
            literal=old.type in (StringType.SLL, StringType.MLL),
            multiline=old.type in (StringType.MLB, StringType.MLL),
        )
    return tomlkit.string(version)


def check_version(
    field: VersionField,
    options: SyncOptions,
    notices: Notices,
) -> Optional[Mismatch]:
    """Compare one field against the target; rewrite it in write mode.

    Returns the mismatch found, or None when the field is satisfied. In write
    mode a returned mismatch means the document was changed.
    """
    target = canonical_version(options.version)
    shape = field.shape

    if shape is FieldShape.INHERITED:
        # Satisfied by [workspace.package] version when the root declares one.
        # Without a shared version the marker is accepted as-is.
        return None

    if shape is FieldShape.INVALID:
        raise SchemaMismatch(
            field.manifest,
            "version must be a string or `workspace = true`",
            field=field.field,
        )

    old = str(field.value)
    if old == target:
        return None

    notices.info(
        f"Version for {field.display} [{field.field}] was {old} want {target}"
        + (" (fixing)" if options.write else "")
    )
    if options.write:
        field.replace(target)
    return Mismatch(file=field.display, field=field.field, found=old, expected=target)
