#!/usr/bin/env python3
"""Check one workspace member manifest.

Handles the member's own ``[package] version`` and every dependency entry that
points at a fellow workspace member.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tomlkit import TOMLDocument

from wsver import wsver_cli_util as u
from wsver.errors import MissingField, MissingSection
from wsver.version_check import Mismatch, VersionField, check_version, is_table


DEPENDENCY_TABLES = ("dependencies", "dev-dependencies", "build-dependencies")


@dataclass
class MemberManifest:
    member: str
    path: Path
    display: str
    document: TOMLDocument
    changed: bool = False
    mismatches: list[Mismatch] = field(default_factory=list)


def check_dependencies(
    deps: Any,
    membership: frozenset[str],
    *,
    manifest: Path,
    display: str,
    prefix: str,
    options: u.SyncOptions,
    notices: u.Notices,
) -> list[Mismatch]:
    """Check the pinned versions of internal dependencies in one table.

    Only entries keyed by a workspace member and written as a table
    (``a = { path = "../a", version = "0.1.0" }`` or ``[dependencies.a]``) are
    considered. Bare ``a = "0.1.0"`` entries are left alone, and so are
    internal entries without a ``version`` key.
    """
    mismatches: list[Mismatch] = []
    if not is_table(deps):
        return mismatches

    for name, entry in deps.items():
        if name not in membership:
            continue
        if not is_table(entry):
            continue
        if "version" not in entry:
            continue
        found = check_version(
            VersionField(
                container=entry,
                key="version",
                manifest=manifest,
                display=display,
                field=f"{prefix}.{name}.version",
            ),
            options,
            notices,
        )
        if found is not None:
            mismatches.append(found)
    return mismatches


def process_member(
    member: str,
    membership: frozenset[str],
    options: u.SyncOptions,
    notices: u.Notices,
) -> MemberManifest:
    """Load `<root>/<member>/Cargo.toml` and check every version it holds.

    In write mode the returned document already carries the new versions;
    saving it is left to the caller.
    """
    path = u.member_manifest_path(options.root, member)
    display = u.relpath(options.root, path)
    manifest = MemberManifest(
        member=member,
        path=path,
        display=display,
        document=u.load_manifest(path),
    )

    package = manifest.document.get("package")
    if not is_table(package):
        raise MissingSection(path, "no [package] section")
    if "version" not in package:
        raise MissingField(path, "no version in [package]", field="package.version")

    own = check_version(
        VersionField(
            container=package,
            key="version",
            manifest=path,
            display=display,
            field="package.version",
        ),
        options,
        notices,
    )
    if own is not None:
        manifest.mismatches.append(own)

    for table_name in DEPENDENCY_TABLES:
        manifest.mismatches += check_dependencies(
            manifest.document.get(table_name),
            membership,
            manifest=path,
            display=display,
            prefix=table_name,
            options=options,
            notices=notices,
        )

    manifest.changed = options.write and bool(manifest.mismatches)
    return manifest
