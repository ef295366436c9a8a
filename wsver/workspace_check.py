#!/usr/bin/env python3
"""Resolve the workspace root manifest.

Reads ``[workspace] members`` and the optional shared
``[workspace.package] version``, and synchronizes ``[workspace.dependencies]``
pins that point at members.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tomlkit import TOMLDocument

from wsver import wsver_cli_util as u
from wsver.errors import MissingField, MissingSection, SchemaMismatch
from wsver.member_check import check_dependencies
from wsver.version_check import (
    FieldShape,
    Mismatch,
    VersionField,
    check_version,
    classify,
    is_table,
)


@dataclass
class WorkspaceManifest:
    path: Path
    display: str
    document: TOMLDocument
    members: list[str]
    membership: frozenset[str]
    shared_version_declared: bool = False
    changed: bool = False
    mismatches: list[Mismatch] = field(default_factory=list)


def _read_members(workspace: Any, path: Path) -> list[str]:
    if "members" not in workspace:
        raise MissingField(path, "no members in [workspace] section", field="workspace.members")
    members = workspace["members"]
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        raise SchemaMismatch(
            path, "members must be an array of strings", field="workspace.members"
        )
    # Keep declaration order; duplicates are visited once.
    return list(dict.fromkeys(str(m) for m in members))


def resolve_workspace(options: u.SyncOptions, notices: u.Notices) -> WorkspaceManifest:
    """Load the root manifest and check the versions it declares itself.

    Raises MissingSection without a [workspace] table and MissingField or
    SchemaMismatch for a missing or malformed members list.
    """
    path = options.root / u.MANIFEST_NAME
    document = u.load_manifest(path)

    workspace = document.get("workspace")
    if not is_table(workspace):
        raise MissingSection(path, "no [workspace] section in top level")

    members = _read_members(workspace, path)
    manifest = WorkspaceManifest(
        path=path,
        display=u.relpath(options.root, path),
        document=document,
        members=members,
        membership=frozenset(members),
    )

    package = workspace.get("package")
    if is_table(package) and "version" in package:
        # The shared version must be a literal; inheriting makes no sense here.
        if classify(package["version"]) is not FieldShape.LITERAL:
            raise SchemaMismatch(
                path,
                "version in [workspace.package] must be a string",
                field="workspace.package.version",
            )
        manifest.shared_version_declared = True
        found = check_version(
            VersionField(
                container=package,
                key="version",
                manifest=path,
                display=manifest.display,
                field="workspace.package.version",
            ),
            options,
            notices,
        )
        if found is not None:
            manifest.mismatches.append(found)

    manifest.mismatches += check_dependencies(
        workspace.get("dependencies"),
        manifest.membership,
        manifest=path,
        display=manifest.display,
        prefix="workspace.dependencies",
        options=options,
        notices=notices,
    )

    manifest.changed = options.write and bool(manifest.mismatches)
    return manifest
