#!/usr/bin/env python3
"""Synchronize one version string across a Cargo workspace.

One pass reads the root ``Cargo.toml`` and every member manifest, compares each
version field against the target and, in write mode, rewrites the fields that
differ. Nothing is written until every manifest has been processed, so a
schema error anywhere leaves the whole workspace untouched.

Exit codes follow the other CLI tools:

- 0: all fields match (check) or the workspace was brought in line (update)
- 1: check found fields that differ from the target
- 2: a manifest is missing, unreadable or malformed
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from tomlkit import TOMLDocument

from wsver import wsver_cli_util as u
from wsver.errors import SyncError
from wsver.member_check import MemberManifest, process_member
from wsver.version_check import Mismatch, canonical_version
from wsver.workspace_check import WorkspaceManifest, resolve_workspace


@dataclass
class SyncResult:
    workspace: WorkspaceManifest
    members: list[MemberManifest]
    written: list[str] = field(default_factory=list)

    @property
    def root_changed(self) -> bool:
        return self.workspace.changed

    @property
    def any_member_changed(self) -> bool:
        return any(m.changed for m in self.members)

    @property
    def mismatches(self) -> list[Mismatch]:
        out = list(self.workspace.mismatches)
        for m in self.members:
            out += m.mismatches
        return out

    @property
    def any_mismatch(self) -> bool:
        return bool(self.mismatches)


def _persist(
    path: Path,
    display: str,
    document: TOMLDocument,
    *,
    options: u.SyncOptions,
    notices: u.Notices,
    written: list[str],
) -> None:
    if options.write:
        notices.info(f"{display} was updated")
        u.save_manifest(path, document)
        written.append(display)
    else:
        notices.info(f"{display} needs to be updated")


def sync_workspace(
    options: u.SyncOptions, notices: Optional[u.Notices] = None
) -> SyncResult:
    """Run one full pass over the workspace rooted at ``options.root``.

    Raises a :class:`wsver.errors.SyncError` subclass on the first structural
    problem; in that case no file has been written.
    """
    if notices is None:
        notices = u.Notices(quiet=options.quiet)

    workspace = resolve_workspace(options, notices)
    members = [
        process_member(member, workspace.membership, options, notices)
        for member in workspace.members
    ]
    result = SyncResult(workspace=workspace, members=members)

    for member in members:
        if member.mismatches:
            _persist(
                member.path,
                member.display,
                member.document,
                options=options,
                notices=notices,
                written=result.written,
            )

    # The root goes last, once no member work still refers into it.
    if workspace.mismatches:
        _persist(
            workspace.path,
            workspace.display,
            workspace.document,
            options=options,
            notices=notices,
            written=result.written,
        )

    return result


def _report_payload(options: u.SyncOptions, result: SyncResult) -> dict:
    return {
        "generated_at": u.utc_now_iso(),
        "mode": "update" if options.write else "check",
        "version": canonical_version(options.version),
        "root": str(options.root),
        "members": list(result.workspace.members),
        "shared_version_declared": result.workspace.shared_version_declared,
        "mismatches": [asdict(m) for m in result.mismatches],
        "written": list(result.written),
    }


def cli(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Check or update the version of every package in a Cargo workspace"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Workspace root containing the top level Cargo.toml (default: .)",
    )
    parser.add_argument(
        "--json-report",
        type=Path,
        default=None,
        help="Optional path to write a machine-readable JSON report",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Don't print anything")

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--update", metavar="VERSION", help="Rewrite versions to VERSION")
    mode.add_argument("--check", metavar="VERSION", help="Verify versions equal VERSION")

    args = parser.parse_args(argv)

    write = args.update is not None
    options = u.SyncOptions(
        root=args.root,
        version=args.update if write else args.check,
        write=write,
        quiet=u.quiet_requested(args),
    )
    notices = u.Notices(quiet=options.quiet)

    if not options.root.is_dir():
        notices.error(f"workspace root not found: {options.root}")
        return u.EXIT_ERROR

    try:
        result = sync_workspace(options, notices)
    except SyncError as exc:
        notices.error(str(exc))
        return u.EXIT_ERROR

    if args.json_report is not None:
        u.write_json_report(args.json_report, _report_payload(options, result))

    if options.write:
        return u.EXIT_OK

    if result.any_mismatch:
        notices.error(
            f"There were differences: {len(result.mismatches)} version field(s) "
            f"not at {canonical_version(options.version)}"
        )
        return u.EXIT_MISMATCH

    notices.info("All files had the correct version")
    return u.EXIT_OK


def main() -> int:
    return cli(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
