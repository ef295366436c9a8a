"""Unit tests for single version field handling."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

from wsver.errors import SchemaMismatch
from wsver.version_check import (
    FieldShape,
    Mismatch,
    VersionField,
    canonical_version,
    check_version,
    classify,
)
from wsver.wsver_cli_util import Notices, SyncOptions


def _package_field(text: str) -> tuple[tomlkit.TOMLDocument, VersionField]:
    doc = tomlkit.parse(text)
    field = VersionField(
        container=doc["package"],
        key="version",
        manifest=Path("x/Cargo.toml"),
        display="x/Cargo.toml",
        field="package.version",
    )
    return doc, field


def _options(version: str, *, write: bool) -> SyncOptions:
    return SyncOptions(root=Path("."), version=version, write=write)


class TestCanonicalVersion:
    def test_strips_one_leading_v(self):
        assert canonical_version("v1.2.3") == "1.2.3"
        assert canonical_version("1.2.3") == "1.2.3"

    def test_strips_only_one(self):
        assert canonical_version("vv1.2.3") == "v1.2.3"

    def test_leaves_inner_v_alone(self):
        assert canonical_version("1.2.3-dev") == "1.2.3-dev"


class TestClassify:
    def test_literal(self):
        doc = tomlkit.parse('[package]\nversion = "0.1.0"\n')
        assert classify(doc["package"]["version"]) is FieldShape.LITERAL

    def test_dotted_inheritance_marker(self):
        doc = tomlkit.parse("[package]\nversion.workspace = true\n")
        assert classify(doc["package"]["version"]) is FieldShape.INHERITED

    def test_inline_inheritance_marker(self):
        doc = tomlkit.parse("[package]\nversion = { workspace = true }\n")
        assert classify(doc["package"]["version"]) is FieldShape.INHERITED

    def test_workspace_false_is_invalid(self):
        doc = tomlkit.parse("[package]\nversion.workspace = false\n")
        assert classify(doc["package"]["version"]) is FieldShape.INVALID

    def test_other_types_are_invalid(self):
        doc = tomlkit.parse("[package]\nversion = 1\nother = [\"0.1.0\"]\n")
        assert classify(doc["package"]["version"]) is FieldShape.INVALID
        assert classify(doc["package"]["other"]) is FieldShape.INVALID


class TestCheckVersion:
    def test_equal_value_reports_nothing(self, capsys):
        doc, field = _package_field('[package]\nversion = "0.2.0"\n')

        assert check_version(field, _options("0.2.0", write=True), Notices()) is None
        assert tomlkit.dumps(doc) == '[package]\nversion = "0.2.0"\n'
        assert capsys.readouterr().out == ""

    def test_check_mode_reports_but_keeps_value(self, capsys):
        text = '[package]\nversion = "0.1.0"\n'
        doc, field = _package_field(text)

        found = check_version(field, _options("0.2.0", write=False), Notices())

        assert found == Mismatch(
            file="x/Cargo.toml", field="package.version", found="0.1.0", expected="0.2.0"
        )
        assert tomlkit.dumps(doc) == text
        out = capsys.readouterr().out
        assert "Version for x/Cargo.toml [package.version] was 0.1.0 want 0.2.0" in out
        assert "(fixing)" not in out

    def test_write_mode_replaces_only_the_scalar(self, capsys):
        doc, field = _package_field(
            '[package]\nname = "x"\nversion   =   "0.1.0"   # pinned\nedition = "2021"\n'
        )

        found = check_version(field, _options("v0.2.0", write=True), Notices())

        assert found is not None
        assert tomlkit.dumps(doc) == (
            '[package]\nname = "x"\nversion   =   "0.2.0"   # pinned\nedition = "2021"\n'
        )
        assert "(fixing)" in capsys.readouterr().out

    def test_write_mode_keeps_literal_quotes(self):
        doc, field = _package_field("[package]\nversion = '0.1.0'\n")

        check_version(field, _options("0.2.0", write=True), Notices())

        assert tomlkit.dumps(doc) == "[package]\nversion = '0.2.0'\n"

    def test_prefixed_and_plain_targets_agree(self):
        for stored in ("1.2.3", "v1.2.3", "1.2.4"):
            results = []
            for target in ("v1.2.3", "1.2.3"):
                _, field = _package_field(f'[package]\nversion = "{stored}"\n')
                results.append(
                    check_version(field, _options(target, write=False), Notices(quiet=True))
                )
            assert results[0] == results[1]

    def test_stored_prefix_is_not_stripped(self):
        _, field = _package_field('[package]\nversion = "v1.2.3"\n')

        found = check_version(field, _options("v1.2.3", write=False), Notices(quiet=True))

        assert found is not None
        assert found.found == "v1.2.3"
        assert found.expected == "1.2.3"

    def test_inheritance_marker_is_untouched(self, capsys):
        text = "[package]\nversion.workspace = true\n"
        doc, field = _package_field(text)

        assert check_version(field, _options("0.2.0", write=True), Notices()) is None
        assert tomlkit.dumps(doc) == text
        assert capsys.readouterr().out == ""

    def test_invalid_shape_names_file_and_field(self):
        _, field = _package_field("[package]\nversion = 3\n")

        with pytest.raises(SchemaMismatch) as excinfo:
            check_version(field, _options("0.2.0", write=True), Notices())

        assert "x/Cargo.toml" in str(excinfo.value)
        assert "package.version" in str(excinfo.value)
        assert excinfo.value.field == "package.version"

    def test_quiet_suppresses_notice(self, capsys):
        _, field = _package_field('[package]\nversion = "0.1.0"\n')

        check_version(field, _options("0.2.0", write=True), Notices(quiet=True))

        assert capsys.readouterr().out == ""
