# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for parsing inspection engine reports."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from helpers.inspector import problem

from jbinspect.errors import InspectionError, InspectionErrorKind
from jbinspect.inspection import ResultParser, normalize_file_path
from jbinspect.inspection.parser import matches_target
from jbinspect.severity import Severity


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$PROJECT_DIR$/src/app.ts", "src/app.ts"),
        ("file://$PROJECT_DIR$/src/app.ts", "src/app.ts"),
        ("$MODULE_DIR$/lib/x.py", "lib/x.py"),
        ("file://$MODULE_DIR$/lib/x.py", "lib/x.py"),
        ("file://file://$PROJECT_DIR$/a.py", "a.py"),
        ("src/./nested/../app.ts", "src/app.ts"),
    ],
)
def test_normalize_file_path(raw: str, expected: str) -> None:
    assert normalize_file_path(raw) == expected.replace("/", os.sep)


@pytest.mark.parametrize(
    "raw",
    [
        "$PROJECT_DIR$/src/app.ts",
        "file://$PROJECT_DIR$/$MODULE_DIR$/x.py",
        "$PROJECT_DIR$/$PROJECT_DIR$/y.py",
        "file://$MODULE_DIR$/file://z.py",
        "/abs/file.kt",
    ],
)
def test_normalize_file_path_is_idempotent(raw: str) -> None:
    once = normalize_file_path(raw)

    assert normalize_file_path(once) == once


def test_matches_target_by_basename_or_path() -> None:
    assert matches_target("$PROJECT_DIR$/src/app.ts", "/repo/src/app.ts")
    assert matches_target("/repo/src/../src/app.ts", "/repo/src/app.ts")
    assert not matches_target("$PROJECT_DIR$/src/other.ts", "/repo/src/app.ts")
    assert not matches_target(None, "/repo/src/app.ts")


def _write_report(directory: Path, name: str, problems: list[dict[str, object]]) -> Path:
    path = directory / name
    path.write_text(json.dumps({"problems": problems}), encoding="utf-8")
    return path


def test_single_report_produces_normalised_diagnostic(tmp_path: Path) -> None:
    _write_report(
        tmp_path,
        "UnusedVar.json",
        [
            problem(
                "$PROJECT_DIR$/src/app.ts",
                line=10,
                offset=3,
                code="UnusedVar",
                severity="WARNING",
                description="variable x is unused",
            )
        ],
    )

    diagnostics = ResultParser().parse_directory(tmp_path, "/repo/src/app.ts")

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.file == os.path.normpath("src/app.ts")
    assert (diagnostic.line, diagnostic.column) == (10, 3)
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.code == "UnusedVar"
    assert diagnostic.message == "UnusedVar: variable x is unused"


def test_positions_are_clamped(tmp_path: Path) -> None:
    _write_report(tmp_path, "a.json", [problem("$PROJECT_DIR$/a.py", line=0, offset=-5)])

    diagnostic = ResultParser().parse_directory(tmp_path, "/repo/a.py")[0]

    assert (diagnostic.line, diagnostic.column) == (1, 1)


def test_duplicates_are_dropped_across_reports(tmp_path: Path) -> None:
    _write_report(
        tmp_path,
        "a.json",
        [
            problem("$PROJECT_DIR$/a.py", line=3, offset=4, description="first"),
            problem("$PROJECT_DIR$/a.py", line=3, offset=4, description="second"),
            problem("$PROJECT_DIR$/a.py", line=3, offset=4, code="Other"),
        ],
    )
    _write_report(tmp_path, "b.json", [problem("$PROJECT_DIR$/a.py", line=3, offset=4, description="third")])

    diagnostics = ResultParser().parse_directory(tmp_path, "/repo/a.py")

    assert [(item.code, item.message) for item in diagnostics] == [
        ("UnusedVar", "UnusedVar: first"),
        ("Other", "Other: variable x is unused"),
    ]


def test_records_for_other_files_are_ignored(tmp_path: Path) -> None:
    _write_report(tmp_path, "a.json", [problem("$PROJECT_DIR$/b.py"), problem("$PROJECT_DIR$/a.py")])

    diagnostics = ResultParser().parse_directory(tmp_path, "/repo/a.py")

    assert [item.file for item in diagnostics] == ["a.py"]


def test_optional_fields_and_legacy_problem_class(tmp_path: Path) -> None:
    record = problem(
        "$PROJECT_DIR$/a.py",
        code=None,
        severity="weak warning",
        problemClass="PyUnresolvedReferences",
        length=4,
        category="Python",
        hints=["Import", 3],
        highlighted_element="foo",
    )
    _write_report(tmp_path, "a.json", [record])

    diagnostic = ResultParser().parse_directory(tmp_path, "/repo/a.py")[0]

    assert diagnostic.code == "PyUnresolvedReferences"
    assert diagnostic.severity is Severity.INFO
    assert diagnostic.length == 4
    assert diagnostic.category == "Python"
    assert diagnostic.hints == ("Import", "3")
    assert diagnostic.highlighted_element == "foo"


def test_missing_severity_reads_nested_problem_class(tmp_path: Path) -> None:
    record = problem("$PROJECT_DIR$/a.py", severity=None)
    record["problem_class"]["severity"] = "ERROR"
    _write_report(tmp_path, "a.json", [record])

    diagnostic = ResultParser().parse_directory(tmp_path, "/repo/a.py")[0]

    assert diagnostic.severity is Severity.ERROR


def test_malformed_inputs_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "empty.json").write_text("   ", encoding="utf-8")
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / ".descriptions.json").write_text(json.dumps({"problems": [problem("a.py")]}), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "list.json").write_text("[]", encoding="utf-8")
    _write_report(
        tmp_path,
        "good.json",
        [
            "not a record",
            problem("$PROJECT_DIR$/a.py", line="ten"),
            problem("$PROJECT_DIR$/a.py", line=2),
        ],
    )

    diagnostics = ResultParser().parse_directory(tmp_path, "/repo/a.py")

    assert [item.line for item in diagnostics] == [2]


def test_parse_output_without_problem_list() -> None:
    assert ResultParser().parse_output({"metadata": {}}, "/repo/a.py") == []


def test_unreadable_directory_is_a_parse_failure(tmp_path: Path) -> None:
    with pytest.raises(InspectionError) as excinfo:
        ResultParser().parse_directory(tmp_path / "missing", "/repo/a.py")

    assert excinfo.value.kind is InspectionErrorKind.PARSE_FAILED
    assert excinfo.value.message.startswith("Failed to parse inspection results")
