# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for the inspection tool using fake inspectors."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from helpers.inspector import posix_only, problem, report_script_body

from jbinspect.config import ServerConfig
from jbinspect.filesystem import TempDirectoryManager
from jbinspect.ide import IDEDiscoverer, IDESelector, PathExpander, VersionResolver
from jbinspect.inspection import InspectionStrategy, InspectionTool, ResultCache
from jbinspect.models import DiagnosticFilterSpec
from jbinspect.project import ProjectClassifier, ProjectRootLocator
from jbinspect.severity import Severity

INSPECTOR = "idea/bin/inspect.sh"


def _build_tool(
    tmp_path: Path,
    templates: list[str],
    *,
    config: ServerConfig | None = None,
    cache: ResultCache | None = None,
) -> tuple[InspectionTool, TempDirectoryManager]:
    settings = config or ServerConfig()
    temp_manager = TempDirectoryManager(temp_root=tmp_path / "tmp")
    versions = VersionResolver()
    discoverer = IDEDiscoverer(
        platform="linux",
        expander=PathExpander(env={}, home=str(tmp_path), platform="linux", cwd=str(tmp_path)),
        templates=templates,
        version_resolver=versions,
    )
    strategy = InspectionStrategy(
        selector=IDESelector(discoverer, ProjectClassifier()),
        root_locator=ProjectRootLocator(),
        temp_manager=temp_manager,
        version_resolver=versions,
        default_timeout_ms=settings.default_timeout,
    )
    return InspectionTool(strategy=strategy, config=settings, cache=cache), temp_manager


def _leftovers(tmp_path: Path) -> list[str]:
    scratch = tmp_path / "tmp"
    return sorted(os.listdir(scratch)) if scratch.exists() else []


REPORT = {
    "problems": [
        problem(
            "$PROJECT_DIR$/src/app.ts",
            line=10,
            offset=3,
            code="UnusedVar",
            severity="WARNING",
            description="variable x is unused",
        ),
        problem("$PROJECT_DIR$/src/app.ts", line=1, code="SpellCheckingInspection", severity="TYPO"),
        problem("$PROJECT_DIR$/src/other.ts", line=4),
    ]
}


@posix_only
def test_single_problem_run(tmp_path: Path, project: Path, make_script) -> None:
    make_script(INSPECTOR, report_script_body(REPORT))
    tool, manager = _build_tool(tmp_path, [f"~/{INSPECTOR}"])

    result = tool.execute(str(project / "src" / "app.ts"))

    assert result.error is None
    assert result.total_problems == 1
    diagnostic = result.diagnostics[0]
    assert diagnostic.file == os.path.normpath("src/app.ts")
    assert (diagnostic.line, diagnostic.column) == (10, 3)
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.code == "UnusedVar"
    assert diagnostic.message == "UnusedVar: variable x is unused"
    assert result.metadata is not None
    assert result.metadata.ide_name == "IntelliJ IDEA"
    assert result.metadata.ide_version == "2024.1.2"
    assert result.metadata.project_root == str(project.resolve())
    assert manager.tracked == frozenset()
    assert _leftovers(tmp_path) == []


@posix_only
def test_request_filter_replaces_configured_default(tmp_path: Path, project: Path, make_script) -> None:
    make_script(INSPECTOR, report_script_body(REPORT))
    tool, _ = _build_tool(tmp_path, [f"~/{INSPECTOR}"])

    result = tool.execute(
        str(project / "src" / "app.ts"),
        filter_spec=DiagnosticFilterSpec(only=("Spell*",)),
    )

    assert [item.code for item in result.diagnostics] == ["SpellCheckingInspection"]
    assert result.diagnostics[0].severity is Severity.WARNING


def test_no_ide_installed(tmp_path: Path, project: Path) -> None:
    tool, manager = _build_tool(tmp_path, [])

    result = tool.execute(str(project / "src" / "app.ts"))

    assert result.error is not None
    assert "No suitable JetBrains IDE found" in result.error
    assert result.diagnostics == ()
    assert result.total_problems == 0
    assert result.timeout is None
    assert manager.tracked == frozenset()


@posix_only
def test_timeout_removes_scratch_directories(tmp_path: Path, project: Path, make_script) -> None:
    body = 'if [ "$1" = "--version" ]; then echo "IntelliJ IDEA 2024.1"; exit 0; fi\nexec sleep 10'
    make_script(INSPECTOR, body)
    tool, manager = _build_tool(tmp_path, [f"~/{INSPECTOR}"])

    result = tool.execute(str(project / "src" / "app.ts"), timeout_ms=300)

    assert result.timeout is True
    assert result.error == "Inspection timed out after 300ms"
    assert result.diagnostics == ()
    assert manager.tracked == frozenset()
    assert _leftovers(tmp_path) == []


@posix_only
def test_nonzero_exit_is_reported(tmp_path: Path, project: Path, make_script) -> None:
    make_script(INSPECTOR, 'if [ "$1" = "--version" ]; then exit 0; fi\nexit 2')
    tool, _ = _build_tool(tmp_path, [f"~/{INSPECTOR}"])

    result = tool.execute(str(project / "src" / "app.ts"))

    assert result.error is not None
    assert result.error.startswith("Inspection failed with exit code 2")
    assert result.timeout is None
    assert _leftovers(tmp_path) == []


@pytest.mark.parametrize("path", ["", "   ", None, 42])
def test_invalid_path_is_rejected(tmp_path: Path, path: object) -> None:
    tool, _ = _build_tool(tmp_path, [])

    result = tool.execute(path)

    assert result.error == "Invalid parameters: path must be a non-empty string"


def test_path_with_nul_byte_is_rejected(tmp_path: Path) -> None:
    tool, manager = _build_tool(tmp_path, [], cache=ResultCache(ttl_seconds=60, max_size=4))

    result = tool.execute(f"{tmp_path}/a\x00b.py")

    assert result.error is not None
    assert result.error.startswith("Invalid parameters:")
    assert manager.tracked == frozenset()


def test_non_positive_timeout_is_rejected(tmp_path: Path, project: Path) -> None:
    tool, manager = _build_tool(tmp_path, [])

    result = tool.execute(str(project / "src" / "app.ts"), timeout_ms=-5)

    assert result.error is not None
    assert result.error.startswith("Invalid parameters:")
    assert "timeout_ms" in result.error
    assert manager.tracked == frozenset()
    assert _leftovers(tmp_path) == []


@posix_only
def test_invalid_run_context_releases_output_directory(tmp_path: Path, project: Path, make_script) -> None:
    make_script(INSPECTOR, report_script_body(REPORT))
    tool, manager = _build_tool(tmp_path, [f"~/{INSPECTOR}"])
    # Bypass request validation so the invalid timeout reaches context construction.
    params = tool.build_params(str(project / "src" / "app.ts")).model_copy(update={"timeout_ms": -1})

    result = tool.inspect(params)

    assert result.error is not None
    assert result.error.startswith("Inspection failed:")
    assert manager.tracked == frozenset()
    assert _leftovers(tmp_path) == []


def test_missing_project_root(tmp_path: Path) -> None:
    tool, _ = _build_tool(tmp_path, [])
    target = tmp_path / "nowhere" / "file.py"

    result = tool.execute(str(target))

    assert result.error == f"Could not find project root for {target.resolve()}"


def test_forced_ide_path_must_exist(tmp_path: Path, project: Path) -> None:
    missing = tmp_path / "idea" / "bin" / "missing.sh"
    tool, _ = _build_tool(tmp_path, [], config=ServerConfig(ide_path=str(missing)))

    result = tool.execute(str(project / "src" / "app.ts"))

    assert result.error is not None
    assert result.error.startswith("No suitable JetBrains IDE found: configured inspect path")


@posix_only
def test_forced_ide_path_and_project_root_skip_discovery(tmp_path: Path, make_script) -> None:
    script = make_script(INSPECTOR, report_script_body({"problems": [problem("$PROJECT_DIR$/main.py")]}))
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    target = workspace / "main.py"
    target.write_text("print(1)\n", encoding="utf-8")
    config = ServerConfig(ide_path=str(script), project_root=str(workspace))
    tool, _ = _build_tool(tmp_path, [], config=config)

    result = tool.execute(str(target))

    assert result.error is None
    assert result.total_problems == 1
    assert result.metadata is not None
    assert result.metadata.project_root == str(workspace.resolve())


@posix_only
def test_file_results_are_cached_until_modified(tmp_path: Path, project: Path, make_script) -> None:
    counter = tmp_path / "runs.txt"
    write_report = 'cat > "$5/report.json"'
    body = report_script_body(REPORT).replace(write_report, f'echo run >> "{counter}"\n{write_report}')
    make_script(INSPECTOR, body)
    cache = ResultCache(ttl_seconds=60, max_size=4)
    tool, _ = _build_tool(tmp_path, [f"~/{INSPECTOR}"], cache=cache)
    target = project / "src" / "app.ts"

    first = tool.execute(str(target))
    second = tool.execute(str(target))
    target.write_text("const x = 1;\nconst y = 2;\n", encoding="utf-8")
    third = tool.execute(str(target))

    assert second is first
    assert third is not first
    assert counter.read_text(encoding="utf-8").splitlines() == ["run", "run"]
    assert len(cache) == 2


def test_errors_are_not_cached(tmp_path: Path, project: Path) -> None:
    cache = ResultCache(ttl_seconds=60, max_size=4)
    tool, _ = _build_tool(tmp_path, [], cache=cache)

    tool.execute(str(project / "src" / "app.ts"))

    assert len(cache) == 0


@posix_only
def test_cached_result_is_refreshed_when_another_project_file_changes(
    tmp_path: Path,
    project: Path,
    make_script,
) -> None:
    engine_report = tmp_path / "engine-report.json"
    engine_report.write_text(json.dumps({"problems": []}), encoding="utf-8")
    body = "\n".join(
        [
            'if [ "$1" = "--version" ]; then echo "IntelliJ IDEA 2024.1.2"; exit 0; fi',
            f'cat "{engine_report}" > "$5/report.json"',
        ]
    )
    make_script(INSPECTOR, body)
    tool, _ = _build_tool(tmp_path, [f"~/{INSPECTOR}"], cache=ResultCache(ttl_seconds=60, max_size=4))
    target = project / "src" / "app.ts"

    first = tool.execute(str(target))
    (project / "src" / "lib.ts").write_text("export const y = 2;\n", encoding="utf-8")
    engine_report.write_text(json.dumps({"problems": [problem("$PROJECT_DIR$/src/app.ts")]}), encoding="utf-8")
    second = tool.execute(str(target))

    assert first.total_problems == 0
    assert second is not first
    assert second.total_problems == 1
