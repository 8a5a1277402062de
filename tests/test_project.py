# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for project classification and root location."""

from __future__ import annotations

from pathlib import Path

import pytest

from jbinspect.project import ProjectClassifier, ProjectRootLocator


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_go_marker_wins_over_nested_python_files(tmp_path: Path) -> None:
    _write(tmp_path / "go.mod", "module example\n")
    _write(tmp_path / "scripts" / "tools" / "gen.py")
    _write(tmp_path / "scripts" / "tools" / "lint.py")

    assert ProjectClassifier().classify(tmp_path) == "go"


def test_marker_order_decides_between_ecosystems(tmp_path: Path) -> None:
    _write(tmp_path / "package.json", "{}")
    _write(tmp_path / "pyproject.toml")

    assert ProjectClassifier().classify(tmp_path) == "node"


def test_wildcard_markers(tmp_path: Path) -> None:
    _write(tmp_path / "App.sln")

    assert ProjectClassifier().classify(tmp_path) == "dotnet"


def test_falls_back_to_most_frequent_language(tmp_path: Path) -> None:
    _write(tmp_path / "a.rb")
    _write(tmp_path / "lib" / "b.py")
    _write(tmp_path / "lib" / "c.py")
    _write(tmp_path / ".hidden" / "d.rb")
    for name in ("e.rb", "f.rb", "g.rb"):
        _write(tmp_path / "lib" / "node_modules" / name)

    assert ProjectClassifier().classify(tmp_path) == "python"


def test_language_scan_respects_depth(tmp_path: Path) -> None:
    _write(tmp_path / "main.go")
    _write(tmp_path / "a" / "b" / "c" / "one.py")
    _write(tmp_path / "a" / "b" / "c" / "two.py")

    assert ProjectClassifier().classify(tmp_path) == "go"


def test_unclassifiable_directory(tmp_path: Path) -> None:
    _write(tmp_path / "notes.txt")

    assert ProjectClassifier().classify(tmp_path) is None
    assert ProjectClassifier().classify(tmp_path / "missing") is None


def test_root_found_from_nested_file(tmp_path: Path) -> None:
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    target = _write(tmp_path / "repo" / "src" / "pkg" / "mod.py")

    assert ProjectRootLocator().find_project_root(target) == tmp_path / "repo"


def test_ide_marker_beats_closer_generic_marker(tmp_path: Path) -> None:
    (tmp_path / "workspace" / ".idea").mkdir(parents=True)
    _write(tmp_path / "workspace" / "service" / "package.json", "{}")
    target = _write(tmp_path / "workspace" / "service" / "src" / "index.ts")

    assert ProjectRootLocator().find_project_root(target) == tmp_path / "workspace"


def test_start_directory_itself_can_be_root(tmp_path: Path) -> None:
    _write(tmp_path / "Cargo.toml")

    assert ProjectRootLocator().find_project_root(tmp_path) == tmp_path


def test_missing_start_path_has_no_root(tmp_path: Path) -> None:
    assert ProjectRootLocator().find_project_root(tmp_path / "nope" / "file.py") is None


@pytest.mark.parametrize("marker", [".vscode", "pom.xml", "build.gradle", "go.mod", "composer.json", "Gemfile"])
def test_generic_markers(tmp_path: Path, marker: str) -> None:
    root = tmp_path / "proj"
    root.mkdir()
    if marker.startswith("."):
        (root / marker).mkdir()
    else:
        _write(root / marker)
    target = _write(root / "deep" / "file.txt")

    assert ProjectRootLocator().find_project_root(target) == root
