# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for scratch directory management."""

from __future__ import annotations

import os
import time
from pathlib import Path

from jbinspect.filesystem import DEBUG_COPY_DIRNAME, TEMP_PREFIX, TempDirectoryManager


def test_create_temp_dir_is_unique_and_tracked(tmp_path: Path) -> None:
    manager = TempDirectoryManager(temp_root=tmp_path)

    first = manager.create_temp_dir("inspection-")
    second = manager.create_temp_dir("inspection-")

    assert first != second
    assert first.is_dir() and second.is_dir()
    assert first.name.startswith(f"{TEMP_PREFIX}inspection-")
    assert manager.tracked == {first, second}


def test_cleanup_removes_directory_once(tmp_path: Path) -> None:
    manager = TempDirectoryManager(temp_root=tmp_path)
    path = manager.create_temp_dir()
    (path / "report.json").write_text("{}", encoding="utf-8")

    manager.cleanup(path)
    manager.cleanup(path)

    assert not path.exists()
    assert manager.tracked == frozenset()


def test_cleanup_ignores_untracked_paths(tmp_path: Path) -> None:
    manager = TempDirectoryManager(temp_root=tmp_path)
    foreign = tmp_path / "foreign"
    foreign.mkdir()

    manager.cleanup(foreign)

    assert foreign.is_dir()


def test_cleanup_tolerates_already_removed_directory(tmp_path: Path) -> None:
    manager = TempDirectoryManager(temp_root=tmp_path)
    path = manager.create_temp_dir()
    path.rmdir()

    manager.cleanup(path)

    assert manager.tracked == frozenset()


def test_debug_output_is_copied_before_removal(tmp_path: Path) -> None:
    debug_dir = tmp_path / "debug"
    manager = TempDirectoryManager(temp_root=tmp_path / "tmp", debug_output_dir=debug_dir)
    path = manager.create_temp_dir("inspection-")
    (path / "report.json").write_text('{"problems": []}', encoding="utf-8")

    manager.cleanup(path)

    assert not path.exists()
    assert (debug_dir / DEBUG_COPY_DIRNAME / "report.json").read_text(encoding="utf-8") == '{"problems": []}'


def test_cleanup_all_removes_everything(tmp_path: Path) -> None:
    manager = TempDirectoryManager(temp_root=tmp_path)
    paths = [manager.create_temp_dir(prefix) for prefix in ("inspection-", "config-", "system-")]

    assert manager.cleanup_all() == 3
    assert not any(path.exists() for path in paths)
    assert manager.tracked == frozenset()
    assert manager.cleanup_all() == 0


def _aged_dir(root: Path, name: str, age_seconds: float) -> Path:
    path = root / name
    path.mkdir()
    stamp = time.time() - age_seconds
    os.utime(path, (stamp, stamp))
    return path


def test_reap_stale_removes_only_old_prefixed_directories(tmp_path: Path) -> None:
    old = _aged_dir(tmp_path, f"{TEMP_PREFIX}inspection-1", 2 * 86400)
    fresh = _aged_dir(tmp_path, f"{TEMP_PREFIX}inspection-2", 60)
    unrelated = _aged_dir(tmp_path, "other-dir", 2 * 86400)
    stray_file = tmp_path / f"{TEMP_PREFIX}file"
    stray_file.write_text("", encoding="utf-8")
    os.utime(stray_file, (0, 0))

    removed = TempDirectoryManager.reap_stale(temp_root=tmp_path)

    assert removed == 1
    assert not old.exists()
    assert fresh.exists() and unrelated.exists() and stray_file.exists()


def test_reap_stale_honours_custom_age(tmp_path: Path) -> None:
    path = _aged_dir(tmp_path, f"{TEMP_PREFIX}system-1", 120)

    assert TempDirectoryManager.reap_stale(60, temp_root=tmp_path) == 1
    assert not path.exists()


def test_reap_stale_on_missing_root(tmp_path: Path) -> None:
    assert TempDirectoryManager.reap_stale(temp_root=tmp_path / "missing") == 0
