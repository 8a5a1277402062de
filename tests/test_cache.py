# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the inspection result cache."""

from __future__ import annotations

from pathlib import Path

from jbinspect.config import CacheConfig
from jbinspect.inspection import ResultCache
from jbinspect.inspection.cache import project_fingerprint, result_cache_key
from jbinspect.models import DiagnosticFilterSpec, InspectionResult


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl() -> None:
    clock = _Clock()
    cache = ResultCache(ttl_seconds=10, max_size=4, clock=clock)
    result = InspectionResult()
    cache.put("key", result)

    clock.now = 10
    assert cache.get("key") is result
    clock.now = 10.5
    assert cache.get("key") is None
    assert len(cache) == 0


def test_oldest_entry_is_evicted_first() -> None:
    cache = ResultCache(ttl_seconds=60, max_size=2, clock=_Clock())
    for key in ("a", "b", "c"):
        cache.put(key, InspectionResult())

    assert cache.get("a") is None
    assert cache.get("b") is not None
    assert cache.get("c") is not None


def test_clear() -> None:
    cache = ResultCache(ttl_seconds=60, max_size=2)
    cache.put("a", InspectionResult())

    cache.clear()

    assert len(cache) == 0


def test_cache_is_disabled_by_default() -> None:
    assert ResultCache.from_config(CacheConfig()) is None


def test_from_config() -> None:
    assert ResultCache.from_config(CacheConfig(enabled=True, max_size=0)) is None
    assert ResultCache.from_config(CacheConfig(enabled=True, ttl=0)) is None
    assert isinstance(ResultCache.from_config(CacheConfig(enabled=True)), ResultCache)


def test_cache_key_tracks_target_and_filter(project: Path) -> None:
    target = project / "src" / "app.ts"
    spec = DiagnosticFilterSpec()

    first = result_cache_key(target, spec, project_root=project)
    assert first == result_cache_key(target, DiagnosticFilterSpec(), project_root=project)
    assert first != result_cache_key(target, DiagnosticFilterSpec(only=("X",)), project_root=project)
    target.write_text("const x = 10;\n", encoding="utf-8")
    assert first != result_cache_key(target, spec, project_root=project)


def test_cache_key_tracks_other_project_files(project: Path) -> None:
    target = project / "src" / "app.ts"
    before = result_cache_key(target, DiagnosticFilterSpec(), project_root=project)

    (project / "src" / "lib.ts").write_text("export const y = 2;\n", encoding="utf-8")

    assert result_cache_key(target, DiagnosticFilterSpec(), project_root=project) != before


def test_cache_key_tracks_profile(tmp_path: Path, project: Path) -> None:
    target = project / "src" / "app.ts"
    profile = tmp_path / "profile.xml"
    profile.write_text("<profile/>", encoding="utf-8")

    with_profile = result_cache_key(target, DiagnosticFilterSpec(), project_root=project, profile_path=profile)

    assert with_profile != result_cache_key(target, DiagnosticFilterSpec(), project_root=project)
    assert result_cache_key(
        target,
        DiagnosticFilterSpec(),
        project_root=project,
        profile_path=tmp_path / "missing.xml",
    ) is None


def test_fingerprint_skips_vcs_metadata_and_workspace_state(project: Path) -> None:
    before = project_fingerprint(project)

    (project / ".git" / "index").write_text("changed", encoding="utf-8")
    (project / ".idea").mkdir()
    (project / ".idea" / "workspace.xml").write_text("<project/>", encoding="utf-8")
    after_ignored = project_fingerprint(project)
    (project / ".idea" / "misc.xml").write_text("<project/>", encoding="utf-8")

    assert after_ignored == before
    assert project_fingerprint(project) != before


def test_directories_and_missing_paths_have_no_key(project: Path) -> None:
    spec = DiagnosticFilterSpec()

    assert result_cache_key(project / "src", spec, project_root=project) is None
    assert result_cache_key(project / "missing.ts", spec, project_root=project) is None
