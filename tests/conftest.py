# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ENV_KEYS = (
    "FORCE_INSPECT_PATH",
    "FORCE_PROJECT_ROOT",
    "FORCE_PROFILE_PATH",
    "INSPECTION_TIMEOUT",
    "EXCLUDE_INSPECTIONS",
    "ONLY_INSPECTIONS",
    "RESPONSE_FORMAT",
    "DEBUG",
    "MCP_DEBUG_OUTPUT_DIR",
)

ScriptFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop configuration variables inherited from the developer's shell."""

    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo handler and propagation changes made by CLI logging setup."""

    logger = logging.getLogger("jbinspect")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_script(tmp_path: Path) -> ScriptFactory:
    """Return a factory writing executable ``/bin/sh`` scripts below ``tmp_path``."""

    def _make(relative: str, body: str) -> Path:
        script = tmp_path / relative
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project directory holding a ``.git`` marker and a source file."""

    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    source = root / "src" / "app.ts"
    source.parent.mkdir()
    source.write_text("const x = 1;\n", encoding="utf-8")
    return root
