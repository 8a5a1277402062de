# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the project root enclosing a target path."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

IDE_MARKER: Final[str] = ".idea"
PROJECT_MARKERS: Final[tuple[str, ...]] = (
    ".git",
    ".vscode",
    "package.json",
    "pom.xml",
    "build.gradle",
    "Cargo.toml",
    "go.mod",
    "composer.json",
    "Gemfile",
)


class ProjectRootLocator:
    """Walk upwards from a path looking for project markers.

    A ``.idea`` directory anywhere above the start wins over generic markers,
    even when a generic marker sits closer to the start path.
    """

    def find_project_root(self, start: str | Path) -> Path | None:
        """Return the project root for ``start`` or ``None`` when none is found."""

        start_path = Path(start)
        if not start_path.exists():
            LOGGER.debug("cannot locate project root, %s does not exist", start_path)
            return None
        current = start_path if start_path.is_dir() else start_path.parent

        for directory in self._walk_up(current, include_root=True):
            if (directory / IDE_MARKER).exists():
                LOGGER.debug("found project root with %s at %s", IDE_MARKER, directory)
                return directory

        for directory in self._walk_up(current, include_root=False):
            for marker in PROJECT_MARKERS:
                if (directory / marker).exists():
                    LOGGER.debug("found project root with %s at %s", marker, directory)
                    return directory
        return None

    @staticmethod
    def _walk_up(start: Path, *, include_root: bool) -> Iterator[Path]:
        """Yield ``start`` and each ancestor, nearest first.

        Args:
            start: Directory to begin from.
            include_root: Whether the filesystem root itself is yielded.

        Yields:
            Path: Successive ancestor directories.
        """

        current = start
        while current.parent != current:
            yield current
            current = current.parent
        if include_root:
            yield current


__all__ = ["IDE_MARKER", "PROJECT_MARKERS", "ProjectRootLocator"]
