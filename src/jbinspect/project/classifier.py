# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Guess the dominant ecosystem of a project directory."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

LOGGER = logging.getLogger(__name__)

SCAN_MAX_DEPTH: Final[int] = 2
_SKIPPED_DIRECTORY: Final[str] = "node_modules"

# Checked in order; the first ecosystem with a marker present wins.
PROJECT_INDICATORS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("node", ("package.json", "node_modules", "tsconfig.json", "jsconfig.json")),
    ("python", ("requirements.txt", "setup.py", "pyproject.toml", "Pipfile")),
    ("java", ("pom.xml", "build.gradle", "build.gradle.kts", ".mvn")),
    ("php", ("composer.json", "composer.lock", "vendor")),
    ("go", ("go.mod", "go.sum")),
    ("dotnet", ("*.csproj", "*.sln", "*.fsproj", "global.json")),
    ("cpp", ("CMakeLists.txt", "Makefile", "conanfile.txt", "vcpkg.json")),
    ("ruby", ("Gemfile", "Gemfile.lock", "Rakefile", ".bundle")),
    ("rust", ("Cargo.toml", "Cargo.lock")),
    ("ios", ("Package.swift", "*.xcodeproj", "*.xcworkspace", "Podfile")),
)

EXTENSION_LANGUAGES: Final[Mapping[str, str]] = MappingProxyType(
    {
        ".js": "javascript",
        ".jsx": "javascript",
        ".ts": "typescript",
        ".tsx": "typescript",
        ".py": "python",
        ".java": "java",
        ".kt": "kotlin",
        ".php": "php",
        ".go": "go",
        ".cs": "csharp",
        ".cpp": "cpp",
        ".c": "c",
        ".rb": "ruby",
        ".rs": "rust",
        ".swift": "swift",
        ".m": "objc",
        ".sql": "sql",
    }
)


def language_for_file(path: str | Path) -> str | None:
    """Return the language tag associated with the extension of ``path``."""

    return EXTENSION_LANGUAGES.get(os.path.splitext(str(path))[1].lower())


class ProjectClassifier:
    """Classify a project directory by marker files, then by file extensions."""

    def __init__(self, *, max_depth: int = SCAN_MAX_DEPTH) -> None:
        """Initialise the classifier.

        Args:
            max_depth: Directory levels scanned below the root when counting languages.
        """

        self._max_depth = max_depth

    def classify(self, root: str | Path) -> str | None:
        """Return an ecosystem or language tag for ``root``.

        Args:
            root: Directory to inspect.

        Returns:
            str | None: Ecosystem tag from the marker table, the most frequent
            language found within ``max_depth`` levels, or ``None``.
        """

        root_path = Path(root)
        try:
            entries = sorted(entry.name for entry in os.scandir(root_path))
        except OSError as exc:
            LOGGER.debug("cannot list %s: %s", root_path, exc)
            return None
        for project_type, indicators in PROJECT_INDICATORS:
            if any(self._has_indicator(entries, indicator) for indicator in indicators):
                LOGGER.debug("detected project type %s at %s", project_type, root_path)
                return project_type
        return self._primary_language(root_path)

    @staticmethod
    def _has_indicator(entries: list[str], indicator: str) -> bool:
        """Return whether ``entries`` contains ``indicator``, honouring ``*`` globs."""

        if "*" in indicator:
            return any(fnmatch.fnmatch(entry, indicator) for entry in entries)
        return indicator in entries

    def _primary_language(self, root: Path) -> str | None:
        """Return the language with the most source files below ``root``.

        Args:
            root: Directory to scan.

        Returns:
            str | None: Most frequent language tag, or ``None`` when no file matched.
            Ties keep the language seen first.
        """

        counts: dict[str, int] = {}
        self._count_languages(root, counts, depth=0)
        best: str | None = None
        best_count = 0
        for language, count in counts.items():
            if count > best_count:
                best, best_count = language, count
        if best is not None:
            LOGGER.debug("detected primary language %s at %s", best, root)
        return best

    def _count_languages(self, directory: Path, counts: dict[str, int], *, depth: int) -> None:
        """Accumulate per-language file counts for ``directory`` into ``counts``.

        Hidden entries and dependency directories are skipped; recursion stops at
        ``max_depth``.

        Args:
            directory: Directory being scanned.
            counts: Mutable tally updated in place.
            depth: Current recursion depth.
        """

        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as exc:
            LOGGER.debug("skipping unreadable directory %s: %s", directory, exc)
            return
        for entry in entries:
            if entry.name.startswith(".") or entry.name == _SKIPPED_DIRECTORY:
                continue
            if entry.is_file():
                language = language_for_file(entry.name)
                if language:
                    counts[language] = counts.get(language, 0) + 1
            elif entry.is_dir() and depth < self._max_depth:
                self._count_languages(Path(entry.path), counts, depth=depth + 1)


__all__ = ["EXTENSION_LANGUAGES", "PROJECT_INDICATORS", "ProjectClassifier", "language_for_file"]
