# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn the inspection engine's JSON reports into :class:`Diagnostic` objects."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import InspectionError
from ..models import Diagnostic, RawProblem
from ..severity import map_severity

LOGGER = logging.getLogger(__name__)

_URL_SCHEME: Final[str] = "file://"
_PLACEHOLDERS: Final[tuple[str, ...]] = ("$PROJECT_DIR$/", "$MODULE_DIR$/")

DedupKey = tuple[str, int, int, str | None]


def normalize_file_path(raw: str) -> str:
    """Strip ``file://`` and IDE placeholders from ``raw`` and normalise it.

    Applying the function to its own output returns the same value.
    """

    current = raw
    while True:
        candidate = current
        while candidate.startswith(_URL_SCHEME):
            candidate = candidate[len(_URL_SCHEME) :]
        for placeholder in _PLACEHOLDERS:
            candidate = candidate.replace(f"{_URL_SCHEME}{placeholder}", "").replace(placeholder, "")
        candidate = os.path.normpath(candidate) if candidate else candidate
        if candidate == current:
            return candidate
        current = candidate


def matches_target(problem_file: str | None, target_file: str | Path) -> bool:
    """Return ``True`` when ``problem_file`` refers to ``target_file``.

    A record matches when it contains the target's base name or when both
    normalised paths are equal.
    """

    if not problem_file:
        return False
    target = str(target_file)
    basename = os.path.basename(target)
    if basename and basename in problem_file:
        return True
    return os.path.normpath(problem_file) == os.path.normpath(target)


def build_diagnostic(problem: RawProblem) -> Diagnostic:
    """Build a :class:`Diagnostic` from ``problem``.

    Raises:
        pydantic.ValidationError: When a required field cannot be derived.
    """

    return Diagnostic(
        file=normalize_file_path(problem.file or ""),
        line=problem.line or 1,
        column=problem.offset or 1,
        length=problem.length or None,
        severity=map_severity(problem.raw_severity),
        code=problem.code,
        message=problem.build_message(),
        highlighted_element=problem.highlighted_element or None,
        category=problem.category or None,
        hints=tuple(problem.hints) if problem.hints else None,
    )


def _dedup_key(diagnostic: Diagnostic) -> DedupKey:
    """Return the identity shared by duplicate diagnostics across report files."""

    return (diagnostic.file, diagnostic.line, diagnostic.column, diagnostic.code)


class ResultParser:
    """Parse every report in an output directory for a single target."""

    def parse_output(
        self,
        payload: Mapping[str, Any],
        target_file: str | Path,
        *,
        seen: set[DedupKey] | None = None,
    ) -> list[Diagnostic]:
        """Return diagnostics for ``target_file`` found in a decoded report.

        Args:
            payload: Decoded JSON document with a ``problems`` list.
            target_file: Path originally requested for inspection.
            seen: Dedup keys shared across several reports of one run.

        Returns:
            list[Diagnostic]: Diagnostics in report order, duplicates removed.
        """

        problems = payload.get("problems") if isinstance(payload, Mapping) else None
        if not isinstance(problems, list):
            return []
        keys = seen if seen is not None else set()
        diagnostics: list[Diagnostic] = []
        for record in problems:
            if not isinstance(record, Mapping) or not matches_target(_as_str(record.get("file")), target_file):
                continue
            try:
                diagnostic = build_diagnostic(RawProblem.model_validate(record))
            except ValidationError as exc:
                LOGGER.warning("skipping malformed problem record %s: %s", record.get("file"), exc)
                continue
            key = _dedup_key(diagnostic)
            if key in keys:
                continue
            keys.add(key)
            diagnostics.append(diagnostic)
        return diagnostics

    def parse_directory(self, output_dir: str | Path, target_file: str | Path) -> list[Diagnostic]:
        """Return diagnostics from every ``*.json`` report in ``output_dir``.

        Empty or undecodable files are skipped.

        Raises:
            InspectionError: If the directory itself cannot be read.
        """

        directory = Path(output_dir)
        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            LOGGER.error("cannot read inspection results directory %s: %s", directory, exc)
            raise InspectionError.parse_failed(str(exc)) from exc

        reports = [name for name in names if name.endswith(".json") and not name.startswith(".")]
        LOGGER.debug("found %d JSON reports in %s", len(reports), directory)
        seen: set[DedupKey] = set()
        diagnostics: list[Diagnostic] = []
        for payload in self._load_reports(directory, reports):
            diagnostics.extend(self.parse_output(payload, target_file, seen=seen))
        LOGGER.info("parsed %d diagnostics for %s", len(diagnostics), os.path.basename(str(target_file)))
        return diagnostics

    @staticmethod
    def _load_reports(directory: Path, names: Iterable[str]) -> Iterable[Mapping[str, Any]]:
        """Yield decoded JSON objects from the named report files in ``directory``.

        Unreadable, empty and malformed files are logged and skipped.

        Args:
            directory: Output directory written by the inspection engine.
            names: Report file names, in processing order.

        Returns:
            Iterable[Mapping[str, Any]]: Decoded report payloads.
        """

        for name in names:
            path = directory / name
            try:
                content = path.read_text(encoding="utf-8")
            except OSError as exc:
                LOGGER.error("cannot read report %s: %s", path, exc)
                continue
            if not content.strip():
                LOGGER.debug("skipping empty report %s", name)
                continue
            try:
                payload = json.loads(content)
            except json.JSONDecodeError as exc:
                LOGGER.error("error parsing report %s: %s", name, exc)
                continue
            if isinstance(payload, Mapping):
                yield payload


def _as_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


__all__ = ["ResultParser", "build_diagnostic", "matches_target", "normalize_file_path"]
