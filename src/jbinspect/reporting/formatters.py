# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Markdown and JSON renderings of :class:`InspectionResult`."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Final, Protocol, runtime_checkable

from ..config import ResponseFormat
from ..models import Diagnostic, InspectionResult
from ..severity import Severity

_SECTIONS: Final[tuple[tuple[Severity, str, str, str], ...]] = (
    (Severity.ERROR, "### 🔴 Errors", "- 🔴 Errors", "error"),
    (Severity.WARNING, "### 🟡 Warnings", "- 🟡 Warnings", "warning"),
    (Severity.INFO, "### 🔵 Information", "- 🔵 Info", "info"),
)
_TIMEOUT_HINT: Final[str] = "Increase `INSPECTION_TIMEOUT` (milliseconds) for large projects."


@runtime_checkable
class ResultFormatter(Protocol):
    """Render an :class:`InspectionResult` as text."""

    def format(self, result: InspectionResult) -> str:
        """Return the textual representation of ``result``."""


def _plural(count: int, noun: str) -> str:
    """Return ``count`` followed by ``noun``, pluralised with a trailing ``s``."""

    return f"{count} {noun}{'' if count == 1 else 's'}"


class MarkdownFormatter:
    """Render results as Markdown grouped by severity and file."""

    def format(self, result: InspectionResult) -> str:
        """Return ``result`` as Markdown.

        Args:
            result: Inspection outcome to render.

        Returns:
            str: Error block, warning block, clean-run notice or a report
            grouped by severity then file.
        """

        if result.error:
            return self._format_error(result)
        if result.warning:
            return f"⚠️ **Warning**: {result.warning}\n\n{result.total_problems} problems found"
        if not result.diagnostics:
            return "✅ **No issues found** - Code inspection completed successfully with no problems detected."
        return self._format_diagnostics(result)

    @staticmethod
    def _format_error(result: InspectionResult) -> str:
        """Return the error block, adding a tuning hint after a timeout."""

        text = f"❌ **Inspection Error**\n\n{result.error}"
        if result.timeout:
            text = f"{text}\n\n{_TIMEOUT_HINT}"
        return text

    def _format_diagnostics(self, result: InspectionResult) -> str:
        """Return the summary header followed by one section per non-empty severity."""

        groups: dict[Severity, list[Diagnostic]] = {severity: [] for severity, *_ in _SECTIONS}
        for diagnostic in result.diagnostics:
            groups[diagnostic.severity].append(diagnostic)
        counts = [_plural(len(groups[severity]), noun) for severity, _, _, noun in _SECTIONS if groups[severity]]

        lines = [f"⚠️ **Issues found** - {_plural(result.total_problems, 'problem')} detected"]
        if counts:
            lines[0] += f" ({', '.join(counts)})"
        lines[0] += "."
        lines.extend(["", "## Code Inspection Results", "", f"**Total Issues**: {result.total_problems}"])
        lines.extend(f"{label}: {len(groups[severity])}" for severity, _, label, _ in _SECTIONS if groups[severity])
        lines.extend(["", "---", ""])
        for severity, heading, _, _ in _SECTIONS:
            if groups[severity]:
                lines.extend([heading, ""])
                lines.append(self._format_group(groups[severity]))
        return "\n".join(lines)

    def _format_group(self, diagnostics: Sequence[Diagnostic]) -> str:
        """Return ``diagnostics`` grouped by file in first-seen order, sorted by line.

        Args:
            diagnostics: Diagnostics sharing one severity.

        Returns:
            str: Markdown block with one heading per file.
        """

        by_file: dict[str, list[Diagnostic]] = {}
        for diagnostic in diagnostics:
            by_file.setdefault(diagnostic.file, []).append(diagnostic)
        blocks: list[str] = []
        for file, items in by_file.items():
            blocks.append(f"#### 📄 `{file}`\n")
            blocks.extend(self._format_single(item) for item in sorted(items, key=lambda entry: entry.line))
        return "\n".join(blocks)

    @staticmethod
    def _format_single(diagnostic: Diagnostic) -> str:
        """Return the bullet list describing one diagnostic."""

        header = f"- **Line {diagnostic.line}, Column {diagnostic.column}**"
        if diagnostic.length:
            header += f" (length: {diagnostic.length})"
        lines = [header]
        if diagnostic.code:
            lines.append(f"  - Code: `{diagnostic.code}`")
        lines.append(f"  - {diagnostic.message}")
        if diagnostic.highlighted_element:
            lines.append(f"  - Element: `{diagnostic.highlighted_element}`")
        if diagnostic.category:
            lines.append(f"  - Category: {diagnostic.category}")
        if diagnostic.hints:
            lines.append("  - Hints:")
            lines.extend(f"    - {hint}" for hint in diagnostic.hints)
        return "\n".join(lines) + "\n"


class JSONFormatter:
    """Render results as indented camelCase JSON."""

    def __init__(self, *, indent: int = 2) -> None:
        """Initialise the formatter.

        Args:
            indent: Spaces per indentation level.
        """

        self._indent = indent

    def format(self, result: InspectionResult) -> str:
        """Return ``result`` as camelCase JSON with ``None`` fields omitted."""

        return json.dumps(result.to_payload(), indent=self._indent, ensure_ascii=False)


def build_formatter(response_format: ResponseFormat | str) -> ResultFormatter:
    """Return the formatter registered for ``response_format``.

    Raises:
        ValueError: If the format is not ``markdown`` or ``json``.
    """

    normalized = response_format.strip().lower()
    if normalized == "markdown":
        return MarkdownFormatter()
    if normalized == "json":
        return JSONFormatter()
    raise ValueError(f"Unknown response format '{response_format}'. Expected 'markdown' or 'json'.")


__all__ = ["JSONFormatter", "MarkdownFormatter", "ResultFormatter", "build_formatter"]
