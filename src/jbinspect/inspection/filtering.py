# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Apply include, exclude and severity filters to diagnostics."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from functools import lru_cache

from ..models import Diagnostic, DiagnosticFilterSpec

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _wildcard_regex(pattern: str) -> re.Pattern[str]:
    """Return a compiled case-insensitive regex for a ``*`` wildcard pattern.

    Every other character is matched literally.

    Args:
        pattern: Filter pattern such as ``Spell*``.

    Returns:
        re.Pattern[str]: Anchored pattern.
    """

    translated = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{translated}$", re.IGNORECASE)


def code_matches(code: str, pattern: str) -> bool:
    """Return ``True`` when diagnostic ``code`` matches filter ``pattern``.

    ``*`` acts as a case-insensitive wildcard, dotted names must match
    exactly, anything else is compared case-insensitively.
    """

    if "*" in pattern:
        return _wildcard_regex(pattern).match(code) is not None
    if "." in pattern:
        return code == pattern
    return code.lower() == pattern.lower()


def _matches_any(code: str, patterns: Sequence[str]) -> bool:
    """Return ``True`` when ``code`` matches at least one of ``patterns``."""

    return any(code_matches(code, pattern) for pattern in patterns)


def apply_filter(diagnostics: Sequence[Diagnostic], spec: DiagnosticFilterSpec) -> list[Diagnostic]:
    """Return the diagnostics that survive ``spec``.

    Args:
        diagnostics: Parsed diagnostics, in report order.
        spec: Filter specification; a non-empty ``only`` overrides ``exclude``.

    Returns:
        list[Diagnostic]: Filtered diagnostics, order preserved.
    """

    filtered = list(diagnostics)
    if spec.only:
        filtered = [item for item in filtered if item.code and _matches_any(item.code, spec.only)]
    elif spec.exclude:
        filtered = [item for item in filtered if not item.code or not _matches_any(item.code, spec.exclude)]
    if spec.severities:
        allowed = set(spec.severities)
        filtered = [item for item in filtered if item.severity in allowed]
    LOGGER.debug("filtered diagnostics from %d to %d", len(diagnostics), len(filtered))
    return filtered


__all__ = ["apply_filter", "code_matches"]
