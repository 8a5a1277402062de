# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final, Mapping


class Severity(str, Enum):
    """Severity levels normalising the inspection engine vocabulary."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


SEVERITY_TABLE: Final[Mapping[str, Severity]] = {
    "ERROR": Severity.ERROR,
    "WARNING": Severity.WARNING,
    "WEAK WARNING": Severity.INFO,
    "INFO": Severity.INFO,
    "INFORMATION": Severity.INFO,
    "TYPO": Severity.WARNING,
    "SERVER PROBLEM": Severity.ERROR,
    "GENERIC_SERVER_ERROR_OR_WARNING": Severity.WARNING,
    "DEPRECATED": Severity.WARNING,
    "MARKED_FOR_REMOVAL": Severity.WARNING,
}


def map_severity(raw: str | None) -> Severity:
    """Translate an inspection engine severity label into a :class:`Severity`.

    Args:
        raw: Severity label emitted by the engine, possibly ``None``.

    Returns:
        Severity: Matching bucket, or :attr:`Severity.INFO` when the label is
        absent or unrecognised.
    """

    if not raw:
        return Severity.INFO
    return SEVERITY_TABLE.get(raw.strip().upper(), Severity.INFO)


def coerce_severity(value: str | Severity) -> Severity:
    """Return ``value`` as a :class:`Severity`, accepting loose spellings."""

    if isinstance(value, Severity):
        return value
    normalized = value.strip().lower()
    try:
        return Severity(normalized)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in Severity)
        raise ValueError(f"Unknown severity '{value}'. Expected one of: {allowed}") from exc


__all__ = ["SEVERITY_TABLE", "Severity", "coerce_severity", "map_severity"]
