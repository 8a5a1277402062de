# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models shared across the inspection pipeline."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import InspectionError
from .severity import Severity

_FROZEN_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
_NO_DESCRIPTION = "No description provided"


class IDEType(str, Enum):
    """JetBrains-family products able to run headless inspections."""

    INTELLIJ_IDEA = "intellij-idea"
    WEBSTORM = "webstorm"
    PYCHARM = "pycharm"
    PHPSTORM = "phpstorm"
    GOLAND = "goland"
    RIDER = "rider"
    CLION = "clion"
    RUBYMINE = "rubymine"
    DATAGRIP = "datagrip"
    DATASPELL = "dataspell"
    APPCODE = "appcode"
    ANDROID_STUDIO = "android-studio"
    RUSTROVER = "rustrover"
    AQUA = "aqua"
    WRITERSIDE = "writerside"


class IDE(BaseModel):
    """Installed IDE discovered on the host."""

    model_config = _FROZEN_CAMEL

    type: IDEType
    name: str
    path: str
    version: str | None = None
    is_running: bool = False


class IDECapabilities(BaseModel):
    """Static language affinity and priority for an :class:`IDEType`."""

    model_config = ConfigDict(frozen=True)

    languages: tuple[str, ...]
    extensions: tuple[str, ...]
    priority: int


class Diagnostic(BaseModel):
    """Normalised inspection finding.

    ``file``, ``line``, ``column``, ``severity`` and ``message`` are required;
    construction raises :class:`pydantic.ValidationError` when any is missing.
    Line and column values below one are clamped to one.
    """

    model_config = _FROZEN_CAMEL

    file: str = Field(min_length=1)
    line: int
    column: int
    length: int | None = None
    severity: Severity
    code: str | None = None
    message: str = Field(min_length=1)
    highlighted_element: str | None = None
    category: str | None = None
    hints: tuple[str, ...] | None = None

    @field_validator("line", "column", mode="before")
    @classmethod
    def _clamp_position(cls, value: object) -> object:
        """Raise line and column numbers below one to one."""

        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 1:
            return 1
        return value


class DiagnosticFilterSpec(BaseModel):
    """Code and severity filters applied to parsed diagnostics.

    A non-empty ``only`` list takes precedence and ``exclude`` is then ignored.
    """

    model_config = ConfigDict(frozen=True)

    exclude: tuple[str, ...] = ()
    only: tuple[str, ...] = ()
    severities: tuple[Severity, ...] = ()


class ProblemClass(BaseModel):
    """Nested problem-class object emitted by the inspection engine."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    severity: str | None = None


class RawProblem(BaseModel):
    """Single problem record as written by the inspection engine."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file: str | None = None
    line: int | None = None
    offset: int | None = None
    length: int | None = None
    severity: str | None = None
    problem_class: ProblemClass | None = None
    legacy_problem_class: str | None = Field(default=None, alias="problemClass")
    description: str | None = None
    category: str | None = None
    hints: list[str] | None = None
    highlighted_element: str | None = None

    @field_validator("hints", mode="before")
    @classmethod
    def _stringify_hints(cls, value: object) -> object:
        """Coerce non-string hint entries to strings."""

        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value]
        return value

    @property
    def code(self) -> str | None:
        """Return the rule identifier, treating ``UNKNOWN`` as absent."""

        candidate = self.problem_class.id if self.problem_class and self.problem_class.id else None
        candidate = candidate or self.legacy_problem_class
        if not candidate or candidate == "UNKNOWN":
            return None
        return candidate

    @property
    def raw_severity(self) -> str | None:
        """Return the bare severity or the one nested under ``problem_class``."""

        if self.severity:
            return self.severity
        return self.problem_class.severity if self.problem_class else None

    def build_message(self) -> str:
        """Return the description prefixed with the rule code when present."""

        if not self.description:
            return _NO_DESCRIPTION
        code = self.code
        if code and not self.description.startswith(f"{code}:"):
            return f"{code}: {self.description}"
        return self.description


class RunContext(BaseModel):
    """Immutable settings governing a single inspection run."""

    model_config = ConfigDict(frozen=True)

    target_path: Path
    project_root: Path
    profile_path: Path | None = None
    output_dir: Path
    ide_path: Path
    ide_name: str
    ide_version: str | None = None
    timeout_ms: int = Field(gt=0)


class InspectionParams(BaseModel):
    """Request-level parameters used to prepare a :class:`RunContext`."""

    model_config = ConfigDict(frozen=True)

    target_path: str
    project_root: str | None = None
    profile_path: str | None = None
    ide_path: str | None = None
    timeout_ms: int | None = Field(default=None, gt=0)
    filter: DiagnosticFilterSpec = Field(default_factory=DiagnosticFilterSpec)


class InspectionMetadata(BaseModel):
    """Descriptive metadata attached to a completed run."""

    model_config = _FROZEN_CAMEL

    target_path: str
    project_root: str | None = None
    ide_name: str | None = None
    ide_version: str | None = None
    execution_time_ms: int
    timestamp: str


class InspectionResult(BaseModel):
    """Outcome of a single inspection request."""

    model_config = _FROZEN_CAMEL

    diagnostics: tuple[Diagnostic, ...] = ()
    total_problems: int = 0
    error: str | None = None
    warning: str | None = None
    timeout: bool | None = None
    metadata: InspectionMetadata | None = None

    @classmethod
    def from_diagnostics(
        cls,
        diagnostics: tuple[Diagnostic, ...] | list[Diagnostic],
        *,
        metadata: InspectionMetadata | None = None,
    ) -> InspectionResult:
        """Build a successful result whose count matches ``diagnostics``."""

        items = tuple(diagnostics)
        return cls(diagnostics=items, total_problems=len(items), metadata=metadata)

    @classmethod
    def from_error(
        cls,
        error: InspectionError,
        *,
        metadata: InspectionMetadata | None = None,
    ) -> InspectionResult:
        """Build a failed result from ``error``."""

        return cls(
            error=error.message,
            timeout=True if error.is_timeout else None,
            metadata=metadata,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON-compatible representation of the result."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "IDE",
    "IDECapabilities",
    "IDEType",
    "Diagnostic",
    "DiagnosticFilterSpec",
    "InspectionMetadata",
    "InspectionParams",
    "InspectionResult",
    "ProblemClass",
    "RawProblem",
    "RunContext",
]
