# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed failures raised by the inspection pipeline."""

from __future__ import annotations

from enum import Enum


class InspectionErrorKind(str, Enum):
    """Enumerate every failure the inspection pipeline can report."""

    IDE_NOT_FOUND = "ide_not_found"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    PROJECT_ROOT_NOT_FOUND = "project_root_not_found"
    EXECUTION_FAILED = "execution_failed"
    TIMEOUT = "timeout"
    PARSE_FAILED = "parse_failed"
    INVALID_REQUEST = "invalid_request"


class InspectionError(RuntimeError):
    """Single error type carrying an :class:`InspectionErrorKind` and payload.

    Components raise this error and the inspection tool converts it into the
    ``error`` field of an :class:`~jbinspect.models.InspectionResult` exactly once.
    """

    def __init__(
        self,
        kind: InspectionErrorKind,
        message: str,
        *,
        exit_code: int | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """Initialise the error with its kind and optional payload.

        Args:
            kind: Category of the failure.
            message: Human-readable description shown to callers.
            exit_code: Exit status of the inspection process when relevant.
            timeout_ms: Timeout that elapsed, for :attr:`InspectionErrorKind.TIMEOUT`.
        """

        super().__init__(message)
        self.kind = kind
        self.message = message
        self.exit_code = exit_code
        self.timeout_ms = timeout_ms

    @property
    def is_timeout(self) -> bool:
        """Return ``True`` when the failure was caused by the run timing out."""

        return self.kind is InspectionErrorKind.TIMEOUT

    @classmethod
    def ide_not_found(cls, detail: str | None = None) -> InspectionError:
        """Return the error raised when no usable IDE installation exists.

        Args:
            detail: Optional reason appended to the message.

        Returns:
            InspectionError: Error of kind :attr:`InspectionErrorKind.IDE_NOT_FOUND`.
        """

        message = "No suitable JetBrains IDE found"
        if detail:
            message = f"{message}: {detail}"
        return cls(InspectionErrorKind.IDE_NOT_FOUND, message)

    @classmethod
    def unsupported_platform(cls, platform_name: str) -> InspectionError:
        """Return the error raised for hosts without known IDE locations."""

        return cls(InspectionErrorKind.UNSUPPORTED_PLATFORM, f"Unsupported platform: {platform_name}")

    @classmethod
    def project_root_not_found(cls, target: str) -> InspectionError:
        """Return the error raised when no project marker exists above ``target``."""

        return cls(
            InspectionErrorKind.PROJECT_ROOT_NOT_FOUND,
            f"Could not find project root for {target}",
        )

    @classmethod
    def execution_failed(cls, exit_code: int, detail: str | None = None) -> InspectionError:
        """Return the error raised when the inspection process exits abnormally.

        Args:
            exit_code: Exit status reported by the process.
            detail: Optional reason appended to the message.

        Returns:
            InspectionError: Error carrying ``exit_code``.
        """

        message = f"Inspection failed with exit code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        return cls(InspectionErrorKind.EXECUTION_FAILED, message, exit_code=exit_code)

    @classmethod
    def timeout(cls, timeout_ms: int) -> InspectionError:
        """Return the error raised when the run exceeds ``timeout_ms``."""

        return cls(
            InspectionErrorKind.TIMEOUT,
            f"Inspection timed out after {timeout_ms}ms",
            timeout_ms=timeout_ms,
        )

    @classmethod
    def parse_failed(cls, detail: str) -> InspectionError:
        """Return the error raised when report files cannot be read."""

        return cls(InspectionErrorKind.PARSE_FAILED, f"Failed to parse inspection results: {detail}")

    @classmethod
    def invalid_request(cls, detail: str) -> InspectionError:
        """Return the error raised for malformed request parameters."""

        return cls(InspectionErrorKind.INVALID_REQUEST, detail)


__all__ = ["InspectionError", "InspectionErrorKind"]
