# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Inspection entry point converting every failure into a result value."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from ..config import ServerConfig
from ..errors import InspectionError, InspectionErrorKind
from ..models import (
    DiagnosticFilterSpec,
    InspectionMetadata,
    InspectionParams,
    InspectionResult,
    RunContext,
)
from .cache import CacheKey, ResultCache, result_cache_key
from .filtering import apply_filter
from .parser import ResultParser
from .strategy import InspectionStrategy

LOGGER = logging.getLogger(__name__)

TOOL_NAME: Final[str] = "get_jetbrains_code_inspections"
TOOL_DESCRIPTION: Final[str] = "Run JetBrains IDE code inspections on files or directories"


def filter_spec_from_config(config: ServerConfig) -> DiagnosticFilterSpec:
    """Return the default filter derived from ``config``."""

    return DiagnosticFilterSpec(exclude=config.default_exclude, only=config.default_only)


class InspectionTool:
    """Run the full inspection pipeline for one path at a time.

    :meth:`execute` never raises :class:`InspectionError`; failures are
    reported through :attr:`InspectionResult.error`.
    """

    def __init__(
        self,
        *,
        strategy: InspectionStrategy,
        config: ServerConfig,
        parser: ResultParser | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        """Initialise the tool.

        Args:
            strategy: Run lifecycle owner.
            config: Source of request defaults.
            parser: Report parser; a default instance is created when omitted.
            cache: Optional result cache; ``None`` runs every request.
        """

        self._strategy = strategy
        self._config = config
        self._parser = parser or ResultParser()
        self._cache = cache

    def build_params(
        self,
        path: str,
        *,
        filter_spec: DiagnosticFilterSpec | None = None,
        timeout_ms: int | None = None,
    ) -> InspectionParams:
        """Return request parameters for ``path`` using configured defaults."""

        return InspectionParams(
            target_path=path,
            project_root=self._config.project_root,
            profile_path=self._config.profile_path,
            ide_path=self._config.ide_path,
            timeout_ms=timeout_ms or self._config.default_timeout,
            filter=filter_spec or filter_spec_from_config(self._config),
        )

    def execute(
        self,
        path: object,
        *,
        filter_spec: DiagnosticFilterSpec | None = None,
        timeout_ms: int | None = None,
    ) -> InspectionResult:
        """Inspect ``path`` and return the result.

        Args:
            path: File or directory to inspect.
            filter_spec: Filter replacing the configured default.
            timeout_ms: Timeout replacing the configured default.

        Returns:
            InspectionResult: Diagnostics, or an error description.
        """

        LOGGER.info("executing inspection for %s", path)
        if not isinstance(path, str) or not path.strip():
            return InspectionResult.from_error(
                InspectionError.invalid_request("Invalid parameters: path must be a non-empty string")
            )
        try:
            params = self.build_params(path.strip(), filter_spec=filter_spec, timeout_ms=timeout_ms)
            target = Path(params.target_path).expanduser().resolve()
            key = self._cache_key(params, target)
        except (ValidationError, ValueError, OSError) as exc:
            LOGGER.warning("rejected inspection request for %r: %s", path, exc)
            return InspectionResult.from_error(InspectionError.invalid_request(f"Invalid parameters: {exc}"))

        if self._cache is not None and key is not None:
            cached = self._cache.get(key)
            if cached is not None:
                LOGGER.debug("returning cached result for %s", params.target_path)
                return cached

        result = self.inspect(params)
        if self._cache is not None and key is not None and result.error is None:
            self._cache.put(key, result)
        LOGGER.info("inspection completed for %s with %d problems", path, result.total_problems)
        return result

    def inspect(self, params: InspectionParams) -> InspectionResult:
        """Run prepare, execute, parse and filter, always releasing the context."""

        started = time.monotonic()
        context: RunContext | None = None
        try:
            context = self._strategy.prepare(params)
            output_dir = self._strategy.execute(context)
            diagnostics = self._parser.parse_directory(output_dir, context.target_path)
            filtered = apply_filter(diagnostics, params.filter)
            LOGGER.debug("kept %d of %d diagnostics", len(filtered), len(diagnostics))
            return InspectionResult.from_diagnostics(filtered, metadata=self._metadata(params, context, started))
        except InspectionError as exc:
            LOGGER.error("inspection failed: %s", exc.message)
            return InspectionResult.from_error(exc, metadata=self._metadata(params, context, started))
        except OSError as exc:
            LOGGER.error("inspection failed with filesystem error: %s", exc)
            error = InspectionError(InspectionErrorKind.EXECUTION_FAILED, f"Inspection failed: {exc}")
            return InspectionResult.from_error(error, metadata=self._metadata(params, context, started))
        except (ValidationError, ValueError) as exc:
            LOGGER.error("inspection failed with invalid run settings: %s", exc)
            error = InspectionError(InspectionErrorKind.EXECUTION_FAILED, f"Inspection failed: {exc}")
            return InspectionResult.from_error(error, metadata=self._metadata(params, context, started))
        finally:
            if context is not None:
                self._strategy.cleanup(context)

    def _cache_key(self, params: InspectionParams, target: Path) -> CacheKey | None:
        """Return the cache key for ``params`` or ``None`` when caching does not apply.

        Args:
            params: Validated request parameters.
            target: Resolved target path.

        Returns:
            CacheKey | None: Key covering the target, project state, profile and
            filter; ``None`` when the cache is off, the target is a directory or
            no project root can be located (the run itself reports that).
        """

        if self._cache is None or not target.is_file():
            return None
        try:
            project_root = self._strategy.resolve_project_root(params)
        except InspectionError:
            return None
        profile = Path(params.profile_path).expanduser().resolve() if params.profile_path else None
        return result_cache_key(target, params.filter, project_root=project_root, profile_path=profile)

    @staticmethod
    def _metadata(params: InspectionParams, context: RunContext | None, started: float) -> InspectionMetadata:
        """Return run metadata, falling back to request values when no context was built.

        Args:
            params: Request parameters.
            context: Run context, or ``None`` when preparation failed.
            started: :func:`time.monotonic` reading taken when the run began.

        Returns:
            InspectionMetadata: Metadata attached to the result.
        """

        return InspectionMetadata(
            target_path=str(context.target_path) if context else params.target_path,
            project_root=str(context.project_root) if context else None,
            ide_name=context.ide_name if context else None,
            ide_version=context.ide_version if context else None,
            execution_time_ms=int((time.monotonic() - started) * 1000),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


__all__ = ["InspectionTool", "TOOL_DESCRIPTION", "TOOL_NAME", "filter_spec_from_config"]
