# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover installed JetBrains IDEs and their versions."""

from __future__ import annotations

import glob
import logging
import os
import re
import sys
from collections.abc import Sequence
from typing import Final

from packaging.version import InvalidVersion, Version

from ..core.runtime import run_command
from ..errors import InspectionError
from ..models import IDE
from .catalog import IDE_PATH_TEMPLATES, SUPPORTED_PLATFORMS, ide_name_from_path, ide_type_for_name
from .paths import PathExpander

LOGGER = logging.getLogger(__name__)

VERSION_PROBE_TIMEOUT_SECONDS: Final[float] = 5.0
_EXCLUDED_SEGMENT: Final[str] = "node_modules"


class VersionResolver:
    """Query an inspection executable for its version string."""

    VERSION_PATTERN = re.compile(r"\d+\.\d+(?:\.\d+)?")

    def __init__(self, *, timeout: float = VERSION_PROBE_TIMEOUT_SECONDS) -> None:
        """Initialise the resolver.

        Args:
            timeout: Seconds allowed for each ``--version`` call.
        """

        self._timeout = timeout

    def capture(self, executable: str) -> str | None:
        """Return the version reported by ``executable --version`` if available.

        Failures of any kind leave the version unset.
        """

        try:
            completed = run_command([executable, "--version"], timeout=self._timeout)
        except (OSError, ValueError) as exc:
            LOGGER.debug("version probe failed for %s: %s", executable, exc)
            return None
        if completed.returncode != 0:
            LOGGER.debug("version probe for %s exited with %s", executable, completed.returncode)
            return None
        return self.normalize(completed.stdout.strip() or (completed.stderr or "").strip())

    def normalize(self, raw: str | None) -> str | None:
        """Return the dotted version found in ``raw`` when it is a valid release number.

        Args:
            raw: Output of ``--version`` or any free-form version text.

        Returns:
            str | None: Version such as ``2024.1.2``, or ``None`` when absent or invalid.
        """

        if not raw:
            return None
        match = self.VERSION_PATTERN.search(raw)
        if match is None:
            return None
        candidate = match.group(0)
        try:
            Version(candidate)
        except InvalidVersion:
            return None
        return candidate


class IDEDiscoverer:
    """Locate inspection executables from the per-platform catalog."""

    def __init__(
        self,
        *,
        platform: str | None = None,
        expander: PathExpander | None = None,
        templates: Sequence[str] | None = None,
        version_resolver: VersionResolver | None = None,
    ) -> None:
        """Initialise the discoverer.

        Args:
            platform: ``sys.platform`` identifier; defaults to the host platform.
            expander: Path expander used for catalog templates.
            templates: Explicit templates replacing the catalog entries.
            version_resolver: Resolver used to probe executables for versions.

        Raises:
            InspectionError: If the platform is not one of the supported families.
        """

        self._platform = platform or sys.platform
        if self._platform not in SUPPORTED_PLATFORMS:
            raise InspectionError.unsupported_platform(self._platform)
        self._expander = expander or PathExpander(platform=self._platform)
        self._templates = tuple(templates) if templates is not None else IDE_PATH_TEMPLATES[self._platform]
        self._versions = version_resolver or VersionResolver()

    def find_available_ides(self) -> list[IDE]:
        """Return every distinct IDE installed on the host.

        Only the first installation found per product name is kept. An empty
        list means no IDE is installed; it is up to the caller to treat that
        as fatal.
        """

        LOGGER.debug("checking %d potential IDE paths on %s", len(self._templates), self._platform)
        results: list[IDE] = []
        seen: set[str] = set()
        for candidate in self._candidate_paths():
            name = ide_name_from_path(candidate)
            if name in seen:
                continue
            seen.add(name)
            ide = IDE(
                type=ide_type_for_name(name),
                name=name,
                path=candidate,
                version=self._versions.capture(candidate),
            )
            LOGGER.debug("found IDE %s at %s", name, candidate)
            results.append(ide)
        LOGGER.info("found %d JetBrains IDEs", len(results))
        return results

    def _candidate_paths(self) -> list[str]:
        """Return existing launcher paths for every catalog template, in catalog order."""

        paths: list[str] = []
        for template in self._templates:
            expanded = self._expander.expand(template)
            if not expanded:
                continue
            if "*" in template:
                paths.extend(self._glob_files(expanded))
            elif os.path.isfile(expanded):
                paths.append(expanded)
        return paths

    @staticmethod
    def _glob_files(pattern: str) -> list[str]:
        """Return files matching ``pattern``, newest build first, skipping excluded segments."""

        # Newest build directories sort last lexically; prefer them.
        matches = sorted(glob.glob(pattern), reverse=True)
        return [
            match
            for match in matches
            if _EXCLUDED_SEGMENT not in re.split(r"[\\/]", match) and os.path.isfile(match)
        ]


__all__ = ["IDEDiscoverer", "VERSION_PROBE_TIMEOUT_SECONDS", "VersionResolver"]
