# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Prepare, execute and tear down a single inspection run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from ..errors import InspectionError
from ..filesystem import TempDirectoryManager
from ..ide import IDESelector, VersionResolver
from ..ide.catalog import ide_name_from_path, ide_type_for_name
from ..models import IDE, InspectionParams, RunContext
from ..project import ProjectRootLocator
from .runner import InspectionRunner

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS: Final[int] = 120_000
OUTPUT_DIR_PREFIX: Final[str] = "inspection-"
CONFIG_DIR_PREFIX: Final[str] = "config-"
SYSTEM_DIR_PREFIX: Final[str] = "system-"


def _absolute(path: str | Path) -> Path:
    """Return ``path`` with ``~`` expanded, made absolute and resolved."""

    return Path(path).expanduser().resolve()


class InspectionStrategy:
    """Own the run context lifecycle and its scratch directories."""

    def __init__(
        self,
        *,
        selector: IDESelector,
        root_locator: ProjectRootLocator,
        temp_manager: TempDirectoryManager,
        runner: InspectionRunner | None = None,
        version_resolver: VersionResolver | None = None,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        """Initialise the strategy.

        Args:
            selector: Chooses the IDE for a target when none is configured.
            root_locator: Finds the project root when none is configured.
            temp_manager: Owner of every scratch directory.
            runner: Launches the inspection process.
            version_resolver: Reads the version of a configured launcher.
            default_timeout_ms: Timeout used when the request carries none.
        """

        self._selector = selector
        self._root_locator = root_locator
        self._temp_manager = temp_manager
        self._runner = runner or InspectionRunner()
        self._versions = version_resolver or VersionResolver()
        self._default_timeout_ms = default_timeout_ms

    def prepare(self, params: InspectionParams) -> RunContext:
        """Resolve project root and IDE, then allocate the output directory.

        Args:
            params: Request parameters, including optional overrides.

        Returns:
            RunContext: Immutable context owning a fresh output directory.

        Raises:
            InspectionError: When no project root or no IDE can be found.
            ValueError: When the resolved settings do not form a valid context;
                the output directory is released before re-raising.
        """

        target = _absolute(params.target_path)
        project_root = self.resolve_project_root(params)
        ide = self._resolve_ide(params, target, project_root)
        fields = {
            "target_path": target,
            "project_root": project_root,
            "profile_path": _absolute(params.profile_path) if params.profile_path else None,
            "ide_path": Path(ide.path),
            "ide_name": ide.name,
            "ide_version": ide.version,
            "timeout_ms": params.timeout_ms or self._default_timeout_ms,
        }
        output_dir = self._temp_manager.create_temp_dir(OUTPUT_DIR_PREFIX)
        try:
            return RunContext(output_dir=output_dir, **fields)
        except ValueError:
            self._temp_manager.cleanup(output_dir)
            raise

    def resolve_project_root(self, params: InspectionParams) -> Path:
        """Return the configured project root or the one located from the target.

        Args:
            params: Request parameters carrying the target and optional override.

        Returns:
            Path: Absolute project root directory.

        Raises:
            InspectionError: When no project marker exists above the target.
            ValueError: When a path cannot be represented on this platform.
        """

        if params.project_root:
            return _absolute(params.project_root)
        target = _absolute(params.target_path)
        located = self._root_locator.find_project_root(target)
        if located is None:
            raise InspectionError.project_root_not_found(str(target))
        return located.resolve()

    def execute(self, context: RunContext) -> Path:
        """Run the inspection inside isolated config and system directories.

        Both directories are removed again whatever the outcome.

        Returns:
            Path: The output directory holding the engine's JSON reports.
        """

        config_dir = self._temp_manager.create_temp_dir(CONFIG_DIR_PREFIX)
        system_dir: Path | None = None
        try:
            system_dir = self._temp_manager.create_temp_dir(SYSTEM_DIR_PREFIX)
            self._runner.run(context, config_dir, system_dir)
            return context.output_dir
        finally:
            self._temp_manager.cleanup(config_dir)
            if system_dir is not None:
                self._temp_manager.cleanup(system_dir)

    def cleanup(self, context: RunContext) -> None:
        """Release the output directory owned by ``context``."""

        self._temp_manager.cleanup(context.output_dir)

    def _resolve_ide(self, params: InspectionParams, target: Path, project_root: Path) -> IDE:
        """Return the configured launcher, or the best installed IDE for ``target``.

        Args:
            params: Request parameters, possibly naming a launcher.
            target: Absolute target path.
            project_root: Absolute project root.

        Returns:
            IDE: IDE used for the run.

        Raises:
            InspectionError: When the configured launcher is missing or no IDE is installed.
        """

        if params.ide_path:
            forced = _absolute(params.ide_path)
            if not forced.is_file():
                raise InspectionError.ide_not_found(f"configured inspect path {forced} does not exist")
            name = ide_name_from_path(str(forced))
            LOGGER.debug("using configured IDE %s at %s", name, forced)
            return IDE(
                type=ide_type_for_name(name),
                name=name,
                path=str(forced),
                version=self._versions.capture(str(forced)),
            )
        ide = self._selector.select_for_path(str(target), str(project_root))
        if ide is None:
            raise InspectionError.ide_not_found()
        return ide


__all__ = [
    "CONFIG_DIR_PREFIX",
    "DEFAULT_TIMEOUT_MS",
    "InspectionStrategy",
    "OUTPUT_DIR_PREFIX",
    "SYSTEM_DIR_PREFIX",
]
