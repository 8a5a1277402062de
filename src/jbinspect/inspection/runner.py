# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and run the headless inspection command."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.runtime import spawn_with_timeout
from ..errors import InspectionError, InspectionErrorKind
from ..models import RunContext

LOGGER = logging.getLogger(__name__)


def build_inspection_args(context: RunContext, config_dir: Path, system_dir: Path) -> list[str]:
    """Return the argument vector passed to the inspection executable.

    The engine requires three positional arguments: the project root, a
    profile, and the output directory. Without a profile the project root is
    repeated in the profile slot and ``-e`` selects the default inspections.

    Args:
        context: Run context for the inspection.
        config_dir: Isolated ``idea.config.path`` directory.
        system_dir: Isolated ``idea.system.path`` directory.

    Returns:
        list[str]: Arguments excluding the executable itself.
    """

    args = [
        f"-Didea.config.path={config_dir}",
        f"-Didea.system.path={system_dir}",
        str(context.project_root),
        str(context.profile_path or context.project_root),
        str(context.output_dir),
    ]
    if context.profile_path is None:
        args.append("-e")
    args.extend(["-format", "json", "-v2", "-d", str(context.target_path)])
    return args


class InspectionRunner:
    """Run the inspection executable for a :class:`RunContext`."""

    def run(self, context: RunContext, config_dir: Path, system_dir: Path) -> None:
        """Execute the inspection and wait for it to finish.

        Results are written by the engine into ``context.output_dir``; nothing
        is read from its output streams.

        Raises:
            InspectionError: On timeout, a non-zero exit status, or when the
                executable cannot be started.
        """

        command = [str(context.ide_path), *build_inspection_args(context, config_dir, system_dir)]
        LOGGER.info("running inspection command: %s", command)
        try:
            outcome = spawn_with_timeout(
                command,
                cwd=context.project_root,
                timeout=context.timeout_ms / 1000,
            )
        except OSError as exc:
            raise InspectionError(
                InspectionErrorKind.EXECUTION_FAILED,
                f"Failed to start {context.ide_name} inspection: {exc}",
            ) from exc

        if outcome.timed_out:
            raise InspectionError.timeout(context.timeout_ms)
        if outcome.returncode is not None and outcome.returncode > 0:
            raise InspectionError.execution_failed(
                outcome.returncode,
                f"{context.ide_name} inspect exited with code {outcome.returncode}",
            )
        if outcome.returncode is not None and outcome.returncode < 0:
            LOGGER.warning("inspection process ended by signal %d", -outcome.returncode)


__all__ = ["InspectionRunner", "build_inspection_args"]
