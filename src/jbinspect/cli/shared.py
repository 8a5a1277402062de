# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared utilities for CLI commands (logging, errors, configuration)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import ConfigError, ServerConfig, load_config
from ..core.logging import fail as core_fail
from ..core.logging import info as core_info
from ..core.logging import ok as core_ok
from ..core.logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        """Emit an error line on stderr."""

        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Emit a warning line on stderr."""

        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Emit a success line on stderr."""

        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        """Emit an informational line on stderr."""

        core_info(message, use_emoji=self.use_emoji)


def load_cli_config(cwd: Path | None = None, *, debug: bool = False) -> ServerConfig:
    """Load configuration for a CLI command, applying the ``--debug`` flag.

    Raises:
        CLIError: When the configuration is invalid.
    """

    try:
        config = load_config(cwd)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=2) from exc
    if debug and not config.debug:
        config = config.model_copy(update={"debug": True})
    return config


__all__ = ["CLIError", "CLILogger", "load_cli_config"]
