# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging

# Bandit: subprocess usage is intentional; arguments are passed as a vector and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

LOGGER = logging.getLogger(__name__)

_TIMEOUT_RETURNCODE: Final[int] = 124
_TERMINATE_GRACE_SECONDS: Final[float] = 5.0


@dataclass(slots=True, frozen=True)
class ProcessOutcome:
    """Exit state of a process started by :func:`spawn_with_timeout`.

    Attributes:
        returncode: Exit status, negative when killed by a signal, ``None`` when
            the process was still running after termination was requested.
        timed_out: ``True`` when the timeout elapsed and termination was requested.
    """

    returncode: int | None
    timed_out: bool = False


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text, dropping undecodable bytes.

    Args:
        value: Captured stream content, possibly bytes after a timeout.

    Returns:
        str | None: Text content, or ``None`` when nothing was captured.
    """

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Return ``args`` as a list of strings.

    Args:
        args: Command and argument sequence.

    Returns:
        list[str]: Argument vector passed to :mod:`subprocess`.

    Raises:
        ValueError: If ``args`` is empty.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    return [str(arg) for arg in args]


def run_command(args: Sequence[str], *, timeout: float | None = None) -> CompletedProcess[str]:
    """Execute ``args`` and return the completed process without raising on failure.

    Args:
        args: Command and argument sequence to execute.
        timeout: Seconds to wait before the process is killed; ``None`` waits forever.

    Returns:
        CompletedProcess: Subprocess execution metadata. A timeout is reported
        with return code ``124`` and a note appended to ``stderr``.

    Raises:
        OSError: If the executable cannot be started.
        ValueError: If ``args`` is empty.
    """

    normalized = _normalize_args(args)
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument vector, no shell
            normalized,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s"
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=_TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    return completed


def spawn_with_timeout(
    args: Sequence[str],
    *,
    cwd: Path | None,
    timeout: float,
) -> ProcessOutcome:
    """Run ``args`` with all standard streams detached, terminating on timeout.

    Output is discarded at the OS level; callers read whatever the process
    writes to disk. On timeout the process receives ``SIGTERM`` only.

    Args:
        args: Command and argument sequence to execute.
        cwd: Working directory for the process.
        timeout: Seconds to wait before requesting termination.

    Returns:
        ProcessOutcome: Exit status and whether the timeout fired.

    Raises:
        OSError: If the executable cannot be started.
        ValueError: If ``args`` is empty.
    """

    normalized = _normalize_args(args)
    LOGGER.debug("spawning %s (timeout=%.1fs)", normalized, timeout)
    # Not used as a context manager: ``Popen.__exit__`` waits without a bound.
    process = subprocess.Popen(  # nosec B603 - argument vector, no shell
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    try:
        return ProcessOutcome(returncode=process.wait(timeout=timeout))
    except subprocess.TimeoutExpired:
        LOGGER.warning("process %s exceeded %.1fs, terminating", normalized[0], timeout)
        process.terminate()
    try:
        returncode: int | None = process.wait(timeout=_TERMINATE_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        LOGGER.warning("process %s ignored termination request", normalized[0])
        returncode = None
    return ProcessOutcome(returncode=returncode, timed_out=True)


__all__ = ["ProcessOutcome", "run_command", "spawn_with_timeout"]
