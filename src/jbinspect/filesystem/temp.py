# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Track, copy out and remove temporary directories created for inspection runs."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from threading import Lock
from typing import Final

LOGGER = logging.getLogger(__name__)

TEMP_PREFIX: Final[str] = "jetbrains-inspect-"
DEBUG_COPY_DIRNAME: Final[str] = "inspect-output"
DEFAULT_MAX_AGE_SECONDS: Final[float] = 24 * 60 * 60
_MAX_CLEANUP_WORKERS: Final[int] = 8


class TempDirectoryManager:
    """Create uniquely named scratch directories and guarantee their removal.

    The tracked set is guarded by a lock so concurrent runs may share one
    manager. A path is claimed before removal, which makes a second cleanup
    of the same path a no-op.
    """

    def __init__(self, *, temp_root: Path | None = None, debug_output_dir: Path | None = None) -> None:
        """Initialise the manager.

        Args:
            temp_root: Directory receiving scratch directories; defaults to the OS temp dir.
            debug_output_dir: When set, directory contents are copied into
                ``<debug_output_dir>/inspect-output`` before removal.
        """

        self._temp_root = Path(temp_root) if temp_root is not None else Path(tempfile.gettempdir())
        self._debug_output_dir = debug_output_dir
        self._tracked: set[Path] = set()
        self._lock = Lock()

    @property
    def tracked(self) -> frozenset[Path]:
        """Return a snapshot of the directories still awaiting cleanup."""

        with self._lock:
            return frozenset(self._tracked)

    def create_temp_dir(self, prefix: str = "") -> Path:
        """Create and track ``<temp_root>/jetbrains-inspect-<prefix><millis>``.

        A numeric suffix is appended when a directory with the same name was
        already created within the same millisecond.

        Args:
            prefix: Caller-specific name fragment such as ``"inspection-"``.

        Returns:
            Path: The newly created directory.
        """

        base = f"{TEMP_PREFIX}{prefix}{int(time.time() * 1000)}"
        candidate = self._temp_root / base
        attempt = 0
        while True:
            try:
                candidate.mkdir(parents=True)
                break
            except FileExistsError:
                attempt += 1
                candidate = self._temp_root / f"{base}-{attempt}"
        with self._lock:
            self._tracked.add(candidate)
        LOGGER.debug("created temp directory %s", candidate)
        return candidate

    def cleanup(self, path: Path) -> None:
        """Remove a tracked directory; untracked paths are ignored.

        Removal failures are logged and the path stays tracked so a later
        :meth:`cleanup_all` can retry.
        """

        target = Path(path)
        with self._lock:
            if target not in self._tracked:
                return
            self._tracked.discard(target)

        if self._debug_output_dir is not None:
            self._copy_out(target)

        try:
            shutil.rmtree(target)
        except FileNotFoundError:
            pass
        except OSError as exc:
            LOGGER.warning("failed to clean up temp directory %s: %s", target, exc)
            with self._lock:
                self._tracked.add(target)
            return
        LOGGER.debug("cleaned up temp directory %s", target)

    def cleanup_all(self) -> int:
        """Clean every tracked directory concurrently.

        Returns:
            int: Number of directories that were attempted.
        """

        pending = list(self.tracked)
        if not pending:
            return 0
        with ThreadPoolExecutor(max_workers=min(_MAX_CLEANUP_WORKERS, len(pending))) as executor:
            futures = [executor.submit(self.cleanup, path) for path in pending]
            wait(futures)
        for path, future in zip(pending, futures):
            error = future.exception()
            if error is not None:
                LOGGER.warning("cleanup of %s raised %s", path, error)
        LOGGER.info("cleaned up %d temp directories", len(pending))
        return len(pending)

    def _copy_out(self, source: Path) -> None:
        """Copy ``source`` into the debug output directory before it is removed.

        Copy failures are logged and never prevent cleanup.

        Args:
            source: Tracked scratch directory about to be deleted.
        """

        destination = Path(self._debug_output_dir or ".") / DEBUG_COPY_DIRNAME
        try:
            shutil.copytree(source, destination, dirs_exist_ok=True)
        except (OSError, shutil.Error) as exc:
            LOGGER.warning("failed to save inspection output from %s: %s", source, exc)
            return
        LOGGER.debug("saved inspection output to %s", destination)

    @staticmethod
    def reap_stale(
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
        *,
        temp_root: Path | None = None,
        now: float | None = None,
    ) -> int:
        """Remove leftover ``jetbrains-inspect-*`` directories older than ``max_age_seconds``.

        Args:
            max_age_seconds: Minimum age, measured by modification time.
            temp_root: Directory to scan; defaults to the OS temp dir.
            now: Reference timestamp used instead of :func:`time.time`.

        Returns:
            int: Number of directories removed.
        """

        root = Path(temp_root) if temp_root is not None else Path(tempfile.gettempdir())
        reference = time.time() if now is None else now
        try:
            entries = list(os.scandir(root))
        except OSError as exc:
            LOGGER.warning("failed to scan %s for stale temp directories: %s", root, exc)
            return 0

        removed = 0
        for entry in entries:
            if not entry.name.startswith(TEMP_PREFIX):
                continue
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
                if reference - entry.stat(follow_symlinks=False).st_mtime <= max_age_seconds:
                    continue
                shutil.rmtree(entry.path)
            except OSError as exc:
                LOGGER.debug("could not reap %s: %s", entry.path, exc)
                continue
            removed += 1
            LOGGER.debug("reaped stale temp directory %s", entry.path)
        if removed:
            LOGGER.info("cleaned up %d old temp directories", removed)
        return removed


__all__ = ["DEBUG_COPY_DIRNAME", "DEFAULT_MAX_AGE_SECONDS", "TEMP_PREFIX", "TempDirectoryManager"]
