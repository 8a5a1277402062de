# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Opt-in time-to-live cache for inspection results."""

from __future__ import annotations

import hashlib
import os
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from pathlib import Path
from threading import Lock
from typing import Final

from ..config import CacheConfig
from ..models import DiagnosticFilterSpec, InspectionResult

CacheKey = Hashable

FINGERPRINT_SKIP_DIRS: Final[frozenset[str]] = frozenset(
    {".git", ".hg", ".svn", "__pycache__", ".venv", "venv", "node_modules"},
)
# Rewritten by the IDE on every headless run.
FINGERPRINT_SKIP_FILES: Final[frozenset[str]] = frozenset({"workspace.xml"})
_FIELD_DELIMITER: Final[bytes] = b"\0"


def project_fingerprint(project_root: Path) -> str:
    """Return a digest of every file's path, size and mtime below ``project_root``.

    Inspection results depend on the whole project (imports, ``.idea``
    settings, build files), so any edit, addition or removal below the
    root changes the digest. Version control metadata and dependency
    directories are skipped.

    Args:
        project_root: Directory whose contents determine the digest.

    Returns:
        str: Hex digest of the project state.
    """

    hasher = hashlib.sha256()
    for dirpath, dirnames, filenames in os.walk(project_root):
        dirnames[:] = sorted(name for name in dirnames if name not in FINGERPRINT_SKIP_DIRS)
        directory = Path(dirpath)
        for filename in sorted(filenames):
            if filename in FINGERPRINT_SKIP_FILES:
                continue
            path = directory / filename
            try:
                stat = path.stat()
            except OSError:
                continue
            hasher.update(str(path.relative_to(project_root)).encode("utf-8", errors="surrogateescape"))
            hasher.update(_FIELD_DELIMITER)
            hasher.update(f"{stat.st_size}:{stat.st_mtime_ns}".encode("ascii"))
            hasher.update(_FIELD_DELIMITER)
    return hasher.hexdigest()


def result_cache_key(
    target: Path,
    spec: DiagnosticFilterSpec,
    *,
    project_root: Path,
    profile_path: Path | None = None,
) -> CacheKey | None:
    """Return a key that changes whenever the inputs of an inspection change.

    Args:
        target: Absolute file being inspected.
        spec: Filter applied to the run.
        project_root: Root whose full contents feed into the key.
        profile_path: Inspection profile, when one is configured.

    Returns:
        CacheKey | None: Key for the request, or ``None`` for directories and
        unreadable paths, which are never cached.
    """

    if not target.is_file():
        return None
    profile_state: tuple[str, int, int] | None = None
    if profile_path is not None:
        try:
            stat = profile_path.stat()
        except OSError:
            return None
        profile_state = (str(profile_path), stat.st_mtime_ns, stat.st_size)
    return (str(target), str(project_root), project_fingerprint(project_root), profile_state, spec)


class ResultCache:
    """Thread-safe FIFO-bounded cache with per-entry expiry."""

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise the cache.

        Args:
            ttl_seconds: Lifetime of each entry.
            max_size: Maximum number of entries; the oldest is evicted first.
            clock: Monotonic time source.
        """

        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._store: OrderedDict[CacheKey, tuple[float, InspectionResult]] = OrderedDict()
        self._lock = Lock()

    @classmethod
    def from_config(cls, config: CacheConfig) -> ResultCache | None:
        """Return a cache configured from ``config`` or ``None`` when disabled."""

        if not config.enabled or config.max_size <= 0 or config.ttl <= 0:
            return None
        return cls(ttl_seconds=config.ttl / 1000, max_size=config.max_size)

    def __len__(self) -> int:
        """Return the number of stored entries, expired ones included."""

        with self._lock:
            return len(self._store)

    def get(self, key: CacheKey) -> InspectionResult | None:
        """Return the live entry stored under ``key``.

        Args:
            key: Key produced by :func:`result_cache_key`.

        Returns:
            InspectionResult | None: Cached result, or ``None`` when absent or
            expired. Expired entries are dropped on lookup.
        """

        now = self._clock()
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at < now:
                del self._store[key]
                return None
            return value

    def put(self, key: CacheKey, value: InspectionResult) -> None:
        """Store ``value`` under ``key``, evicting the oldest entries past capacity.

        Args:
            key: Key produced by :func:`result_cache_key`.
            value: Successful inspection result.
        """

        with self._lock:
            self._store.pop(key, None)
            self._store[key] = (self._clock() + self._ttl_seconds, value)
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry."""

        with self._lock:
            self._store.clear()


__all__ = ["ResultCache", "project_fingerprint", "result_cache_key"]
