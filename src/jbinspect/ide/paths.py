# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expand IDE installation path templates into concrete path strings."""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
import sys
import tempfile
from collections.abc import Callable, Mapping
from typing import Final

_BRACED_VAR: Final[re.Pattern[str]] = re.compile(r"\$\{([^}]+)\}")
_BARE_VAR: Final[re.Pattern[str]] = re.compile(r"\$(\w+)")
_PERCENT_VAR: Final[re.Pattern[str]] = re.compile(r"%([^%]+)%")
_TILDE_USER: Final[re.Pattern[str]] = re.compile(r"^~([^/]+)(.*)$")


class PathExpander:
    """Resolve home shortcuts and environment placeholders in path templates.

    Expansion is a pure string transformation: no filesystem access happens
    and glob wildcards are returned untouched. Placeholders naming unknown
    environment variables are kept verbatim.
    """

    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        home: str | None = None,
        platform: str | None = None,
        cwd: str | None = None,
    ) -> None:
        """Initialise the expander.

        Args:
            env: Environment mapping; defaults to :data:`os.environ`.
            home: Home directory; defaults to the current user's home.
            platform: ``sys.platform`` style identifier controlling the syntax.
            cwd: Working directory substituted for ``$PWD``.
        """

        self._env = dict(os.environ if env is None else env)
        self._platform = platform or sys.platform
        self._home = home or os.path.expanduser("~")
        self._cwd = cwd or os.getcwd()

    @property
    def is_windows(self) -> bool:
        """Return whether templates use Windows ``%VAR%`` syntax and separators."""

        return self._platform == "win32"

    def expand(self, template: str) -> str:
        """Return ``template`` with home and variable placeholders substituted.

        Args:
            template: Path template, possibly containing ``~``, ``$VAR``,
                ``${VAR}`` or ``%VAR%`` placeholders and glob wildcards.

        Returns:
            str: Normalised path string, or ``""`` for blank input.
        """

        expanded = template.strip() if template else ""
        if not expanded:
            return ""
        if self.is_windows:
            return ntpath.normpath(self._expand_windows(expanded))
        return posixpath.normpath(self._expand_posix(expanded))

    def _expand_windows(self, value: str) -> str:
        """Substitute ``%VAR%`` placeholders, falling back to conventional defaults.

        Args:
            value: Template using Windows placeholder syntax.

        Returns:
            str: Template with every resolvable placeholder replaced.
        """

        home = self._env.get("USERPROFILE") or self._home
        known: dict[str, Callable[[], str]] = {
            "LOCALAPPDATA": lambda: ntpath.join(home, "AppData", "Local"),
            "APPDATA": lambda: ntpath.join(home, "AppData", "Roaming"),
            "USERPROFILE": lambda: home,
            "HOMEPATH": lambda: home,
            "HOMEDRIVE": lambda: "C:",
            "PROGRAMDATA": lambda: "C:\\ProgramData",
            "PROGRAMFILES": lambda: "C:\\Program Files",
            "PROGRAMFILES(X86)": lambda: "C:\\Program Files (x86)",
            "SYSTEMROOT": lambda: "C:\\Windows",
            "TEMP": lambda: self._lookup_windows("TMP") or tempfile.gettempdir(),
            "TMP": lambda: self._lookup_windows("TEMP") or tempfile.gettempdir(),
        }

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            found = self._lookup_windows(name)
            if found:
                return found
            fallback = known.get(name.upper())
            return fallback() if fallback is not None else match.group(0)

        return _PERCENT_VAR.sub(_replace, value)

    def _lookup_windows(self, name: str) -> str | None:
        """Return the non-empty value of ``name`` matched case-insensitively.

        Args:
            name: Environment variable name.

        Returns:
            str | None: Variable value, or ``None`` when unset or empty.
        """

        wanted = name.upper()
        for key, value in self._env.items():
            if key.upper() == wanted and value:
                return value
        return None

    def _expand_posix(self, value: str) -> str:
        """Substitute ``~``, ``$VAR`` and ``${VAR}`` placeholders.

        ``$HOME`` always resolves to the configured home; ``$TMPDIR`` and
        ``$PWD`` fall back to the temp and working directories when unset.

        Args:
            value: Template using POSIX placeholder syntax.

        Returns:
            str: Template with every resolvable placeholder replaced.
        """

        expanded = self._expand_home(value)
        fallbacks: dict[str, Callable[[], str]] = {
            "HOME": lambda: self._home,
            "TMPDIR": tempfile.gettempdir,
            "PWD": lambda: self._cwd,
        }

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name == "HOME":
                return self._home
            found = self._env.get(name)
            if found:
                return found
            fallback = fallbacks.get(name)
            return fallback() if fallback is not None else match.group(0)

        expanded = _BRACED_VAR.sub(_replace, expanded)
        return _BARE_VAR.sub(_replace, expanded)

    def _expand_home(self, value: str) -> str:
        """Replace a leading ``~`` or ``~user`` naming the current user.

        Args:
            value: Template possibly starting with a tilde.

        Returns:
            str: Template with the home shortcut expanded.
        """

        if value == "~":
            return self._home
        if value.startswith("~/"):
            return posixpath.join(self._home, value[2:])
        match = _TILDE_USER.match(value)
        if match and match.group(1) == self._env.get("USER"):
            return f"{self._home}{match.group(2)}"
        return value


__all__ = ["PathExpander"]
