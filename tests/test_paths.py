# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for installation path template expansion."""

from __future__ import annotations

import pytest

from jbinspect.ide.paths import PathExpander


@pytest.fixture
def posix() -> PathExpander:
    return PathExpander(
        env={"USER": "dev", "JB_HOME": "/opt/jb"},
        home="/home/dev",
        platform="linux",
        cwd="/work",
    )


@pytest.fixture
def windows() -> PathExpander:
    return PathExpander(
        env={"LocalAppData": "D:\\Users\\dev\\AppData\\Local"},
        home="C:\\Users\\dev",
        platform="win32",
        cwd="C:\\work",
    )


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("~", "/home/dev"),
        ("~/bin/idea/bin/inspect.sh", "/home/dev/bin/idea/bin/inspect.sh"),
        ("~dev/apps", "/home/dev/apps"),
        ("~other/apps", "~other/apps"),
        ("$HOME/.local/share", "/home/dev/.local/share"),
        ("${JB_HOME}/bin/inspect.sh", "/opt/jb/bin/inspect.sh"),
        ("$PWD/tools", "/work/tools"),
        ("$MISSING/tools", "$MISSING/tools"),
        ("/opt//idea/../idea/bin", "/opt/idea/bin"),
    ],
)
def test_posix_expansion(posix: PathExpander, template: str, expected: str) -> None:
    assert posix.expand(template) == expected


def test_posix_expansion_keeps_glob_wildcards(posix: PathExpander) -> None:
    template = "~/.local/share/JetBrains/Toolbox/apps/IDEA-U/ch-0/*/bin/inspect.sh"

    assert posix.expand(template) == "/home/dev/.local/share/JetBrains/Toolbox/apps/IDEA-U/ch-0/*/bin/inspect.sh"


@pytest.mark.parametrize("template", ["", "   "])
def test_blank_template_expands_to_empty_string(posix: PathExpander, template: str) -> None:
    assert posix.expand(template) == ""


def test_windows_lookup_is_case_insensitive(windows: PathExpander) -> None:
    assert windows.expand("%LOCALAPPDATA%\\JetBrains") == "D:\\Users\\dev\\AppData\\Local\\JetBrains"


def test_windows_known_variables_fall_back_to_defaults(windows: PathExpander) -> None:
    assert windows.expand("%APPDATA%\\x") == "C:\\Users\\dev\\AppData\\Roaming\\x"
    assert windows.expand("%PROGRAMDATA%\\JetBrains") == "C:\\ProgramData\\JetBrains"


def test_windows_unknown_variable_is_kept(windows: PathExpander) -> None:
    assert windows.expand("%NOPE%\\bin") == "%NOPE%\\bin"
