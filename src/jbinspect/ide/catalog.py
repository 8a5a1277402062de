# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static tables describing where JetBrains IDEs live and what they handle."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from ..models import IDECapabilities, IDEType

SUPPORTED_PLATFORMS: Final[tuple[str, ...]] = ("darwin", "linux", "win32")
UNKNOWN_IDE_NAME: Final[str] = "Unknown IDE"

_DARWIN_APPS: Final[tuple[str, ...]] = (
    "IntelliJ IDEA",
    "IntelliJ IDEA CE",
    "WebStorm",
    "PyCharm",
    "PyCharm CE",
    "Android Studio",
    "PhpStorm",
    "GoLand",
    "DataGrip",
    "Rider",
    "CLion",
    "RubyMine",
    "DataSpell",
    "RustRover",
    "AppCode",
    "Aqua",
    "Writerside",
)

# Toolbox channel directory paired with the application bundle it installs.
_DARWIN_TOOLBOX: Final[tuple[tuple[str, str], ...]] = (
    ("IDEA-U", "IntelliJ IDEA"),
    ("IDEA-C", "IntelliJ IDEA CE"),
    ("WebStorm", "WebStorm"),
    ("PyCharm-P", "PyCharm"),
    ("PyCharm-C", "PyCharm CE"),
    ("AndroidStudio", "Android Studio"),
    ("PhpStorm", "PhpStorm"),
    ("Goland", "GoLand"),
    ("datagrip", "DataGrip"),
    ("Rider", "Rider"),
    ("CLion", "CLion"),
    ("RubyMine", "RubyMine"),
    ("DataSpell", "DataSpell"),
    ("RustRover", "RustRover"),
    ("AppCode", "AppCode"),
    ("Aqua", "Aqua"),
    ("Writerside", "Writerside"),
)

_TOOLBOX_APPS: Final[tuple[str, ...]] = (
    "IDEA-U",
    "IDEA-C",
    "WebStorm",
    "PyCharm-P",
    "PyCharm-C",
    "AndroidStudio",
    "PhpStorm",
    "Goland",
    "datagrip",
    "Rider",
    "CLion",
    "RubyMine",
    "DataSpell",
    "RustRover",
    "Aqua",
    "Writerside",
)

_SNAP_PACKAGES: Final[tuple[str, ...]] = (
    "intellij-idea-ultimate",
    "intellij-idea-community",
    "webstorm",
    "pycharm-professional",
    "pycharm-community",
    "android-studio",
    "phpstorm",
    "goland",
    "datagrip",
    "rider",
    "clion",
    "rubymine",
    "dataspell",
    "rustrover",
)

_LINUX_LOCATIONS: Final[tuple[str, ...]] = ("/opt", "/usr/local/bin", "~/bin")
_LINUX_DIRS: Final[tuple[str, ...]] = (
    "idea",
    "idea-ce",
    "webstorm",
    "pycharm",
    "pycharm-ce",
    "android-studio",
    "phpstorm",
    "goland",
    "datagrip",
    "rider",
    "clion",
    "rubymine",
    "dataspell",
    "rustrover",
    "aqua",
    "writerside",
)

_FLATPAK_APPS: Final[tuple[str, ...]] = (
    "com.jetbrains.IntelliJ-IDEA-Ultimate",
    "com.jetbrains.IntelliJ-IDEA-Community",
    "com.jetbrains.WebStorm",
    "com.jetbrains.PyCharm-Professional",
    "com.jetbrains.PyCharm-Community",
    "com.jetbrains.PhpStorm",
    "com.jetbrains.GoLand",
    "com.jetbrains.DataGrip",
    "com.jetbrains.Rider",
    "com.jetbrains.CLion",
    "com.jetbrains.RubyMine",
    "com.jetbrains.DataSpell",
)

_WINDOWS_DIRS: Final[tuple[str, ...]] = (
    "IntelliJ IDEA",
    "IntelliJ IDEA Community Edition",
    "WebStorm",
    "PyCharm",
    "PyCharm Community Edition",
    "PhpStorm",
    "GoLand",
    "DataGrip",
    "Rider",
    "CLion",
    "RubyMine",
    "DataSpell",
    "RustRover",
    "Aqua",
    "Writerside",
)


def _darwin_templates() -> tuple[str, ...]:
    """Return macOS launcher templates for user, system and Toolbox installs."""

    templates = [f"~/Applications/{app}.app/Contents/bin/inspect.sh" for app in _DARWIN_APPS]
    templates.extend(f"/Applications/{app}.app/Contents/bin/inspect.sh" for app in _DARWIN_APPS)
    templates.extend(
        f"~/Library/Application Support/JetBrains/Toolbox/apps/{channel}/ch-0/*/{bundle}.app/Contents/bin/inspect.sh"
        for channel, bundle in _DARWIN_TOOLBOX
    )
    return tuple(templates)


def _linux_templates() -> tuple[str, ...]:
    """Return Linux launcher templates for Toolbox, snap, flatpak and manual installs."""

    templates = [f"~/.local/share/JetBrains/Toolbox/apps/{app}/ch-0/*/bin/inspect.sh" for app in _TOOLBOX_APPS]
    templates.extend(f"/snap/{package}/current/bin/inspect.sh" for package in _SNAP_PACKAGES)
    templates.extend(
        f"{location}/{directory}/bin/inspect.sh" for location in _LINUX_LOCATIONS for directory in _LINUX_DIRS
    )
    templates.extend(f"/var/lib/flatpak/app/{app}/current/active/files/bin/inspect.sh" for app in _FLATPAK_APPS)
    return tuple(templates)


def _windows_templates() -> tuple[str, ...]:
    """Return Windows launcher templates for Toolbox and ``Program Files`` installs."""

    templates: list[str] = []
    for app in _TOOLBOX_APPS:
        templates.append(f"%LOCALAPPDATA%\\JetBrains\\Toolbox\\apps\\{app}\\ch-0\\*\\bin\\inspect.bat")
        templates.append(f"%PROGRAMDATA%\\JetBrains\\Toolbox\\apps\\{app}\\ch-0\\*\\bin\\inspect.bat")
    for directory in _WINDOWS_DIRS:
        templates.append(f"C:\\Program Files\\JetBrains\\{directory}\\bin\\inspect.bat")
        templates.append(f"C:\\Program Files (x86)\\JetBrains\\{directory}\\bin\\inspect.bat")
    templates.append("C:\\Program Files\\Android\\Android Studio\\bin\\inspect.bat")
    templates.append("C:\\Program Files (x86)\\Android\\Android Studio\\bin\\inspect.bat")
    templates.extend(f"%USERPROFILE%\\JetBrains\\{directory}\\bin\\inspect.bat" for directory in _WINDOWS_DIRS)
    return tuple(templates)


IDE_PATH_TEMPLATES: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "darwin": _darwin_templates(),
        "linux": _linux_templates(),
        "win32": _windows_templates(),
    }
)

# Order matters: editions are listed before the family name that contains them.
IDE_NAME_PATTERNS: Final[tuple[tuple[re.Pattern[str], str], ...]] = tuple(
    (re.compile(pattern, re.IGNORECASE), name)
    for pattern, name in (
        (r"IntelliJ IDEA CE|IntelliJ[ -]IDEA[ -]Community|IDEA-C\b|idea-ce\b", "IntelliJ IDEA CE"),
        (r"IntelliJ IDEA Ultimate|IntelliJ[ -]IDEA[ -]Ultimate|IDEA-U\b", "IntelliJ IDEA Ultimate"),
        (r"IntelliJ IDEA|[\\/]idea[\\/]", "IntelliJ IDEA"),
        (r"PyCharm CE|PyCharm[ -]Community|PyCharm-C\b|pycharm-ce\b", "PyCharm CE"),
        (r"PyCharm Professional|PyCharm-P(?:rofessional)?\b", "PyCharm Professional"),
        (r"PyCharm", "PyCharm"),
        (r"WebStorm", "WebStorm"),
        (r"PhpStorm", "PhpStorm"),
        (r"GoLand", "GoLand"),
        (r"Rider", "Rider"),
        (r"CLion", "CLion"),
        (r"RubyMine", "RubyMine"),
        (r"DataGrip", "DataGrip"),
        (r"DataSpell", "DataSpell"),
        (r"AppCode", "AppCode"),
        (r"Android[ -]?Studio", "Android Studio"),
        (r"RustRover", "RustRover"),
        (r"Aqua", "Aqua"),
        (r"Writerside", "Writerside"),
    )
)

IDE_NAME_TYPES: Final[Mapping[str, IDEType]] = MappingProxyType(
    {
        "IntelliJ IDEA": IDEType.INTELLIJ_IDEA,
        "IntelliJ IDEA CE": IDEType.INTELLIJ_IDEA,
        "IntelliJ IDEA Ultimate": IDEType.INTELLIJ_IDEA,
        "WebStorm": IDEType.WEBSTORM,
        "PyCharm": IDEType.PYCHARM,
        "PyCharm CE": IDEType.PYCHARM,
        "PyCharm Professional": IDEType.PYCHARM,
        "PhpStorm": IDEType.PHPSTORM,
        "GoLand": IDEType.GOLAND,
        "Rider": IDEType.RIDER,
        "CLion": IDEType.CLION,
        "RubyMine": IDEType.RUBYMINE,
        "DataGrip": IDEType.DATAGRIP,
        "DataSpell": IDEType.DATASPELL,
        "AppCode": IDEType.APPCODE,
        "Android Studio": IDEType.ANDROID_STUDIO,
        "RustRover": IDEType.RUSTROVER,
        "Aqua": IDEType.AQUA,
        "Writerside": IDEType.WRITERSIDE,
    }
)


def _caps(languages: tuple[str, ...], extensions: tuple[str, ...], priority: int) -> IDECapabilities:
    return IDECapabilities(languages=languages, extensions=extensions, priority=priority)


IDE_CAPABILITIES: Final[Mapping[IDEType, IDECapabilities]] = MappingProxyType(
    {
        IDEType.INTELLIJ_IDEA: _caps(
            ("java", "kotlin", "scala", "groovy"),
            (".java", ".kt", ".kts", ".scala", ".groovy", ".gradle"),
            10,
        ),
        IDEType.WEBSTORM: _caps(
            ("javascript", "typescript", "html", "css"),
            (".js", ".jsx", ".ts", ".tsx", ".vue", ".html", ".css"),
            9,
        ),
        IDEType.PYCHARM: _caps(("python",), (".py", ".pyi", ".pyx"), 8),
        IDEType.PHPSTORM: _caps(("php",), (".php", ".phtml", ".blade.php"), 7),
        IDEType.GOLAND: _caps(("go",), (".go", ".mod"), 7),
        IDEType.RIDER: _caps(("csharp", "fsharp", "vb"), (".cs", ".fs", ".vb", ".csproj", ".sln"), 7),
        IDEType.CLION: _caps(("c", "cpp", "rust"), (".c", ".cpp", ".cc", ".h", ".hpp", ".rs"), 6),
        IDEType.RUBYMINE: _caps(("ruby",), (".rb", ".erb", ".rake", ".gemspec"), 6),
        IDEType.DATAGRIP: _caps(("sql",), (".sql",), 5),
        IDEType.DATASPELL: _caps(("python", "jupyter"), (".py", ".ipynb"), 5),
        IDEType.APPCODE: _caps(("swift", "objc"), (".swift", ".m", ".mm"), 5),
        IDEType.ANDROID_STUDIO: _caps(("java", "kotlin"), (".java", ".kt", ".xml"), 6),
        IDEType.RUSTROVER: _caps(("rust",), (".rs", ".toml"), 5),
        IDEType.AQUA: _caps(("java", "kotlin"), (".java", ".kt"), 4),
        IDEType.WRITERSIDE: _caps(("markdown", "xml"), (".md", ".xml"), 3),
    }
)

PROJECT_TYPE_BONUSES: Final[Mapping[str, Mapping[IDEType, int]]] = MappingProxyType(
    {
        "node": {IDEType.WEBSTORM: 30, IDEType.INTELLIJ_IDEA: 20},
        "python": {IDEType.PYCHARM: 30, IDEType.DATASPELL: 25, IDEType.INTELLIJ_IDEA: 15},
        "java": {IDEType.INTELLIJ_IDEA: 30},
        "php": {IDEType.PHPSTORM: 30, IDEType.INTELLIJ_IDEA: 15},
        "go": {IDEType.GOLAND: 30, IDEType.INTELLIJ_IDEA: 15},
        "dotnet": {IDEType.RIDER: 30, IDEType.INTELLIJ_IDEA: 10},
        "cpp": {IDEType.CLION: 30, IDEType.INTELLIJ_IDEA: 10},
        "ruby": {IDEType.RUBYMINE: 30, IDEType.INTELLIJ_IDEA: 10},
        "rust": {IDEType.RUSTROVER: 25, IDEType.CLION: 20, IDEType.INTELLIJ_IDEA: 10},
        "ios": {IDEType.APPCODE: 30, IDEType.CLION: 15},
    }
)


def ide_name_from_path(path: str) -> str:
    """Return the canonical product name for an inspection executable path."""

    for pattern, name in IDE_NAME_PATTERNS:
        if pattern.search(path):
            return name
    return UNKNOWN_IDE_NAME


def ide_type_for_name(name: str) -> IDEType:
    """Return the product type for ``name``, defaulting to IntelliJ IDEA."""

    return IDE_NAME_TYPES.get(name, IDEType.INTELLIJ_IDEA)


__all__ = [
    "IDE_CAPABILITIES",
    "IDE_NAME_PATTERNS",
    "IDE_NAME_TYPES",
    "IDE_PATH_TEMPLATES",
    "PROJECT_TYPE_BONUSES",
    "SUPPORTED_PLATFORMS",
    "UNKNOWN_IDE_NAME",
    "ide_name_from_path",
    "ide_type_for_name",
]
