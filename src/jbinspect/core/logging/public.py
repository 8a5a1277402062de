# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support.

Everything here writes to standard error. Standard output is reserved for the
MCP stdio transport and for the formatted reports printed by the CLI.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

_NOISY_LOGGERS: Final[tuple[str, ...]] = ("asyncio", "httpcore", "httpx", "mcp", "urllib3")
_ROOT_LOGGER_NAME: Final[str] = "jbinspect"


def _stderr_is_tty() -> bool:
    """Return whether stderr is an interactive terminal, ``False`` when it is closed or replaced."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_stderr_console(*, color: bool = True, use_emoji: bool = True) -> Console:
    """Return a cached Rich console bound to standard error.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        use_emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Console writing to ``sys.stderr``.
    """

    tty = _stderr_is_tty()
    return Console(
        stderr=True,
        color_system="auto" if color and tty else None,
        no_color=not (color and tty),
        emoji=use_emoji,
        soft_wrap=True,
    )


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Install a Rich handler for the package logger.

    Args:
        debug: Enable ``DEBUG`` level output when ``True``; otherwise only
            warnings and errors are shown.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=get_stderr_console(),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)
    return logger


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool) -> None:
    """Print ``msg`` to the shared stderr console in ``style``."""

    console = get_stderr_console(use_emoji=use_emoji)
    text = Text(msg)
    text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool) -> None:
    """Emit an informational message."""

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji)


__all__ = ["configure_logging", "emoji", "fail", "get_stderr_console", "info", "ok", "warn"]
