# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Logging helpers exposed to the rest of the package."""

from __future__ import annotations

from .public import configure_logging, emoji, fail, get_stderr_console, info, ok, warn

__all__ = ["configure_logging", "emoji", "fail", "get_stderr_console", "info", "ok", "warn"]
