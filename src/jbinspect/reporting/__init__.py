# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render inspection results for humans or machines."""

from __future__ import annotations

from .formatters import JSONFormatter, MarkdownFormatter, ResultFormatter, build_formatter

__all__ = ["JSONFormatter", "MarkdownFormatter", "ResultFormatter", "build_formatter"]
