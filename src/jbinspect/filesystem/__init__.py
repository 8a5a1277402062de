# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers for per-run scratch directories."""

from __future__ import annotations

from .temp import DEBUG_COPY_DIRNAME, DEFAULT_MAX_AGE_SECONDS, TEMP_PREFIX, TempDirectoryManager

__all__ = ["DEBUG_COPY_DIRNAME", "DEFAULT_MAX_AGE_SECONDS", "TEMP_PREFIX", "TempDirectoryManager"]
