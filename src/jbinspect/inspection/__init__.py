# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Inspection orchestration: run context, subprocess, parsing and filtering."""

from __future__ import annotations

from .cache import ResultCache
from .filtering import apply_filter, code_matches
from .parser import ResultParser, normalize_file_path
from .runner import InspectionRunner, build_inspection_args
from .strategy import InspectionStrategy
from .tool import TOOL_NAME, InspectionTool

__all__ = [
    "InspectionRunner",
    "InspectionStrategy",
    "InspectionTool",
    "ResultCache",
    "ResultParser",
    "TOOL_NAME",
    "apply_filter",
    "build_inspection_args",
    "code_matches",
    "normalize_file_path",
]
