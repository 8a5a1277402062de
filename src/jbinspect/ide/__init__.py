# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""IDE discovery, catalog and selection."""

from __future__ import annotations

from .discovery import IDEDiscoverer, VersionResolver
from .paths import PathExpander
from .selection import IDESelector, pick_best, score_ide

__all__ = ["IDEDiscoverer", "IDESelector", "PathExpander", "VersionResolver", "pick_best", "score_ide"]
