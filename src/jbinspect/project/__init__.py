# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project classification and root discovery."""

from __future__ import annotations

from .classifier import ProjectClassifier, language_for_file
from .root import ProjectRootLocator

__all__ = ["ProjectClassifier", "ProjectRootLocator", "language_for_file"]
