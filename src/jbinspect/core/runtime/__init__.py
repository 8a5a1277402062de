# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution helpers."""

from __future__ import annotations

from .process import ProcessOutcome, run_command, spawn_with_timeout

__all__ = ["ProcessOutcome", "run_command", "spawn_with_timeout"]
