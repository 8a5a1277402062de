# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pick the best-suited IDE for a target file and project."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import Final

from ..models import IDE
from ..project.classifier import ProjectClassifier
from .catalog import IDE_CAPABILITIES, PROJECT_TYPE_BONUSES
from .discovery import IDEDiscoverer

LOGGER = logging.getLogger(__name__)

EXTENSION_MATCH_SCORE: Final[int] = 50
EDITION_BONUS: Final[int] = 5
_EDITION_MARKERS: Final[tuple[str, ...]] = ("Ultimate", "Professional")


def score_ide(ide: IDE, extension: str, project_type: str | None) -> int:
    """Return the suitability score of ``ide`` for a file and project type.

    Args:
        ide: Candidate IDE.
        extension: Lower-cased extension of the target including the dot.
        project_type: Ecosystem tag reported by the project classifier.

    Returns:
        int: Priority times ten, plus the extension, ecosystem and edition bonuses.
    """

    capabilities = IDE_CAPABILITIES.get(ide.type)
    if capabilities is None:
        return 0
    score = capabilities.priority * 10
    if extension and extension in capabilities.extensions:
        score += EXTENSION_MATCH_SCORE
    if project_type:
        score += PROJECT_TYPE_BONUSES.get(project_type, {}).get(ide.type, 0)
    if any(marker in ide.name for marker in _EDITION_MARKERS):
        score += EDITION_BONUS
    return score


def pick_best(ides: Sequence[IDE], target_path: str, project_type: str | None) -> IDE | None:
    """Return the highest scoring IDE; the first one wins on ties."""

    extension = os.path.splitext(target_path)[1].lower()
    best: IDE | None = None
    best_score = -1
    for ide in ides:
        score = score_ide(ide, extension, project_type)
        if score > best_score:
            best, best_score = ide, score
    if best is not None:
        LOGGER.info("selected IDE %s (score: %d)", best.name, best_score)
    return best


class IDESelector:
    """Combine discovery and project classification to choose an IDE."""

    def __init__(self, discoverer: IDEDiscoverer, classifier: ProjectClassifier) -> None:
        """Initialise the selector.

        Args:
            discoverer: Source of installed IDEs.
            classifier: Classifier applied to the project root.
        """

        self._discoverer = discoverer
        self._classifier = classifier

    def select_for_path(self, target_path: str, project_root: str) -> IDE | None:
        """Return the IDE best suited to ``target_path`` or ``None`` if none is installed."""

        ides = self._discoverer.find_available_ides()
        if not ides:
            LOGGER.warning("no JetBrains IDEs found")
            return None
        project_type = self._classifier.classify(project_root)
        return pick_best(ides, target_path, project_type)


__all__ = ["EDITION_BONUS", "EXTENSION_MATCH_SCORE", "IDESelector", "pick_best", "score_ide"]
