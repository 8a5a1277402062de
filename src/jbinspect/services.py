# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Construct the inspection collaborators from a :class:`ServerConfig`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import ServerConfig
from .filesystem import TempDirectoryManager
from .ide import IDEDiscoverer, IDESelector, VersionResolver
from .inspection import InspectionStrategy, InspectionTool, ResultCache, ResultParser
from .project import ProjectClassifier, ProjectRootLocator
from .reporting import ResultFormatter, build_formatter


@dataclass(slots=True)
class InspectionServices:
    """Concrete collaborators shared by the MCP server and the CLI."""

    config: ServerConfig
    temp_manager: TempDirectoryManager
    discoverer: IDEDiscoverer
    classifier: ProjectClassifier
    selector: IDESelector
    tool: InspectionTool
    formatter: ResultFormatter


def build_services(
    config: ServerConfig,
    *,
    platform: str | None = None,
    temp_root: Path | None = None,
) -> InspectionServices:
    """Wire every collaborator explicitly from ``config``.

    Args:
        config: Loaded server configuration.
        platform: Override of the host platform used for IDE discovery.
        temp_root: Override of the directory receiving scratch directories.

    Returns:
        InspectionServices: Ready-to-use services.

    Raises:
        InspectionError: If the host platform is not supported.
    """

    versions = VersionResolver()
    temp_manager = TempDirectoryManager(
        temp_root=temp_root,
        debug_output_dir=Path(config.debug_output_dir) if config.debug_output_dir else None,
    )
    discoverer = IDEDiscoverer(platform=platform, version_resolver=versions)
    classifier = ProjectClassifier()
    selector = IDESelector(discoverer, classifier)
    strategy = InspectionStrategy(
        selector=selector,
        root_locator=ProjectRootLocator(),
        temp_manager=temp_manager,
        version_resolver=versions,
        default_timeout_ms=config.default_timeout,
    )
    tool = InspectionTool(
        strategy=strategy,
        config=config,
        parser=ResultParser(),
        cache=ResultCache.from_config(config.cache),
    )
    return InspectionServices(
        config=config,
        temp_manager=temp_manager,
        discoverer=discoverer,
        classifier=classifier,
        selector=selector,
        tool=tool,
        formatter=build_formatter(config.response_format),
    )


__all__ = ["InspectionServices", "build_services"]
