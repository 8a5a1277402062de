# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""MCP stdio server exposing the inspection tool, prompts and resources."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from .config import ServerConfig
from .core.logging import configure_logging
from .filesystem import TempDirectoryManager
from .inspection.tool import TOOL_DESCRIPTION, TOOL_NAME
from .services import InspectionServices, build_services

LOGGER = logging.getLogger(__name__)


def analyze_project_prompt(project_path: str, profile: str | None = None) -> str:
    """Return the ``analyze-project`` prompt text, naming ``profile`` when given."""

    suffix = f' with profile "{profile}"' if profile else ""
    return f"Please analyze the project at {project_path} using JetBrains inspections{suffix}."


def check_file_prompt(file_path: str) -> str:
    """Return the ``check-file`` prompt text."""

    return f"Check the file at {file_path} for code quality issues using JetBrains inspections."


def fix_issues_prompt(project_path: str, severity: str | None = None) -> str:
    """Return the ``fix-issues`` prompt text, naming the minimum ``severity`` when given."""

    suffix = f" with severity {severity} or higher" if severity else ""
    return f"Analyze the project at {project_path} and provide fix suggestions for issues{suffix}."


def create_server(services: InspectionServices) -> FastMCP:
    """Return a FastMCP server bound to ``services``.

    The blocking inspection pipeline runs in a worker thread so the event
    loop keeps serving other requests. Failed inspections raise
    :class:`ToolError` carrying the formatted report, which the MCP runtime
    returns as a tool result with ``isError`` set.

    Args:
        services: Collaborators built by :func:`build_services`.

    Returns:
        FastMCP: Server with the tool, prompts and resources registered.
    """

    server = FastMCP(services.config.name)

    @server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def get_jetbrains_code_inspections(
        path: Annotated[str, Field(description="File or directory path to inspect")],
    ) -> str:
        result = await asyncio.to_thread(services.tool.execute, path)
        text = services.formatter.format(result)
        if result.error is not None:
            # Surfaced to clients as a result with ``isError`` set.
            raise ToolError(text)
        return text

    @server.prompt(name="analyze-project", description="Analyze a project for code quality issues")
    def analyze_project(projectPath: str, profile: str | None = None) -> str:  # noqa: N803
        return analyze_project_prompt(projectPath, profile)

    @server.prompt(name="check-file", description="Check a specific file for issues")
    def check_file(filePath: str) -> str:  # noqa: N803
        return check_file_prompt(filePath)

    @server.prompt(name="fix-issues", description="Get suggestions to fix detected issues")
    def fix_issues(projectPath: str, severity: str | None = None) -> str:  # noqa: N803
        return fix_issues_prompt(projectPath, severity)

    @server.resource("inspection://config", name="Current Configuration", mime_type="application/json")
    def current_config() -> str:
        return services.config.model_dump_json(by_alias=True, indent=2)

    @server.resource("inspection://ides", name="Detected IDEs", mime_type="application/json")
    def detected_ides() -> str:
        ides = services.discoverer.find_available_ides()
        payload = {"detected": [ide.model_dump(mode="json", by_alias=True) for ide in ides], "count": len(ides)}
        return json.dumps(payload, indent=2)

    return server


def run_server(config: ServerConfig) -> None:
    """Serve over stdio until the client disconnects.

    Stale scratch directories from crashed runs are reaped on start and every
    directory still tracked is removed on exit.
    """

    configure_logging(debug=config.debug)
    TempDirectoryManager.reap_stale()
    services = build_services(config)
    server = create_server(services)
    LOGGER.info("starting %s %s", config.name, config.version)
    try:
        server.run(transport="stdio")
    finally:
        services.temp_manager.cleanup_all()
        LOGGER.info("server stopped")


__all__ = [
    "analyze_project_prompt",
    "check_file_prompt",
    "create_server",
    "fix_issues_prompt",
    "run_server",
]
