# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..core.logging import configure_logging
from ..errors import InspectionError
from ..filesystem import TempDirectoryManager
from ..ide import pick_best, score_ide
from ..inspection.tool import filter_spec_from_config
from ..models import DiagnosticFilterSpec
from ..reporting import build_formatter
from ..server import run_server
from ..services import build_services
from ..severity import Severity, coerce_severity
from .shared import CLIError, CLILogger, load_cli_config
from .typer_ext import create_typer

SECONDS_PER_HOUR = 3600


class OutputFormat(str, Enum):
    """Report formats accepted by ``inspect``."""

    MARKDOWN = "markdown"
    JSON = "json"


app = create_typer(
    name="jbinspect",
    help="Run JetBrains IDE code inspections and serve them over MCP.",
    no_args_is_help=True,
    add_completion=False,
)

DebugOption = Annotated[bool, typer.Option("--debug", help="Enable debug logging on stderr.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI messages.")]


def _coerce_severities(values: list[str] | None) -> tuple[Severity, ...]:
    """Return ``values`` as severities, rejecting unknown names as a bad parameter.

    Args:
        values: Raw ``--severity`` option values.

    Returns:
        tuple[Severity, ...]: Parsed severities, empty when none were given.

    Raises:
        typer.BadParameter: If any value is not a known severity.
    """

    try:
        return tuple(coerce_severity(value) for value in values or ())
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--severity") from exc


@app.command("serve")
def serve_command(debug: DebugOption = False) -> None:
    """Serve the inspection tool over the MCP stdio transport."""

    try:
        config = load_cli_config(debug=debug)
    except CLIError as exc:
        CLILogger(use_emoji=True).fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    try:
        run_server(config)
    except InspectionError as exc:
        CLILogger(use_emoji=True).fail(exc.message)
        raise typer.Exit(code=1) from exc


@app.command("inspect")
def inspect_command(
    path: Annotated[Path, typer.Argument(help="File or directory to inspect.")],
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", case_sensitive=False, help="Report format; defaults to the configured one."),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", min=1, help="Inspection timeout in milliseconds."),
    ] = None,
    only: Annotated[
        list[str] | None,
        typer.Option("--only", help="Keep only these inspection codes (repeatable, '*' wildcards)."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Drop these inspection codes (repeatable, '*' wildcards)."),
    ] = None,
    severity: Annotated[
        list[str] | None,
        typer.Option("--severity", help="Keep only these severities: error, warning or info (repeatable)."),
    ] = None,
    debug: DebugOption = False,
    use_emoji: EmojiOption = True,
) -> None:
    """Inspect PATH once and print the report to stdout."""

    logger = CLILogger(use_emoji=use_emoji)
    severities = _coerce_severities(severity)
    try:
        config = load_cli_config(debug=debug)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    configure_logging(debug=config.debug)

    defaults = filter_spec_from_config(config)
    filter_spec = DiagnosticFilterSpec(
        exclude=tuple(exclude) if exclude else defaults.exclude,
        only=tuple(only) if only else defaults.only,
        severities=severities,
    )
    try:
        services = build_services(config)
    except InspectionError as exc:
        logger.fail(exc.message)
        raise typer.Exit(code=1) from exc

    formatter = build_formatter(output_format.value) if output_format else services.formatter
    try:
        result = services.tool.execute(str(path), filter_spec=filter_spec, timeout_ms=timeout)
    finally:
        services.temp_manager.cleanup_all()
    typer.echo(formatter.format(result))
    if result.error is not None:
        raise typer.Exit(code=1)


@app.command("ides")
def ides_command(
    target: Annotated[
        Path | None,
        typer.Option("--for", help="Score every detected IDE against this file or directory."),
    ] = None,
    debug: DebugOption = False,
    use_emoji: EmojiOption = True,
) -> None:
    """List the JetBrains IDEs detected on this machine."""

    logger = CLILogger(use_emoji=use_emoji)
    try:
        config = load_cli_config(debug=debug)
        configure_logging(debug=config.debug)
        services = build_services(config)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except InspectionError as exc:
        logger.fail(exc.message)
        raise typer.Exit(code=1) from exc

    ides = services.discoverer.find_available_ides()
    if not ides:
        logger.warn("No JetBrains IDEs found")
        raise typer.Exit(code=1)

    table = Table(title="Detected JetBrains IDEs")
    for column in ("Name", "Type", "Version", "Path"):
        table.add_column(column)
    best_name: str | None = None
    extension = ""
    project_type: str | None = None
    if target is not None:
        resolved = target.expanduser().resolve()
        project_type = services.classifier.classify(resolved if resolved.is_dir() else resolved.parent)
        extension = resolved.suffix.lower()
        logger.info(f"Scoring for project type: {project_type or 'unknown'}")
        table.add_column("Score", justify="right")
        best = pick_best(ides, str(resolved), project_type)
        best_name = best.name if best else None
    for ide in ides:
        row = [ide.name, ide.type.value, ide.version or "-", ide.path]
        if target is not None:
            row.append(str(score_ide(ide, extension, project_type)))
        table.add_row(*row, style="bold green" if ide.name == best_name else None)
    Console(emoji=use_emoji).print(table)
    if best_name:
        logger.ok(f"Best match: {best_name}")


@app.command("clean-temp")
def clean_temp_command(
    max_age_hours: Annotated[
        float,
        typer.Option("--max-age-hours", min=0, help="Remove scratch directories older than this many hours."),
    ] = 24.0,
    use_emoji: EmojiOption = True,
) -> None:
    """Remove stale inspection scratch directories from the temp dir."""

    removed = TempDirectoryManager.reap_stale(max_age_hours * SECONDS_PER_HOUR)
    CLILogger(use_emoji=use_emoji).ok(f"Removed {removed} stale inspection director{'y' if removed == 1 else 'ies'}")


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["OutputFormat", "app", "main"]
