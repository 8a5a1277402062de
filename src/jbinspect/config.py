# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Server configuration model and loader."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    ".mcp-jetbrains.json",
    ".mcp-jetbrains.config.json",
    "mcp-jetbrains.config.json",
)

ResponseFormat = Literal["markdown", "json"]


class ConfigError(RuntimeError):
    """Raised when configuration files or environment values are invalid."""


class CacheConfig(BaseModel):
    """Settings for the opt-in in-memory result cache.

    Disabled by default so every request runs a fresh inspection.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    enabled: bool = False
    ttl: int = Field(default=3_600_000, ge=0, description="Entry lifetime in milliseconds.")
    max_size: int = Field(default=100, ge=0)


class ServerConfig(BaseModel):
    """Process configuration passed explicitly to the services that need it."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = "mcp-jetbrains-code-inspections"
    version: str = "2.0.0"
    ide_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("idePath", "ide_path", "customIDEPath"),
    )
    project_root: str | None = None
    profile_path: str | None = None
    default_timeout: int = Field(default=120_000, gt=0, description="Inspection timeout in milliseconds.")
    default_exclude: tuple[str, ...] = ("SpellCheckingInspection",)
    default_only: tuple[str, ...] = ()
    debug: bool = False
    response_format: ResponseFormat = "markdown"
    debug_output_dir: str | None = None
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("response_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        """Normalise the response format to lower case before validation."""

        return value.strip().lower() if isinstance(value, str) else value


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``, merging nested mappings key by key.

    Args:
        base: Lower-precedence settings.
        override: Higher-precedence settings.

    Returns:
        dict[str, Any]: New merged mapping; neither input is modified.
    """

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_list(raw: str) -> list[str]:
    """Return the non-blank entries of a comma-separated environment value.

    Args:
        raw: Comma-separated value such as ``"A, B,,C"``.

    Returns:
        list[str]: Stripped entries in their original order.
    """

    return [item.strip() for item in raw.split(",") if item.strip()]


def _canonical_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``payload`` keyed by snake_case field names where they are known."""

    known = {
        alias: name
        for name, field in ServerConfig.model_fields.items()
        for alias in (name, field.alias, to_camel(name))
        if alias
    }
    known["customIDEPath"] = "ide_path"
    result: dict[str, Any] = {}
    for key, value in payload.items():
        name = known.get(key, key)
        if name == "cache" and isinstance(value, Mapping):
            cache_fields = {to_camel(field): field for field in CacheConfig.model_fields}
            value = {cache_fields.get(inner, inner): item for inner, item in value.items()}
        result[name] = value
    return result


def load_config_file(cwd: Path) -> tuple[dict[str, Any], Path | None]:
    """Return the first configuration file found in ``cwd`` and its path.

    Raises:
        ConfigError: When the file exists but is not a JSON object.
    """

    for filename in CONFIG_FILENAMES:
        candidate = cwd / filename
        if not candidate.is_file():
            continue
        try:
            payload = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read {candidate}: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise ConfigError(f"{candidate} must contain a JSON object")
        LOGGER.info("loaded configuration from %s", candidate)
        return _canonical_keys(payload), candidate
    return {}, None


def config_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Return configuration overrides sourced from environment variables.

    Raises:
        ConfigError: When ``INSPECTION_TIMEOUT`` is not an integer.
    """

    overrides: dict[str, Any] = {}
    if env.get("FORCE_INSPECT_PATH"):
        overrides["ide_path"] = env["FORCE_INSPECT_PATH"]
    if env.get("FORCE_PROJECT_ROOT"):
        overrides["project_root"] = env["FORCE_PROJECT_ROOT"]
    if env.get("FORCE_PROFILE_PATH"):
        overrides["profile_path"] = env["FORCE_PROFILE_PATH"]
    if env.get("INSPECTION_TIMEOUT"):
        try:
            overrides["default_timeout"] = int(env["INSPECTION_TIMEOUT"])
        except ValueError as exc:
            raise ConfigError(f"INSPECTION_TIMEOUT must be an integer, got {env['INSPECTION_TIMEOUT']!r}") from exc
    if env.get("EXCLUDE_INSPECTIONS"):
        overrides["default_exclude"] = _parse_list(env["EXCLUDE_INSPECTIONS"])
    if env.get("ONLY_INSPECTIONS"):
        overrides["default_only"] = _parse_list(env["ONLY_INSPECTIONS"])
    if env.get("RESPONSE_FORMAT"):
        overrides["response_format"] = env["RESPONSE_FORMAT"]
    if env.get("DEBUG") == "true":
        overrides["debug"] = True
    if env.get("MCP_DEBUG_OUTPUT_DIR"):
        overrides["debug_output_dir"] = env["MCP_DEBUG_OUTPUT_DIR"]
    return overrides


def load_config(cwd: Path | None = None, env: Mapping[str, str] | None = None) -> ServerConfig:
    """Build a :class:`ServerConfig` from defaults, a config file and the environment.

    Later sources win; the nested ``cache`` object is merged key by key.

    Args:
        cwd: Directory searched for configuration files; defaults to the working directory.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        ServerConfig: Validated configuration.

    Raises:
        ConfigError: When any source holds invalid values.
    """

    base = Path.cwd() if cwd is None else Path(cwd)
    environment = os.environ if env is None else env
    file_payload, source = load_config_file(base)
    merged = _deep_merge(file_payload, config_from_env(environment))
    try:
        config = ServerConfig.model_validate(merged)
    except ValidationError as exc:
        origin = str(source) if source else "environment"
        raise ConfigError(f"Invalid configuration ({origin}): {exc}") from exc
    LOGGER.debug("configuration resolved: %s", config.model_dump())
    return config


__all__ = [
    "CONFIG_FILENAMES",
    "CacheConfig",
    "ConfigError",
    "ResponseFormat",
    "ServerConfig",
    "config_from_env",
    "load_config",
    "load_config_file",
]
