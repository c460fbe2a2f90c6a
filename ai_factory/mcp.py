"""Merge bundled MCP server templates into an agent's settings file."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, ClassVar, Mapping

from ai_factory.agents import McpFormat, get_agent_config
from ai_factory.constants import DEFAULT_AGENT_ID, MCP_TEMPLATES_DIR
from ai_factory.errors import InvalidConfigSchemaError, InvalidJsonFormatError
from ai_factory.models import MCP_OPTION_KEYS, McpOptions
from ai_factory.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


MCP_SERVER_FILES: dict[str, str] = {
    "github": "github.json",
    "filesystem": "filesystem.json",
    "postgres": "postgres.json",
    "chromeDevtools": "chrome-devtools.json",
}

MCP_INSTRUCTIONS: dict[str, str] = {
    "github": (
        "GitHub MCP: Set GITHUB_TOKEN environment variable with your GitHub "
        "personal access token"
    ),
    "filesystem": (
        "Filesystem MCP: No additional configuration needed. Server provides "
        "file access tools."
    ),
    "postgres": (
        "Postgres MCP: Set DATABASE_URL environment variable with your "
        "PostgreSQL connection string"
    ),
    "chromeDevtools": (
        "Chrome Devtools MCP: No additional configuration needed. Server lets "
        "your coding agent control and inspect a live Chrome browser."
    ),
}


class IMcpSettingsMapper(ABC):
    SERVERS_KEY: ClassVar[str]

    @abstractmethod
    def from_template(self, template: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def merge(
        self, settings: dict[str, Any], servers: list[tuple[str, dict[str, Any]]]
    ) -> dict[str, Any]:
        merged = deepcopy(settings)
        section = merged.get(self.SERVERS_KEY)
        if not isinstance(section, dict):
            section = {}
        for name, template in servers:
            section[name] = self.from_template(template)
        merged[self.SERVERS_KEY] = section
        return merged


class StandardMcpMapper(IMcpSettingsMapper):
    SERVERS_KEY = "mcpServers"

    def from_template(self, template: dict[str, Any]) -> dict[str, Any]:
        return deepcopy(template)


class OpenCodeMcpMapper(IMcpSettingsMapper):
    SERVERS_KEY = "mcp"

    def from_template(self, template: dict[str, Any]) -> dict[str, Any]:
        return to_opencode_format(template)


MCP_MAPPERS: dict[McpFormat, type[IMcpSettingsMapper]] = {
    McpFormat.STANDARD: StandardMcpMapper,
    McpFormat.OPENCODE: OpenCodeMcpMapper,
}


def to_opencode_format(template: Mapping[str, Any]) -> dict[str, Any]:
    args = template.get("args") or []
    out: dict[str, Any] = {
        "type": "local",
        "command": [template["command"], *[str(arg) for arg in args]],
    }
    if "env" in template:
        out["environment"] = deepcopy(dict(template["env"]))
    return out


def load_server_templates(
    options: McpOptions, templates_dir: Path | None = None
) -> list[tuple[str, dict[str, Any]]]:
    """Load templates for enabled flags, skipping any that are not bundled."""
    root = templates_dir or MCP_TEMPLATES_DIR
    enabled = options.as_dict()
    selected: list[tuple[str, dict[str, Any]]] = []
    for key in MCP_OPTION_KEYS:
        if not enabled.get(key):
            continue
        path = root / MCP_SERVER_FILES[key]
        template, error = read_json_safe(path)
        if error is not None:
            logger.warning('Could not read MCP template "%s": %s', key, error)
            continue
        if not isinstance(template, dict) or not isinstance(template.get("command"), str):
            logger.debug("no usable MCP template for %s at %s", key, path)
            continue
        selected.append((key, template))
    return selected


def _load_settings(path: Path) -> dict[str, Any]:
    payload, error = read_json_safe(path)
    if error is not None:
        raise InvalidJsonFormatError(path, error)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(path, "must be a JSON object")
    return payload


def configure_mcp(
    project_dir: Path,
    options: McpOptions | Mapping[str, Any],
    agent_id: str = DEFAULT_AGENT_ID,
    templates_dir: Path | None = None,
) -> list[str]:
    """Add the selected MCP servers to the agent's settings file.

    Returns the configured server keys. Agents without MCP support and calls
    that select nothing leave the filesystem untouched.
    """
    agent = get_agent_config(agent_id)
    if not agent.mcp_enabled:
        return []

    if not isinstance(options, McpOptions):
        options = McpOptions.from_mapping(options)

    selected = load_server_templates(options, templates_dir)
    if not selected:
        return []

    settings_path = project_dir / str(agent.settings_file)
    mapper = MCP_MAPPERS[agent.mcp_format]()
    settings = mapper.merge(_load_settings(settings_path), selected)
    write_json(settings_path, settings)

    configured = [key for key, _ in selected]
    logger.debug("configured MCP servers %s in %s", configured, settings_path)
    return configured


def get_mcp_instructions(servers: list[str]) -> list[str]:
    return [MCP_INSTRUCTIONS[key] for key in MCP_OPTION_KEYS if key in servers]
