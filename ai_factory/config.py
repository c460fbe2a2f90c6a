"""Load, migrate and persist the project's ``.ai-factory.json``.

Agent resolution here is deliberately forgiving: an unknown or missing agent
id falls back to the default agent so that loading a hand-edited or outdated
file never fails. Installer and MCP code paths look agents up strictly and
raise ``UnknownAgentError`` instead; keep the two entry points separate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ai_factory import __version__
from ai_factory.agents import get_agent_config, is_known_agent
from ai_factory.constants import CONFIG_FILENAME, DEFAULT_AGENT_ID
from ai_factory.errors import InvalidConfigSchemaError, InvalidJsonFormatError
from ai_factory.models import AiFactoryConfig, McpOptions
from ai_factory.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)

CURRENT_VERSION: str = __version__


def get_current_version() -> str:
    return CURRENT_VERSION


def get_config_path(project_dir: Path) -> Path:
    return project_dir / CONFIG_FILENAME


def resolve_agent_id(agent_id: Any) -> str:
    if not is_known_agent(agent_id):
        if agent_id:
            logger.debug("unknown agent %r in config, using %s", agent_id, DEFAULT_AGENT_ID)
        return DEFAULT_AGENT_ID
    return get_agent_config(agent_id).id.value


def create_default_config(agent_id: str = DEFAULT_AGENT_ID) -> AiFactoryConfig:
    resolved = resolve_agent_id(agent_id)
    agent = get_agent_config(resolved)
    return AiFactoryConfig(
        version=CURRENT_VERSION,
        agent=resolved,
        skills_dir=agent.skills_dir,
        installed_skills=[],
        mcp=McpOptions(),
    )


def migrate_config(config: Mapping[str, Any] | None) -> AiFactoryConfig:
    """Build a complete config from any partial or outdated payload.

    Known fields present in ``config`` override the agent defaults, ``mcp``
    flags are merged one by one, unknown keys are dropped and ``version`` is
    always the running tool's version.
    """
    if not isinstance(config, Mapping):
        config = {}

    defaults = create_default_config(resolve_agent_id(config.get("agent")))

    skills_dir = config.get("skillsDir")
    if not isinstance(skills_dir, str) or not skills_dir:
        skills_dir = defaults.skills_dir

    installed = config.get("installedSkills")
    if isinstance(installed, list):
        installed_skills = [item for item in installed if isinstance(item, str)]
    else:
        installed_skills = list(defaults.installed_skills)

    mcp = config.get("mcp")
    mcp_options = McpOptions.from_mapping(
        mcp if isinstance(mcp, Mapping) else {}, defaults=defaults.mcp
    )

    return AiFactoryConfig(
        version=CURRENT_VERSION,
        agent=defaults.agent,
        skills_dir=skills_dir,
        installed_skills=installed_skills,
        mcp=mcp_options,
    )


def load_config(project_dir: Path) -> AiFactoryConfig | None:
    """Return the migrated config, or None when the project was never initialized."""
    path = get_config_path(project_dir)
    payload, error = read_json_safe(path)
    if error is not None:
        raise InvalidJsonFormatError(path, error)
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(path, "must be a JSON object")
    return migrate_config(payload)


def save_config(project_dir: Path, config: AiFactoryConfig) -> None:
    write_json(get_config_path(project_dir), config.as_dict())


def config_exists(project_dir: Path) -> bool:
    return get_config_path(project_dir).is_file()
