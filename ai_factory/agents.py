"""Static registry of supported coding agents and their conventions."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ai_factory.errors import UnknownAgentError


class AgentId(str, Enum):
    CLAUDE = "claude"
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    OPENCODE = "opencode"
    CODEX = "codex"
    GEMINI = "gemini"


class SkillLayout(str, Enum):
    DIRECTORY = "directory"
    FLAT = "flat"


class McpFormat(str, Enum):
    STANDARD = "standard"
    OPENCODE = "opencode"


@dataclass(frozen=True)
class AgentProfile:
    id: AgentId
    label: str
    config_dir: str
    skills_dir: str
    settings_file: str | None
    supports_mcp: bool
    skill_layout: SkillLayout = SkillLayout.DIRECTORY
    mcp_format: McpFormat = McpFormat.STANDARD
    template_vars: Mapping[str, str] = field(default_factory=dict)

    @property
    def mcp_enabled(self) -> bool:
        return self.supports_mcp and bool(self.settings_file)


def _vars(**values: str) -> Mapping[str, str]:
    return MappingProxyType(dict(values))


AGENT_CATALOG: dict[AgentId, AgentProfile] = {
    AgentId.CLAUDE: AgentProfile(
        id=AgentId.CLAUDE,
        label="Claude Code",
        config_dir=".claude",
        skills_dir=".claude/skills",
        settings_file=".mcp.json",
        supports_mcp=True,
        template_vars=_vars(
            agent_name="Claude Code",
            instructions_file="CLAUDE.md",
            skill_invocation="/",
        ),
    ),
    AgentId.CURSOR: AgentProfile(
        id=AgentId.CURSOR,
        label="Cursor",
        config_dir=".cursor",
        skills_dir=".cursor/rules",
        settings_file=".cursor/mcp.json",
        supports_mcp=True,
        skill_layout=SkillLayout.FLAT,
        template_vars=_vars(
            agent_name="Cursor",
            instructions_file="AGENTS.md",
            skill_invocation="@",
        ),
    ),
    AgentId.WINDSURF: AgentProfile(
        id=AgentId.WINDSURF,
        label="Windsurf",
        config_dir=".windsurf",
        skills_dir=".windsurf/rules",
        settings_file=None,
        supports_mcp=False,
        skill_layout=SkillLayout.FLAT,
        template_vars=_vars(
            agent_name="Windsurf",
            instructions_file="AGENTS.md",
            skill_invocation="@",
        ),
    ),
    AgentId.OPENCODE: AgentProfile(
        id=AgentId.OPENCODE,
        label="OpenCode",
        config_dir=".opencode",
        skills_dir=".opencode/skill",
        settings_file="opencode.json",
        supports_mcp=True,
        mcp_format=McpFormat.OPENCODE,
        template_vars=_vars(
            agent_name="OpenCode",
            instructions_file="AGENTS.md",
            skill_invocation="/",
        ),
    ),
    AgentId.CODEX: AgentProfile(
        id=AgentId.CODEX,
        label="Codex",
        config_dir=".codex",
        skills_dir=".codex/skills",
        settings_file=None,
        supports_mcp=False,
        template_vars=_vars(
            agent_name="Codex",
            instructions_file="AGENTS.md",
            skill_invocation="$",
        ),
    ),
    AgentId.GEMINI: AgentProfile(
        id=AgentId.GEMINI,
        label="Gemini CLI",
        config_dir=".gemini",
        skills_dir=".gemini/skills",
        settings_file=".gemini/settings.json",
        supports_mcp=True,
        template_vars=_vars(
            agent_name="Gemini CLI",
            instructions_file="GEMINI.md",
            skill_invocation="/",
        ),
    ),
}


def get_agent_config(agent: AgentId | str) -> AgentProfile:
    """Look up an agent profile, raising ``UnknownAgentError`` for unknown ids."""
    try:
        agent_id = agent if isinstance(agent, AgentId) else AgentId(str(agent).lower())
    except ValueError:
        raise UnknownAgentError(str(agent)) from None
    return AGENT_CATALOG[agent_id]


def agent_ids() -> list[str]:
    return [agent_id.value for agent_id in AgentId]


def is_known_agent(agent: object) -> bool:
    return isinstance(agent, str) and agent.lower() in agent_ids()
