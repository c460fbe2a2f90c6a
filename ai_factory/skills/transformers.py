"""Per-agent skill transformers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from ai_factory.agents import AgentId, AgentProfile, SkillLayout, get_agent_config
from ai_factory.constants import SKILL_FILENAME, SKILL_INDEX_FILENAME
from ai_factory.skills.models import TransformResult
from ai_factory.skills.parser import (
    fallback_description,
    parse_skill,
    parse_skill_text,
    render_frontmatter,
)
from ai_factory.utils import slugify, write_text

logger = logging.getLogger(__name__)


class ISkillTransformer(ABC):
    LAYOUT: ClassVar[SkillLayout] = SkillLayout.DIRECTORY

    def __init__(self, agent: AgentProfile) -> None:
        self.agent = agent

    @abstractmethod
    def transform(self, skill_name: str, content: str) -> TransformResult:
        """Return the agent-specific representation of one skill."""

    def post_install(self, project_dir: Path, skills_dir: str) -> None:
        """Agent-wide side effects run once per batch installed into ``skills_dir``."""


class DirectorySkillTransformer(ISkillTransformer):
    """Canonical layout: the skill directory is copied as-is."""

    def transform(self, skill_name: str, content: str) -> TransformResult:
        return TransformResult(flat=False, target_dir=skill_name, content=content)


class OpenCodeSkillTransformer(DirectorySkillTransformer):
    """OpenCode requires ``name`` to match the directory and a description."""

    def transform(self, skill_name: str, content: str) -> TransformResult:
        skill = parse_skill_text(content, skill_name)
        expected_name = slugify(skill_name)
        if (
            skill.has_frontmatter
            and skill.metadata.name == expected_name
            and skill.metadata.description
        ):
            return TransformResult(flat=False, target_dir=skill_name, content=content)

        fm: dict[str, Any] = {
            "name": expected_name,
            "description": skill.metadata.description or fallback_description(skill),
        }
        if skill.metadata.globs:
            fm["globs"] = list(skill.metadata.globs)
        fm.update(skill.metadata.extra)
        return TransformResult(
            flat=False,
            target_dir=skill_name,
            content=render_frontmatter(fm, skill.content),
        )


class IndexedSkillTransformer(DirectorySkillTransformer):
    """Directory layout plus an ``INDEX.md`` the agent can be pointed at."""

    def post_install(self, project_dir: Path, skills_dir: str) -> None:
        skills_root = project_dir / skills_dir
        lines = ["# Skills", ""]
        entries: list[str] = []
        if skills_root.is_dir():
            for entry in sorted(skills_root.iterdir()):
                skill_file = entry / SKILL_FILENAME
                if not skill_file.is_file():
                    continue
                try:
                    skill = parse_skill(skill_file)
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning('Could not index skill "%s": %s', entry.name, exc)
                    continue
                description = skill.metadata.description or fallback_description(skill)
                entries.append(
                    f"- [{entry.name}]({entry.name}/{SKILL_FILENAME}): {description}"
                )
        lines.extend(entries or ["_No skills installed._"])
        write_text(skills_root / SKILL_INDEX_FILENAME, "\n".join(lines) + "\n")
        logger.debug("wrote skill index with %s entries", len(entries))


class FlatSkillTransformer(ISkillTransformer):
    """Single-file layout: one rendered document per skill."""

    LAYOUT = SkillLayout.FLAT
    TARGET_DIR: ClassVar[str] = "rules"
    EXTENSION: ClassVar[str] = ".md"

    def target_name(self, skill_name: str) -> str:
        return f"{slugify(skill_name)}{self.EXTENSION}"

    def frontmatter(self, description: str, globs: list[str], always_apply: bool) -> dict[str, Any]:
        return {"description": description}

    def transform(self, skill_name: str, content: str) -> TransformResult:
        skill = parse_skill_text(content, skill_name)
        fm = self.frontmatter(
            skill.metadata.description or fallback_description(skill),
            list(skill.metadata.globs),
            skill.metadata.always_apply,
        )
        return TransformResult(
            flat=True,
            target_dir=self.TARGET_DIR,
            target_name=self.target_name(skill_name),
            content=render_frontmatter(fm, skill.content),
        )


class CursorSkillTransformer(FlatSkillTransformer):
    """Cursor ``.mdc`` rules with camelCase front-matter."""

    EXTENSION = ".mdc"

    def frontmatter(self, description: str, globs: list[str], always_apply: bool) -> dict[str, Any]:
        fm: dict[str, Any] = {"description": description}
        if globs:
            fm["globs"] = globs
        fm["alwaysApply"] = always_apply
        return fm


class WindsurfSkillTransformer(FlatSkillTransformer):
    def frontmatter(self, description: str, globs: list[str], always_apply: bool) -> dict[str, Any]:
        if always_apply:
            return {"trigger": "always_on", "description": description}
        if globs:
            return {"trigger": "glob", "globs": ",".join(globs), "description": description}
        return {"trigger": "model_decision", "description": description}


TRANSFORMERS: dict[AgentId, type[ISkillTransformer]] = {
    AgentId.CLAUDE: DirectorySkillTransformer,
    AgentId.CURSOR: CursorSkillTransformer,
    AgentId.WINDSURF: WindsurfSkillTransformer,
    AgentId.OPENCODE: OpenCodeSkillTransformer,
    AgentId.CODEX: IndexedSkillTransformer,
    AgentId.GEMINI: IndexedSkillTransformer,
}


def get_transformer(agent_id: AgentId | str) -> ISkillTransformer:
    agent = get_agent_config(agent_id)
    return TRANSFORMERS[agent.id](agent)
