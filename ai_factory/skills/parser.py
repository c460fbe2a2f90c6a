"""Parse and serialize SKILL.md documents with YAML front-matter."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from ai_factory.constants import SKILL_FILENAME
from ai_factory.skills.models import Skill, SkillMetadata

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
_KNOWN_KEYS = {"name", "description", "globs", "alwaysApply", "always_apply"}


def _as_globs(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str) and value.strip():
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def split_frontmatter(text: str) -> tuple[dict[str, Any] | None, str]:
    """Return ``(front-matter, body)``; front-matter is None when absent or unreadable."""
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    try:
        raw = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        logger.debug("ignoring unreadable front-matter: %s", exc)
        return None, text
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return None, text
    return raw, text[match.end() :]


def parse_skill_text(text: str, name: str) -> Skill:
    raw, content = split_frontmatter(text)
    fm = raw or {}

    always_apply = fm.get("alwaysApply", fm.get("always_apply", False))
    metadata = SkillMetadata(
        name=str(fm.get("name", name)),
        description=str(fm.get("description", "") or ""),
        globs=_as_globs(fm.get("globs")),
        always_apply=bool(always_apply),
        extra={k: v for k, v in fm.items() if k not in _KNOWN_KEYS},
    )
    return Skill(
        name=name, metadata=metadata, content=content, has_frontmatter=raw is not None
    )


def parse_skill(path: Path) -> Skill:
    text = path.read_text(encoding="utf-8")
    name = path.parent.name if path.name == SKILL_FILENAME else path.stem
    return parse_skill_text(text, name)


def render_frontmatter(fm: dict[str, Any], body: str) -> str:
    parts: list[str] = []
    if fm:
        parts.append("---")
        parts.append(yaml.dump(fm, default_flow_style=False, sort_keys=False).rstrip())
        parts.append("---")
        parts.append("")
    parts.append(body.lstrip("\n"))
    return "\n".join(parts)


def serialize_skill(skill: Skill) -> str:
    fm: dict[str, Any] = {}
    if skill.metadata.name:
        fm["name"] = skill.metadata.name
    if skill.metadata.description:
        fm["description"] = skill.metadata.description
    if skill.metadata.globs:
        fm["globs"] = list(skill.metadata.globs)
    if skill.metadata.always_apply:
        fm["alwaysApply"] = True
    fm.update(skill.metadata.extra)
    return render_frontmatter(fm, skill.content)


def fallback_description(skill: Skill) -> str:
    """First heading or non-empty line of the body, used when front-matter has none."""
    for line in skill.content.splitlines():
        stripped = line.strip().lstrip("#").strip()
        if stripped:
            return stripped
    return f"{skill.name} skill"
