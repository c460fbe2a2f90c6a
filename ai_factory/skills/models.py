"""Skill data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SkillMetadata:
    name: str = ""
    description: str = ""
    globs: list[str] = field(default_factory=list)
    always_apply: bool = False
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Skill:
    name: str
    metadata: SkillMetadata
    content: str
    has_frontmatter: bool = False


@dataclass(frozen=True)
class TransformResult:
    """Agent-specific representation of one skill.

    Flat results are written as a single ``target_name`` file inside
    ``target_dir``; directory results copy the whole source tree into
    ``target_dir`` and use ``content`` for ``SKILL.md``.
    """

    flat: bool
    target_dir: str
    content: str
    target_name: str | None = None
