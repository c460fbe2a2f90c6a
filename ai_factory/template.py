"""Render ``{{var}}`` placeholders with agent-derived values."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Mapping

from ai_factory.agents import AgentProfile
from ai_factory.constants import TEMPLATE_SUFFIXES
from ai_factory.utils import write_text

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def build_template_vars(agent: AgentProfile) -> dict[str, str]:
    variables = {
        "agent": agent.id.value,
        "agent_label": agent.label,
        "config_dir": agent.config_dir,
        "skills_dir": agent.skills_dir,
        "settings_file": agent.settings_file or "",
    }
    variables.update(agent.template_vars)
    return variables


def process_template(content: str, variables: Mapping[str, str]) -> str:
    """Substitute known placeholders; unknown ones are left verbatim."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, content)


def process_skill_templates(skill_dir: Path, agent: AgentProfile) -> list[Path]:
    """Render every markdown file under ``skill_dir`` in place.

    Returns the files that were rewritten.
    """
    variables = build_template_vars(agent)
    rewritten: list[Path] = []
    for path in sorted(skill_dir.rglob("*")):
        if not path.is_file() or path.suffix not in TEMPLATE_SUFFIXES:
            continue
        original = path.read_text(encoding="utf-8")
        rendered = process_template(original, variables)
        if rendered != original:
            write_text(path, rendered)
            rewritten.append(path)
    logger.debug("rendered %s template file(s) under %s", len(rewritten), skill_dir)
    return rewritten
