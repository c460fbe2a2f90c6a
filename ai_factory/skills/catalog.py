from pathlib import Path

from ai_factory.constants import SKILL_FILENAME, SKILLS_DIR, TEMPLATES_DIRNAME
from ai_factory.utils import list_directories


class SkillCatalog:
    """Read-only source tree of base skills and per-stack template skills."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or SKILLS_DIR

    @property
    def root(self) -> Path:
        return self._root

    @property
    def templates_dir(self) -> Path:
        return self.root / TEMPLATES_DIRNAME

    def skill_dir(self, name: str) -> Path:
        return self.root / name

    def stack_dir(self, stack: str) -> Path:
        return self.templates_dir / stack

    def template_skill_dir(self, stack: str, skill: str) -> Path:
        return self.stack_dir(stack) / skill

    def has_template_skill(self, stack: str, skill: str) -> bool:
        return (self.template_skill_dir(stack, skill) / SKILL_FILENAME).is_file()

    def list_skills(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return [name for name in list_directories(self.root) if not name.startswith("_")]

    def list_stacks(self) -> list[str]:
        if not self.templates_dir.is_dir():
            return []
        return list_directories(self.templates_dir)

    def list_stack_skills(self, stack: str) -> list[str]:
        stack_dir = self.stack_dir(stack)
        if not stack_dir.is_dir():
            return []
        return list_directories(stack_dir)
