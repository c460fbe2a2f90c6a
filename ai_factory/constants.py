from pathlib import Path
from typing import Final


CONFIG_FILENAME: Final[str] = ".ai-factory.json"
SKILL_FILENAME: Final[str] = "SKILL.md"
SKILL_INDEX_FILENAME: Final[str] = "INDEX.md"
TEMPLATES_DIRNAME: Final[str] = "_templates"

DEFAULT_AGENT_ID: Final[str] = "claude"

RESOURCES_DIR: Final[Path] = Path(__file__).resolve().parent / "resources"
SKILLS_DIR: Final[Path] = RESOURCES_DIR / "skills"
MCP_DIR: Final[Path] = RESOURCES_DIR / "mcp"
MCP_TEMPLATES_DIR: Final[Path] = MCP_DIR / "templates"

TEMPLATE_SUFFIXES: Final[tuple[str, ...]] = (".md", ".mdc")
