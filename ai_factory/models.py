from dataclasses import dataclass, field
from typing import Any, Mapping


MCP_OPTION_KEYS: tuple[str, ...] = ("github", "filesystem", "postgres", "chromeDevtools")


@dataclass
class McpOptions:
    github: bool = False
    filesystem: bool = False
    postgres: bool = False
    chrome_devtools: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {
            "github": self.github,
            "filesystem": self.filesystem,
            "postgres": self.postgres,
            "chromeDevtools": self.chrome_devtools,
        }

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], defaults: "McpOptions | None" = None
    ) -> "McpOptions":
        """Overlay known flags from ``payload`` onto ``defaults`` one key at a time."""
        merged = (defaults or cls()).as_dict()
        for key in MCP_OPTION_KEYS:
            if isinstance(payload.get(key), bool):
                merged[key] = payload[key]
        return cls(
            github=merged["github"],
            filesystem=merged["filesystem"],
            postgres=merged["postgres"],
            chrome_devtools=merged["chromeDevtools"],
        )

    def selected(self) -> list[str]:
        return [key for key, enabled in self.as_dict().items() if enabled]


@dataclass
class AiFactoryConfig:
    version: str
    agent: str
    skills_dir: str
    installed_skills: list[str] = field(default_factory=list)
    mcp: McpOptions = field(default_factory=McpOptions)

    @property
    def custom_skills(self) -> list[str]:
        return [key for key in self.installed_skills if "/" in key]

    def as_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "agent": self.agent,
            "skillsDir": self.skills_dir,
            "installedSkills": list(self.installed_skills),
            "mcp": self.mcp.as_dict(),
        }
