from pathlib import Path


class AiFactoryError(Exception):
    """Base user-facing application error."""


class FactoryFileError(AiFactoryError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingSkillFileError(FactoryFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="SKILL.md not found")


class InvalidJsonFormatError(FactoryFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(FactoryFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class UnknownAgentError(AiFactoryError, KeyError):
    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Unknown agent: {agent_id}")

    def __str__(self) -> str:
        return f"Unknown agent: {self.agent_id}"
