from rich.console import Console

from ai_factory.agents import AgentProfile
from ai_factory.models import AiFactoryConfig
from ai_factory.tui.enums import UIStyle
from ai_factory.tui.sections import UISection
from ai_factory.tui.tables import AgentsTable, CatalogTable, SummaryTable


class FactoryConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_result(
        self,
        config: AiFactoryConfig,
        mode: str,
        skills: list[str],
        servers: list[str] | None = None,
        instructions: list[str] | None = None,
    ) -> None:
        self.console.print(
            UISection.panel("project", SummaryTable.config_block(config, mode=mode), UIStyle.BLUE)
        )

        if skills:
            self.console.print(
                UISection.panel(
                    f"skills ({len(skills)})", SummaryTable.skills_table(skills), UIStyle.CYAN
                )
            )
        else:
            self.console.print(UISection.empty("skills", "No skills installed.", UIStyle.YELLOW))

        if servers:
            self.console.print(UISection.bullets("mcp servers", servers, UIStyle.MAGENTA))

        if instructions:
            self.console.print(UISection.bullets("next", instructions, UIStyle.GREEN))

    def render_catalog(self, skills: list[str], stacks: dict[str, list[str]]) -> None:
        if not skills and not stacks:
            self.console.print(UISection.empty("skills", "No skills available."))
            return
        self.console.print(
            UISection.panel("skills", CatalogTable.build(skills, stacks), UIStyle.CYAN)
        )

    def render_agents(self, agents: list[AgentProfile]) -> None:
        self.console.print(UISection.panel("agents", AgentsTable.build(agents), UIStyle.BLUE))
