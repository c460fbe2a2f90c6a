from rich.table import Table
from rich.text import Text

from ai_factory.agents import AgentProfile
from ai_factory.models import AiFactoryConfig
from ai_factory.tui.enums import UIStyle


def _flag(value: bool) -> Text:
    if value:
        return Text("yes", style=UIStyle.GREEN.value)
    return Text("no", style=UIStyle.DIM.value)


class SummaryTable:
    @staticmethod
    def config_block(config: AiFactoryConfig, mode: str) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Agent", config.agent)
        table.add_row("Skills dir", config.skills_dir)
        table.add_row("Version", config.version)
        table.add_row("MCP", ", ".join(config.mcp.selected()) or "none")
        return table

    @staticmethod
    def skills_table(skills: list[str]) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Skill")
        table.add_column("Source", style=UIStyle.DIM.value)
        for key in skills:
            stack, _, name = key.rpartition("/")
            table.add_row(name, f"stack:{stack}" if stack else "base")
        return table


class CatalogTable:
    @staticmethod
    def build(skills: list[str], stacks: dict[str, list[str]]) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Skill")
        table.add_column("Source", style=UIStyle.DIM.value)
        for name in skills:
            table.add_row(name, "base")
        for stack, names in stacks.items():
            for name in names:
                table.add_row(f"{stack}/{name}", f"stack:{stack}")
        return table


class AgentsTable:
    @staticmethod
    def build(agents: list[AgentProfile]) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Agent")
        table.add_column("Label")
        table.add_column("Skills dir")
        table.add_column("Layout")
        table.add_column("MCP")
        table.add_column("Settings file", style=UIStyle.DIM.value)
        for agent in agents:
            table.add_row(
                agent.id.value,
                agent.label,
                agent.skills_dir,
                agent.skill_layout.value,
                _flag(agent.mcp_enabled),
                agent.settings_file or "-",
            )
        return table
