from rich.console import RenderableType
from rich.panel import Panel

from ai_factory.tui.enums import UIStyle


class UISection:
    """Panels shared by the init/update result, catalog and agents views."""

    @staticmethod
    def panel(title: str, body: RenderableType, style: UIStyle) -> Panel:
        return Panel(body, title=title, border_style=style.value, padding=(0, 1))

    @staticmethod
    def bullets(title: str, items: list[str], style: UIStyle) -> Panel:
        return UISection.panel(title, "\n".join(f"- {item}" for item in items), style)

    @staticmethod
    def empty(title: str, message: str, style: UIStyle = UIStyle.DIM) -> Panel:
        return UISection.panel(title, f"[italic]{message}[/italic]", style)
