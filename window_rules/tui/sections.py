from typing import Optional

from rich.markup import escape
from rich.panel import Panel

from window_rules.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str, markup: bool = True) -> Panel:
        text = body if markup else escape(body)
        return Panel(text, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def bullets(items: list[str]) -> str:
        return "\n".join(f"- {escape(item)}" for item in items)
