from typing import Iterable, Optional

from rich.panel import Panel

from md_linter.models import LintStatus
from md_linter.tui.enums import LINT_STATUS_STYLE, UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str = UIStyle.DIM.value) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def bullets(title: str, lines: Iterable[str], style: str = UIStyle.RED.value) -> Panel:
        body = "\n".join([f"- {line}" for line in lines])
        return UISection.note(title, body, style=style)

    @staticmethod
    def status(status: LintStatus) -> str:
        style = LINT_STATUS_STYLE.get(status, UIStyle.WHITE.value)
        return f"[{style}]{status.value}[/{style}]"
