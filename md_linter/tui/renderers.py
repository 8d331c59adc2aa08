from rich.console import Console
from rich.markup import escape

from md_linter.executor import LintReport
from md_linter.models import LintStatus, RuleDescriptor
from md_linter.tui.enums import UIStyle
from md_linter.tui.sections import UISection
from md_linter.tui.tables import LintTable, RulesTable


class LintConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_reports(self, reports: list[LintReport], mode: str) -> None:
        self.console.print(
            UISection.wrap(
                "lint overview",
                LintTable.summary_block(reports, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )

        if not reports:
            self.console.print(
                UISection.note("files", "No markdown files found.", style=UIStyle.DIM.value)
            )
            return

        failed = [report for report in reports if report.status == LintStatus.FAILED]
        border_style = UIStyle.RED.value if failed else UIStyle.CYAN.value
        self.console.print(
            UISection.wrap(
                "files",
                LintTable.files_table(reports),
                style=border_style,
                subtitle=mode,
            )
        )

        if failed:
            self.console.print(
                UISection.bullets(
                    "failures",
                    [escape(f"{report.path}: {report.error}") for report in failed],
                )
            )

    def render_written(self, count: int) -> None:
        self.console.print(
            UISection.note(
                "write",
                f"Wrote [bold]{count}[/bold] file(s).",
                style=UIStyle.GREEN.value,
            )
        )

    def render_rules(self, rules: list[RuleDescriptor], enabled: set[str]) -> None:
        self.console.print(
            UISection.wrap(
                "rules", RulesTable.rules_table(rules, enabled), style=UIStyle.BLUE.value
            )
        )

    def render_rule(self, rule: RuleDescriptor) -> None:
        self.console.print(
            UISection.wrap(
                rule.alias, RulesTable.details_block(rule), style=UIStyle.BLUE.value
            )
        )
        self.console.print(
            UISection.wrap(
                "options", RulesTable.options_table(rule), style=UIStyle.CYAN.value
            )
        )
