from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from md_linter.executor import LintReport
from md_linter.models import RuleDescriptor
from md_linter.tui.enums import UIStyle
from md_linter.tui.sections import UISection


def _yes_no(value: bool) -> str:
    if value:
        return f"[{UIStyle.GREEN.value}]yes[/{UIStyle.GREEN.value}]"
    return f"[{UIStyle.DIM.value}]no[/{UIStyle.DIM.value}]"


class LintTable:
    @staticmethod
    def summary_block(reports: list[LintReport], mode: str):
        counts = Counter(report.status.value for report in reports)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Files", str(len(reports)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def files_table(reports: list[LintReport]) -> Table:
        table = Table(
            Column(header="File", overflow="ellipsis"),
            Column(header="Status", width=10),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for report in reports:
            detail = escape(str(report.error)) if report.error is not None else ""
            table.add_row(str(report.path), UISection.status(report.status), detail)
        return table


class RulesTable:
    @staticmethod
    def rules_table(rules: list[RuleDescriptor], enabled: set[str]) -> Table:
        table = Table(
            Column(header="Category", width=10),
            Column(header="Name", overflow="fold"),
            Column(header="Alias", overflow="fold"),
            Column(header="Special", width=8),
            Column(header="Enabled", width=8),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            table.add_row(
                rule.category.value,
                rule.name,
                rule.alias,
                _yes_no(rule.special_order),
                _yes_no(rule.alias in enabled),
            )
        return table

    @staticmethod
    def details_block(rule: RuleDescriptor):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Name", rule.name)
        table.add_row("Alias", rule.alias)
        table.add_row("Category", rule.category.value)
        table.add_row("Special order", "yes" if rule.special_order else "no")
        table.add_row("Docs", rule.url)
        table.add_row("Description", escape(rule.description))
        return table

    @staticmethod
    def options_table(rule: RuleDescriptor) -> Table:
        table = Table(
            Column(header="Key", overflow="fold"),
            Column(header="Kind", width=10),
            Column(header="Default", overflow="fold"),
            Column(header="Name", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for option in rule.options:
            table.add_row(
                option.key,
                option.kind.value,
                escape(repr(option.default)),
                escape(option.name),
            )
        return table
