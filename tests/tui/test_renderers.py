"""Tests for the console renderers."""

from pathlib import Path

from rich.console import Console

from md_linter.errors import RuleFailedError
from md_linter.executor import LintReport
from md_linter.models import LintStatus
from md_linter.rules import build_default_registry
from md_linter.tui import LintConsoleUI
from md_linter.tui.sections import UISection


def _ui() -> tuple[LintConsoleUI, Console]:
    console = Console(record=True, width=200, color_system=None)
    return LintConsoleUI(console), console


def test_render_reports_lists_statuses() -> None:
    ui, console = _ui()
    reports = [
        LintReport(path=Path("a.md"), original="x", result="y"),
        LintReport(path=Path("b.md"), original="x", result="x"),
        LintReport(
            path=Path("c.md"),
            original="x",
            result="x",
            error=RuleFailedError(
                "Broken",
                '"Broken" encountered an unknown error: boom',
                RuntimeError("boom"),
            ),
        ),
    ]
    ui.render_reports(reports, mode="check")

    output = console.export_text()
    assert "changed=1" in output
    assert "failed=1" in output
    assert "unchanged=1" in output
    assert "failures" in output
    assert "c.md" in output


def test_render_reports_empty() -> None:
    ui, console = _ui()
    ui.render_reports([], mode="dry-run")
    assert "No markdown files found." in console.export_text()


def test_render_rule_escapes_markup() -> None:
    ui, console = _ui()
    rule = build_default_registry().get("no-bare-urls")
    ui.render_rule(rule)
    output = console.export_text()
    assert "No Bare URLs" in output
    assert "enabled" in output


def test_status_markup() -> None:
    assert UISection.status(LintStatus.FAILED) == "[red]failed[/red]"
