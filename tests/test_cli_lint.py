"""Tests for the lint CLI command."""

import sys
from pathlib import Path

from md_linter.__main__ import cli, main


TRACKED = "---\naliases:\n  - Title\nlinter-yaml-title-alias: Title\n---\n# Title"


def test_lint_dry_run_does_not_write(notes_dir: Path, cli_runner) -> None:
    note = notes_dir / "note.md"
    note.write_text("# Title", encoding="utf-8")

    result = cli_runner.invoke(cli, ["lint", str(notes_dir), "--enable", "yaml-title-alias"])
    assert result.exit_code == 0
    assert "dry-run" in result.output
    assert "changed" in result.output
    assert note.read_text(encoding="utf-8") == "# Title"


def test_lint_write(notes_dir: Path, cli_runner) -> None:
    note = notes_dir / "note.md"
    note.write_text("# Title", encoding="utf-8")
    other = notes_dir / "readme.txt"
    other.write_text("# Title", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["lint", str(notes_dir), "--enable", "yaml-title-alias", "--write"]
    )
    assert result.exit_code == 0
    assert "Wrote 1 file(s)." in result.output
    assert note.read_text(encoding="utf-8") == TRACKED
    assert other.read_text(encoding="utf-8") == "# Title"


def test_lint_check_exit_codes(notes_dir: Path, cli_runner) -> None:
    note = notes_dir / "note.md"
    note.write_text("# Title", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["lint", str(note), "--enable", "yaml-title-alias", "--check"]
    )
    assert result.exit_code == 1

    note.write_text(TRACKED, encoding="utf-8")
    result = cli_runner.invoke(
        cli, ["lint", str(note), "--enable", "yaml-title-alias", "--check"]
    )
    assert result.exit_code == 0
    assert "unchanged" in result.output


def test_lint_reports_rule_failures(notes_dir: Path, cli_runner) -> None:
    broken = notes_dir / "broken.md"
    broken.write_text("---\naliases: [a, [b]]\n---\n# Title", encoding="utf-8")
    fine = notes_dir / "fine.md"
    fine.write_text("# Fine", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["lint", str(notes_dir), "--enable", "yaml-title-alias", "--write"]
    )
    assert result.exit_code == 1
    assert "failed" in result.output
    assert "failures" in result.output
    assert broken.read_text(encoding="utf-8") == "---\naliases: [a, [b]]\n---\n# Title"
    assert "linter-yaml-title-alias: Fine" in fine.read_text(encoding="utf-8")


def test_lint_unknown_rule(notes_dir: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["lint", str(notes_dir), "--enable", "nope"])
    assert result.exit_code != 0
    assert "Unknown rule: nope" in result.output


def test_lint_uses_default_settings_file(
    notes_dir: Path, settings_path: Path, write_json, cli_runner
) -> None:
    write_json(
        settings_path,
        {
            "rule_configs": {"yaml-title-alias": {"enabled": True}},
            "common_styles": {"alias_array_style": "single-line"},
        },
    )
    note = notes_dir / "note.md"
    note.write_text("# Title", encoding="utf-8")

    result = cli_runner.invoke(cli, ["lint", str(note), "--write"])
    assert result.exit_code == 0
    assert note.read_text(encoding="utf-8") == (
        "---\naliases: [Title]\nlinter-yaml-title-alias: Title\n---\n# Title"
    )


def test_lint_with_explicit_config(
    notes_dir: Path, tmp_path: Path, write_json, cli_runner
) -> None:
    config = tmp_path / "custom.json"
    write_json(config, {"rule_configs": {"no-bare-urls": {"enabled": True}}})
    note = notes_dir / "note.md"
    note.write_text("see https://example.com", encoding="utf-8")

    result = cli_runner.invoke(cli, ["lint", str(note), "--config", str(config), "--write"])
    assert result.exit_code == 0
    assert note.read_text(encoding="utf-8") == "see <https://example.com>"


def test_lint_missing_explicit_config(notes_dir: Path, tmp_path: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli, ["lint", str(notes_dir), "--config", str(tmp_path / "missing.json")]
    )
    assert result.exit_code != 0
    assert "Missing settings file" in result.output


def test_lint_invalid_settings(
    notes_dir: Path, settings_path: Path, write_json, cli_runner
) -> None:
    write_json(settings_path, {"disabled_rules": "all"})
    result = cli_runner.invoke(cli, ["lint", str(notes_dir)])
    assert result.exit_code != 0
    assert "Invalid settings schema" in result.output


def test_lint_invalid_option_value(
    notes_dir: Path, settings_path: Path, write_json, cli_runner
) -> None:
    write_json(settings_path, {"rule_configs": {"yaml-title-alias": {"enabled": "yes"}}})
    (notes_dir / "note.md").write_text("# Title", encoding="utf-8")
    result = cli_runner.invoke(cli, ["lint", str(notes_dir)])
    assert result.exit_code != 0
    assert "Invalid value for option 'enabled'" in result.output


def test_lint_verbose(notes_dir: Path, cli_runner) -> None:
    (notes_dir / "note.md").write_text("# Title", encoding="utf-8")
    result = cli_runner.invoke(
        cli, ["lint", str(notes_dir), "--enable", "yaml-title-alias", "-v"]
    )
    assert result.exit_code == 0


def test_lint_empty_directory(notes_dir: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["lint", str(notes_dir)])
    assert result.exit_code == 0
    assert "No markdown files found." in result.output


def test_main_exit_codes(notes_dir: Path, monkeypatch) -> None:
    note = notes_dir / "note.md"
    note.write_text("# Title", encoding="utf-8")

    monkeypatch.setattr(
        sys, "argv", ["md-linter", "lint", str(note), "--enable", "yaml-title-alias", "--check"]
    )
    assert main() == 1

    monkeypatch.setattr(sys, "argv", ["md-linter", "rules", "show", "nope"])
    assert main() == 2

    monkeypatch.setattr(sys, "argv", ["md-linter", "rules", "show", "no-bare-urls"])
    assert main() == 0
