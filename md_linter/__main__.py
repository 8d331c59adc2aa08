import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from md_linter.errors import LintError, SettingsFileError
from md_linter.executor import LintReport, lint_file
from md_linter.registry import RuleRegistry
from md_linter.rules import build_default_registry
from md_linter.settings import LinterSettings, SettingsRepository
from md_linter.tui import LintConsoleUI


MARKDOWN_SUFFIXES = (".md", ".markdown")


def _config_option() -> Any:
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Settings file (defaults to $XDG_CONFIG_HOME/md-linter/settings.json).",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _registry_from_obj(obj: Dict[str, Any]) -> RuleRegistry:
    registry = obj.get("registry")
    if registry is None:
        try:
            registry = build_default_registry()
        except LintError as exc:
            raise click.ClickException(f"Fatal: {exc}")
        obj["registry"] = registry
    return registry


def _load_settings(config_path: Optional[Path]) -> LinterSettings:
    try:
        if config_path is not None:
            return SettingsRepository(config_path).load()
        return SettingsRepository().load_or_default()
    except SettingsFileError as exc:
        raise click.ClickException(str(exc))


def _collect_markdown_files(paths: tuple[Path, ...]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(
                    item
                    for item in path.rglob("*")
                    if item.is_file() and item.suffix.lower() in MARKDOWN_SUFFIXES
                )
            )
        else:
            files.append(path)
    return files


def _enabled_aliases(registry: RuleRegistry, settings: LinterSettings) -> set[str]:
    enabled: set[str] = set()
    for rule in registry:
        values = registry.resolve_options(rule, settings)
        if values is not None and values[rule.enabled_option_key]:
            enabled.add(rule.alias)
    return enabled


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Rule based markdown linter."""
    ctx.obj = {}


@cli.command(help="Lint markdown files and optionally write the fixes back.")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@_config_option()
@click.option(
    "--enable",
    "enable",
    multiple=True,
    metavar="ALIAS",
    help="Enable a rule by alias for this run. Repeatable.",
)
@click.option("--write", is_flag=True, help="Write changed files back to disk.")
@click.option("--check", is_flag=True, help="Exit with 1 when a file would change.")
@click.option("-v", "--verbose", is_flag=True, help="Log rule execution details.")
@click.pass_obj
def lint(
    obj: Dict[str, Any],
    paths: tuple[Path, ...],
    config_path: Optional[Path],
    enable: tuple[str, ...],
    write: bool,
    check: bool,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    ui = LintConsoleUI(Console())
    registry = _registry_from_obj(obj)
    settings = _load_settings(config_path)

    unknown = [alias for alias in enable if alias not in registry]
    if unknown:
        raise click.ClickException(f"Unknown rule: {', '.join(unknown)}")
    if enable:
        settings = settings.with_enabled(enable)

    reports: list[LintReport] = []
    for path in _collect_markdown_files(paths):
        try:
            reports.append(lint_file(path, settings, registry))
        except LintError as exc:
            raise click.ClickException(f"{path}: {exc}")

    mode = "write" if write else "check" if check else "dry-run"
    ui.render_reports(reports, mode=mode)

    changed = [report for report in reports if report.changed]
    if write and changed:
        for report in changed:
            report.path.write_text(report.result, encoding="utf-8")
        ui.render_written(len(changed))

    if any(report.error is not None for report in reports):
        raise click.exceptions.Exit(1)
    if check and changed:
        raise click.exceptions.Exit(1)


@cli.group(help="Inspect the available rules.")
def rules() -> None:
    pass


@rules.command("list", help="List rules in execution order.")
@_config_option()
@click.pass_obj
def rules_list(obj: Dict[str, Any], config_path: Optional[Path]) -> None:
    registry = _registry_from_obj(obj)
    settings = _load_settings(config_path)
    try:
        enabled = _enabled_aliases(registry, settings)
    except LintError as exc:
        raise click.ClickException(str(exc))

    normal, special = registry.partition()
    LintConsoleUI(Console()).render_rules([*normal, *special], enabled)


@rules.command("show", help="Show a rule's description and options.")
@click.argument("alias")
@click.pass_obj
def rules_show(obj: Dict[str, Any], alias: str) -> None:
    registry = _registry_from_obj(obj)
    rule = registry.get(alias)
    if rule is None:
        raise click.ClickException(f"Unknown rule: {alias}")
    LintConsoleUI(Console()).render_rule(rule)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
