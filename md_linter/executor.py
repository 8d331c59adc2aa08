import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from md_linter.errors import LintError, RuleFailedError, StructuredValueError
from md_linter.models import LintStatus, RuleDescriptor
from md_linter.registry import RuleRegistry
from md_linter.rules import build_default_registry
from md_linter.settings import LinterSettings

logger = logging.getLogger(__name__)


@dataclass
class LintReport:
    path: Path
    original: str
    result: str
    error: Optional[LintError] = None

    @property
    def changed(self) -> bool:
        return self.error is None and self.result != self.original

    @property
    def status(self) -> LintStatus:
        if self.error is not None:
            return LintStatus.FAILED
        if self.changed:
            return LintStatus.CHANGED
        return LintStatus.UNCHANGED


class RuleExecutor:
    def __init__(self, registry: RuleRegistry) -> None:
        self.registry = registry

    def run(
        self,
        text: str,
        settings: LinterSettings,
        file_name: Optional[str] = None,
    ) -> str:
        """Apply every enabled rule to ``text`` and return the result.

        Normal rules run in registry order, then special-order rules in the
        order they were registered. The first failing rule aborts the run
        with a ``RuleFailedError``.
        """
        disabled = self.registry.disabled_aliases_for(text) | set(
            settings.disabled_rules
        )
        normal, special = self.registry.partition()

        for rule in [*normal, *special]:
            if rule.alias in disabled:
                logger.debug("Skipping disabled rule %s", rule.alias)
                continue

            options = self._options_for(rule, settings, file_name)
            if options is None:
                continue

            logger.debug("Running rule %s", rule.alias)
            text = self._apply(rule, text, options)
        return text

    def _options_for(
        self,
        rule: RuleDescriptor,
        settings: LinterSettings,
        file_name: Optional[str],
    ) -> Any:
        values = self.registry.resolve_options(rule, settings)
        if values is None or not values[rule.enabled_option_key]:
            return None

        values.update(settings.common_styles.as_rule_options())
        values["file_name"] = file_name
        return rule.make_options(values)

    def _apply(self, rule: RuleDescriptor, text: str, options: Any) -> str:
        try:
            return rule.apply(text, options)
        except (StructuredValueError, yaml.YAMLError) as exc:
            message = f'"{rule.name}" encountered an error in the frontmatter: {exc}'
            raise RuleFailedError(rule.name, message, exc) from exc
        except Exception as exc:
            message = f'"{rule.name}" encountered an unknown error: {exc}'
            raise RuleFailedError(rule.name, message, exc) from exc


def lint_text(
    text: str,
    settings: LinterSettings,
    registry: Optional[RuleRegistry] = None,
    file_name: Optional[str] = None,
) -> str:
    if registry is None:
        registry = build_default_registry()
    return RuleExecutor(registry).run(text, settings, file_name=file_name)


def lint_file(
    path: Path, settings: LinterSettings, registry: RuleRegistry
) -> LintReport:
    original = path.read_text(encoding="utf-8")
    try:
        result = RuleExecutor(registry).run(original, settings, file_name=path.stem)
    except (RuleFailedError, StructuredValueError) as exc:
        logger.debug("Linting %s failed: %s", path, exc)
        return LintReport(path=path, original=original, result=original, error=exc)
    return LintReport(path=path, original=original, result=result)
