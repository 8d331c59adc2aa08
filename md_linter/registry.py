from __future__ import annotations

import logging
from typing import Any, Iterator

from md_linter.constants import DISABLE_ALL_RULES_TOKEN, DISABLED_RULES_KEY
from md_linter.errors import DuplicateRuleAliasError, StructuredValueError
from md_linter.models import RuleDescriptor
from md_linter.settings import LinterSettings
from md_linter.yaml_block import get_frontmatter_body, load_section

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Rules sorted by category then name, indexed by alias."""

    def __init__(self) -> None:
        self._rules: list[RuleDescriptor] = []
        self._registration_order: list[RuleDescriptor] = []
        self._by_alias: dict[str, RuleDescriptor] = {}

    def register(self, rule: RuleDescriptor) -> None:
        existing = self._by_alias.get(rule.alias)
        if existing is not None:
            raise DuplicateRuleAliasError(rule.alias, existing.name, rule.name)

        self._by_alias[rule.alias] = rule
        self._registration_order.append(rule)
        self._rules.append(rule)
        self._rules.sort(
            key=lambda item: (item.category.order(), item.name.lower(), item.name)
        )
        logger.debug("Registered rule %s", rule.alias)

    def get(self, alias: str) -> RuleDescriptor | None:
        return self._by_alias.get(alias)

    def __iter__(self) -> Iterator[RuleDescriptor]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, alias: object) -> bool:
        return alias in self._by_alias

    @property
    def rules(self) -> list[RuleDescriptor]:
        return list(self._rules)

    @property
    def aliases(self) -> list[str]:
        return [rule.alias for rule in self._rules]

    def partition(self) -> tuple[list[RuleDescriptor], list[RuleDescriptor]]:
        """Split into sorted normal rules and special rules in registration order."""
        normal = [rule for rule in self._rules if not rule.special_order]
        special = [rule for rule in self._registration_order if rule.special_order]
        return normal, special

    def resolve_options(
        self, rule: RuleDescriptor, settings: LinterSettings
    ) -> dict[str, Any] | None:
        stored = settings.rule_config(rule)
        if stored is None:
            return None

        values = rule.get_default_options()
        for option in rule.options:
            if option.key in stored:
                values[option.key] = option.coerce(stored[option.key])
        return values

    def disabled_aliases_for(self, text: str) -> set[str]:
        body = get_frontmatter_body(text)
        if body is None:
            return set()

        value = load_section(body, DISABLED_RULES_KEY).unwrap()
        if value is None or value == "":
            return set()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(
            isinstance(item, str) for item in value
        ):
            raise StructuredValueError(
                f"{DISABLED_RULES_KEY!r} must be a rule alias or a list of rule aliases",
                str(value),
            )

        if DISABLE_ALL_RULES_TOKEN in value:
            return set(self._by_alias)
        return set(value)
