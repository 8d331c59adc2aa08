"""Tests for rule registration, option resolution and disable directives."""

from dataclasses import dataclass

import pytest

from md_linter.errors import DuplicateRuleAliasError, OptionValueError, StructuredValueError
from md_linter.models import RuleCategory, RuleDescriptor
from md_linter.options import BooleanOption, TextOption
from md_linter.registry import RuleRegistry
from md_linter.settings import LinterSettings


@dataclass(frozen=True)
class _Options:
    label: str = ""


def _rule(
    name: str,
    category: RuleCategory = RuleCategory.CONTENT,
    special_order: bool = False,
) -> RuleDescriptor:
    return RuleDescriptor(
        name=name,
        description=f"{name} description",
        category=category,
        apply=lambda text, options: text,
        options_class=_Options,
        options=(
            BooleanOption(key="enabled", name=f"{name} description"),
            TextOption(key="label", name="Label", default="default"),
        ),
        special_order=special_order,
    )


# --- registration ---


def test_duplicate_alias_is_rejected() -> None:
    registry = RuleRegistry()
    registry.register(_rule("Some Rule"))
    with pytest.raises(DuplicateRuleAliasError) as exc_info:
        registry.register(_rule("some rule"))
    assert exc_info.value.alias == "some-rule"
    assert len(registry) == 1


def test_rules_are_sorted_by_category_then_name() -> None:
    registry = RuleRegistry()
    registry.register(_rule("Beta", RuleCategory.SPACING))
    registry.register(_rule("charlie", RuleCategory.YAML))
    registry.register(_rule("Alpha", RuleCategory.YAML))
    registry.register(_rule("Delta", RuleCategory.HEADING))

    assert [rule.name for rule in registry] == ["Alpha", "charlie", "Delta", "Beta"]
    assert registry.get("charlie").category is RuleCategory.YAML
    assert registry.get("missing") is None
    assert "alpha" in registry


def test_partition_keeps_special_rules_in_registration_order() -> None:
    registry = RuleRegistry()
    registry.register(_rule("Zulu Special", special_order=True))
    registry.register(_rule("Normal"))
    registry.register(_rule("Alpha Special", special_order=True))

    normal, special = registry.partition()
    assert [rule.name for rule in normal] == ["Normal"]
    assert [rule.name for rule in special] == ["Zulu Special", "Alpha Special"]


def test_default_registry(registry) -> None:
    assert registry.aliases == [
        "force-yaml-escape",
        "yaml-title-alias",
        "no-bare-urls",
        "space-between-chinese-japanese-or-korean-and-english-or-numbers",
    ]
    normal, special = registry.partition()
    assert [rule.alias for rule in special] == ["force-yaml-escape"]
    assert all(rule.options[0].key == "enabled" for rule in registry)
    assert all(rule.options[0].name == rule.description for rule in registry)


# --- option resolution ---


def test_unconfigured_rule_resolves_to_none() -> None:
    registry = RuleRegistry()
    rule = _rule("Some Rule")
    registry.register(rule)
    assert registry.resolve_options(rule, LinterSettings()) is None


def test_resolve_options_overlays_defaults() -> None:
    registry = RuleRegistry()
    rule = _rule("Some Rule")
    registry.register(rule)
    settings = LinterSettings(
        rule_configs={"some-rule": {"enabled": True, "unknown": 1}}
    )
    assert registry.resolve_options(rule, settings) == {
        "enabled": True,
        "label": "default",
    }


def test_resolve_options_by_name_and_alias() -> None:
    registry = RuleRegistry()
    rule = _rule("Some Rule")
    registry.register(rule)
    settings = LinterSettings(
        rule_configs={
            "Some Rule": {"enabled": False, "label": "by name"},
            "some-rule": {"enabled": True},
        }
    )
    assert registry.resolve_options(rule, settings) == {
        "enabled": True,
        "label": "by name",
    }


def test_resolve_options_rejects_bad_values() -> None:
    registry = RuleRegistry()
    rule = _rule("Some Rule")
    registry.register(rule)
    settings = LinterSettings(rule_configs={"some-rule": {"enabled": "yes"}})
    with pytest.raises(OptionValueError):
        registry.resolve_options(rule, settings)


# --- disable directive ---


def test_disabled_aliases_without_block(registry) -> None:
    assert registry.disabled_aliases_for("# Title") == set()
    assert registry.disabled_aliases_for("---\ntitle: x\n---\n") == set()
    assert registry.disabled_aliases_for("---\ndisabled rules:\n---\n") == set()


def test_disabled_aliases_list(registry) -> None:
    text = "---\ndisabled rules: [yaml-title-alias, no-bare-urls]\n---\n"
    assert registry.disabled_aliases_for(text) == {"yaml-title-alias", "no-bare-urls"}

    text = "---\ndisabled rules:\n  - no-bare-urls\n---\n"
    assert registry.disabled_aliases_for(text) == {"no-bare-urls"}


@pytest.mark.parametrize(
    "directive",
    ["disabled rules: all", "disabled rules: [all]", "disabled rules:\n  - all"],
)
def test_disabled_all(registry, directive: str) -> None:
    text = f"---\n{directive}\n---\n# Title\n"
    assert registry.disabled_aliases_for(text) == set(registry.aliases)


@pytest.mark.parametrize(
    "directive",
    ["disabled rules: [a, b", "disabled rules:\n  key: value"],
)
def test_malformed_directive_raises(registry, directive: str) -> None:
    with pytest.raises(StructuredValueError):
        registry.disabled_aliases_for(f"---\n{directive}\n---\n")
