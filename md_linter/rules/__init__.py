"""Built-in rule catalog."""

from __future__ import annotations

from md_linter.registry import RuleRegistry
from md_linter.rules.base import RuleBuilder
from md_linter.rules.force_yaml_escape import ForceYamlEscape
from md_linter.rules.no_bare_urls import NoBareUrls
from md_linter.rules.space_between_cjk import SpaceBetweenCjkAndEnglishOrNumbers
from md_linter.rules.yaml_title_alias import YamlTitleAlias


def default_rule_builders() -> list[RuleBuilder]:
    return [
        YamlTitleAlias(),
        NoBareUrls(),
        SpaceBetweenCjkAndEnglishOrNumbers(),
        ForceYamlEscape(),
    ]


def build_default_registry() -> RuleRegistry:
    registry = RuleRegistry()
    for builder in default_rule_builders():
        registry.register(builder.build())
    return registry


__all__ = [
    "RuleBuilder",
    "build_default_registry",
    "default_rule_builders",
]
