from __future__ import annotations

from dataclasses import dataclass

from md_linter.models import Example, RuleCategory
from md_linter.options import Option, TextAreaOption
from md_linter.rules.base import RuleBuilder
from md_linter.yaml_block import (
    escape_if_needed,
    format_frontmatter,
    get_section_value,
    is_value_escaped_already,
    set_section_value,
)


@dataclass(frozen=True)
class ForceYamlEscapeOptions:
    force_yaml_escape: tuple[str, ...] = ()
    default_escape_character: str = '"'


class ForceYamlEscape(RuleBuilder):
    NAME = "Force YAML Escape"
    DESCRIPTION = "Escapes the values for the specified YAML keys."
    CATEGORY = RuleCategory.YAML
    OPTIONS_CLASS = ForceYamlEscapeOptions
    SPECIAL_ORDER = True

    def apply(self, text: str, options: ForceYamlEscapeOptions) -> str:
        def _escape_keys(body: str) -> str:
            for key in options.force_yaml_escape:
                value = get_section_value(body, key)
                # arrays and block values are left alone
                if (
                    not value
                    or "\n" in value
                    or value.startswith("[")
                    or is_value_escaped_already(value)
                ):
                    continue
                escaped = escape_if_needed(
                    value, options.default_escape_character, force_escape=True
                )
                body = set_section_value(body, key, escaped)
            return body

        return format_frontmatter(text, _escape_keys)

    def examples(self) -> list[Example]:
        return [
            Example(
                description="YAML without anything to escape",
                before="---\nkey: value\notherKey: []\n---",
                after="---\nkey: value\notherKey: []\n---",
            ),
            Example(
                description=(
                    "Force YAML keys to be escaped with double quotes where not "
                    "already escaped with `Force Yaml Escape on Keys = "
                    "'key'\\n'title'\\n'bool'`"
                ),
                before=(
                    "---\n"
                    "key: 'Already escaped value'\n"
                    "title: This is a title\n"
                    "bool: false\n"
                    "unaffected: value\n"
                    "---\n"
                    "\n"
                    "_Note that the force Yaml key option should not be used with arrays._"
                ),
                after=(
                    "---\n"
                    "key: 'Already escaped value'\n"
                    'title: "This is a title"\n'
                    'bool: "false"\n'
                    "unaffected: value\n"
                    "---\n"
                    "\n"
                    "_Note that the force Yaml key option should not be used with arrays._"
                ),
                options={
                    "force_yaml_escape": ["key", "title", "bool"],
                    "default_escape_character": '"',
                },
            ),
        ]

    def option_builders(self) -> list[Option]:
        return [
            TextAreaOption(
                key="force_yaml_escape",
                name="Force YAML Escape on Keys",
                description=(
                    "Uses the YAML escape character on the specified YAML keys "
                    "separated by a new line character if it is not already "
                    "escaped. Do not use on YAML arrays."
                ),
            ),
        ]
