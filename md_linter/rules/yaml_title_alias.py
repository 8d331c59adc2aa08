from __future__ import annotations

from dataclasses import dataclass

from md_linter.constants import (
    LINTER_ALIASES_HELPER_KEY,
    OBSIDIAN_ALIAS_KEY_PLURAL,
    OBSIDIAN_ALIASES_KEYS,
)
from md_linter.markdown import get_first_header_one_text
from md_linter.masking import IgnoreType, ignore_list_of_types
from md_linter.models import ArrayFormat, Example, RuleCategory, ValueKind
from md_linter.options import BooleanOption, Option
from md_linter.rules.base import RuleBuilder
from md_linter.yaml_block import (
    classify_value,
    ensure_frontmatter,
    escape_if_needed,
    first_present_key,
    format_value,
    get_frontmatter_body,
    get_section_value,
    remove_section,
    replace_frontmatter_body,
    set_section_value,
    strip_flow_quotes,
    to_string_or_array,
)


@dataclass(frozen=True)
class YamlTitleAliasOptions:
    preserve_existing_aliases_section_style: bool = True
    keep_alias_that_matches_the_filename: bool = False
    use_yaml_key_to_keep_track_of_old_filename_or_heading: bool = True
    alias_array_style: ArrayFormat = ArrayFormat.MULTI_LINE
    file_name: str | None = None
    default_escape_character: str = '"'


class YamlTitleAlias(RuleBuilder):
    NAME = "YAML Title Alias"
    DESCRIPTION = (
        "Inserts the title of the file into the YAML frontmatter's aliases section. "
        "Gets the title from the first H1 or filename."
    )
    CATEGORY = RuleCategory.YAML
    OPTIONS_CLASS = YamlTitleAliasOptions

    def apply(self, text: str, options: YamlTitleAliasOptions) -> str:
        title = ignore_list_of_types(
            [IgnoreType.CODE, IgnoreType.YAML, IgnoreType.TAG],
            text,
            get_first_header_one_text,
        )
        title = title or options.file_name or ""
        if not title:
            return text

        text = ensure_frontmatter(text)
        body = get_frontmatter_body(text) or ""
        track_title = options.use_yaml_key_to_keep_track_of_old_filename_or_heading
        should_remove_title = (
            not options.keep_alias_that_matches_the_filename
            and title == options.file_name
        )

        previous_title = None
        if track_title:
            previous_title = (
                get_section_value(body, LINTER_ALIASES_HELPER_KEY) or ""
            ).strip() or None

        title = escape_if_needed(title, options.default_escape_character)

        alias_key = first_present_key(body, OBSIDIAN_ALIASES_KEYS)
        if alias_key is not None:
            body = self._update_aliases(
                body, alias_key, title, previous_title, should_remove_title, options
            )
        elif not should_remove_title:
            body = set_section_value(
                body,
                OBSIDIAN_ALIAS_KEY_PLURAL,
                format_value(
                    title, options.alias_array_style, options.default_escape_character
                ),
            )

        if not track_title or should_remove_title:
            body = remove_section(body, LINTER_ALIASES_HELPER_KEY)
        else:
            body = set_section_value(body, LINTER_ALIASES_HELPER_KEY, title)

        return replace_frontmatter_body(text, body)

    def _update_aliases(
        self,
        body: str,
        alias_key: str,
        title: str,
        previous_title: str | None,
        should_remove_title: bool,
        options: YamlTitleAliasOptions,
    ) -> str:
        raw = get_section_value(body, alias_key) or ""
        kind = classify_value(raw)
        is_single_string = kind in (ValueKind.EMPTY, ValueKind.SCALAR)
        if kind == ValueKind.MULTI_LINE_ARRAY:
            current_style = ArrayFormat.MULTI_LINE
        elif kind == ValueKind.SINGLE_LINE_ARRAY:
            current_style = ArrayFormat.SINGLE_LINE
        else:
            current_style = ArrayFormat.SINGLE_STRING_TO_SINGLE_LINE

        value = to_string_or_array(raw).unwrap()
        if isinstance(value, str):
            current = [value] if value else []
        else:
            known = {title, previous_title}
            current = [
                strip_flow_quotes(item) if strip_flow_quotes(item) in known else item
                for item in value
            ]
        updated = _updated_aliases(current, title, previous_title, should_remove_title)

        if not updated:
            return remove_section(body, alias_key)

        style = options.alias_array_style
        if options.preserve_existing_aliases_section_style and kind != ValueKind.EMPTY:
            if not is_single_string or updated == [title] or updated == current:
                style = current_style
        return set_section_value(
            body,
            alias_key,
            format_value(updated, style, options.default_escape_character),
        )

    def examples(self) -> list[Example]:
        return [
            Example(
                description="Adds a header with the title from heading.",
                before="# Obsidian",
                after=(
                    "---\n"
                    "aliases:\n"
                    "  - Obsidian\n"
                    "linter-yaml-title-alias: Obsidian\n"
                    "---\n"
                    "# Obsidian"
                ),
            ),
            Example(
                description=(
                    "Adds a header with the title from heading without YAML key "
                    "when the use of the YAML key is set to false."
                ),
                before="# Obsidian",
                after="---\naliases:\n  - Obsidian\n---\n# Obsidian",
                options={"use_yaml_key_to_keep_track_of_old_filename_or_heading": False},
            ),
            Example(
                description="Adds a header with the title.",
                before="",
                after=(
                    "---\n"
                    "aliases:\n"
                    "  - Filename\n"
                    "linter-yaml-title-alias: Filename\n"
                    "---\n"
                ),
                options={
                    "file_name": "Filename",
                    "keep_alias_that_matches_the_filename": True,
                },
            ),
            Example(
                description=(
                    "Replaces old filename with new filename when no header is present "
                    "and filename is different than the old one listed in "
                    "`linter-yaml-title-alias`."
                ),
                before=(
                    "---\n"
                    "aliases:\n"
                    "  - Old Filename\n"
                    "  - Alias 2\n"
                    "linter-yaml-title-alias: Old Filename\n"
                    "---\n"
                ),
                after=(
                    "---\n"
                    "aliases:\n"
                    "  - Filename\n"
                    "  - Alias 2\n"
                    "linter-yaml-title-alias: Filename\n"
                    "---\n"
                ),
                options={
                    "file_name": "Filename",
                    "keep_alias_that_matches_the_filename": True,
                },
            ),
            Example(
                description=(
                    "Make sure that markdown and wiki links in first H1 get their "
                    "values converted to text"
                ),
                before="# This is a [Heading](markdown.md)",
                after=(
                    "---\n"
                    "aliases:\n"
                    "  - This is a Heading\n"
                    "linter-yaml-title-alias: This is a Heading\n"
                    "---\n"
                    "# This is a [Heading](markdown.md)"
                ),
            ),
        ]

    def option_builders(self) -> list[Option]:
        return [
            BooleanOption(
                key="preserve_existing_aliases_section_style",
                name="Preserve existing aliases section style",
                description=(
                    "If set, the `YAML aliases section style` setting applies only "
                    "to the newly created sections"
                ),
                default=True,
            ),
            BooleanOption(
                key="keep_alias_that_matches_the_filename",
                name="Keep alias that matches the filename",
                description="Such aliases are usually redundant",
                default=False,
            ),
            BooleanOption(
                key="use_yaml_key_to_keep_track_of_old_filename_or_heading",
                name=(
                    "Use the YAML key `linter-yaml-title-alias` to help with filename "
                    "and heading changes"
                ),
                description=(
                    "If set, when the first H1 heading changes or filename if first H1 "
                    "is not present changes, then the old alias stored in this key "
                    "will be replaced with the new value instead of just inserting a "
                    "new entry in the aliases array"
                ),
                default=True,
            ),
        ]


def _updated_aliases(
    aliases: list[str],
    title: str,
    previous_title: str | None,
    should_remove_title: bool,
) -> list[str]:
    aliases = list(aliases)
    if previous_title is not None and previous_title in aliases:
        index = aliases.index(previous_title)
        if should_remove_title or (title in aliases and title != previous_title):
            del aliases[index]
        else:
            aliases[index] = title
    elif title in aliases:
        if should_remove_title:
            aliases.remove(title)
    elif not should_remove_title:
        aliases.insert(0, title)
    return aliases
