from typing import Final


FRONTMATTER_DELIMITER: Final[str] = "---"

DISABLED_RULES_KEY: Final[str] = "disabled rules"
DISABLE_ALL_RULES_TOKEN: Final[str] = "all"

OBSIDIAN_ALIAS_KEY_SINGULAR: Final[str] = "alias"
OBSIDIAN_ALIAS_KEY_PLURAL: Final[str] = "aliases"
OBSIDIAN_ALIASES_KEYS: Final[tuple[str, ...]] = (
    OBSIDIAN_ALIAS_KEY_SINGULAR,
    OBSIDIAN_ALIAS_KEY_PLURAL,
)
LINTER_ALIASES_HELPER_KEY: Final[str] = "linter-yaml-title-alias"

ENABLED_OPTION_KEY: Final[str] = "enabled"

DOCS_BASE_URL: Final[str] = "https://github.com/platers/obsidian-linter/blob/master/docs/rules.md"

SETTINGS_DIRNAME: Final[str] = "md-linter"
SETTINGS_FILENAME: Final[str] = "settings.json"
