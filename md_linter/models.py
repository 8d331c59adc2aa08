from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping

from md_linter.constants import DOCS_BASE_URL
from md_linter.options import Option


class RuleCategory(str, Enum):
    YAML = "YAML"
    HEADING = "Heading"
    FOOTNOTE = "Footnote"
    CONTENT = "Content"
    SPACING = "Spacing"
    PASTE = "Paste"

    def order(self) -> int:
        return list(RuleCategory).index(self)


class ArrayFormat(str, Enum):
    SINGLE_LINE = "single-line"
    MULTI_LINE = "multi-line"
    SINGLE_STRING_TO_SINGLE_LINE = "single string to single-line"
    SINGLE_STRING_TO_MULTI_LINE = "single string to multi-line"


class LintStatus(str, Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    FAILED = "failed"


class ValueKind(str, Enum):
    EMPTY = "empty"
    SCALAR = "scalar"
    SINGLE_LINE_ARRAY = "single-line array"
    MULTI_LINE_ARRAY = "multi-line array"


@dataclass(frozen=True)
class Example:
    description: str
    before: str
    after: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RuleDescriptor:
    name: str
    description: str
    category: RuleCategory
    apply: Callable[[str, Any], str]
    options_class: type
    options: tuple[Option, ...]
    special_order: bool = False
    examples: tuple[Example, ...] = ()

    @property
    def alias(self) -> str:
        return self.name.replace(" ", "-").lower()

    @property
    def url(self) -> str:
        return f"{DOCS_BASE_URL}#{self.alias}"

    @property
    def enabled_option_key(self) -> str:
        return self.options[0].key

    def get_default_options(self) -> dict[str, Any]:
        return {option.key: option.default for option in self.options}

    def make_options(self, values: Mapping[str, Any]) -> Any:
        declared = {item.name for item in fields(self.options_class)}
        return self.options_class(
            **{key: value for key, value in values.items() if key in declared}
        )
