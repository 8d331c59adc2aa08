"""Typed rule options.

Each rule owns a fixed, ordered tuple of options. Values read from settings
are passed through ``coerce`` before they reach a rule.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from md_linter.errors import OptionValueError


class OptionKind(str, Enum):
    BOOLEAN = "boolean"
    TEXT = "text"
    DROPDOWN = "dropdown"
    TEXT_AREA = "text_area"


@dataclass(frozen=True)
class Option(ABC):
    key: str
    name: str
    description: str = ""
    default: Any = None

    kind: ClassVar[OptionKind]

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Return ``value`` as this option's type or raise ``OptionValueError``."""


@dataclass(frozen=True)
class BooleanOption(Option):
    default: bool = False

    kind: ClassVar[OptionKind] = OptionKind.BOOLEAN

    def coerce(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise OptionValueError(self.key, value, "expected a boolean")
        return value


@dataclass(frozen=True)
class TextOption(Option):
    default: str = ""

    kind: ClassVar[OptionKind] = OptionKind.TEXT

    def coerce(self, value: Any) -> str:
        if not isinstance(value, str):
            raise OptionValueError(self.key, value, "expected a string")
        return value


@dataclass(frozen=True)
class DropdownOption(Option):
    default: str = ""
    choices: tuple[str, ...] = field(default_factory=tuple)

    kind: ClassVar[OptionKind] = OptionKind.DROPDOWN

    def coerce(self, value: Any) -> str:
        if isinstance(value, Enum):
            value = value.value
        if value not in self.choices:
            allowed = ", ".join(self.choices)
            raise OptionValueError(self.key, value, f"expected one of {allowed}")
        return value


@dataclass(frozen=True)
class TextAreaOption(Option):
    """Free text list, one entry per line."""

    default: tuple[str, ...] = field(default_factory=tuple)

    kind: ClassVar[OptionKind] = OptionKind.TEXT_AREA

    def coerce(self, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = value.split("\n")
        if not isinstance(value, (list, tuple)):
            raise OptionValueError(self.key, value, "expected a list of strings")
        lines: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise OptionValueError(self.key, value, "expected a list of strings")
            item = item.strip()
            if item:
                lines.append(item)
        return tuple(lines)
