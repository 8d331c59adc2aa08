"""Base class for rule implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from md_linter.constants import ENABLED_OPTION_KEY
from md_linter.models import Example, RuleCategory, RuleDescriptor
from md_linter.options import BooleanOption, Option


class RuleBuilder(ABC):
    NAME: ClassVar[str]
    DESCRIPTION: ClassVar[str]
    CATEGORY: ClassVar[RuleCategory]
    OPTIONS_CLASS: ClassVar[type]
    SPECIAL_ORDER: ClassVar[bool] = False

    @abstractmethod
    def apply(self, text: str, options: Any) -> str:
        """Return ``text`` with the rule applied."""

    def option_builders(self) -> list[Option]:
        return []

    def examples(self) -> list[Example]:
        return []

    def build(self) -> RuleDescriptor:
        enabled = BooleanOption(
            key=ENABLED_OPTION_KEY, name=self.DESCRIPTION, default=False
        )
        return RuleDescriptor(
            name=self.NAME,
            description=self.DESCRIPTION,
            category=self.CATEGORY,
            apply=self.apply,
            options_class=self.OPTIONS_CLASS,
            options=(enabled, *self.option_builders()),
            special_order=self.SPECIAL_ORDER,
            examples=tuple(self.examples()),
        )
