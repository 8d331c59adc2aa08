from __future__ import annotations

import re
from dataclasses import dataclass

from md_linter.masking import IgnoreType, ignore_list_of_types
from md_linter.models import Example, RuleCategory
from md_linter.rules.base import RuleBuilder

_URL_CHAR = r"[-A-Z0-9+&@#/%=~_|$?!:,.]"
_URL_END_CHAR = r"[A-Z0-9+&@#/%=~_|$]"
URL_RE = re.compile(
    r"(?:(?:https?|ftp|file)://|www\.|ftp\.)"
    rf"(?:\({_URL_CHAR}*\)|{_URL_CHAR})*"
    rf"(?:\({_URL_CHAR}*\)|{_URL_END_CHAR})",
    re.IGNORECASE,
)

ENCLOSING_PAIRS: tuple[tuple[str, str], ...] = (
    ("<", ">"),
    ('"', '"'),
    ("'", "'"),
    ("“", "”"),
    ("‘", "’"),
    ("`", "`"),
    ("[", "]"),
)

_IGNORED = (
    IgnoreType.CODE,
    IgnoreType.INLINE_CODE,
    IgnoreType.YAML,
    IgnoreType.IMAGE,
    IgnoreType.LINK,
    IgnoreType.WIKI_LINK,
    IgnoreType.TAG,
)


def _is_enclosed(text: str, start: int, end: int) -> bool:
    if start == 0 or end >= len(text):
        return False
    return (text[start - 1], text[end]) in ENCLOSING_PAIRS


def wrap_bare_urls(text: str) -> str:
    def _wrap(match: re.Match[str]) -> str:
        if _is_enclosed(text, match.start(), match.end()):
            return match.group(0)
        return f"<{match.group(0)}>"

    return URL_RE.sub(_wrap, text)


@dataclass(frozen=True)
class NoBareUrlsOptions:
    pass


class NoBareUrls(RuleBuilder):
    NAME = "No Bare URLs"
    DESCRIPTION = (
        "Encloses bare URLs with angle brackets except when enclosed in back "
        "ticks, square braces, or single or double quotes."
    )
    CATEGORY = RuleCategory.CONTENT
    OPTIONS_CLASS = NoBareUrlsOptions

    def apply(self, text: str, options: NoBareUrlsOptions) -> str:
        return ignore_list_of_types(_IGNORED, text, wrap_bare_urls)

    def examples(self) -> list[Example]:
        return [
            Example(
                description=(
                    "Make sure that links are inside of angle brackets when not in "
                    "single quotes, double quotes, or back ticks"
                ),
                before=(
                    "https://github.com\n"
                    "`https://github.com`\n"
                    "[https://github.com](https://google.com)\n"
                    "\"https://github.com\"\n"
                    "<https://github.com>"
                ),
                after=(
                    "<https://github.com>\n"
                    "`https://github.com`\n"
                    "[https://github.com](https://google.com)\n"
                    "\"https://github.com\"\n"
                    "<https://github.com>"
                ),
            ),
            Example(
                description="Leaves markdown links and images alone",
                before=(
                    "[regular link](https://google.com)\n"
                    "![image alt text](https://github.com/favicon.ico)"
                ),
                after=(
                    "[regular link](https://google.com)\n"
                    "![image alt text](https://github.com/favicon.ico)"
                ),
            ),
        ]
