from __future__ import annotations

from dataclasses import dataclass

import regex

from md_linter.markdown import update_bold_text, update_italics_text
from md_linter.masking import IgnoreType, ignore_list_of_types
from md_linter.models import Example, RuleCategory
from md_linter.rules.base import RuleBuilder

_CJK = r"(\p{Script=Han}|\p{Script=Katakana}|\p{Script=Hiragana}|\p{Script=Hangul})"
_WORD = r"[A-Za-z0-9_]+"

_HEAD_RE = regex.compile(
    _CJK + r"( *)(\[[^\[]*\]\(.*\)|`[^`]*`|" + _WORD + r"|[-+'\"(\[{¥$]|\*[^*])"
)
_TAIL_RE = regex.compile(
    r"(\[[^\[]*\]\(.*\)|`[^`]*`|" + _WORD + r"|[-+;:'\"°%$)\]}]|[^*]\*)( *)" + _CJK
)

_IGNORED = (
    IgnoreType.CODE,
    IgnoreType.INLINE_CODE,
    IgnoreType.YAML,
    IgnoreType.IMAGE,
    IgnoreType.LINK,
    IgnoreType.WIKI_LINK,
    IgnoreType.TAG,
    IgnoreType.ITALICS,
    IgnoreType.BOLD,
    IgnoreType.MATH,
    IgnoreType.INLINE_MATH,
)


def add_space_around_cjk(text: str) -> str:
    text = _HEAD_RE.sub(r"\1 \3", text)
    return _TAIL_RE.sub(r"\1 \3", text)


@dataclass(frozen=True)
class SpaceBetweenCjkOptions:
    minimum_number_of_dollar_signs_to_be_a_math_block: int = 2


class SpaceBetweenCjkAndEnglishOrNumbers(RuleBuilder):
    NAME = "Space between Chinese Japanese or Korean and English or numbers"
    DESCRIPTION = (
        "Ensures that Chinese, Japanese, or Korean and English or numbers are "
        "separated by a single space. Follows these "
        "[guidelines](https://github.com/sparanoid/chinese-copywriting-guidelines)"
    )
    CATEGORY = RuleCategory.SPACING
    OPTIONS_CLASS = SpaceBetweenCjkOptions

    def apply(self, text: str, options: SpaceBetweenCjkOptions) -> str:
        text = ignore_list_of_types(
            _IGNORED,
            text,
            add_space_around_cjk,
            math_block_min_dollars=options.minimum_number_of_dollar_signs_to_be_a_math_block,
        )
        text = update_italics_text(text, add_space_around_cjk)
        return update_bold_text(text, add_space_around_cjk)

    def examples(self) -> list[Example]:
        return [
            Example(
                description="Space between Chinese and English",
                before="中文字符串english中文字符串。",
                after="中文字符串 english 中文字符串。",
            ),
            Example(
                description="Space between Chinese and link",
                before="中文字符串[english](http://example.com)中文字符串。",
                after="中文字符串 [english](http://example.com) 中文字符串。",
            ),
            Example(
                description="Space between Chinese and inline code block",
                before="中文字符串`code`中文字符串。",
                after="中文字符串 `code` 中文字符串。",
            ),
            Example(
                description="No space between Chinese and English in tag",
                before="#标签A #标签2标签",
                after="#标签A #标签2标签",
            ),
            Example(
                description=(
                    "Make sure that spaces are not added between italics and chinese "
                    "characters to preserve markdown syntax"
                ),
                before=(
                    "_这是一个数学公式_\n"
                    "*这是一个数学公式english*\n"
                    "\n"
                    "# Handling bold and italics nested in each other is not supported at this time\n"
                    "\n"
                    "**_这是一_个数学公式**\n"
                    "*这是一hello__个数学world公式__*"
                ),
                after=(
                    "_这是一个数学公式_\n"
                    "*这是一个数学公式 english*\n"
                    "\n"
                    "# Handling bold and italics nested in each other is not supported at this time\n"
                    "\n"
                    "**_ 这是一 _ 个数学公式**\n"
                    "*这是一 hello__ 个数学 world 公式 __*"
                ),
            ),
            Example(
                description="Images and links are ignored",
                before=(
                    "[[这是一个数学公式english]]\n"
                    "![[这是一个数学公式english.jpg]]\n"
                    "[这是一个数学公式english](这是一个数学公式english.md)\n"
                    "![这是一个数学公式english](这是一个数学公式english.jpg)"
                ),
                after=(
                    "[[这是一个数学公式english]]\n"
                    "![[这是一个数学公式english.jpg]]\n"
                    "[这是一个数学公式english](这是一个数学公式english.md)\n"
                    "![这是一个数学公式english](这是一个数学公式english.jpg)"
                ),
            ),
            Example(
                description="Space between CJK and English",
                before=(
                    "日本語englishひらがな\n"
                    "カタカナenglishカタカナ\n"
                    "ﾊﾝｶｸｶﾀｶﾅenglish１２３全角数字\n"
                    "한글english한글"
                ),
                after=(
                    "日本語 english ひらがな\n"
                    "カタカナ english カタカナ\n"
                    "ﾊﾝｶｸｶﾀｶﾅ english１２３全角数字\n"
                    "한글 english 한글"
                ),
            ),
        ]
