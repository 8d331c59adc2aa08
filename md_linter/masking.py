"""Mask protected markdown regions while a rule rewrites the rest of the text.

Every ignore type has its own recognizer that returns the spans it protects.
``mask`` swaps those spans for placeholder tokens, the caller rewrites the
masked text, and ``unmask`` puts the original text back by token content.

Nested emphasis (bold inside italics and the reverse) is not supported: only
the outer span is recognized and the inner markers are left to the rewrite.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from md_linter.yaml_block import FRONTMATTER_RE


class IgnoreType(str, Enum):
    CODE = "code"
    INLINE_CODE = "inline-code"
    YAML = "yaml"
    IMAGE = "image"
    LINK = "link"
    WIKI_LINK = "wiki-link"
    TAG = "tag"
    ITALICS = "italics"
    BOLD = "bold"
    MATH = "math"
    INLINE_MATH = "inline-math"


@dataclass(frozen=True)
class Span:
    start: int
    end: int


@dataclass(frozen=True)
class MaskedRegion:
    kind: IgnoreType
    start: int
    end: int
    original: str
    placeholder: str


class SpanRecognizer(ABC):
    @abstractmethod
    def match_spans(self, text: str) -> list[Span]:
        """Return non-overlapping spans in document order."""


class RegexRecognizer(SpanRecognizer):
    def __init__(self, *patterns: re.Pattern[str]) -> None:
        self.patterns = patterns

    def match_spans(self, text: str) -> list[Span]:
        spans: list[Span] = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                if match.end() > match.start():
                    spans.append(Span(match.start(), match.end()))
        return _drop_overlaps(spans)


class FencedCodeRecognizer(SpanRecognizer):
    """Fenced code blocks; an unclosed fence runs to the end of the text."""

    _OPEN_RE = re.compile(r"^[ \t]*(?:>[ \t]*)*(`{3,}|~{3,})")

    def match_spans(self, text: str) -> list[Span]:
        spans: list[Span] = []
        offset = 0
        fence: str | None = None
        block_start = 0
        for line in text.splitlines(keepends=True):
            content = line.rstrip("\r\n")
            match = self._OPEN_RE.match(content)
            if fence is None:
                if match is not None:
                    fence = match.group(1)
                    block_start = offset
            elif match is not None and _is_closing_fence(content, match.group(1), fence):
                spans.append(Span(block_start, offset + len(content)))
                fence = None
            offset += len(line)
        if fence is not None:
            spans.append(Span(block_start, len(text)))
        return spans


def _is_closing_fence(line: str, marker: str, fence: str) -> bool:
    if marker[0] != fence[0] or len(marker) < len(fence):
        return False
    return not line.strip().lstrip(">").strip()[len(marker) :].strip()


class MathBlockRecognizer(SpanRecognizer):
    def __init__(self, minimum_dollar_signs: int = 2) -> None:
        count = max(minimum_dollar_signs, 2)
        self.pattern = re.compile(
            rf"(?<!\$)(\${{{count},}})(?!\$).*?(?<!\$)\1(?!\$)", re.DOTALL
        )

    def match_spans(self, text: str) -> list[Span]:
        return [Span(match.start(), match.end()) for match in self.pattern.finditer(text)]


_INLINE_CODE_RE = re.compile(r"(?<!`)(`+)(?!`)[^\n]*?(?<!`)\1(?!`)")
_IMAGE_RE = re.compile(r"!\[[^\]\n]*\]\([^)\n]*\)")
_IMAGE_EMBED_RE = re.compile(r"!\[\[[^\[\]\n]+\]\]")
_MARKDOWN_LINK_RE = re.compile(r"\[[^\[\]\n]*\]\([^)\n]*\)")
_AUTOLINK_RE = re.compile(r"<[A-Za-z][A-Za-z0-9+.-]*:[^\s<>]*>")
_WIKI_LINK_RE = re.compile(r"!?\[\[[^\[\]\n]+\]\]")
_TAG_RE = re.compile(r"(?<!\S)#[^\s#;.,><?!=+\[\](){}\"'`*$]+")
_ITALICS_STAR_RE = re.compile(r"(?<![*\\])\*(?![*\s])[^*\n]*?(?<![\s\\])\*(?!\*)")
_ITALICS_UNDERSCORE_RE = re.compile(r"(?<![_\w\\])_(?![_\s])[^_\n]*?(?<!\s)_(?![_\w])")
_BOLD_STAR_RE = re.compile(r"(?<![*\\])\*\*(?![*\s])[^\n]*?(?<![*\s])\*\*(?!\*)")
_BOLD_UNDERSCORE_RE = re.compile(r"(?<![_\w\\])__(?![_\s])[^\n]*?(?<![_\s])__(?![_\w])")
_INLINE_MATH_RE = re.compile(r"(?<![$\\])\$(?=[^\s$])[^$\n]*?[^\s$\\]\$(?![$\d])")


def recognizer_for(kind: IgnoreType, math_block_min_dollars: int = 2) -> SpanRecognizer:
    if kind == IgnoreType.CODE:
        return FencedCodeRecognizer()
    if kind == IgnoreType.MATH:
        return MathBlockRecognizer(math_block_min_dollars)
    return _REGEX_RECOGNIZERS[kind]


_REGEX_RECOGNIZERS: dict[IgnoreType, SpanRecognizer] = {
    IgnoreType.INLINE_CODE: RegexRecognizer(_INLINE_CODE_RE),
    IgnoreType.YAML: RegexRecognizer(FRONTMATTER_RE),
    IgnoreType.IMAGE: RegexRecognizer(_IMAGE_RE, _IMAGE_EMBED_RE),
    IgnoreType.LINK: RegexRecognizer(_MARKDOWN_LINK_RE, _AUTOLINK_RE),
    IgnoreType.WIKI_LINK: RegexRecognizer(_WIKI_LINK_RE),
    IgnoreType.TAG: RegexRecognizer(_TAG_RE),
    IgnoreType.ITALICS: RegexRecognizer(_ITALICS_STAR_RE, _ITALICS_UNDERSCORE_RE),
    IgnoreType.BOLD: RegexRecognizer(_BOLD_STAR_RE, _BOLD_UNDERSCORE_RE),
    IgnoreType.INLINE_MATH: RegexRecognizer(_INLINE_MATH_RE),
}


def _drop_overlaps(spans: list[Span]) -> list[Span]:
    result: list[Span] = []
    for span in sorted(spans, key=lambda item: (item.start, -item.end)):
        if result and span.start < result[-1].end:
            continue
        result.append(span)
    return result


def _placeholder(kind: IgnoreType, index: int) -> str:
    return f"{{{kind.value}-placeholder-{index}}}"


def mask(
    text: str,
    kinds: Iterable[IgnoreType],
    *,
    math_block_min_dollars: int = 2,
) -> tuple[str, list[MaskedRegion]]:
    """Replace protected spans with placeholders, in the order given.

    A span already masked by an earlier kind is a placeholder by the time a
    later kind is scanned, so the first kind to claim text wins.
    """
    original_text = text
    regions: list[MaskedRegion] = []
    counter = 0
    for kind in kinds:
        spans = recognizer_for(kind, math_block_min_dollars).match_spans(text)
        if not spans:
            continue

        pieces: list[str] = []
        cursor = 0
        for span in spans:
            token = _placeholder(kind, counter)
            while token in original_text:
                counter += 1
                token = _placeholder(kind, counter)
            counter += 1

            pieces.append(text[cursor : span.start])
            pieces.append(token)
            regions.append(
                MaskedRegion(
                    kind=kind,
                    start=span.start,
                    end=span.end,
                    original=text[span.start : span.end],
                    placeholder=token,
                )
            )
            cursor = span.end
        pieces.append(text[cursor:])
        text = "".join(pieces)
    return text, regions


def unmask(text: str, regions: Iterable[MaskedRegion]) -> str:
    """Restore masked spans by placeholder content, latest first.

    Placeholders missing from ``text`` are skipped, which lets callers unmask
    a substring pulled out of the masked text.
    """
    for region in reversed(list(regions)):
        text = text.replace(region.placeholder, region.original, 1)
    return text


def ignore_list_of_types(
    kinds: Iterable[IgnoreType],
    text: str,
    func: Callable[[str], str],
    *,
    math_block_min_dollars: int = 2,
) -> str:
    masked, regions = mask(text, kinds, math_block_min_dollars=math_block_min_dollars)
    return unmask(func(masked), regions)
