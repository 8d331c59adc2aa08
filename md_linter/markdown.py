from __future__ import annotations

import re
from typing import Callable

from md_linter.masking import IgnoreType, ignore_list_of_types, recognizer_for

_FIRST_H1_RE = re.compile(r"^#[ \t]+(.*)$", re.MULTILINE)
_WIKI_LINK_TEXT_RE = re.compile(r"!?\[\[([^\[\]|\n]+)(?:\|([^\[\]\n]+))?\]\]")
_MARKDOWN_LINK_TEXT_RE = re.compile(r"\[([^\[\]\n]*)\]\([^)\n]*\)")

_EMPHASIS_PROTECTED = (
    IgnoreType.CODE,
    IgnoreType.INLINE_CODE,
    IgnoreType.YAML,
    IgnoreType.MATH,
    IgnoreType.INLINE_MATH,
    IgnoreType.IMAGE,
    IgnoreType.LINK,
    IgnoreType.WIKI_LINK,
)


def get_first_header_one_text(text: str) -> str:
    """Text of the first H1 with links reduced to their display text."""
    match = _FIRST_H1_RE.search(text)
    if match is None:
        return ""

    header = match.group(1)
    header = _WIKI_LINK_TEXT_RE.sub(
        lambda link: (link.group(2) or link.group(1)).strip(), header
    )
    header = _MARKDOWN_LINK_TEXT_RE.sub(r"\1", header)
    return header.strip()


def _update_emphasis(
    text: str, kind: IgnoreType, marker_width: int, func: Callable[[str], str]
) -> str:
    def _rewrite(masked: str) -> str:
        spans = recognizer_for(kind).match_spans(masked)
        for span in reversed(spans):
            inner_start = span.start + marker_width
            inner_end = span.end - marker_width
            masked = (
                masked[:inner_start]
                + func(masked[inner_start:inner_end])
                + masked[inner_end:]
            )
        return masked

    return ignore_list_of_types(_EMPHASIS_PROTECTED, text, _rewrite)


def update_italics_text(text: str, func: Callable[[str], str]) -> str:
    """Apply ``func`` to the text inside each italics span, keeping the markers."""
    return _update_emphasis(text, IgnoreType.ITALICS, 1, func)


def update_bold_text(text: str, func: Callable[[str], str]) -> str:
    """Apply ``func`` to the text inside each bold span, keeping the markers."""
    return _update_emphasis(text, IgnoreType.BOLD, 2, func)
