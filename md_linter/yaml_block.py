"""Read and edit the YAML frontmatter block at the top of a markdown document.

Section edits are line based: only the lines that belong to the edited key
are rewritten, so every other key keeps its exact text. Values are handled in
their raw form, as they appear after ``key:``:

* ``""`` for a key without a value,
* ``value`` for a scalar (plus any indented continuation lines),
* ``[a, b]`` for a single-line array,
* ``"\\n  - a\\n  - b"`` for a multi-line array.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

import yaml

from md_linter.constants import FRONTMATTER_DELIMITER
from md_linter.errors import StructuredValueError
from md_linter.models import ArrayFormat, ValueKind

FRONTMATTER_RE = re.compile(r"^---\n((?:.*?\n)?)---(?=\n|$)", re.DOTALL)

_LIST_ITEM_RE = re.compile(r"^[ \t]*-(?:[ \t]+|$)")
_LIST_INDENT = "  "
_QUOTES = ("'", '"')
_YAML_INDICATORS = frozenset("[]{},&*!|>%@`#")
_RESERVED_WORDS = frozenset({"true", "false", "yes", "no", "on", "off", "null", "~"})
_FLOW_INDICATORS = frozenset(",[]{}")


@dataclass(frozen=True)
class ReadResult:
    """Outcome of decoding a frontmatter value.

    Callers decide whether a failed read is fatal (``unwrap``) or should fall
    back to a default (``value_or``).
    """

    value: Any = None
    error: StructuredValueError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default: Any) -> Any:
        return default if self.error is not None else self.value


@dataclass(frozen=True)
class _Section:
    start: int
    end: int
    separator: str
    value: str


# --- document level ---


def find_frontmatter(text: str) -> re.Match[str] | None:
    return FRONTMATTER_RE.match(text)


def get_frontmatter_body(text: str) -> str | None:
    match = find_frontmatter(text)
    if match is None:
        return None
    return match.group(1)


def ensure_frontmatter(text: str) -> str:
    if find_frontmatter(text) is not None:
        return text
    return f"{FRONTMATTER_DELIMITER}\n{FRONTMATTER_DELIMITER}\n{text}"


def replace_frontmatter_body(text: str, body: str) -> str:
    match = find_frontmatter(text)
    if match is None:
        raise ValueError("Text does not start with a frontmatter block")
    if body and not body.endswith("\n"):
        body += "\n"
    return text[: match.start(1)] + body + text[match.end(1) :]


def format_frontmatter(text: str, func: Callable[[str], str]) -> str:
    body = get_frontmatter_body(text)
    if body is None:
        return text
    new_body = func(body)
    if new_body == body:
        return text
    return replace_frontmatter_body(text, new_body)


# --- sections ---


def _is_indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def _find_section(lines: Sequence[str], key: str) -> _Section | None:
    prefix = f"{key}:"
    for index, line in enumerate(lines):
        if not line.startswith(prefix):
            continue
        rest = line[len(prefix) :]
        if rest and rest[0] not in (" ", "\t"):
            continue

        if rest.strip(" \t"):
            value, separator = rest[1:], rest[:1]
        else:
            value, separator = "", rest
        end = index + 1
        if value:
            while end < len(lines) and _is_indented(lines[end]):
                end += 1
            continuation = lines[index + 1 : end]
            if continuation:
                value = "\n".join([value, *continuation])
        else:
            while end < len(lines) and (
                _is_indented(lines[end]) or _LIST_ITEM_RE.match(lines[end])
            ):
                end += 1
            continuation = lines[index + 1 : end]
            if continuation:
                value = "\n" + "\n".join(continuation)
        return _Section(start=index, end=end, separator=separator, value=value)
    return None


def _render_section(key: str, value: str, separator: str) -> str:
    if not value:
        return f"{key}:{separator}"
    if value.startswith("\n"):
        return f"{key}:{value}"
    return f"{key}:{separator or ' '}{value}"


def get_section_value(body: str, key: str) -> str | None:
    section = _find_section(body.split("\n"), key)
    if section is None:
        return None
    return section.value


def set_section_value(body: str, key: str, value: str) -> str:
    lines = body.split("\n")
    section = _find_section(lines, key)
    if section is None:
        if body and not body.endswith("\n"):
            body += "\n"
        return f"{body}{_render_section(key, value, separator='')}\n"

    if section.value == value:
        return body
    rendered = _render_section(key, value, section.separator)
    return "\n".join([*lines[: section.start], rendered, *lines[section.end :]])


def remove_section(body: str, key: str) -> str:
    lines = body.split("\n")
    section = _find_section(lines, key)
    if section is None:
        return body

    remaining = [*lines[: section.start], *lines[section.end :]]
    start = section.start
    if (
        start > 0
        and not remaining[start - 1].strip()
        and (start >= len(remaining) - 1 or not remaining[start].strip())
    ):
        del remaining[start - 1]
    elif start == 0 and len(remaining) > 1 and not remaining[0].strip():
        del remaining[0]

    result = "\n".join(remaining)
    if not result.strip():
        return ""
    return result


def first_present_key(body: str, keys: Iterable[str]) -> str | None:
    lines = body.split("\n")
    for key in keys:
        if _find_section(lines, key) is not None:
            return key
    return None


def load_section(body: str, key: str) -> ReadResult:
    """Decode one section with a YAML parser."""
    raw = get_section_value(body, key)
    if raw is None:
        return ReadResult(None)

    source = _render_section(key, raw, separator=" ")
    try:
        loaded = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        return ReadResult(
            error=StructuredValueError(f"could not parse {key!r}: {exc}", raw)
        )
    if not isinstance(loaded, dict):
        return ReadResult(
            error=StructuredValueError(f"could not parse {key!r} as a mapping", raw)
        )
    return ReadResult(loaded.get(key))


# --- values ---


def classify_value(raw: str | None) -> ValueKind:
    if raw is None or not raw.strip():
        return ValueKind.EMPTY
    first_line = raw.split("\n", 1)[0]
    if "\n" in raw and not first_line.strip():
        return ValueKind.MULTI_LINE_ARRAY
    if "\n" not in raw and raw.strip().startswith("["):
        return ValueKind.SINGLE_LINE_ARRAY
    return ValueKind.SCALAR


def style_of(raw: str | None) -> ArrayFormat:
    kind = classify_value(raw)
    if kind is ValueKind.SINGLE_LINE_ARRAY:
        return ArrayFormat.SINGLE_LINE
    if kind is ValueKind.MULTI_LINE_ARRAY:
        return ArrayFormat.MULTI_LINE
    if kind is ValueKind.SCALAR:
        return ArrayFormat.SINGLE_STRING_TO_SINGLE_LINE
    return ArrayFormat.SINGLE_STRING_TO_MULTI_LINE


def to_string_or_array(raw: str | None) -> ReadResult:
    """Split a raw value into a string or a list of item strings.

    Quoted items are returned with their quotes so they compare equal to
    values produced by ``escape_if_needed``.
    """
    kind = classify_value(raw)
    if kind is ValueKind.EMPTY:
        return ReadResult("")
    if kind is ValueKind.SCALAR:
        return ReadResult(raw.strip())
    if kind is ValueKind.SINGLE_LINE_ARRAY:
        return _split_single_line_array(raw.strip())
    return _split_multi_line_array(raw)


def _split_single_line_array(value: str) -> ReadResult:
    if not value.endswith("]"):
        return ReadResult(
            error=StructuredValueError("unterminated single-line array", value)
        )

    inner = value[1:-1]
    items: list[str] = []
    current: list[str] = []
    quote: str | None = None
    index = 0
    while index < len(inner):
        char = inner[index]
        if quote is not None:
            current.append(char)
            if char == quote:
                if quote == "'" and inner[index + 1 : index + 2] == "'":
                    current.append("'")
                    index += 1
                elif quote == '"' and current[-2:-1] == ["\\"]:
                    pass
                else:
                    quote = None
        elif char == ",":
            items.append("".join(current).strip())
            current = []
        elif char in _QUOTES and not "".join(current).strip():
            quote = char
            current.append(char)
        elif char in "[]{}":
            return ReadResult(
                error=StructuredValueError("nested collections are not supported", value)
            )
        else:
            current.append(char)
        index += 1

    if quote is not None:
        return ReadResult(error=StructuredValueError("unbalanced quote", value))
    items.append("".join(current).strip())
    return ReadResult([item for item in items if item])


def _split_multi_line_array(raw: str) -> ReadResult:
    items: list[str] = []
    for line in raw.split("\n")[1:]:
        if not line.strip():
            continue
        match = _LIST_ITEM_RE.match(line)
        if match is None:
            return ReadResult(
                error=StructuredValueError(f"expected a list item, got {line.strip()!r}", raw)
            )
        item = line[match.end() :].strip()
        if item:
            items.append(item)
    return ReadResult(items)


def format_value(
    value: str | Sequence[str], style: ArrayFormat, escape_char: str = '"'
) -> str:
    """Encode items in the given array style.

    Items in a single-line array are quoted when they contain a flow
    indicator, otherwise they would be split or nested on the next read.
    """
    items = [value] if isinstance(value, str) else list(value)
    items = [item for item in items if item]

    if not items:
        if style == ArrayFormat.SINGLE_STRING_TO_MULTI_LINE:
            return ""
        return "[]"

    if len(items) == 1 and style in (
        ArrayFormat.SINGLE_STRING_TO_SINGLE_LINE,
        ArrayFormat.SINGLE_STRING_TO_MULTI_LINE,
    ):
        return items[0]
    if style in (ArrayFormat.SINGLE_LINE, ArrayFormat.SINGLE_STRING_TO_SINGLE_LINE):
        return "[" + ", ".join(_flow_item(item, escape_char) for item in items) + "]"
    return "".join(f"\n{_LIST_INDENT}- {item}" for item in items)


# --- escaping ---


def is_value_escaped_already(value: str) -> bool:
    return len(value) > 1 and value[0] in _QUOTES and value[0] == value[-1]


def _flow_item(item: str, escape_char: str) -> str:
    if is_value_escaped_already(item) or not _FLOW_INDICATORS.intersection(item):
        return item
    return escape_if_needed(item, escape_char, force_escape=True)


def strip_flow_quotes(item: str) -> str:
    """Undo the quoting ``format_value`` adds to single-line array items."""
    if not is_value_escaped_already(item):
        return item
    inner = item[1:-1]
    if not _FLOW_INDICATORS.intersection(inner) or _needs_escape(inner):
        return item
    return inner


def _needs_escape(value: str) -> bool:
    if not value:
        return False
    if "'" in value or '"' in value:
        return True
    if ": " in value or " #" in value or value.endswith(":"):
        return True
    if value[0] in _YAML_INDICATORS or value.startswith(("- ", "? ")):
        return True
    return value.lower() in _RESERVED_WORDS


def escape_if_needed(
    value: str, escape_char: str = '"', force_escape: bool = False
) -> str:
    if escape_char not in _QUOTES:
        raise ValueError(f"Unsupported escape character: {escape_char!r}")
    if is_value_escaped_already(value):
        return value
    if not force_escape and not _needs_escape(value):
        return value

    other = "'" if escape_char == '"' else '"'
    if escape_char in value and other not in value:
        return f"{other}{value}{other}"
    if escape_char in value:
        if escape_char == "'":
            inner = value.replace("'", "''")
        else:
            inner = value.replace("\\", "\\\\").replace('"', '\\"')
        return f"{escape_char}{inner}{escape_char}"
    return f"{escape_char}{value}{escape_char}"
