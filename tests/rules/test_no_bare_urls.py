import pytest

from md_linter.rules.no_bare_urls import NoBareUrls


@pytest.mark.parametrize(
    "text",
    [
        "[regular link](https://google.com)\n![image alt text](https://github.com/favicon.ico)",
        "<https://google.com#hashtag>",
        "“https://google.com”\n‘https://google.com’",
        "`http --headers --follow --all https://google.com`",
        "\"https://google.com\" and 'https://google.com'",
        "```\nhttps://google.com\n```",
        "[[https://google.com]]",
        "see [https://github.com] here",
    ],
)
def test_enclosed_urls_are_left_alone(apply_rule, text: str) -> None:
    assert apply_rule(NoBareUrls(), text) == text


def test_bare_urls_are_wrapped(apply_rule) -> None:
    before = "See https://example.com/path?q=1 and www.example.org."
    after = "See <https://example.com/path?q=1> and <www.example.org>."
    assert apply_rule(NoBareUrls(), before) == after


def test_url_at_start_and_end(apply_rule) -> None:
    assert apply_rule(NoBareUrls(), "https://a.io") == "<https://a.io>"


def test_frontmatter_urls_are_left_alone(apply_rule) -> None:
    text = "---\nsource: https://example.com\n---\nhttps://example.com"
    assert apply_rule(NoBareUrls(), text) == (
        "---\nsource: https://example.com\n---\n<https://example.com>"
    )


def test_wrapping_is_idempotent(apply_rule) -> None:
    once = apply_rule(NoBareUrls(), "visit https://example.com today")
    assert apply_rule(NoBareUrls(), once) == once == "visit <https://example.com> today"
