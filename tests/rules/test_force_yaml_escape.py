from md_linter.rules.force_yaml_escape import ForceYamlEscape


def test_escapes_listed_keys(apply_rule) -> None:
    before = "---\ntitle: This is a title\nbool: false\nother: value\n---\nBody"
    after = '---\ntitle: "This is a title"\nbool: "false"\nother: value\n---\nBody'
    assert apply_rule(ForceYamlEscape(), before, force_yaml_escape=("title", "bool")) == after


def test_uses_configured_escape_character(apply_rule) -> None:
    result = apply_rule(
        ForceYamlEscape(),
        "---\ntitle: plain\n---\n",
        force_yaml_escape=("title",),
        default_escape_character="'",
    )
    assert result == "---\ntitle: 'plain'\n---\n"


def test_value_containing_escape_character_uses_other_quote(apply_rule) -> None:
    result = apply_rule(
        ForceYamlEscape(), '---\ntitle: a "b" c\n---\n', force_yaml_escape=("title",)
    )
    assert result == "---\ntitle: 'a \"b\" c'\n---\n"


def test_skips_arrays_empty_and_escaped_values(apply_rule) -> None:
    before = (
        "---\n"
        "tags: [a, b]\n"
        "aliases:\n"
        "  - a\n"
        "empty:\n"
        "done: 'already'\n"
        "---\n"
    )
    keys = ("tags", "aliases", "empty", "done", "missing")
    assert apply_rule(ForceYamlEscape(), before, force_yaml_escape=keys) == before


def test_without_block_is_noop(apply_rule) -> None:
    assert apply_rule(ForceYamlEscape(), "# Title", force_yaml_escape=("title",)) == "# Title"


def test_is_special_order() -> None:
    assert ForceYamlEscape().build().special_order is True
