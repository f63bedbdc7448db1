from warpgen.rendering.scanner import (
    EACH_OPEN,
    FUNCTION,
    IF_CLOSE,
    IF_OPEN,
    INCLUDE,
    VARIABLE,
    closing_token,
    iter_tags,
    next_tag,
)


def test_classifies_tags():
    text = "{{#if_ci}}{{/if_ci}}{{#each_items}}{{include:a.txt}}{{function:uppercase:x}}{{NAME}}"
    kinds = [(tag.kind, tag.name) for tag in iter_tags(text)]
    assert kinds == [
        (IF_OPEN, "ci"),
        (IF_CLOSE, "ci"),
        (EACH_OPEN, "items"),
        (INCLUDE, "a.txt"),
        (FUNCTION, "uppercase"),
        (VARIABLE, "NAME"),
    ]


def test_tag_positions():
    tag = next_tag("ab{{NAME}}cd")
    assert (tag.start, tag.end) == (2, 10)


def test_function_args_split_on_first_colon():
    tag = next_tag("{{function:lowercase:A:B}}")
    assert (tag.name, tag.args) == ("lowercase", "A:B")


def test_function_without_args():
    tag = next_tag("{{function:current_year}}")
    assert (tag.kind, tag.name, tag.args) == (FUNCTION, "current_year", "")


def test_empty_prefixed_names_are_plain_variables():
    assert next_tag("{{include:}}").kind == VARIABLE
    assert next_tag("{{function:}}").kind == VARIABLE
    assert next_tag("{{#if_}}").kind == VARIABLE


def test_unterminated_tag_is_ignored():
    assert next_tag("text {{NAME") is None


def test_kind_filter_finds_tags_inside_other_tags():
    tag = next_tag("{{function:uppercase:{{include:a.txt}}}}", kinds=(INCLUDE,))
    assert tag.kind == INCLUDE
    assert tag.name == "a.txt"


def test_nested_braces_end_at_first_close():
    tag = next_tag("{{function:uppercase:{{PROJECT_NAME}}}}")
    assert tag.args == "{{PROJECT_NAME"
    assert tag.end == len("{{function:uppercase:{{PROJECT_NAME}}")


def test_closing_token():
    assert closing_token(next_tag("{{#if_docker}}")) == "{{/if_docker}}"
    assert closing_token(next_tag("{{#each_items}}")) == "{{/each_items}}"
