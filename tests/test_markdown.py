import pytest

from linksift.markdown import (
    HeadingIdGenerator,
    extract_markdown,
    extract_markdown_fragments,
)
from linksift.plaintext import RawUri

MD_INPUT = """
# Test

Some link in text [here](https://foo.com)

Code:

```bash
https://bar.com/123
```

or inline like `https://bar.org` for instance.

[example](http://example.com)
        """


def test_skip_verbatim():
    expected = [
        RawUri("https://foo.com", "a", "href"),
        RawUri("http://example.com", "a", "href"),
    ]
    assert extract_markdown(MD_INPUT, False) == expected


def test_include_verbatim():
    expected = [
        RawUri("https://foo.com", "a", "href"),
        RawUri("https://bar.com/123"),
        RawUri("https://bar.org"),
        RawUri("http://example.com", "a", "href"),
    ]
    assert extract_markdown(MD_INPUT, True) == expected


def test_image_link():
    uris = extract_markdown("![alt](https://example.com/pic.png)", False)
    assert uris == [RawUri("https://example.com/pic.png", "img", "src")]


def test_inline_html_link():
    uris = extract_markdown('Text <a href="https://example.org">x</a>', False)
    assert uris == [RawUri("https://example.org", "a", "href")]


def test_plain_url_in_text():
    uris = extract_markdown("Visit https://example.net today", False)
    assert uris == [RawUri("https://example.net")]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("A Heading", "a-heading"),
        ("This header has a :thumbsup: in it", "this-header-has-a-thumbsup-in-it"),
        (
            "Header with 한글 characters (using unicode)",
            "header-with-한글-characters-using-unicode",
        ),
        (
            "Underscores foo_bar_, dots . and numbers 1.7e-3",
            "underscores-foo_bar_-dots--and-numbers-17e-3",
        ),
        ("Many          spaces", "many----------spaces"),
    ],
)
def test_kebab_case(text, expected):
    assert HeadingIdGenerator.into_kebab_case(text) == expected


def test_generator_numbers_repeats():
    generator = HeadingIdGenerator()
    assert generator.generate("Intro") == "intro"
    assert generator.generate("Intro") == "intro-1"
    assert generator.generate("Intro") == "intro-2"


def test_fragments_duplicates():
    assert extract_markdown_fragments("# Test\n\n## Test\n") == {"test", "test-1"}


def test_fragments_explicit_id():
    assert extract_markdown_fragments("# Custom {#custom-id}\n") == {
        "custom-id",
        "custom",
    }


def test_fragments_emphasis():
    assert extract_markdown_fragments("# Hello *World*\n") == {"hello-world"}


def test_fragments_ignore_non_headings():
    assert extract_markdown_fragments("Just a paragraph\n") == set()