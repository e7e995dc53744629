"""Extract links and heading fragments from Markdown documents."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.token import Token

from linksift.html import extract_html
from linksift.plaintext import RawUri, extract_plaintext

_HEADING_ATTRIBUTES = re.compile(r"\s*\{([^{}]*)\}\s*$")


def _parser() -> MarkdownIt:
    """A CommonMark parser that accepts every link destination and keeps it as written."""
    md = MarkdownIt("commonmark")
    md.validateLink = lambda url: True  # type: ignore[method-assign]
    md.normalizeLink = lambda url: url  # type: ignore[method-assign]
    return md


def _inline_links(children: Iterable[Token], include_verbatim: bool) -> Iterator[RawUri]:
    for token in children:
        if token.type == "link_open":
            yield RawUri(str(token.attrGet("href") or ""), "a", "href")
        elif token.type == "image":
            yield RawUri(str(token.attrGet("src") or ""), "img", "src")
            yield from _inline_links(token.children or (), include_verbatim)
        elif token.type == "text":
            yield from extract_plaintext(token.content)
        elif token.type == "html_inline":
            yield from extract_html(token.content, include_verbatim)
        elif token.type == "code_inline":
            if include_verbatim:
                yield from extract_plaintext(token.content)


def _links(text: str, include_verbatim: bool) -> Iterator[RawUri]:
    for token in _parser().parse(text):
        if token.type == "inline":
            yield from _inline_links(token.children or (), include_verbatim)
        elif token.type in ("fence", "code_block"):
            if include_verbatim:
                yield from extract_plaintext(token.content)
        elif token.type == "html_block":
            yield from extract_html(token.content, include_verbatim)


def extract_markdown(text: str, include_verbatim: bool = False) -> list[RawUri]:
    """Extract unparsed links from a Markdown string, in document order.

    Links inside code blocks and inline code are skipped unless
    ``include_verbatim`` is set.
    """
    return list(_links(text, include_verbatim))


def _heading_text(children: Iterable[Token]) -> str:
    parts = []
    for token in children:
        if token.type == "text":
            parts.append(token.content)
        elif token.children:
            parts.append(_heading_text(token.children))
    return "".join(parts)


def _split_heading_attributes(heading: str) -> tuple[str, str | None]:
    """Strip a trailing ``{#id .class}`` block, returning the text and the id."""
    match = _HEADING_ATTRIBUTES.search(heading)
    if match is None:
        return heading, None
    identifier = None
    for attribute in match.group(1).split():
        if attribute.startswith("#") and len(attribute) > 1:
            identifier = attribute[1:]
    return heading[: match.start()].rstrip(), identifier


@dataclass
class HeadingIdGenerator:
    """Generate unique anchor ids for headings, numbering repeats."""

    counter: dict[str, int] = field(default_factory=dict)

    def generate(self, heading: str) -> str:
        """Return the anchor id for ``heading``, unique within this generator."""
        identifier = self.into_kebab_case(heading)
        count = self.counter.get(identifier, 0)
        self.counter[identifier] = count + 1
        if count:
            return f"{identifier}-{count}"
        return identifier

    @staticmethod
    def into_kebab_case(text: str) -> str:
        """Lower-case ASCII letters, turn whitespace into dashes, drop punctuation."""
        chars = []
        for char in text:
            if char.isalnum() or char in "_-":
                chars.append(char.lower() if char.isascii() else char)
            elif char.isspace():
                chars.append("-")
        return "".join(chars)


def extract_markdown_fragments(text: str) -> set[str]:
    """Return the anchor ids of all headings in a Markdown string.

    Both explicit ``{#id}`` attributes and ids generated from the heading
    text are included.
    """
    generator = HeadingIdGenerator()
    fragments: set[str] = set()
    in_heading = False
    heading = ""

    for token in _parser().parse(text):
        if token.type == "heading_open":
            in_heading = True
            heading = ""
        elif token.type == "inline" and in_heading:
            heading += _heading_text(token.children or ())
        elif token.type == "heading_close":
            heading, identifier = _split_heading_attributes(heading)
            if identifier is not None:
                fragments.add(identifier)
            if heading:
                fragments.add(generator.generate(heading))
            heading = ""
            in_heading = False

    return fragments