"""Find links and e-mail addresses in plain text."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class RawUri:
    """An unparsed link as found in a document.

    ``element`` and ``attribute`` name the HTML element and attribute the
    link came from, when there is one.
    """

    text: str
    element: str | None = None
    attribute: str | None = None

    def __str__(self) -> str:
        return self.text


_SCHEME = re.compile(r"(?<![A-Za-z0-9+.\-])[A-Za-z][A-Za-z0-9+.\-]*://")

_LOCAL_CHARS = r"[\w.!#$%&*+/=?^~\-]"
_LABEL = r"[^\W_](?:[\w\-]*[^\W_])?"
_EMAIL = re.compile(rf"{_LOCAL_CHARS}+@{_LABEL}(?:\.{_LABEL})+")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}
_STOP_CHARS = frozenset('<>"')
_TRAILING_CHARS = frozenset(".,:;?!'`")


def _url_end(text: str, start: int) -> int:
    """Return the end of a URL whose body begins at ``start``."""
    depth = dict.fromkeys(_OPENERS, 0)
    end = start
    for position, char in enumerate(text[start:], start):
        if char.isspace() or char in _STOP_CHARS or not char.isprintable():
            break
        if char in _OPENERS:
            depth[char] += 1
        elif char in _CLOSERS:
            opener = _CLOSERS[char]
            if depth[opener] == 0:
                break
            depth[opener] -= 1
        if char not in _TRAILING_CHARS:
            end = position + 1
    return end


def _url_spans(text: str) -> Iterator[tuple[int, int]]:
    position = 0
    while match := _SCHEME.search(text, position):
        end = _url_end(text, match.end())
        if end > match.end():
            yield match.start(), end
            position = end
        else:
            position = match.end()


def _email_spans(text: str) -> Iterator[tuple[int, int]]:
    for match in _EMAIL.finditer(text):
        yield match.span()


def find_emails(text: str) -> Iterator[str]:
    """Yield every e-mail address found in ``text``, in order."""
    for start, end in _email_spans(text):
        yield text[start:end]


def find_links(text: str) -> Iterator[str]:
    """Yield URLs and e-mail addresses found in ``text``, in order.

    An e-mail address that lies within a URL is part of that URL and is not
    reported on its own.
    """
    urls = list(_url_spans(text))
    emails = [
        (start, end)
        for start, end in _email_spans(text)
        if not any(start < url_end and url_start < end for url_start, url_end in urls)
    ]
    for start, end in sorted(urls + emails):
        yield text[start:end]


def extract_plaintext(text: str) -> list[RawUri]:
    """Extract unparsed links from plain text."""
    return [RawUri(link) for link in find_links(text)]