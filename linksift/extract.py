"""Extract unparsed links from Markdown, HTML and plain text."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import PurePath

from linksift.html import extract_html
from linksift.markdown import extract_markdown
from linksift.plaintext import RawUri, extract_plaintext

_MARKDOWN_EXTENSIONS = frozenset({"md", "markdown"})
_HTML_EXTENSIONS = frozenset({"html", "htm"})


class FileType(enum.Enum):
    """The format of a document."""

    MARKDOWN = "markdown"
    HTML = "html"
    PLAINTEXT = "plaintext"

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> FileType:
        """Guess the format from a file extension; unknown ones are plain text."""
        extension = PurePath(path).suffix.lstrip(".").lower()
        if extension in _MARKDOWN_EXTENSIONS:
            return cls.MARKDOWN
        if extension in _HTML_EXTENSIONS:
            return cls.HTML
        return cls.PLAINTEXT


@dataclass(frozen=True)
class Extractor:
    """Extract links from documents of any supported format.

    With ``include_verbatim`` set, links inside code blocks and
    preformatted elements are extracted too.
    """

    include_verbatim: bool = False

    def extract(self, content: str, file_type: FileType) -> list[RawUri]:
        """Extract unparsed links from ``content`` according to ``file_type``."""
        if file_type is FileType.MARKDOWN:
            return extract_markdown(content, self.include_verbatim)
        if file_type is FileType.HTML:
            return extract_html(content, self.include_verbatim)
        return extract_plaintext(content)