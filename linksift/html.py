"""Extract unparsed links from HTML documents.

Links are taken from the attributes known to hold URLs (``href``, ``src``,
``srcset`` and friends) and from the text between elements. Text and
attributes inside preformatted ("verbatim") elements such as ``<pre>`` or
``<code>`` are skipped unless asked for. Links on elements carrying
``rel="nofollow"`` are ignored.
"""

from __future__ import annotations

from html.parser import HTMLParser

from linksift import srcset
from linksift.plaintext import RawUri, extract_plaintext, find_emails

_VERBATIM_ELEMENTS = frozenset(
    {
        "code",
        "kbd",
        "listing",
        "noscript",
        "plaintext",
        "pre",
        "samp",
        "script",
        "textarea",
        "var",
        "xmp",
    }
)

_LINK_ATTRIBUTES = frozenset({"href", "src", "cite", "usemap"})

_ELEMENT_LINK_ATTRIBUTES = frozenset(
    {
        ("applet", "codebase"),
        ("body", "background"),
        ("button", "formaction"),
        ("command", "icon"),
        ("form", "action"),
        ("frame", "longdesc"),
        ("head", "profile"),
        ("html", "manifest"),
        ("iframe", "longdesc"),
        ("img", "longdesc"),
        ("input", "formaction"),
        ("object", "classid"),
        ("object", "codebase"),
        ("object", "data"),
        ("video", "poster"),
    }
)


def is_email_link(text: str) -> bool:
    """Whether ``text`` is exactly one e-mail address, optionally prefixed by ``mailto:``."""
    email = next(find_emails(text), None)
    if email is None:
        return False
    return text.removeprefix("mailto:") == email


def is_verbatim_elem(name: str) -> bool:
    """Whether ``name`` is a preformatted element whose links are skipped by default."""
    return name in _VERBATIM_ELEMENTS


def extract_urls_from_elem_attr(
    attr_name: str, elem_name: str, attr_value: str
) -> list[str] | None:
    """Return the URLs an attribute semantically holds.

    Returns ``None`` when the element/attribute pair is not known to hold
    links at all.
    """
    if attr_name in _LINK_ATTRIBUTES or (elem_name, attr_name) in _ELEMENT_LINK_ATTRIBUTES:
        return [attr_value]
    if attr_name == "srcset":
        return srcset.parse(attr_value)
    return None


class _LinkExtractor(HTMLParser):
    """Tokenizer callbacks that collect links while tracking verbatim blocks."""

    CDATA_CONTENT_ELEMENTS = (
        "script",
        "style",
        "xmp",
        "iframe",
        "noembed",
        "noframes",
        "noscript",
    )

    def __init__(self, include_verbatim: bool) -> None:
        super().__init__(convert_charrefs=True)
        self.links: list[RawUri] = []
        self._include_verbatim = include_verbatim
        self._text: list[str] = []
        self._element_name = ""
        self._element_is_closing = False
        self._element_nofollow = False
        self._attr_name = ""
        self._attr_value = ""
        self._verbatim_element: str | None = None

    # Parser callbacks

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start_tag(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start_tag(tag, attrs, self_closing=True)

    def handle_endtag(self, tag: str) -> None:
        self._init_tag(tag, closing=True)
        self._flush_attribute()

    def handle_data(self, data: str) -> None:
        self._text.append(data)

    def handle_comment(self, data: str) -> None:
        self._flush_characters()

    def handle_decl(self, decl: str) -> None:
        self._flush_characters()

    def handle_pi(self, data: str) -> None:
        self._flush_characters()

    def unknown_decl(self, data: str) -> None:
        self._flush_characters()

    def close(self) -> None:
        super().close()
        self._flush_characters()

    # Token assembly

    def _init_tag(self, name: str, *, closing: bool) -> None:
        self._flush_characters()
        self._element_name = name
        self._element_nofollow = False
        self._element_is_closing = closing

    def _start_tag(
        self, tag: str, attrs: list[tuple[str, str | None]], *, self_closing: bool
    ) -> None:
        self._init_tag(tag, closing=False)
        for name, value in attrs:
            self._flush_attribute()
            self._attr_name += name
            self._attr_value += value or ""
        if self_closing:
            self._element_is_closing = True
        self._flush_attribute()

    @property
    def _inside_verbatim(self) -> bool:
        return self._verbatim_element is not None

    def _skipping_verbatim(self) -> bool:
        return not self._include_verbatim and (
            is_verbatim_elem(self._element_name) or self._inside_verbatim
        )

    def _update_verbatim_element(self) -> None:
        if self._element_is_closing:
            if self._inside_verbatim and self._element_name == self._verbatim_element:
                self._verbatim_element = None
                self._attr_name = ""
                self._attr_value = ""
        elif not self._include_verbatim and is_verbatim_elem(self._element_name):
            if not self._inside_verbatim:
                self._verbatim_element = self._element_name

    def _flush_characters(self) -> None:
        if self._skipping_verbatim():
            self._update_verbatim_element()
            self._text.clear()
            return
        self.links.extend(extract_plaintext("".join(self._text)))
        self._text.clear()

    def _flush_attribute(self) -> None:
        if self._skipping_verbatim():
            self._update_verbatim_element()
            return

        name = self._element_name
        attr = self._attr_name
        value = self._attr_value

        if attr == "rel" and "nofollow" in value:
            self._element_nofollow = True
        if self._element_nofollow:
            self._attr_name = ""
            self._attr_value = ""
            return

        urls = extract_urls_from_elem_attr(attr, name, value)
        if urls is None:
            self.links.extend(extract_plaintext(value))
        else:
            self.links.extend(
                RawUri(url, name, attr)
                for url in urls
                if _keep_url(url, attr)
            )

        self._attr_name = ""
        self._attr_value = ""


def _keep_url(url: str, attr: str) -> bool:
    """Keep e-mail addresses only as ``mailto:`` links in ``href`` attributes."""
    if not is_email_link(url):
        return True
    return url.startswith("mailto:") and attr == "href"


def extract_html(buf: str, include_verbatim: bool = False) -> list[RawUri]:
    """Extract unparsed links from an HTML string, in document order."""
    extractor = _LinkExtractor(include_verbatim)
    extractor.feed(buf)
    extractor.close()
    return extractor.links