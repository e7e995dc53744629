# linksift

Find the links in a document, decide which of them are worth checking, and
prepare them for a request.

linksift reads Markdown, HTML and plain text. It returns the raw links it finds,
and for each one the element and attribute it came from. Its filters drop mail
addresses, private, link-local or loopback hosts, reserved example domains and
well-known false positives. Remapping rules point links at another location.
Request quirks adjust requests for sites that need special handling.

## Installation

```
pip install linksift
```

To run the test suite:

```
pip install "linksift[test]"
pytest
```

## Extracting links

```python
from linksift.extract import Extractor, FileType

extractor = Extractor()
for raw in extractor.extract("See [the docs](https://docs.example.com/start).", FileType.MARKDOWN):
    print(raw.text, raw.element, raw.attribute)
# https://docs.example.com/start a href
```

Each result is a `linksift.plaintext.RawUri` with `text`, `element` and
`attribute`. Links found in running text have no element or attribute.

`FileType.from_path("notes.md")` picks the format from a file name. `.md` and
`.markdown` files are Markdown, `.html` and `.htm` files are HTML, and anything
else is plain text.

Links inside code blocks and inline code are skipped by default. So are links
inside verbatim HTML elements such as `<pre>`, `<code>` and `<script>`. Create
the extractor with `Extractor(include_verbatim=True)` to keep them. HTML links on
elements marked `rel="nofollow"` are always skipped. E-mail addresses in HTML
attributes are kept only as `mailto:` links in `href`.

Each format also has its own function:

- `linksift.plaintext.extract_plaintext`
- `linksift.html.extract_html`
- `linksift.markdown.extract_markdown`

There are also some helper functions:

- `linksift.plaintext.find_links` and `linksift.plaintext.find_emails` yield the
  matching strings one at a time.
- `linksift.srcset.parse` splits an `srcset` attribute into its image URLs.
- `linksift.markdown.extract_markdown_fragments` returns the heading anchors
  that a Markdown document defines. These are explicit `{#id}` attributes and
  ids generated from the heading text.

## Filtering

```python
from linksift.filter import Excludes, Filter, Includes

link_filter = Filter(
    excludes=Excludes([r"github\.com"]),
    exclude_private_ips=True,
)
link_filter.is_excluded("https://github.com/some/repo")   # True
link_filter.is_excluded("http://192.168.0.1/")            # True
link_filter.is_excluded("https://docs.python.org/3/")     # False
```

`Includes` take precedence over `Excludes`. When include patterns are set, a
link that matches none of them is excluded.

Other options on `Filter`:

- `schemes` limits checking to the given schemes.
- `exclude_link_local_ips` excludes link-local addresses.
- `exclude_loopback_ips` excludes loopback addresses, and `localhost` with them.
- `include_mail` keeps `mailto:` links, which are excluded by default.

Some links are always excluded:

- Links into the reserved example domains `example.com`, `example.org`,
  `example.net` and `example.edu`, including their subdomains. Use the
  `example_domains` field to change this list.
- Links into domains that cannot be checked without logging in.
- Well-known namespace URLs such as `http://www.w3.org/1999/xhtml`. These stay
  excluded unless an include pattern matches them.

## Remapping

```python
from linksift.remap import Remaps

remaps = Remaps.from_strings([r"https://docs\.example\.org file:///srv/site"])
remaps.remap("https://docs.example.org/guide.html")
# 'file:///srv/site/guide.html'
```

Each rule is a regular expression and a replacement, separated by whitespace.
`Remaps` also accepts a list of `(pattern, replacement)` pairs directly.

- The first rule that matches is applied. A URL that matches no rule comes back
  unchanged.
- The replacement can use capture groups: `$1`, `${1}`, `$name` or `${name}`.
  Write `$$` for a literal dollar sign.
- A malformed rule raises `RemapError`.
- A replacement that does not give a valid URL also raises `RemapError`.

## Quirks and retries

`linksift.quirks.Quirks().apply(request)` rewrites a `linksift.quirks.Request`,
which holds a URL, a method and headers. Only the first matching quirk is
applied:

- Requests to crates.io ask for `text/html`.
- A YouTube video page or short link becomes a request for the video's
  thumbnail image.

`linksift.retry.should_retry_status(code)` is true for server errors, 408 and 429.

`linksift.retry.should_retry_error(error)` is true for timeouts, incomplete
responses and reset or aborted connections. It also looks at the errors that
caused `error`.

## What linksift does not do

linksift sends no requests and checks no links itself. It has no command-line
tool and reads no files or URLs on its own. You pass it the document text and
the file type, and you handle fetching, checking and reporting.