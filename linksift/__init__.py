"""Extract links from Markdown, HTML and plain text, filter and remap them, and adjust requests."""

__version__ = "0.1.0"