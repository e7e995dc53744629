"""Rewrite requests to sites that need special handling before checking.

Only the first quirk whose pattern matches the request URL is applied.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from urllib.parse import parse_qsl, urlsplit

CRATES_PATTERN = re.compile(r"^(https?://)?(www\.)?crates.io")
YOUTUBE_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com)")
YOUTUBE_SHORT_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtu\.?be)")


@dataclass
class Request:
    """An HTTP request about to be sent: method, URL and headers."""

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Quirk:
    """A rewrite applied to requests whose URL matches ``pattern``."""

    pattern: re.Pattern[str]
    rewrite: Callable[[Request], Request]


def _query(request: Request) -> dict[str, str]:
    """The query parameters of the request URL; later values win."""
    return dict(parse_qsl(urlsplit(request.url).query, keep_blank_values=True))


def _thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/0.jpg"


def _accept_html(request: Request) -> Request:
    return replace(request, headers={**request.headers, "Accept": "text/html"})


def _youtube_video(request: Request) -> Request:
    if urlsplit(request.url).path != "/watch":
        return request
    video_id = _query(request).get("v")
    if video_id is None:
        return request
    return replace(request, url=_thumbnail_url(video_id))


def _youtube_short_link(request: Request) -> Request:
    # Short links carry the video id as their path.
    video_id = urlsplit(request.url).path.lstrip("/")
    if not video_id:
        return request
    return replace(request, url=_thumbnail_url(video_id))


def _default_quirks() -> list[Quirk]:
    return [
        Quirk(CRATES_PATTERN, _accept_html),
        Quirk(YOUTUBE_PATTERN, _youtube_video),
        Quirk(YOUTUBE_SHORT_PATTERN, _youtube_short_link),
    ]


@dataclass
class Quirks:
    """An ordered list of request rewrites for known sites."""

    quirks: list[Quirk] = field(default_factory=_default_quirks)

    def apply(self, request: Request) -> Request:
        """Return ``request`` rewritten by the first matching quirk.

        The request is returned unchanged when no quirk matches.
        """
        for quirk in self.quirks:
            if quirk.pattern.search(request.url):
                return quirk.rewrite(request)
        return request