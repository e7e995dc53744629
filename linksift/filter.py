"""Decide which links should be checked and which should be skipped."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable, Set
from dataclasses import dataclass, field
from urllib.parse import urlsplit

EXAMPLE_DOMAINS: frozenset[str] = frozenset(
    {"example.com", "example.org", "example.net", "example.edu"}
)
"""Second-level domains reserved for examples, which carry no content."""

UNSUPPORTED_DOMAINS: frozenset[str] = frozenset(
    {
        # Viewing posts requires an account.
        "twitter.com",
    }
)
"""Domains that cannot be checked without logging in."""

FALSE_POSITIVE_PATTERNS: tuple[str, ...] = (
    r"^https?://schemas.openxmlformats.org",
    r"^https?://schemas.zune.net",
    r"^https?://www.w3.org/1999/xhtml",
    r"^https?://www.w3.org/1999/xlink",
    r"^https?://www.w3.org/2000/svg",
    r"^https?://ogp.me/ns#",
    r"^https?://schemas.microsoft.com",
)
"""Well-known namespace URLs that look like links but are not meant to be visited."""

_FALSE_POSITIVES = tuple(re.compile(pattern) for pattern in FALSE_POSITIVE_PATTERNS)

_PRIVATE_V4_NETWORKS = tuple(
    ipaddress.IPv4Network(network)
    for network in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")
)
_LINK_LOCAL_V4_NETWORK = ipaddress.IPv4Network("169.254.0.0/16")
_LOOPBACK_V6 = ipaddress.IPv6Address("::1")


def _compile_all(
    patterns: Iterable[str | re.Pattern[str]],
) -> tuple[re.Pattern[str], ...]:
    return tuple(
        pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        for pattern in patterns
    )


class Includes:
    """Patterns of links that are explicitly checked."""

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()) -> None:
        self.patterns = _compile_all(patterns)

    def is_match(self, text: str) -> bool:
        """Whether any include pattern matches somewhere in ``text``."""
        return any(pattern.search(text) for pattern in self.patterns)

    def is_empty(self) -> bool:
        """Whether no include pattern is defined."""
        return not self.patterns

    def __repr__(self) -> str:
        return f"Includes({[pattern.pattern for pattern in self.patterns]!r})"


class Excludes:
    """Patterns of links that are skipped."""

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()) -> None:
        self.patterns = _compile_all(patterns)

    def is_match(self, text: str) -> bool:
        """Whether any exclude pattern matches somewhere in ``text``."""
        return any(pattern.search(text) for pattern in self.patterns)

    def is_empty(self) -> bool:
        """Whether no exclude pattern is defined."""
        return not self.patterns

    def __repr__(self) -> str:
        return f"Excludes({[pattern.pattern for pattern in self.patterns]!r})"


def _scheme(url: str) -> str:
    return urlsplit(url).scheme.lower()


def _ip(url: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    host = urlsplit(url).hostname
    if not host:
        return None
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


def _domain(url: str) -> str | None:
    """The host name of ``url`` when it is a domain rather than an IP address."""
    host = urlsplit(url).hostname
    if not host or _ip(url) is not None:
        return None
    return host


def _is_mail(url: str) -> bool:
    return _scheme(url) == "mailto"


def _is_loopback(url: str) -> bool:
    ip = _ip(url)
    if isinstance(ip, ipaddress.IPv4Address):
        return ip.is_loopback
    return ip == _LOOPBACK_V6


def _is_private(url: str) -> bool:
    ip = _ip(url)
    return isinstance(ip, ipaddress.IPv4Address) and any(
        ip in network for network in _PRIVATE_V4_NETWORKS
    )


def _is_link_local(url: str) -> bool:
    ip = _ip(url)
    return isinstance(ip, ipaddress.IPv4Address) and ip in _LINK_LOCAL_V4_NETWORK


def is_false_positive(text: str) -> bool:
    """Whether ``text`` is a well-known false positive that is not checked by default."""
    return any(pattern.search(text) for pattern in _FALSE_POSITIVES)


def is_example_domain(url: str, domains: Set[str] = EXAMPLE_DOMAINS) -> bool:
    """Whether ``url`` points into one of the reserved example ``domains``.

    Subdomains count, and so do e-mail addresses at those domains.
    """
    domain = _domain(url)
    if domain is not None:
        return any(domain.endswith(tld) for tld in domains)
    if _is_mail(url):
        path = urlsplit(url).path
        return any(path.endswith(tld) for tld in domains)
    return False


def is_unsupported_domain(url: str) -> bool:
    """Whether ``url`` points into a domain known to be uncheckable."""
    domain = _domain(url)
    if domain is None:
        return False
    return any(domain.endswith(tld) for tld in UNSUPPORTED_DOMAINS)


@dataclass
class Filter:
    """Decides whether a link is checked or skipped.

    Includes take precedence over excludes. With ``schemes`` set, only
    links with one of those schemes are checked.
    """

    includes: Includes | None = None
    excludes: Excludes | None = None
    schemes: Set[str] = field(default_factory=frozenset)
    exclude_private_ips: bool = False
    exclude_link_local_ips: bool = False
    exclude_loopback_ips: bool = False
    include_mail: bool = False
    example_domains: Set[str] = EXAMPLE_DOMAINS

    def is_mail_excluded(self, url: str) -> bool:
        """Whether ``url`` is an e-mail address and those are not checked."""
        return _is_mail(url) and not self.include_mail

    def is_ip_excluded(self, url: str) -> bool:
        """Whether the IP address of ``url`` is of an excluded kind."""
        return (
            (self.exclude_loopback_ips and _is_loopback(url))
            or (self.exclude_private_ips and _is_private(url))
            or (self.exclude_link_local_ips and _is_link_local(url))
        )

    def is_host_excluded(self, url: str) -> bool:
        """Whether the host is excluded; ``localhost`` goes with loopback IPs."""
        return self.exclude_loopback_ips and _domain(url) == "localhost"

    def is_scheme_excluded(self, url: str) -> bool:
        """Whether the scheme of ``url`` is not among the allowed ones."""
        if not self.schemes:
            return False
        return _scheme(url) not in self.schemes

    def _includes_empty(self) -> bool:
        return self.includes is None or self.includes.is_empty()

    def _excludes_empty(self) -> bool:
        return self.excludes is None or self.excludes.is_empty()

    def _includes_match(self, text: str) -> bool:
        return self.includes is not None and self.includes.is_match(text)

    def _excludes_match(self, text: str) -> bool:
        return self.excludes is not None and self.excludes.is_match(text)

    def is_excluded(self, url: str) -> bool:
        """Whether ``url`` should be skipped.

        Scheme, host, IP, mail, example and unsupported domain rules come
        first. Then, with no include or exclude patterns, only known false
        positives are skipped. A matching include pattern keeps the link;
        otherwise false positives, links not matched while includes exist,
        and links matching an exclude pattern are skipped.
        """
        if (
            self.is_scheme_excluded(url)
            or self.is_host_excluded(url)
            or self.is_ip_excluded(url)
            or self.is_mail_excluded(url)
            or is_example_domain(url, self.example_domains)
            or is_unsupported_domain(url)
        ):
            return True

        if self._includes_empty():
            if self._excludes_empty():
                return is_false_positive(url)
        elif self._includes_match(url):
            return False

        return (
            is_false_positive(url)
            or self._excludes_empty()
            or self._excludes_match(url)
        )