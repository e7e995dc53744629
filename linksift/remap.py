"""Rules that rewrite URLs matching a pattern to a different URL.

Rules are tried in order and only the first one that matches is applied.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from urllib.parse import urlsplit


class RemapError(ValueError):
    """A remapping rule is malformed or produced an invalid URL."""


_NAMED_GROUP_SHORTHAND = re.compile(r"\(\?<(?=[A-Za-z_])")
_TEMPLATE_REF = re.compile(r"\$(?:(\$)|\{([^}]+)\}|([A-Za-z0-9_]+))")
_VALID_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(_NAMED_GROUP_SHORTHAND.sub("(?P<", pattern))
    except re.error as exc:
        raise RemapError(f"Invalid remapping pattern {pattern!r}: {exc}") from exc


def _group(match: re.Match[str], name: str) -> str:
    key: int | str = int(name) if name.isdigit() else name
    try:
        value = match.group(key)
    except IndexError:
        return ""
    return value or ""


def _expand(match: re.Match[str], template: str) -> str:
    """Expand ``$1``, ``${1}``, ``$name``, ``${name}`` and ``$$`` in ``template``."""

    def reference(ref: re.Match[str]) -> str:
        if ref.group(1):
            return "$"
        return _group(match, ref.group(2) or ref.group(3))

    return _TEMPLATE_REF.sub(reference, template)


def _is_valid_url(text: str) -> bool:
    if not text or any(char.isspace() or not char.isprintable() for char in text):
        return False
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or not _VALID_SCHEME.fullmatch(parts.scheme):
        return False
    if parts.scheme.lower() in _SPECIAL_SCHEMES and not parts.netloc:
        return False
    return True


class Remaps:
    """An ordered list of ``(pattern, replacement)`` remapping rules."""

    def __init__(self, patterns: Iterable[tuple[str | re.Pattern[str], str]]) -> None:
        self._rules: list[tuple[re.Pattern[str], str]] = [
            (_compile(pattern), replacement) for pattern, replacement in patterns
        ]

    @classmethod
    def from_strings(cls, remaps: Iterable[str]) -> Remaps:
        """Build rules from strings of the form ``"REGEX URL"``."""
        parsed = []
        for remap in remaps:
            params = remap.split()
            if len(params) != 2:
                raise RemapError(
                    "Cannot parse into URI remapping, must be a Regex pattern "
                    f"and a URL separated by whitespaces: {remap}"
                )
            pattern, replacement = params
            parsed.append((_compile(pattern), replacement))
        return cls(parsed)

    def remap(self, original: str) -> str:
        """Apply the first matching rule to ``original``.

        Returns ``original`` unchanged when no rule matches and raises
        :class:`RemapError` when the result is not a valid URL.
        """
        for pattern, replacement in self._rules:
            if pattern.search(original):
                after = pattern.sub(lambda match: _expand(match, replacement), original)
                if not _is_valid_url(after):
                    raise RemapError(
                        "The remapping pattern must produce a valid URL, "
                        f"but it is not: {after}"
                    )
                return after
        return original

    def is_empty(self) -> bool:
        """Whether no rule is defined."""
        return not self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[tuple[re.Pattern[str], str]]:
        return iter(self._rules)

    def __getitem__(self, index: int) -> tuple[re.Pattern[str], str]:
        return self._rules[index]

    def __repr__(self) -> str:
        rules = [(pattern.pattern, replacement) for pattern, replacement in self._rules]
        return f"Remaps({rules!r})"