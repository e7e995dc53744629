"""Decide whether a failed check is worth retrying."""

from __future__ import annotations

from collections.abc import Iterator
from http import HTTPStatus
from http.client import IncompleteRead

_RETRYABLE_CLIENT_ERRORS = frozenset(
    {HTTPStatus.REQUEST_TIMEOUT, HTTPStatus.TOO_MANY_REQUESTS}
)


def should_retry_status(status_code: int) -> bool:
    """Whether a response with ``status_code`` should be retried.

    Server errors, request timeouts and rate limiting are retried; other
    client errors, successes and everything else are not.
    """
    if 500 <= status_code <= 599:
        return True
    if 400 <= status_code <= 499:
        return status_code in _RETRYABLE_CLIENT_ERRORS
    return False


def _error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` and the errors that caused it, without repeats."""
    seen: set[int] = set()
    pending: list[BaseException] = [error]
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        reason = getattr(current, "reason", None)
        for source in (current.__cause__, current.__context__, reason):
            if isinstance(source, BaseException):
                pending.append(source)


def should_retry_error(error: BaseException) -> bool:
    """Whether a request that failed with ``error`` should be retried.

    Timeouts, incomplete responses and connections reset or aborted by the
    peer are transient. Refused connections and anything else are not. The
    causes of ``error`` are searched for the first error that decides.
    """
    for current in _error_chain(error):
        if isinstance(current, TimeoutError):
            return True
        if isinstance(current, ConnectionRefusedError):
            return False
        if isinstance(current, IncompleteRead):
            return True
        if isinstance(current, (ConnectionResetError, ConnectionAbortedError)):
            return True
    return False