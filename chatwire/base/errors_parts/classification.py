"""
Map arbitrary exceptions onto the ``ErrorCode`` taxonomy.

Used to pick the ``code`` of a ``TransportError`` and the ``error_code`` of
log events. Checks run from the most to the least reliable signal: an
existing taxonomy code, the exception type, an attached HTTP status, then
keywords in the message.
"""
from __future__ import annotations

import asyncio
from typing import Any, Iterator, Mapping, Optional, Tuple

import httpx

from ..cancellation import CancelledError
from .error_code import ErrorCode
from .request_error import RequestError

_TIMEOUT_TYPES = (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)

_STATUS_CODES: Mapping[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSPORT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# first match wins; every keyword of a group must occur
_KEYWORDS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate", "limit")),
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.CANCELLED, ("cancelled",)),
    (ErrorCode.CANCELLED, ("aborted",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("api key",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.TRANSPORT, ("connection",)),
)


def _status_candidates(exc: BaseException) -> Iterator[Any]:
    yield getattr(exc, "status_code", None)
    yield getattr(exc, "status", None)
    yield getattr(getattr(exc, "response", None), "status_code", None)


def http_status_of(exc: BaseException) -> Optional[int]:
    """HTTP status carried by ``exc`` (``status_code``, ``status`` or ``response.status_code``)."""
    for value in _status_candidates(exc):
        if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
            return value
    return None


def _from_message(message: str) -> Optional[ErrorCode]:
    lowered = message.lower()
    for code, keywords in _KEYWORDS:
        if all(k in lowered for k in keywords):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Return the :class:`ErrorCode` describing ``exc``.

    ``RequestError`` keeps its own code. Cooperative cancellation, timeout
    types and mapped HTTP statuses come next; other httpx transport failures
    are ``transport``; message keywords are the last resort before
    ``unknown``.
    """
    if isinstance(exc, RequestError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, _TIMEOUT_TYPES):
        return ErrorCode.TIMEOUT
    status = http_status_of(exc)
    if status in _STATUS_CODES:
        return _STATUS_CODES[status]
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT
    return _from_message(str(exc)) or ErrorCode.UNKNOWN


__all__ = ["classify_exception", "http_status_of"]
