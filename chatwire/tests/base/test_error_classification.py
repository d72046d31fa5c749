"""Error taxonomy and ``classify_exception`` precedence tests."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from chatwire.base.cancellation import CancelledError
from chatwire.base.errors import (
    ErrorCode,
    ProviderResponseError,
    RequestError,
    ResponseShapeError,
    StreamBuilderError,
    TransportError,
    classify_exception,
)


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


def test_subclass_default_codes():
    assert TransportError("x").code is ErrorCode.TRANSPORT  # nosec B101
    assert ResponseShapeError("x").code is ErrorCode.RESPONSE_SHAPE  # nosec B101
    assert ProviderResponseError("x").code is ErrorCode.PROVIDER  # nosec B101
    assert StreamBuilderError("x").code is ErrorCode.STREAM_BUILDER  # nosec B101
    assert RequestError("x").code is ErrorCode.UNKNOWN  # nosec B101


def test_message_is_str_verbatim():
    err = ProviderResponseError("bad key", status_code=401)
    assert str(err) == "bad key"  # nosec B101
    assert err.status_code == 401  # nosec B101
    with pytest.raises(RequestError, match="^bad key$"):
        raise err


def test_request_error_code_passes_through():
    assert classify_exception(TransportError("x", code=ErrorCode.TIMEOUT)) is ErrorCode.TIMEOUT  # nosec B101


@pytest.mark.parametrize(
    "exc, expected",
    [
        (CancelledError("stop"), ErrorCode.CANCELLED),
        (TimeoutError(), ErrorCode.TIMEOUT),
        (asyncio.TimeoutError(), ErrorCode.TIMEOUT),
        (httpx.ReadTimeout("slow"), ErrorCode.TIMEOUT),
        (httpx.ConnectError("refused"), ErrorCode.TRANSPORT),
        (_StatusError(401), ErrorCode.AUTH),
        (_StatusError(404), ErrorCode.NOT_FOUND),
        (_StatusError(429), ErrorCode.RATE_LIMIT),
        (_StatusError(503), ErrorCode.UNAVAILABLE),
        (RuntimeError("Rate limit exceeded"), ErrorCode.RATE_LIMIT),
        (RuntimeError("invalid api key"), ErrorCode.AUTH),
        (RuntimeError("connection reset"), ErrorCode.TRANSPORT),
        (ValueError("something odd"), ErrorCode.UNKNOWN),
    ],
)
def test_classify_exception(exc, expected):
    assert classify_exception(exc) is expected  # nosec B101


def test_cancellation_wins_over_message_heuristics():
    assert classify_exception(CancelledError("request timed out after 5 ms")) is ErrorCode.CANCELLED  # nosec B101
