"""Cancellable POST transport over ``httpx.AsyncClient``.

Purpose:
    Send the completion request and hand back an ``HttpResponseLike`` whose
    body has not been read yet, so the mapper can choose between streaming
    and whole-body decoding.

Cancellation:
    ``await_cancellable`` runs an awaitable as a task and cancels that task
    when the ``CancellationToken`` trips. The abort then surfaces as the
    package's ``CancelledError``. Cancellation of the calling task itself is
    left as ``asyncio.CancelledError``.

Failure modes:
    ``HttpxTransport.post`` raises ``TransportError`` for every failure of the
    exchange: ``httpx`` errors keep their classified code, cooperative aborts
    carry ``ErrorCode.CANCELLED``.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Mapping, Protocol, TypeVar

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, TransportError, classify_exception
from .response import HttpResponseLike, HttpxResponse

T = TypeVar("T")


async def await_cancellable(awaitable: Awaitable[T], token: CancellationToken) -> T:
    """Await ``awaitable`` unless ``token`` trips first.

    Raises:
        CancelledError: the token was (or became) cancelled before the
            awaitable finished.
    """
    if token.cancelled:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        token.raise_if_cancelled()
    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(awaitable)

    def _abort() -> None:
        # the token may be tripped from a timer thread
        loop.call_soon_threadsafe(task.cancel)

    token.add_callback(_abort)
    try:
        return await task
    except asyncio.CancelledError:
        if token.cancelled and task.cancelled():
            raise CancelledError(token.reason or "operation cancelled") from None
        raise
    finally:
        token.remove_callback(_abort)


class Transport(Protocol):
    """POST primitive used by the request orchestrator."""

    async def post(
        self,
        url: str,
        headers: Mapping[str, str],
        content: bytes,
        token: CancellationToken,
    ) -> HttpResponseLike: ...


class HttpxTransport:
    """``Transport`` implementation backed by an ``httpx.AsyncClient``.

    The client is borrowed; closing it is the owner's job.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def post(
        self,
        url: str,
        headers: Mapping[str, str],
        content: bytes,
        token: CancellationToken,
    ) -> HttpxResponse:
        request = self._client.build_request("POST", url, headers=dict(headers), content=content)
        try:
            response = await await_cancellable(self._client.send(request, stream=True), token)
        except CancelledError as exc:
            raise TransportError(str(exc), code=ErrorCode.CANCELLED, raw=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                str(exc) or exc.__class__.__name__,
                code=classify_exception(exc),
                raw=exc,
            ) from exc
        return HttpxResponse(response)


__all__ = ["await_cancellable", "Transport", "HttpxTransport"]
