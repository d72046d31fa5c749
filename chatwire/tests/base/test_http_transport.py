"""HTTP layer tests: content-type classification, cancellable awaits and the httpx transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from chatwire.base.cancellation import CancellationToken, CancelledError
from chatwire.base.errors import ErrorCode, TransportError
from chatwire.base.http import (
    HttpxTransport,
    await_cancellable,
    build_client_timeout,
    is_event_stream_response,
    is_json_response,
)


@pytest.mark.parametrize(
    "content_type, is_json, is_stream",
    [
        ("application/json", True, False),
        ("application/json; charset=utf-8", True, False),
        ("text/event-stream", False, True),
        ("text/event-stream; charset=utf-8", False, True),
        ("application/stream+json", False, True),
        ("text/html", False, False),
        (None, False, False),
    ],
)
def test_content_type_classification(make_response, content_type, is_json, is_stream):
    response = make_response(content_type=content_type)
    assert is_json_response(response) is is_json  # nosec B101
    assert is_event_stream_response(response) is is_stream  # nosec B101


def test_response_adapter_surface(make_response):
    response = make_response(status=502, content_type="text/html", body="<html/>")
    assert not response.ok  # nosec B101
    assert response.status_code == 502  # nosec B101
    assert response.status_text == "Bad Gateway"  # nosec B101
    assert response.header("Content-Type") == "text/html"  # nosec B101


def test_json_of_empty_body_is_none(make_response):
    assert asyncio.run(make_response(body=b"").json()) is None  # nosec B101


def test_await_cancellable_returns_result():
    async def run():
        return await await_cancellable(asyncio.sleep(0, result="done"), CancellationToken())

    assert asyncio.run(run()) == "done"  # nosec B101


def test_await_cancellable_aborts_on_trip():
    async def run():
        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.02, token.cancel, "user abort")
        await await_cancellable(asyncio.sleep(5), token)

    with pytest.raises(CancelledError, match="user abort"):
        asyncio.run(run())


def test_await_cancellable_rejects_tripped_token():
    token = CancellationToken()
    token.cancel()

    async def run():
        await await_cancellable(asyncio.sleep(0), token)

    with pytest.raises(CancelledError):
        asyncio.run(run())


def test_transport_posts_content_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = request.content
        return httpx.Response(200, headers={"content-type": "application/json"}, json={"ok": True})

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await HttpxTransport(client).post(
                "https://llm.test/v1/chat/completions",
                {"Authorization": "Bearer k"},
                b'{"model":"m"}',
                CancellationToken(),
            )
            try:
                return response.status_code, await response.json()
            finally:
                await response.aclose()

    status, body = asyncio.run(run())
    assert (status, body) == (200, {"ok": True})  # nosec B101
    assert seen == {"method": "POST", "auth": "Bearer k", "body": b'{"model":"m"}'}  # nosec B101


def test_transport_wraps_network_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await HttpxTransport(client).post("https://llm.test/", {}, b"{}", CancellationToken())

    with pytest.raises(TransportError) as info:
        asyncio.run(run())
    assert info.value.code is ErrorCode.TRANSPORT  # nosec B101
    assert "connection refused" in info.value.message  # nosec B101


def test_transport_cancellation_is_a_transport_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200)

    async def run():
        token = CancellationToken()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            asyncio.get_running_loop().call_later(0.02, token.cancel, "stop")
            await HttpxTransport(client).post("https://llm.test/", {}, b"{}", token)

    with pytest.raises(TransportError) as info:
        asyncio.run(run())
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101


def test_client_timeout_mapping():
    assert build_client_timeout(0) == httpx.Timeout(None)  # nosec B101
    assert build_client_timeout(5).read == 5  # nosec B101
