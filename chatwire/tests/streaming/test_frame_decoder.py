"""SseFrameStream decoding tests (SSE and NDJSON framings)."""

from __future__ import annotations

import asyncio

import pytest

from chatwire.base.cancellation import CancellationToken, CancelledError
from chatwire.base.errors import ProviderResponseError, ResponseShapeError
from chatwire.base.streaming import SseFrameStream


def _collect(response, token=None):
    async def run():
        return [frame async for frame in SseFrameStream(response, token or CancellationToken())]

    return asyncio.run(run())


def _stream_response(make_response, body, content_type="text/event-stream"):
    return make_response(content_type=content_type, body=body)


def test_sse_frames_until_done(make_response, sse_body):
    body = sse_body("Hel", "lo") + 'data: {"never": "decoded"}\n\n'
    frames = _collect(_stream_response(make_response, body))
    assert [f["choices"][0]["delta"]["content"] for f in frames] == ["Hel", "lo"]  # nosec B101


def test_comments_and_unknown_fields_are_ignored(make_response):
    body = ': keep-alive\n\nid: 7\nretry: 1000\ndata: {"a": 1}\n\n'
    assert _collect(_stream_response(make_response, body)) == [{"a": 1}]  # nosec B101


def test_multiline_data_is_joined(make_response):
    body = 'data: {"a":\ndata: 1}\n\n'
    assert _collect(_stream_response(make_response, body)) == [{"a": 1}]  # nosec B101


def test_trailing_event_without_blank_line(make_response):
    body = 'data: {"a": 1}\n\ndata: {"a": 2}'
    assert _collect(_stream_response(make_response, body)) == [{"a": 1}, {"a": 2}]  # nosec B101


def test_ndjson_lines(make_response):
    body = '{"a": 1}\n{"a": 2}\n'
    frames = _collect(_stream_response(make_response, body, "application/stream+json"))
    assert frames == [{"a": 1}, {"a": 2}]  # nosec B101


def test_undecodable_frame_raises(make_response):
    with pytest.raises(ResponseShapeError, match="Could not decode stream frame"):
        _collect(_stream_response(make_response, "data: {not json\n\n"))


def test_error_frame_raises_provider_error(make_response):
    body = 'data: {"error": {"message": "quota exceeded"}}\n\n'
    with pytest.raises(ProviderResponseError, match="quota exceeded"):
        _collect(_stream_response(make_response, body))


def test_tripped_token_stops_iteration(make_response, sse_body):
    token = CancellationToken()
    token.cancel("stop")
    with pytest.raises(CancelledError, match="stop"):
        _collect(_stream_response(make_response, sse_body("x")), token)


def test_stream_is_single_use(make_response, sse_body):
    stream = SseFrameStream(_stream_response(make_response, sse_body("x")), CancellationToken())
    stream.__aiter__()
    with pytest.raises(RuntimeError, match="only be consumed once"):
        stream.__aiter__()
