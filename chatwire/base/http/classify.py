"""Content-type predicates deciding how a response body is handled.

The two predicates are independent; the response mapper checks the streaming
one first.
"""

from __future__ import annotations

from .response import HttpResponseLike

JSON_CONTENT_TYPES = ("application/json",)
EVENT_STREAM_CONTENT_TYPES = ("application/stream+json", "text/event-stream")


def _content_type(resp: HttpResponseLike) -> str:
    return (resp.header("content-type") or "").lower()


def is_json_response(resp: HttpResponseLike) -> bool:
    """Return True when the content type announces a JSON body."""
    content_type = _content_type(resp)
    return any(t in content_type for t in JSON_CONTENT_TYPES)


def is_event_stream_response(resp: HttpResponseLike) -> bool:
    """Return True for server-sent events or newline-delimited JSON streams."""
    content_type = _content_type(resp)
    return any(t in content_type for t in EVENT_STREAM_CONTENT_TYPES)


__all__ = [
    "is_json_response",
    "is_event_stream_response",
    "JSON_CONTENT_TYPES",
    "EVENT_STREAM_CONTENT_TYPES",
]
