"""Response mapper: one HTTP response in, one answer string out.

Dispatch
--------
- Streaming path: a partial-result sink was given, the status is successful
  and the content type is an event stream. Frames come from the configured
  ``build_stream`` and the stream consumer produces the (already sanitized)
  answer; in-stream failures become an ``"\\nError: ..."`` annotation.
- JSON path: everything else. The body must be JSON, non-empty, free of a
  provider error message and must carry the full content, which is sanitized.

Failures on the JSON path raise a ``RequestError`` subclass:

==============================================  =========================
condition                                       raised
==============================================  =========================
builder returned no frame sequence              ``StreamBuilderError``
content type is not JSON                        ``ResponseShapeError(status text)``
empty body / falsy JSON                         ``ResponseShapeError("Empty response")``
undecodable body                                ``ResponseShapeError("Invalid JSON response")``
``extract_error`` returns a message             ``ProviderResponseError(message)``
``extract_full`` finds no choice                ``ResponseShapeError("Malformed response: ...")``
content is neither text nor null                ``ResponseShapeError("Malformed response: ...")``
body read fails at the transport                ``TransportError``
==============================================  =========================
"""

from __future__ import annotations

from typing import Optional

import httpx

from .cancellation import CancellationToken
from .errors import (
    ProviderResponseError,
    ResponseShapeError,
    StreamBuilderError,
    TransportError,
    classify_exception,
)
from .extractors import ExtractorOverrides, resolve_extractors
from .http.classify import is_event_stream_response, is_json_response
from .http.response import HttpResponseLike
from .logging import LogContext, get_logger, normalized_log_event
from .sanitize import sanitize
from .streaming.consumer import PartialSink, consume_stream

_logger = get_logger("chatwire.mapper")


def _log_failure(ctx: Optional[LogContext], response: HttpResponseLike, error) -> None:
    normalized_log_event(
        _logger,
        "response.error",
        ctx,
        phase="map",
        error_code=error.code.value,
        emitted=False,
        streaming=False,
        status=response.status_code,
        error=error.message,
    )


async def map_response_to_answer(
    response: HttpResponseLike,
    token: Optional[CancellationToken],
    overrides: ExtractorOverrides,
    on_partial: Optional[PartialSink],
    *,
    min_interval_ms: Optional[float] = None,
    ctx: Optional[LogContext] = None,
) -> str:
    """Turn ``response`` into the final answer text.

    Parameters:
        response: received HTTP response (body not yet read).
        token: cancellation token of the request; a fresh one is used when
            ``None``.
        overrides: extractor overrides (see :func:`resolve_extractors`).
        on_partial: partial-result sink; enables the streaming path.
        min_interval_ms: passed to the stream consumer.
        ctx: log context of the enclosing request.

    Raises:
        RequestError: see the module table.
    """
    extractors = resolve_extractors(overrides)

    if on_partial is not None and response.ok and is_event_stream_response(response):
        frames = extractors.build_stream(response, token or CancellationToken())
        if frames is None:
            error = StreamBuilderError("Stream builder error", status_code=response.status_code)
            _log_failure(ctx, response, error)
            raise error
        outcome = await consume_stream(
            frames,
            extractors.extract_delta,
            on_partial,
            min_interval_ms=min_interval_ms,
            ctx=ctx,
        )
        return outcome.text

    if not is_json_response(response):
        error = ResponseShapeError(response.status_text, status_code=response.status_code)
        _log_failure(ctx, response, error)
        raise error

    try:
        body = await response.json()
    except httpx.HTTPError as exc:
        error = TransportError(
            str(exc) or exc.__class__.__name__,
            code=classify_exception(exc),
            status_code=response.status_code,
            raw=exc,
        )
        _log_failure(ctx, response, error)
        raise error from exc
    except ValueError as exc:
        error = ResponseShapeError("Invalid JSON response", status_code=response.status_code, raw=exc)
        _log_failure(ctx, response, error)
        raise error from exc
    if not body:
        error = ResponseShapeError("Empty response", status_code=response.status_code)
        _log_failure(ctx, response, error)
        raise error

    if provider_message := extractors.extract_error(body):
        error = ProviderResponseError(str(provider_message) or "Unknown error", status_code=response.status_code)
        _log_failure(ctx, response, error)
        raise error

    try:
        content = extractors.extract_full(body)
    except (KeyError, IndexError, TypeError) as exc:
        error = ResponseShapeError(f"Malformed response: {exc!r}", status_code=response.status_code, raw=exc)
        _log_failure(ctx, response, error)
        raise error from exc
    if content is None:
        return ""
    if not isinstance(content, str):
        error = ResponseShapeError(
            f"Malformed response: content is {type(content).__name__}, not text",
            status_code=response.status_code,
        )
        _log_failure(ctx, response, error)
        raise error
    return sanitize(content)


__all__ = ["map_response_to_answer"]
