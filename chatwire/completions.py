"""Request orchestration for OpenAI-compatible chat completions.

Summary:
- ``request_chat_completion`` posts a body to a chat-completions URL and maps
  the response (event stream or JSON) to the final answer text.
- ``complete_chat`` resolves URL, credentials and model from provider config
  and builds a validated request body first.

Timeouts & Cancellation:
- Every call owns a fresh ``CancellationToken``.
- ``CompletionSettings.request_timeout_ms > 0`` arms a one-shot timer that
  cancels the token; the timer is disarmed as soon as the POST settles.
- An aborted exchange raises ``TransportError`` (code ``timeout`` when the
  timer fired, ``cancelled`` otherwise).

Errors & Observability:
- Transport failures raise ``TransportError``; mapping failures raise the
  mapper's ``RequestError`` subclasses. Mid-stream failures do not raise.
- Emits ``request.start`` / ``request.end`` / ``request.error`` events with
  latency; never logs headers, request bodies or answer text.
"""

from __future__ import annotations

import json
import time
import uuid
from contextlib import AsyncExitStack
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from .base.cancellation import CancellationToken
from .base.dto import ChatCompletionBody, MessageDTO
from .base.errors import ErrorCode, RequestError, TransportError
from .base.extractors import ExtractorOverrides
from .base.http import HttpxTransport, Transport, client_scope
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.mapper import map_response_to_answer
from .base.streaming import PartialSink
from .base.timeouts import cancel_after, timeout_reason
from .config import CompletionSettings, get_provider_config, get_settings
from .config.defaults import CHAT_COMPLETIONS_PATH

RequestBody = Union[Mapping[str, Any], BaseModel]

_logger = get_logger("chatwire.request")


def _serialize_body(body: RequestBody) -> bytes:
    if isinstance(body, ChatCompletionBody):
        payload: Any = body.to_payload()
    elif isinstance(body, BaseModel):
        payload = body.model_dump(exclude_none=True)
    else:
        payload = body
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def _request_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    merged = dict(headers or {})
    if not any(k.lower() == "content-type" for k in merged):
        merged["Content-Type"] = "application/json"
    return merged


def _model_of(body: RequestBody) -> Optional[str]:
    model = getattr(body, "model", None) if isinstance(body, BaseModel) else body.get("model")
    return model if isinstance(model, str) else None


def _loggable_url(url: str) -> str:
    return url.split("?", 1)[0]


async def request_chat_completion(
    url: str,
    headers: Optional[Mapping[str, str]],
    body: RequestBody,
    on_partial: Optional[PartialSink] = None,
    overrides: ExtractorOverrides = None,
    *,
    settings: Optional[CompletionSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
    transport: Optional[Transport] = None,
) -> str:
    """POST ``body`` to ``url`` and return the sanitized answer.

    Parameters:
        url: full chat-completions endpoint URL.
        headers: request headers; ``Content-Type: application/json`` is added
            when absent.
        body: JSON-serializable mapping or pydantic model.
        on_partial: optional sink for throttled partial snapshots; required
            for the streaming path.
        overrides: extractor overrides for non-OpenAI envelopes.
        settings: completion settings; defaults to :func:`get_settings`.
        client: ``httpx.AsyncClient`` to reuse (left open); a client is
            created and closed per call otherwise.
        transport: alternative POST primitive; bypasses ``client``.

    Raises:
        TransportError: the exchange failed, timed out or was cancelled.
        RequestError: the response could not be mapped to an answer.
    """
    settings = settings or get_settings()
    token = CancellationToken()
    ctx = LogContext(url=_loggable_url(url), model=_model_of(body), request_id=uuid.uuid4().hex[:12])
    content = _serialize_body(body)
    request_headers = _request_headers(headers)
    streaming = on_partial is not None

    normalized_log_event(
        _logger,
        "request.start",
        ctx,
        phase="start",
        streaming=streaming,
        timeout_ms=settings.request_timeout_ms if settings.request_timeout_ms > 0 else None,
        body_len=len(content),
    )
    t0 = time.perf_counter()
    async with AsyncExitStack() as stack:
        if transport is None:
            http = await stack.enter_async_context(
                client_scope(client, http_timeout_seconds=settings.http_timeout_seconds)
            )
            transport = HttpxTransport(http)

        with cancel_after(token, settings.request_timeout_ms) as timer:
            try:
                response = await transport.post(url, request_headers, content, token)
            except TransportError as exc:
                error = exc
                if timer.fired:
                    error = TransportError(
                        timeout_reason(settings.request_timeout_ms),
                        code=ErrorCode.TIMEOUT,
                        raw=exc,
                    )
                    normalized_log_event(
                        _logger,
                        "request.timeout",
                        ctx,
                        phase="start",
                        error_code=error.code.value,
                        streaming=streaming,
                        timeout_ms=settings.request_timeout_ms,
                    )
                _log_request_error(ctx, error, streaming, t0)
                if error is exc:
                    raise
                raise error from exc

        stack.push_async_callback(response.aclose)
        try:
            answer = await map_response_to_answer(
                response,
                token,
                overrides,
                on_partial,
                min_interval_ms=settings.min_stream_interval_ms,
                ctx=ctx,
            )
        except RequestError as exc:
            _log_request_error(ctx, exc, streaming, t0)
            raise

    normalized_log_event(
        _logger,
        "request.end",
        ctx,
        phase="finalize",
        emitted=bool(answer),
        streaming=streaming,
        status=response.status_code,
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        answer_len=len(answer),
    )
    return answer


def _log_request_error(ctx: LogContext, error: RequestError, streaming: bool, t0: float) -> None:
    normalized_log_event(
        _logger,
        "request.error",
        ctx,
        phase="finalize",
        error_code=error.code.value,
        emitted=False,
        streaming=streaming,
        status=error.status_code,
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        error=error.message,
    )


async def complete_chat(
    provider: str,
    messages: Iterable[Union[MessageDTO, Mapping[str, Any]]],
    on_partial: Optional[PartialSink] = None,
    *,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    overrides: ExtractorOverrides = None,
    settings: Optional[CompletionSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
    **params: Any,
) -> str:
    """Run a chat completion against a configured OpenAI-compatible provider.

    ``model``, ``api_key`` and ``base_url`` override the provider config (see
    :func:`chatwire.config.get_provider_config`). Streaming is requested from
    the server exactly when ``on_partial`` is given. Extra keyword arguments
    (``temperature``, ``max_tokens``, ...) go into the request body.

    Raises:
        ValueError: no base URL or model is configured for ``provider``.
        pydantic.ValidationError: the request body is invalid.
        RequestError: see :func:`request_chat_completion`.
    """
    cfg = get_provider_config(provider, {"model": model, "api_key": api_key, "base_url": base_url})
    if not cfg.get("base_url"):
        raise ValueError(f"no base_url configured for provider '{provider}'")
    if not cfg.get("model"):
        raise ValueError(f"no model configured for provider '{provider}'")
    body = ChatCompletionBody(
        model=cfg["model"],
        messages=list(messages),
        stream=on_partial is not None,
        **params,
    )
    headers: Dict[str, str] = {}
    if cfg.get("api_key"):
        headers["Authorization"] = f"Bearer {cfg['api_key']}"
    url = str(cfg["base_url"]).rstrip("/") + CHAT_COMPLETIONS_PATH
    return await request_chat_completion(
        url,
        headers,
        body,
        on_partial,
        overrides,
        settings=settings,
        client=client,
    )


__all__ = ["request_chat_completion", "complete_chat", "RequestBody"]
