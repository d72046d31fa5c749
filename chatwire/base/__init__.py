"""
Completion Base Package

Exports the provider-agnostic building blocks of the completion call: the
cancellation token, the error taxonomy, the HTTP response abstraction, the
frame decoder and stream consumer, the extractor set and the response mapper.

Layering (lower never imports higher):
- cancellation, errors, logging, sanitize
- http, streaming, extractors, timeouts, dto
- mapper
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ErrorCode,
    ProviderResponseError,
    RequestError,
    ResponseShapeError,
    StreamBuilderError,
    TransportError,
    classify_exception,
)
from .logging import LogContext, configure_logger, get_logger
from .sanitize import sanitize
from .http import HttpResponseLike, HttpxResponse, HttpxTransport, Transport
from .streaming import SseFrameStream, StreamOutcome, consume_stream
from .extractors import DEFAULT_EXTRACTORS, ExtractorSet, resolve_extractors
from .timeouts import cancel_after
from .dto import ChatCompletionBody, ContentPartDTO, MessageDTO
from .mapper import map_response_to_answer

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Errors
    "ErrorCode",
    "RequestError",
    "TransportError",
    "ResponseShapeError",
    "ProviderResponseError",
    "StreamBuilderError",
    "classify_exception",
    # Logging
    "LogContext",
    "get_logger",
    "configure_logger",
    # Text
    "sanitize",
    # HTTP
    "HttpResponseLike",
    "HttpxResponse",
    "Transport",
    "HttpxTransport",
    # Streaming
    "SseFrameStream",
    "StreamOutcome",
    "consume_stream",
    # Extractors
    "ExtractorSet",
    "DEFAULT_EXTRACTORS",
    "resolve_extractors",
    # Timeouts
    "cancel_after",
    # DTOs
    "ChatCompletionBody",
    "MessageDTO",
    "ContentPartDTO",
    # Mapping
    "map_response_to_answer",
]
