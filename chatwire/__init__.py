"""chatwire package

Streaming-aware client for OpenAI-compatible chat-completion endpoints.

Purpose:
    Send one chat-completion request, follow the answer as it streams in
    (throttled partial snapshots for a UI), strip model "thinking" markup and
    return the final answer text. Non-OpenAI envelopes are supported through
    pluggable extractor functions.

Public API (re-exported):
    - Version: ``__version__``
    - Requests: :func:`request_chat_completion`, :func:`complete_chat`
    - Extractors: :class:`ExtractorSet`
    - Errors: :class:`RequestError` and subclasses, :class:`ErrorCode`
    - Settings: :class:`CompletionSettings`, :func:`get_settings`
    - Text: :func:`sanitize`
"""

from .base import (
    CancellationToken,
    CancelledError,
    ChatCompletionBody,
    ErrorCode,
    ExtractorSet,
    MessageDTO,
    ProviderResponseError,
    RequestError,
    ResponseShapeError,
    StreamBuilderError,
    TransportError,
    configure_logger,
    sanitize,
)
from .config import CompletionSettings, get_provider_config, get_settings
from .completions import complete_chat, request_chat_completion

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "request_chat_completion",
    "complete_chat",
    "ExtractorSet",
    "ChatCompletionBody",
    "MessageDTO",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "RequestError",
    "TransportError",
    "ResponseShapeError",
    "ProviderResponseError",
    "StreamBuilderError",
    "CompletionSettings",
    "get_settings",
    "get_provider_config",
    "configure_logger",
    "sanitize",
]
