"""Unified request error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatwire.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.request_error import RequestError
from .errors_parts.transport_error import TransportError
from .errors_parts.response_shape_error import ResponseShapeError
from .errors_parts.provider_response_error import ProviderResponseError
from .errors_parts.stream_builder_error import StreamBuilderError
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "RequestError",
    "TransportError",
    "ResponseShapeError",
    "ProviderResponseError",
    "StreamBuilderError",
    "classify_exception",
]
