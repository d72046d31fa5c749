"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatwire.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .request_error import RequestError
from .transport_error import TransportError
from .response_shape_error import ResponseShapeError
from .provider_response_error import ProviderResponseError
from .stream_builder_error import StreamBuilderError
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "RequestError",
    "TransportError",
    "ResponseShapeError",
    "ProviderResponseError",
    "StreamBuilderError",
    "classify_exception",
]
