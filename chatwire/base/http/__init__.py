"""HTTP utilities package.

Exposes the response abstraction, content-type classification, the cancellable
httpx transport and client provisioning.
"""

from .response import HttpResponseLike, HttpxResponse
from .classify import is_event_stream_response, is_json_response
from .transport import HttpxTransport, Transport, await_cancellable
from .client import build_client_timeout, client_scope

__all__ = [
    "HttpResponseLike",
    "HttpxResponse",
    "is_json_response",
    "is_event_stream_response",
    "Transport",
    "HttpxTransport",
    "await_cancellable",
    "client_scope",
    "build_client_timeout",
]
