"""Transport failure: network error, timeout or cancellation while sending."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .request_error import RequestError


@dataclass(eq=False)
class TransportError(RequestError):
    """Raised when the HTTP exchange itself fails or is aborted."""

    code: ErrorCode = ErrorCode.TRANSPORT


__all__ = ["TransportError"]
