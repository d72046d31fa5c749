"""Stream construction failure."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .request_error import RequestError


@dataclass(eq=False)
class StreamBuilderError(RequestError):
    """Raised when streaming was selected but the builder returned no frames."""

    code: ErrorCode = ErrorCode.STREAM_BUILDER


__all__ = ["StreamBuilderError"]
