"""Response shape failure raised by the mapper and the frame decoder."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .request_error import RequestError


@dataclass(eq=False)
class ResponseShapeError(RequestError):
    """Raised for a response that cannot be turned into an answer.

    Covers a non-JSON response off the streaming path (message is the HTTP
    reason phrase), an empty or undecodable JSON body, a body missing the
    answer path, and a stream frame that is not valid JSON.
    """

    code: ErrorCode = ErrorCode.RESPONSE_SHAPE


__all__ = ["ResponseShapeError"]
