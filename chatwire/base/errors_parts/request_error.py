"""
Structured request error exception type.

``RequestError`` is the failure raised to callers of the completion API. The
failure kinds of the taxonomy subclass it (``TransportError``,
``ResponseShapeError``, ``ProviderResponseError``, ``StreamBuilderError``) so
callers can catch one kind without inspecting messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class RequestError(Exception):
    """Represents a failed completion request.

    Attributes:
        message: Human-readable message; ``str(error)`` returns it verbatim.
        code: Normalized :class:`ErrorCode` classification for the failure.
        status_code: HTTP status of the response, when one was received.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:
        return self.message


__all__ = ["RequestError"]
