"""Provider-reported error carried inside a response body or stream frame."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .request_error import RequestError


@dataclass(eq=False)
class ProviderResponseError(RequestError):
    """Raised with the provider's own error message."""

    code: ErrorCode = ErrorCode.PROVIDER


__all__ = ["ProviderResponseError"]
