"""
Normalized request error codes (taxonomy).

Defines the ``ErrorCode`` enumeration attached to every ``RequestError`` and
emitted as ``error_code`` in structured logs. Values are lowercase snake_case
and are considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    RESPONSE_SHAPE = "response_shape"
    PROVIDER = "provider"
    STREAM_BUILDER = "stream_builder"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
