"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``chatwire.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is created once per completion call and observed by
  the request timer, the transport and the frame decoder.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
