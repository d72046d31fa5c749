"""Cancellation error type.

Raised when a tripped ``CancellationToken`` is observed.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a tripped cancellation token.

    This is a ``RuntimeError``, not ``asyncio.CancelledError``; task
    cancellation coming from outside the call keeps propagating untouched.
    """


__all__ = ["CancelledError"]
