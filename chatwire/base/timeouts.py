"""Request timeout enforcement through the cancellation token.

The orchestrator arms a one-shot event-loop timer that trips the request's
``CancellationToken`` when the configured timeout elapses. The timer covers
the HTTP exchange up to the response headers; it is disarmed as soon as that
exchange settles, successfully or not, so no pending callback outlives it.

Key Components
--------------
RequestTimer
    Handle on the armed timer; records whether it fired.

cancel_after(token, timeout_ms)
    Context manager arming the timer on entry and disarming it on exit. A
    ``timeout_ms <= 0`` yields an inert timer.

Failure Modes
-------------
The timer never raises itself. Expiry cancels the token; the awaiting
transport observes that and raises ``TransportError``.
"""
from __future__ import annotations

import asyncio
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .cancellation import CancellationToken


@dataclass
class RequestTimer:
    """One-shot timer bound to a cancellation token."""

    timeout_ms: float = 0.0
    handle: Optional[asyncio.TimerHandle] = None
    fired: bool = False

    @property
    def armed(self) -> bool:
        return self.handle is not None

    def disarm(self) -> None:
        """Cancel the pending callback (idempotent)."""
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None


def timeout_reason(timeout_ms: float) -> str:
    return f"request timed out after {timeout_ms:g} ms"


@contextmanager
def cancel_after(token: CancellationToken, timeout_ms: float) -> Iterator[RequestTimer]:
    """Trip ``token`` if the block is still running after ``timeout_ms``.

    Must be entered from a running event loop.
    """
    timer = RequestTimer(timeout_ms=timeout_ms)
    if timeout_ms <= 0:
        yield timer
        return

    def _expire() -> None:
        timer.handle = None
        timer.fired = True
        token.cancel(timeout_reason(timeout_ms))

    loop = asyncio.get_running_loop()
    timer.handle = loop.call_later(timeout_ms / 1000.0, _expire)
    try:
        yield timer
    finally:
        timer.disarm()


__all__ = ["RequestTimer", "cancel_after", "timeout_reason"]
