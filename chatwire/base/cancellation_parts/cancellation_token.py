"""Cancellation signal shared by the parts of one completion call.

The request timer trips the token; the transport and every frame read
subscribe with :meth:`CancellationToken.add_callback` and abort their pending
await when it trips.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Optional

from ..logging import get_logger
from .cancelled_error import CancelledError
from .state import TokenState

_logger = get_logger("chatwire.cancellation")

Callback = Callable[[], None]


class CancellationToken:
    """One-way, thread-safe cancellation flag with trip callbacks.

    A token created with ``parent=`` trips together with its parent (with the
    parent's reason). Tripping twice is a no-op.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = TokenState()
        self._lock = Lock()
        if parent is not None:
            parent.add_callback(lambda: self.cancel(parent.reason))

    @property
    def cancelled(self) -> bool:
        return self._state.tripped

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Trip the token and run the pending callbacks in registration order.

        Callbacks run on the calling thread, outside the lock. A failing
        callback is logged and does not stop the remaining ones.
        """
        with self._lock:
            if self._state.tripped:
                return
            self._state.tripped = True
            self._state.reason = reason
            pending, self._state.callbacks = self._state.callbacks, []
        for callback in pending:
            try:
                callback()
            except Exception:
                _logger.exception("cancellation callback failed")

    def add_callback(self, callback: Callback) -> None:
        """Run ``callback`` when the token trips, or right away if it already has."""
        with self._lock:
            if not self._state.tripped:
                self._state.callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callback) -> None:
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    def raise_if_cancelled(self) -> None:
        if self._state.tripped:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """New token that trips when this one does."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.tripped}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
