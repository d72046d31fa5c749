"""Mutable accumulator threaded through one stream consumption.

Holds the full text received so far plus the throttling bookkeeping that
decides when a partial snapshot is flushed to the sink. The flush threshold
grows after every flush so long answers are pushed less and less often.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..sanitize import sanitize

INITIAL_UPDATE_STEP = 50
UPDATE_STEP_GROWTH = 20
PARTIAL_SUFFIX = "\n..."


@dataclass
class AccumulatedAnswer:
    """Answer text plus flush state.

    Attributes:
        length_delta: characters appended since the last flush.
        update_step: threshold ``length_delta`` must exceed to flush.
        last_update: clock reading (seconds) of the last flush, or of the
            start of consumption before any flush.
        last_delivered: last sanitized snapshot handed to the sink.
        flushes: number of flushes performed.
        deliveries: number of snapshots handed to the sink.
    """

    length_delta: int = 0
    update_step: int = INITIAL_UPDATE_STEP
    last_update: float = 0.0
    last_delivered: str = ""
    flushes: int = 0
    deliveries: int = 0
    _parts: List[str] = field(default_factory=list, repr=False)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def append(self, delta: str) -> None:
        self._parts.append(delta)
        self.length_delta += len(delta)

    def flush_due(self) -> bool:
        return self.length_delta > self.update_step

    def interval_elapsed(self, now: float, min_interval_ms: float) -> bool:
        """True when ``min_interval_ms`` is disabled or has passed since the last flush."""
        if min_interval_ms <= 0:
            return True
        return (now - self.last_update) * 1000.0 >= min_interval_ms

    def mark_flushed(self, now: Optional[float] = None) -> None:
        if now is not None:
            self.last_update = now
        self.length_delta = 0
        self.update_step += UPDATE_STEP_GROWTH
        self.flushes += 1

    def take_snapshot(self) -> Optional[str]:
        """Return the sink payload for the current text, or ``None``.

        ``None`` when the sanitized text is empty or identical to the last
        delivered snapshot.
        """
        display = sanitize(self.text)
        if not display or display == self.last_delivered:
            return None
        self.last_delivered = display
        self.deliveries += 1
        return f"{display}{PARTIAL_SUFFIX}"

    def annotate_error(self, message: str) -> None:
        self._parts.append(f"\nError: {message}")


__all__ = [
    "AccumulatedAnswer",
    "INITIAL_UPDATE_STEP",
    "UPDATE_STEP_GROWTH",
    "PARTIAL_SUFFIX",
]
