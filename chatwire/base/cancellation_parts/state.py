"""Mutable state behind a ``CancellationToken``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass
class TokenState:
    """Trip flag, reason and the callbacks still waiting for the trip.

    ``callbacks`` is emptied when the token trips; it is only touched under
    the token's lock.
    """

    tripped: bool = False
    reason: Optional[str] = None
    callbacks: List[Callable[[], None]] = field(default_factory=list)


__all__ = ["TokenState"]
