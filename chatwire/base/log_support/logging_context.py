"""Per-request fields attached to every completion log event."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Endpoint URL (without query), model and request id of one call.

    ``extra`` holds caller metadata such as a tenant or chat id; its keys are
    flattened into the event next to the fixed fields.
    """

    url: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        fixed = {"url": self.url, "model": self.model, "request_id": self.request_id}
        merged = {**fixed, **self.extra}
        return {key: value for key, value in merged.items() if value is not None}


__all__ = ["LogContext"]
