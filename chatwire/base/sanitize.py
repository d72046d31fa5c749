"""Removal of model "thinking" markup from answer text.

Reasoning models interleave ``<think>...</think>`` (or ``<thinking>``) blocks
with the answer. Closed blocks are dropped; an opening tag that is never closed
hides everything after it, since the rest is reasoning still in progress.
"""

from __future__ import annotations

import re
from typing import Optional

_CLOSED_BLOCK = re.compile(r"<think(?:ing)?>.*?</think(?:ing)?>", re.DOTALL)
_OPEN_TAG = re.compile(r"<think(?:ing)?>")


def sanitize(text: Optional[str]) -> str:
    """Return ``text`` without thinking markup, left-trimmed.

    Order matters: closed blocks are removed first, then the text is cut at
    the first remaining opening tag, then leading whitespace is stripped.
    Trailing and inner whitespace is preserved.

    >>> sanitize("a<think>secret</think>b")
    'ab'
    >>> sanitize("visible<think>hidden")
    'visible'
    """
    if not text:
        return ""
    text = _CLOSED_BLOCK.sub("", text)
    match = _OPEN_TAG.search(text)
    if match:
        text = text[: match.start()]
    return text.lstrip()


__all__ = ["sanitize"]
