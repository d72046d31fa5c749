"""Pluggable extraction functions for OpenAI-compatible response envelopes.

An :class:`ExtractorSet` bundles the four functions the response mapper needs.
Callers override any subset; :func:`resolve_extractors` fills the rest with
the OpenAI chat-completions defaults:

==================  =====================================  ====================
field               default reads                          on missing path
==================  =====================================  ====================
``build_stream``    ``SseFrameStream(response, token)``    n/a
``extract_delta``   ``frame.choices[0].delta.content``     ``None``
``extract_full``    ``body.choices[0].message.content``    raises
``extract_error``   ``body.error.message``                 ``None``
==================  =====================================  ====================

Resolution returns a new instance and never mutates the overrides; resolving
an already resolved set returns an equal set.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, AsyncIterable, Callable, Mapping, Optional, Union

from .cancellation import CancellationToken
from .http.response import HttpResponseLike
from .streaming.frames import SseFrameStream

StreamBuilder = Callable[[HttpResponseLike, CancellationToken], Optional[AsyncIterable[Any]]]
TextExtractor = Callable[[Any], Optional[str]]


def default_build_stream(response: HttpResponseLike, token: CancellationToken) -> SseFrameStream:
    return SseFrameStream(response, token)


def default_extract_delta(frame: Any) -> Optional[str]:
    """Incremental text of the first choice.

    ``None`` for malformed frames and for non-text content such as a list of
    content parts.
    """
    try:
        content = frame["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def default_extract_full(body: Any) -> Optional[str]:
    """Message text of the first choice.

    Strict: a body without ``choices[0].message`` raises ``KeyError``,
    ``IndexError`` or ``TypeError``.
    """
    return body["choices"][0]["message"]["content"]


def default_extract_error(body: Any) -> Optional[str]:
    """Top-level ``error.message``, or ``None`` when the body carries no error."""
    error = body.get("error") if isinstance(body, Mapping) else None
    if isinstance(error, Mapping):
        return error.get("message")
    return None


@dataclass(frozen=True)
class ExtractorSet:
    """Four optional extraction functions; ``None`` means "use the default"."""

    build_stream: Optional[StreamBuilder] = None
    extract_delta: Optional[TextExtractor] = None
    extract_full: Optional[TextExtractor] = None
    extract_error: Optional[TextExtractor] = None

    @property
    def is_resolved(self) -> bool:
        return all(getattr(self, f.name) is not None for f in fields(self))


DEFAULT_EXTRACTORS = ExtractorSet(
    build_stream=default_build_stream,
    extract_delta=default_extract_delta,
    extract_full=default_extract_full,
    extract_error=default_extract_error,
)

ExtractorOverrides = Union[ExtractorSet, Mapping[str, Any], None]


def _as_extractor_set(overrides: ExtractorOverrides) -> ExtractorSet:
    if overrides is None:
        return ExtractorSet()
    if isinstance(overrides, ExtractorSet):
        return overrides
    known = {f.name for f in fields(ExtractorSet)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"unknown extractor override(s): {', '.join(sorted(unknown))}")
    return ExtractorSet(**dict(overrides))


def resolve_extractors(overrides: ExtractorOverrides = None) -> ExtractorSet:
    """Return a fully populated :class:`ExtractorSet`.

    ``overrides`` may be ``None``, an ``ExtractorSet`` or a mapping keyed by
    the field names. Provided functions win; missing ones take the defaults.

    Raises:
        TypeError: a mapping contains keys that are not extractor fields.
    """
    requested = _as_extractor_set(overrides)
    return replace(
        DEFAULT_EXTRACTORS,
        **{f.name: getattr(requested, f.name) for f in fields(requested) if getattr(requested, f.name) is not None},
    )


__all__ = [
    "ExtractorSet",
    "ExtractorOverrides",
    "DEFAULT_EXTRACTORS",
    "StreamBuilder",
    "TextExtractor",
    "resolve_extractors",
    "default_build_stream",
    "default_extract_delta",
    "default_extract_full",
    "default_extract_error",
]
