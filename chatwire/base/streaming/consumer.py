"""Stream consumer: frames in, sanitized answer out.

Reads a frame sequence to exhaustion, accumulates the text deltas and flushes
throttled, sanitized snapshots to an optional partial-result sink. The sink is
awaited before the next frame is read, so a slow sink slows consumption.

Throttling
----------
A flush is attempted when the characters received since the last flush exceed
``update_step`` (50, then +20 per flush). With a positive minimum interval, an
attempt made too soon after the previous flush is skipped without resetting
the counter, so the very next delta retries it.

Failure policy
--------------
An exception raised while consuming (a frame read, the delta extractor, a
non-text delta or the sink) stops consumption. The accumulated text gets a
``"\\nError: <message>"`` suffix and is returned; the exception is not re-raised.
``StreamOutcome.error`` records the message so callers need not inspect the
text.
"""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass
from typing import Any, AsyncIterable, Awaitable, Callable, Optional, Union

from ...config import get_settings
from ..errors import ResponseShapeError, classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..sanitize import sanitize
from .accumulator import AccumulatedAnswer

PartialSink = Callable[[str], Union[Awaitable[Any], Any]]
DeltaExtractor = Callable[[Any], Optional[str]]

_logger = get_logger("chatwire.stream")


@dataclass(frozen=True)
class StreamOutcome:
    """Result of one stream consumption.

    Attributes:
        text: sanitized final text, including the error annotation if any.
        error: message of the failure that ended consumption early.
        flushes: throttled flushes performed.
        deliveries: snapshots handed to the sink.
    """

    text: str
    error: Optional[str] = None
    flushes: int = 0
    deliveries: int = 0

    @property
    def completed_cleanly(self) -> bool:
        return self.error is None


async def deliver_partial(on_partial: Optional[PartialSink], payload: str) -> None:
    """Invoke the sink, awaiting it when it returns an awaitable."""
    if on_partial is None:
        return
    result = on_partial(payload)
    if inspect.isawaitable(result):
        await result


async def consume_stream(
    frames: AsyncIterable[Any],
    extract_delta: DeltaExtractor,
    on_partial: Optional[PartialSink] = None,
    *,
    min_interval_ms: Optional[float] = None,
    clock: Callable[[], float] = time.monotonic,
    ctx: Optional[LogContext] = None,
) -> StreamOutcome:
    """Consume ``frames`` and return the sanitized answer.

    Parameters:
        frames: single-use async iterable of decoded frames.
        extract_delta: returns the text fragment of a frame, or a falsy value
            for frames without text.
        on_partial: optional sink receiving ``sanitized_text + "\\n..."``.
        min_interval_ms: minimum milliseconds between flushes; ``None`` reads
            ``CompletionSettings.min_stream_interval_ms``; ``<= 0`` disables.
        clock: monotonic clock in seconds.
        ctx: log context of the enclosing request.
    """
    if min_interval_ms is None:
        min_interval_ms = get_settings().min_stream_interval_ms
    answer = AccumulatedAnswer(last_update=clock())
    failure: Optional[BaseException] = None
    error_message: Optional[str] = None
    try:
        async for frame in frames:
            delta = extract_delta(frame)
            if not delta:
                continue
            if not isinstance(delta, str):
                raise ResponseShapeError(f"Stream delta is not text: {type(delta).__name__}")
            answer.append(delta)
            if not answer.flush_due():
                continue
            if min_interval_ms > 0:
                now = clock()
                if not answer.interval_elapsed(now, min_interval_ms):
                    continue
                answer.mark_flushed(now)
            else:
                answer.mark_flushed()
            payload = answer.take_snapshot()
            if payload is None:
                continue
            normalized_log_event(
                _logger,
                "stream.flush",
                ctx,
                phase="mid_stream",
                emitted=True,
                streaming=True,
                level=logging.DEBUG,
                flushes=answer.flushes,
                snapshot_len=len(payload),
            )
            await deliver_partial(on_partial, payload)
    except Exception as exc:
        failure = exc
        error_message = str(exc) or exc.__class__.__name__
        answer.annotate_error(error_message)

    text = sanitize(answer.text)
    normalized_log_event(
        _logger,
        "stream.end" if failure is None else "stream.error",
        ctx,
        phase="finalize",
        error_code=classify_exception(failure).value if failure is not None else None,
        emitted=answer.deliveries > 0,
        streaming=True,
        level=logging.INFO if failure is None else logging.WARNING,
        flushes=answer.flushes,
        deliveries=answer.deliveries,
        text_len=len(text),
        error=error_message,
    )
    return StreamOutcome(
        text=text,
        error=error_message,
        flushes=answer.flushes,
        deliveries=answer.deliveries,
    )


__all__ = ["StreamOutcome", "PartialSink", "consume_stream", "deliver_partial"]
