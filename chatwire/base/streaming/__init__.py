"""Streaming package for the completion layer.

Exposes the frame decoder, the accumulator and the stream consumer under a
single namespace.
"""

from .frames import DONE_MARKER, SseFrameStream
from .accumulator import AccumulatedAnswer, INITIAL_UPDATE_STEP, PARTIAL_SUFFIX, UPDATE_STEP_GROWTH
from .consumer import PartialSink, StreamOutcome, consume_stream, deliver_partial

__all__ = [
    "SseFrameStream",
    "DONE_MARKER",
    "AccumulatedAnswer",
    "INITIAL_UPDATE_STEP",
    "UPDATE_STEP_GROWTH",
    "PARTIAL_SUFFIX",
    "StreamOutcome",
    "PartialSink",
    "consume_stream",
    "deliver_partial",
]
