"""Frame decoder turning a streamed response body into decoded JSON frames.

``SseFrameStream`` is the default ``build_stream`` of the extractor set. It
understands two framings:

- Server-sent events: ``data:`` fields (several lines are joined with
  ``"\\n"``), dispatched on a blank line; comments and the ``id``/``retry``
  fields are ignored; ``event: error`` marks an error payload.
- Newline-delimited JSON (``application/stream+json``): a line starting with
  ``{`` or ``[`` outside an SSE event is one frame.

A ``[DONE]`` payload ends the sequence. Failures surface as exceptions raised
from iteration, which the stream consumer turns into an inline annotation:
``ResponseShapeError`` for undecodable payloads, ``ProviderResponseError``
for error frames, ``CancelledError`` once the token trips.
"""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, List, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderResponseError, ResponseShapeError
from ..http.response import HttpResponseLike
from ..http.transport import await_cancellable

DONE_MARKER = "[DONE]"

_END = object()


async def _next_line(lines: AsyncIterator[str]) -> Any:
    try:
        return await lines.__anext__()
    except StopAsyncIteration:
        return _END


def _error_message(frame: Any) -> str:
    error = frame.get("error") if isinstance(frame, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return "Unknown error"


class SseFrameStream:
    """Single-use async iterable of decoded frames read from ``response``.

    Every line read is raced against ``token``; once it trips the pending
    read is aborted and iteration raises ``CancelledError``.
    """

    def __init__(self, response: HttpResponseLike, token: CancellationToken) -> None:
        self._response = response
        self._token = token
        self._started = False

    def __aiter__(self) -> AsyncIterator[Any]:
        if self._started:
            raise RuntimeError("frame stream can only be consumed once")
        self._started = True
        return self._frames()

    async def _frames(self) -> AsyncIterator[Any]:
        lines = self._response.lines()
        try:
            async for frame in self._decode_lines(lines):
                yield frame
        finally:
            aclose = getattr(lines, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _decode_lines(self, lines: AsyncIterator[str]) -> AsyncIterator[Any]:
        data: List[str] = []
        event: Optional[str] = None
        while True:
            line = await await_cancellable(_next_line(lines), self._token)
            if line is _END:
                break
            line = line.rstrip("\r")
            if not line:
                if data:
                    frame = self._decode("\n".join(data), event)
                    if frame is _END:
                        return
                    yield frame
                data, event = [], None
                continue
            if line.startswith(":"):
                continue
            if not data and line[0] in "{[":
                frame = self._decode(line, None)
                if frame is _END:
                    return
                yield frame
                continue
            field, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if field == "data":
                data.append(value)
            elif field == "event":
                event = value
        if data:
            frame = self._decode("\n".join(data), event)
            if frame is not _END:
                yield frame

    @staticmethod
    def _decode(payload: str, event: Optional[str]) -> Any:
        if payload.strip() == DONE_MARKER:
            return _END
        try:
            frame = json.loads(payload)
        except ValueError as exc:
            raise ResponseShapeError(f"Could not decode stream frame: {exc}", raw=exc) from exc
        if event == "error" or (isinstance(frame, dict) and frame.get("error")):
            raise ProviderResponseError(_error_message(frame))
        return frame


__all__ = ["SseFrameStream", "DONE_MARKER"]
