"""HTTP response abstraction consumed by the response mapper.

``HttpResponseLike`` is the narrow surface the mapper, the classifier and the
frame decoder rely on; ``HttpxResponse`` implements it over a streamed
``httpx.Response``. Tests and alternative transports may provide their own
implementation.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Optional, Protocol, runtime_checkable

import httpx


@runtime_checkable
class HttpResponseLike(Protocol):
    """Received HTTP response, owned by one completion call."""

    @property
    def ok(self) -> bool: ...

    @property
    def status_code(self) -> int: ...

    @property
    def status_text(self) -> str: ...

    def header(self, name: str) -> Optional[str]: ...

    async def json(self) -> Any: ...

    def lines(self) -> AsyncIterator[str]: ...

    async def aclose(self) -> None: ...


class HttpxResponse:
    """``HttpResponseLike`` adapter over an ``httpx.Response``.

    The wrapped response is expected to be opened with ``stream=True``; the
    body is read lazily, either whole by :meth:`json` or line by line by
    :meth:`lines`.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def raw(self) -> httpx.Response:
        return self._response

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase or str(self._response.status_code)

    def header(self, name: str) -> Optional[str]:
        return self._response.headers.get(name)

    async def json(self) -> Any:
        """Read the whole body and decode it as JSON.

        Returns ``None`` for an empty body. Raises ``ValueError`` (a
        ``json.JSONDecodeError``) when the body is not valid JSON.
        """
        content = await self._response.aread()
        if not content.strip():
            return None
        return self._response.json()

    def lines(self) -> AsyncIterator[str]:
        return self._response.aiter_lines()

    async def aclose(self) -> None:
        await self._response.aclose()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"HttpxResponse(status={self._response.status_code}, url={self._response.request.url!s})"


__all__ = ["HttpResponseLike", "HttpxResponse"]
