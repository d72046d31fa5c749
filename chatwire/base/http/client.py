"""Async HTTP client provisioning for completion calls.

Purpose:
    Give the orchestrator an ``httpx.AsyncClient`` for the duration of one
    call. A caller-supplied client is reused and left open; otherwise a client
    is created with the configured timeout and closed when the call ends.

Timeout strategy:
    The client timeout is ``CompletionSettings.http_timeout_seconds`` (per
    connect/read/write/pool phase). It bounds silent sockets only; the
    end-to-end request timeout is the token-based timer in
    :mod:`chatwire.base.timeouts`. A value ``<= 0`` disables the client
    timeout.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx


def build_client_timeout(http_timeout_seconds: float) -> httpx.Timeout:
    """Return the ``httpx.Timeout`` for a configured number of seconds."""
    if http_timeout_seconds <= 0:
        return httpx.Timeout(None)
    return httpx.Timeout(http_timeout_seconds)


@asynccontextmanager
async def client_scope(
    client: Optional[httpx.AsyncClient],
    *,
    http_timeout_seconds: float,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``client`` untouched, or a fresh client closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=build_client_timeout(http_timeout_seconds)) as owned:
        yield owned


__all__ = ["client_scope", "build_client_timeout"]
