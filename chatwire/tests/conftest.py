"""Pytest configuration for the chatwire test suite.

Provides:
- an autouse fixture isolating completion settings from the developer's
  environment, config file and ``.env``;
- a factory for in-memory ``HttpxResponse`` objects;
- an SSE body builder;
- a capture of the structured events logged under the ``chatwire`` logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator, List, Optional, Union

import httpx
import pytest

from chatwire.base.http import HttpxResponse
from chatwire.base.logging import get_logger
from chatwire.config import reset_settings_cache
from chatwire.config.env import CONFIG_FILE_ENV, DOTENV_FILE_ENV, SETTINGS_ENV_ALIASES


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Run every test against built-in defaults only."""

    for aliases in SETTINGS_ENV_ALIASES.values():
        for name in aliases:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.setenv(DOTENV_FILE_ENV, str(tmp_path / "missing.env"))
    reset_settings_cache()
    yield
    reset_settings_cache()


Body = Union[bytes, str, dict, list, None]


@pytest.fixture()
def make_response() -> Callable[..., HttpxResponse]:
    """Build an ``HttpxResponse`` over an in-memory ``httpx.Response``."""

    def _make(
        status: int = 200,
        content_type: Optional[str] = "application/json",
        body: Body = b"",
    ) -> HttpxResponse:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        headers = {"content-type": content_type} if content_type else {}
        return HttpxResponse(httpx.Response(status, headers=headers, content=body or b""))

    return _make


def _chunk(text: str) -> dict:
    return {"choices": [{"index": 0, "delta": {"content": text}}]}


@pytest.fixture()
def sse_body() -> Callable[..., str]:
    """Return a builder for an OpenAI-style SSE body ending with ``[DONE]``."""

    def _build(*deltas: Any, done: bool = True) -> str:
        lines = []
        for delta in deltas:
            frame = delta if isinstance(delta, dict) else _chunk(delta)
            lines.append(f"data: {json.dumps(frame)}\n\n")
        if done:
            lines.append("data: [DONE]\n\n")
        return "".join(lines)

    return _build


@pytest.fixture()
def log_events() -> Iterator[List[dict]]:
    """Capture structured events emitted under the ``chatwire`` logger."""

    events: List[dict] = []

    class _Collector(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                events.append(json.loads(record.getMessage()))
            except ValueError:
                pass

    logger = get_logger()
    previous_level = logger.level
    handler = _Collector(level=logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield events
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
