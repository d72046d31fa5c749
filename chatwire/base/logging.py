"""Structured logging for completion calls.

Every module logs through a child of the ``chatwire`` logger. The base logger
owns the handlers (stderr, plus an optional rotating file) and does not
propagate to the root logger, so applications opt in through
``configure_logger`` or by attaching their own handler.

Events are single JSON messages built by ``log_event``. Completion events go
through ``normalized_log_event`` so each carries ``phase``, ``emitted`` and
``streaming`` (and ``error_code`` on failures). Answer text and request
headers are never logged; only lengths and counters are.

Environment:
    CHATWIRE_LOG_LEVEL  level name for the base logger (default INFO)
    CHATWIRE_LOG_JSON   "0"/"false"/"off" switches stderr output to plain text
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "chatwire"
LOG_LEVEL_ENV = "CHATWIRE_LOG_LEVEL"
LOG_JSON_ENV = "CHATWIRE_LOG_JSON"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` currently is.

    Test runners swap and close ``sys.stderr``; resolving it per record keeps
    the handler usable across those swaps.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


class _ManagedFileHandler(RotatingFileHandler):
    """Rotating file handler installed by :func:`configure_logger`."""


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _level_from(value: int | str | None, fallback: int) -> int:
    """Resolve a level given as number or name; unknown names yield ``fallback``."""
    if value is None:
        return fallback
    if isinstance(value, int):
        return value
    resolved = getattr(logging, value.strip().upper(), None)
    return resolved if isinstance(resolved, int) else fallback


def _json_from_env(default: bool) -> bool:
    raw = (os.getenv(LOG_JSON_ENV) or "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def _base_logger(json_mode: bool) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if any(isinstance(h, _StderrHandler) for h in logger.handlers):
        return logger
    level = _level_from(os.getenv(LOG_LEVEL_ENV), logging.INFO)
    handler = _StderrHandler()
    handler.setFormatter(_formatter(json_mode))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return ``name`` under the ``chatwire`` hierarchy, installing the base handler once.

    Child loggers keep no handlers and defer their level to the base logger.
    """
    base = _base_logger(_json_from_env(json_mode))
    if name == BASE_LOGGER_NAME:
        return base
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the ``chatwire`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level for the logger and its handlers; ``None`` keeps the current one.
    file_path: Optional[str]
        Attach (or keep) a rotating file handler for this path. ``None``
        removes a handler previously attached here.
    json_mode: bool
        Formatter of the file handler.
    """
    logger = get_logger()
    if level is not None:
        logger.setLevel(_level_from(level, logger.level))
        for handler in logger.handlers:
            handler.setLevel(logger.level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in [h for h in logger.handlers if isinstance(h, _ManagedFileHandler)]:
        if handler.baseFilename == target:
            handler.setFormatter(_formatter(json_mode))
            return logger
        logger.removeHandler(handler)
        handler.close()
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    file_handler = _ManagedFileHandler(
        target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8"
    )
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(_formatter(json_mode))
    logger.addHandler(file_handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object.

    ``ctx`` fields come first, then ``fields``; ``None`` values are dropped
    unless ``keep_none`` is set. Nothing is serialized when ``level`` is
    disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    for key, value in fields.items():
        if value is not None or keep_none:
            payload[key] = value
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "error_code",
    "emitted",
    "streaming",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: bool | None = None,
    streaming: bool | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """``log_event`` with the completion keys always present.

    ``phase``, ``emitted`` and ``streaming`` are written even when ``None``;
    ``error_code`` only on failures. Extra fields cannot shadow them and
    ``None`` extras are dropped.
    """
    normalized: Dict[str, Any] = {"phase": phase, "emitted": emitted, "streaming": streaming}
    if error_code is not None:
        normalized["error_code"] = error_code
    extras = {k: v for k, v in extra_fields.items() if v is not None and k not in REQUIRED_NORMALIZED_KEYS}
    log_event(logger, event, ctx, level=level, keep_none=True, **normalized, **extras)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]
