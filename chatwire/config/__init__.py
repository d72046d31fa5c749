"""Unified configuration layer for chatwire.

Goals
-----
* Centralize defaults (stream throttling, timeouts, provider endpoints).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by CHATWIRE_CONFIG_FILE
    3. Environment variables
    4. In-code overrides passed to the helper
* Provide two call sites: ``get_settings()`` for completion behaviour and
  ``get_provider_config(provider)`` for OpenAI-compatible endpoints.

Environment
-----------
CHATWIRE_MIN_STREAM_INTERVAL_MS (legacy TELEGRAM_MIN_STREAM_INTERVAL),
CHATWIRE_REQUEST_TIMEOUT_MS (legacy CHAT_COMPLETE_API_TIMEOUT),
CHATWIRE_HTTP_TIMEOUT_SECONDS, and <PROVIDER>_MODEL / <PROVIDER>_API_KEY /
<PROVIDER>_BASE_URL, e.g. OPENAI_API_KEY, OPENROUTER_BASE_URL.

Config file
-----------
JSON is tried first, then YAML. Top-level keys are sections:

```
completion:
  min_stream_interval_ms: 500
  request_timeout_ms: 60000
openrouter:
  model: openrouter/auto
  base_url: https://openrouter.ai/api/v1
```

Public API
----------
* CompletionSettings
* get_settings(**overrides) -> CompletionSettings
* reset_settings_cache() -> None
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .env import (
    CONFIG_FILE_ENV,
    DOTENV_FILE_ENV,
    is_placeholder,
    provider_env_overrides,
    resolve_setting_env,
    settings_env_fingerprint,
)
from .defaults import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_MIN_STREAM_INTERVAL_MS,
    DEFAULT_REQUEST_TIMEOUT_MS,
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    OLLAMA_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)


@dataclass(frozen=True)
class CompletionSettings:
    """Normalized completion behaviour settings.

    Attributes:
        min_stream_interval_ms: minimum milliseconds between two partial
            flushes while streaming; ``<= 0`` disables time throttling.
        request_timeout_ms: timeout of the HTTP exchange, enforced by
            cancelling the request token; ``<= 0`` disables it.
        http_timeout_seconds: per-phase httpx client timeout; ``<= 0``
            disables it.
    """

    min_stream_interval_ms: float = DEFAULT_MIN_STREAM_INTERVAL_MS
    request_timeout_ms: float = DEFAULT_REQUEST_TIMEOUT_MS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS


PROVIDER_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "deepseek": {"model": DEEPSEEK_DEFAULT_MODEL, "base_url": DEEPSEEK_DEFAULT_BASE_URL},
    "xai": {"model": XAI_DEFAULT_MODEL, "base_url": XAI_DEFAULT_BASE_URL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_BASE_URL},
}

SETTINGS_SECTION = "completion"

_CACHED: Optional[CompletionSettings] = None
_ENV_GUARD: Optional[str] = None
_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None
_DOTENV_LOADED = False


def _parse_dotenv(text: str) -> Dict[str, str]:
    """``KEY=VALUE`` pairs of a dotenv file; comments, blanks and junk lines skipped."""
    pairs: Dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        pairs[key] = value.strip().strip("\"'")
    return pairs


def _load_dotenv_once() -> None:
    """Apply the dotenv file (``DOTENV_FILE``, default ``.env``) once per cache cycle.

    Only variables that are unset or hold a placeholder value are written.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = Path(os.getenv(DOTENV_FILE_ENV, ".env"))
    if not path.is_file():
        return
    for key, value in _parse_dotenv(path.read_text(encoding="utf-8")).items():
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            data = None
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    """Content of ``CHATWIRE_CONFIG_FILE`` (JSON, else YAML), cached per path.

    A missing or unreadable file and a non-mapping document give ``{}``.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV) or ""
    if _FILE_CACHE is None or _FILE_CACHE_PATH != path:
        candidate = Path(path) if path else None
        if candidate is not None and candidate.is_file():
            _FILE_CACHE = _parse_config_text(candidate.read_text(encoding="utf-8"))
        else:
            _FILE_CACHE = {}
        _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _coerce_number(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _build_settings() -> CompletionSettings:
    values: Dict[str, float] = {f.name: f.default for f in fields(CompletionSettings)}
    section = _load_external_config().get(SETTINGS_SECTION)
    if isinstance(section, dict):
        for name in values:
            if name in section:
                values[name] = _coerce_number(section[name], values[name])
    for name in values:
        raw, _ = resolve_setting_env(name)
        if raw is not None:
            values[name] = _coerce_number(raw, values[name])
    return CompletionSettings(**values)


def get_settings(**overrides: Any) -> CompletionSettings:
    """Return the merged :class:`CompletionSettings`.

    The merged result is cached per process and recomputed when a relevant
    environment variable changes. Keyword overrides (``None`` values ignored)
    are applied on top and never cached.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    _load_dotenv_once()
    guard = settings_env_fingerprint()
    if _CACHED is None or _ENV_GUARD != guard:
        _CACHED = _build_settings()
        _ENV_GUARD = guard
    explicit = {k: v for k, v in overrides.items() if v is not None}
    return replace(_CACHED, **explicit) if explicit else _CACHED


def reset_settings_cache() -> None:
    """Drop cached settings, config file content and the dotenv marker."""
    global _CACHED, _ENV_GUARD, _FILE_CACHE, _FILE_CACHE_PATH, _DOTENV_LOADED
    _CACHED = None
    _ENV_GUARD = None
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None
    _DOTENV_LOADED = False


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Endpoint settings (``model``, ``base_url``, ``api_key``) for ``provider``.

    Layers, later wins: built-in defaults, the provider section of the config
    file, ``<PROVIDER>_*`` env vars, then non-``None`` ``overrides``. Unknown
    providers start from an empty mapping.
    """
    _load_dotenv_once()
    name = (provider or "").strip().lower()
    file_section = _load_external_config().get(name)
    layers = (
        PROVIDER_DEFAULTS.get(name) or {},
        file_section if isinstance(file_section, dict) else {},
        provider_env_overrides(name),
        {k: v for k, v in (overrides or {}).items() if v is not None},
    )
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


__all__ = [
    "CompletionSettings",
    "get_settings",
    "reset_settings_cache",
    "get_provider_config",
    "PROVIDER_DEFAULTS",
]
