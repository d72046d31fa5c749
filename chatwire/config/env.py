"""chatwire.config.env
===================

Centralized environment variable names and small lookup helpers.

Purpose
-------
- Single source of truth for the environment variables read by the package:
  completion settings (with legacy aliases) and provider credentials.
- Helpers never raise on unknown names or unset variables; callers decide how
  to fall back.

Design Notes
------------
- Alias tuples list the canonical name first to establish precedence.
- No external dependencies.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Completion setting -> ordered env var names (canonical first, then legacy)
SETTINGS_ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "min_stream_interval_ms": ("CHATWIRE_MIN_STREAM_INTERVAL_MS", "TELEGRAM_MIN_STREAM_INTERVAL"),
    "request_timeout_ms": ("CHATWIRE_REQUEST_TIMEOUT_MS", "CHAT_COMPLETE_API_TIMEOUT"),
    "http_timeout_seconds": ("CHATWIRE_HTTP_TIMEOUT_SECONDS",),
}

CONFIG_FILE_ENV = "CHATWIRE_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

# Provider endpoint field -> env var suffix, e.g. OPENAI_BASE_URL
PROVIDER_ENV_FIELDS: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_setting_env_candidates(setting: str) -> Iterable[str]:
    """Yield env var names for a completion setting in priority order."""
    yield from SETTINGS_ENV_ALIASES.get(setting, ())


def resolve_setting_env(setting: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(raw_value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    for name in get_setting_env_candidates(setting):
        raw = os.environ.get(name)
        if raw is not None and raw.strip():
            return raw, name
    return None, None


def settings_env_fingerprint() -> str:
    """Concatenate every settings-related env value (cache invalidation key)."""
    names = [CONFIG_FILE_ENV]
    for aliases in SETTINGS_ENV_ALIASES.values():
        names.extend(aliases)
    return "/".join(os.getenv(n, "") for n in names)


def provider_env_overrides(provider: str) -> Dict[str, str]:
    """Collect ``<PROVIDER>_<FIELD>`` env values for a provider."""
    out: Dict[str, str] = {}
    prefix = (provider or "").upper()
    for field, suffix in PROVIDER_ENV_FIELDS.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


__all__ = [
    "SETTINGS_ENV_ALIASES",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
    "PROVIDER_ENV_FIELDS",
    "is_placeholder",
    "get_setting_env_candidates",
    "resolve_setting_env",
    "settings_env_fingerprint",
    "provider_env_overrides",
]
