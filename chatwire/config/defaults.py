"""chatwire.config.defaults
========================

Central place for small, stable default values used across the chatwire
package. These defaults can be overridden via environment variables or an
external configuration file, but provide sensible fallbacks for local
development and tests.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Completion behaviour ----
# Minimum milliseconds between two partial-result flushes; 0 disables.
DEFAULT_MIN_STREAM_INTERVAL_MS = 0.0
# End-to-end timeout of the HTTP exchange in milliseconds; 0 disables.
DEFAULT_REQUEST_TIMEOUT_MS = 0.0
# Per-phase httpx client timeout (connect/read/write/pool) in seconds.
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0

# Path appended to a provider base URL.
CHAT_COMPLETIONS_PATH = "/chat/completions"


# ---- OpenAI-compatible endpoints ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

XAI_DEFAULT_MODEL = "grok-4"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"

OLLAMA_DEFAULT_MODEL = "gpt-oss:20b"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434/v1"


__all__ = [
    "DEFAULT_MIN_STREAM_INTERVAL_MS",
    "DEFAULT_REQUEST_TIMEOUT_MS",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "CHAT_COMPLETIONS_PATH",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "XAI_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_BASE_URL",
]
