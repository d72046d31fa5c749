"""Configuration layering tests: defaults, config file, env aliases, overrides."""

from __future__ import annotations

import json

import pytest

from chatwire.config import (
    CompletionSettings,
    PROVIDER_DEFAULTS,
    get_provider_config,
    get_settings,
    reset_settings_cache,
)


def test_defaults():
    settings = get_settings()
    assert settings == CompletionSettings()  # nosec B101
    assert settings.min_stream_interval_ms == 0 and settings.request_timeout_ms == 0  # nosec B101


def test_canonical_env_wins_over_legacy_alias(monkeypatch):
    monkeypatch.setenv("TELEGRAM_MIN_STREAM_INTERVAL", "250")
    assert get_settings().min_stream_interval_ms == 250  # nosec B101
    monkeypatch.setenv("CHATWIRE_MIN_STREAM_INTERVAL_MS", "400")
    assert get_settings().min_stream_interval_ms == 400  # nosec B101


def test_legacy_timeout_alias(monkeypatch):
    monkeypatch.setenv("CHAT_COMPLETE_API_TIMEOUT", "15000")
    assert get_settings().request_timeout_ms == 15000  # nosec B101


def test_unparseable_env_value_keeps_default(monkeypatch):
    monkeypatch.setenv("CHATWIRE_REQUEST_TIMEOUT_MS", "soon")
    assert get_settings().request_timeout_ms == 0  # nosec B101


def test_yaml_file_then_env_then_overrides(monkeypatch, tmp_path):
    cfg = tmp_path / "chatwire.yaml"
    cfg.write_text(
        "completion:\n  min_stream_interval_ms: 500\n  request_timeout_ms: 1000\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CHATWIRE_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("CHATWIRE_REQUEST_TIMEOUT_MS", "2000")
    settings = get_settings(http_timeout_seconds=5, min_stream_interval_ms=None)
    assert settings.min_stream_interval_ms == 500  # nosec B101
    assert settings.request_timeout_ms == 2000  # nosec B101
    assert settings.http_timeout_seconds == 5  # nosec B101


def test_overrides_are_not_cached():
    assert get_settings(request_timeout_ms=10).request_timeout_ms == 10  # nosec B101
    assert get_settings().request_timeout_ms == 0  # nosec B101


def test_json_config_for_provider(monkeypatch, tmp_path):
    cfg = tmp_path / "chatwire.json"
    cfg.write_text(json.dumps({"openrouter": {"model": "vendor/model-x"}}), encoding="utf-8")
    monkeypatch.setenv("CHATWIRE_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("OPENROUTER_MODEL", raising=False)
    monkeypatch.delenv("OPENROUTER_BASE_URL", raising=False)
    reset_settings_cache()
    provider = get_provider_config("OpenRouter")
    assert provider["model"] == "vendor/model-x"  # nosec B101
    assert provider["base_url"] == PROVIDER_DEFAULTS["openrouter"]["base_url"]  # nosec B101


def test_provider_env_and_overrides(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")
    monkeypatch.setenv("DEEPSEEK_MODEL", "deepseek-reasoner")
    cfg = get_provider_config("deepseek", {"model": "pinned", "base_url": None})
    assert cfg["api_key"] == "sk-env" and cfg["model"] == "pinned"  # nosec B101
    assert cfg["base_url"] == PROVIDER_DEFAULTS["deepseek"]["base_url"]  # nosec B101


def test_dotenv_fills_missing_and_placeholder_values(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "# local secrets\nXAI_API_KEY='sk-from-file'\nXAI_MODEL=grok-from-file\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("XAI_API_KEY", "changeme")
    monkeypatch.setenv("XAI_MODEL", "grok-explicit")
    reset_settings_cache()
    cfg = get_provider_config("xai")
    assert cfg["api_key"] == "sk-from-file"  # nosec B101
    assert cfg["model"] == "grok-explicit"  # nosec B101


@pytest.mark.parametrize("provider", ["", "unknown-vendor"])
def test_unknown_provider_has_no_defaults(provider):
    assert "base_url" not in get_provider_config(provider)  # nosec B101
