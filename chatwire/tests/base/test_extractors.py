"""Extractor defaults and override resolution."""

from __future__ import annotations

import pytest

from chatwire.base.extractors import (
    DEFAULT_EXTRACTORS,
    ExtractorSet,
    default_extract_delta,
    default_extract_error,
    default_extract_full,
    resolve_extractors,
)


def test_none_resolves_to_defaults():
    resolved = resolve_extractors(None)
    assert resolved == DEFAULT_EXTRACTORS  # nosec B101
    assert resolved.is_resolved  # nosec B101


def test_partial_override_keeps_other_defaults():
    def full(body):
        return body["output"]["text"]

    resolved = resolve_extractors({"extract_full": full})
    assert resolved.extract_full is full  # nosec B101
    assert resolved.extract_delta is DEFAULT_EXTRACTORS.extract_delta  # nosec B101
    assert resolved.build_stream is DEFAULT_EXTRACTORS.build_stream  # nosec B101
    assert resolved.extract_error is DEFAULT_EXTRACTORS.extract_error  # nosec B101


def test_resolution_is_idempotent():
    once = resolve_extractors(ExtractorSet(extract_delta=lambda f: f.get("t")))
    assert resolve_extractors(once) == once  # nosec B101


def test_unknown_override_key_is_rejected():
    with pytest.raises(TypeError, match="extract_text"):
        resolve_extractors({"extract_text": lambda b: b})


def test_default_delta_is_lenient():
    assert default_extract_delta({"choices": [{"delta": {"content": "hi"}}]}) == "hi"  # nosec B101
    assert default_extract_delta({"choices": []}) is None  # nosec B101
    assert default_extract_delta({"choices": [{"delta": {}}]}) is None  # nosec B101
    assert default_extract_delta(None) is None  # nosec B101
    parts = [{"type": "text", "text": "x"}]
    assert default_extract_delta({"choices": [{"delta": {"content": parts}}]}) is None  # nosec B101


def test_default_full_is_strict():
    assert default_extract_full({"choices": [{"message": {"content": "x"}}]}) == "x"  # nosec B101
    with pytest.raises(IndexError):
        default_extract_full({"choices": []})
    with pytest.raises(KeyError):
        default_extract_full({"id": "cmpl-1"})


def test_default_error_message():
    assert default_extract_error({"error": {"message": "bad key"}}) == "bad key"  # nosec B101
    assert default_extract_error({"choices": []}) is None  # nosec B101
    assert default_extract_error(["not", "a", "mapping"]) is None  # nosec B101
