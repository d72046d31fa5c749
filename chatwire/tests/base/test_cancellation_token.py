"""CancellationToken behaviour: reasons, callbacks and cascading."""

from __future__ import annotations

import pytest

from chatwire.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_reason_and_raises():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("stop")
    assert token.cancelled and token.reason == "stop"  # nosec B101
    with pytest.raises(CancelledError, match="stop"):
        token.raise_if_cancelled()


def test_callbacks_run_once_in_order():
    token = CancellationToken()
    calls = []
    token.add_callback(lambda: calls.append("a"))
    token.add_callback(lambda: calls.append("b"))
    token.cancel()
    token.cancel()
    assert calls == ["a", "b"]  # nosec B101


def test_callback_added_after_cancel_runs_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    token.add_callback(lambda: calls.append(1))
    assert calls == [1]  # nosec B101


def test_removed_callback_does_not_run():
    token = CancellationToken()
    calls = []

    def hook():
        calls.append(1)

    token.add_callback(hook)
    token.remove_callback(hook)
    token.remove_callback(hook)
    token.cancel()
    assert calls == []  # nosec B101


def test_failing_callback_does_not_block_others():
    token = CancellationToken()
    calls = []

    def broken():
        raise ValueError("hook failed")

    token.add_callback(broken)
    token.add_callback(lambda: calls.append("ok"))
    token.cancel()
    assert calls == ["ok"]  # nosec B101


def test_parent_cancellation_cascades_to_children():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("shutdown")
    assert child.cancelled and child.reason == "shutdown"  # nosec B101
    late = parent.child()
    assert late.cancelled  # nosec B101


def test_cancelled_error_is_not_asyncio_cancellation():
    import asyncio

    assert not issubclass(CancelledError, asyncio.CancelledError)  # nosec B101
    assert issubclass(CancelledError, RuntimeError)  # nosec B101
