"""Tests for CancelScope."""

import pytest

from src.ai.errors import CancellationError
from src.ai.scope import DEFAULT_REASON, CancelScope


def test_fresh_scope_is_not_cancelled():
    scope = CancelScope()
    assert not scope.cancelled
    assert scope.reason is None
    scope.raise_if_cancelled()


def test_cancel_default_reason():
    scope = CancelScope()
    scope.cancel()
    assert scope.cancelled
    with pytest.raises(CancellationError, match=DEFAULT_REASON):
        scope.raise_if_cancelled()


def test_first_reason_wins():
    scope = CancelScope()
    scope.cancel("write failed")
    scope.cancel("something else")
    assert scope.reason == "write failed"
