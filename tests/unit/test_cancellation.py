#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for render cancellation tokens."""

import threading

import pytest

from mdpreview.exceptions import RenderCancelledError, RenderingError
from mdpreview.live.cancellation import CancellationToken


@pytest.mark.unit
class TestCancellationToken:
    """Test the cooperative cancellation flag."""

    def test_initially_active(self) -> None:
        """Test a new token is not cancelled and does not raise."""
        token = CancellationToken()
        assert not token.cancelled
        assert token.reason is None
        token.raise_if_cancelled()

    def test_cancel_keeps_first_reason(self) -> None:
        """Test cancellation is one-way and keeps the first reason."""
        token = CancellationToken()
        token.cancel("text changed")
        token.cancel("closed")
        assert token.cancelled
        assert token.reason == "text changed"
        assert "cancelled" in repr(token)

    def test_raise_if_cancelled(self) -> None:
        """Test the raised error is a rendering error carrying the reason."""
        token = CancellationToken()
        token.cancel("text changed")
        with pytest.raises(RenderCancelledError, match="text changed") as exc_info:
            token.raise_if_cancelled()
        assert isinstance(exc_info.value, RenderingError)
        assert exc_info.value.rendering_stage == "cancelled"
        assert exc_info.value.reason == "text changed"

    def test_cancel_from_other_thread(self) -> None:
        """Test a cancel on another thread is visible here."""
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel, args=("edit",))
        worker.start()
        worker.join(timeout=5)
        assert token.cancelled
