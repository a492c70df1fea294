#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/live/cancellation.py
"""Cooperative cancellation for render passes.

A token is created per render attempt. The scheduler cancels it when the
text changes again; the preview renderer polls it between blocks and aborts
with ``RenderCancelledError``.
"""

from __future__ import annotations

import threading

from mdpreview.exceptions import RenderCancelledError


class CancellationToken:
    """Thread-safe one-way cancellation flag.

    Examples
    --------
        >>> token = CancellationToken()
        >>> token.cancel("text changed")
        >>> token.cancelled
        True
        >>> token.raise_if_cancelled()
        Traceback (most recent call last):
        ...
        mdpreview.exceptions.RenderCancelledError: Render pass was cancelled: text changed

    """

    def __init__(self) -> None:
        """Create an uncancelled token."""
        self._event = threading.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        """Return True once ``cancel()`` has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Return the reason passed to the first ``cancel()`` call."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Cancel the token; later calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``RenderCancelledError`` if the token was cancelled.

        Raises
        ------
        RenderCancelledError
            If ``cancel()`` has been called

        """
        if self._event.is_set():
            raise RenderCancelledError(self._reason)

    def __repr__(self) -> str:
        """Return a debug representation."""
        state = "cancelled" if self.cancelled else "active"
        return f"<CancellationToken {state}>"
