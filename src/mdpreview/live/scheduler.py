#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/live/scheduler.py
"""Debounced render scheduling for the live preview.

Every edit restarts a quiescence window. When the window elapses the scheduler
reads the *current* text, skips the render when it is identical to the last
one that succeeded, and otherwise runs the render function with a fresh
cancellation token, either inline or on an executor.

State machine::

    IDLE ──notify──▶ PENDING ──deadline──▶ RENDERING ──done──▶ IDLE
                        ▲                     │
                        │                 notify (token cancelled)
                        │                     ▼
                        └──────done─── RENDERING_SUPERSEDED

Time is read from an injectable ``clock`` so hosts and tests can drive the
scheduler with ``poll()`` instead of real timers. A ``timer_factory`` with the
``threading.Timer`` signature makes it self-driving.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from mdpreview.constants import DEFAULT_DEBOUNCE_MS, MAX_DEBOUNCE_MS, MIN_DEBOUNCE_MS
from mdpreview.exceptions import RenderCancelledError, ValidationError
from mdpreview.live.cancellation import CancellationToken

logger = logging.getLogger(__name__)

TextProvider = Callable[[], str]
RenderFunction = Callable[[str, CancellationToken], Any]
PublishFunction = Callable[[Any, str], None]


class Timer(Protocol):
    """One-shot timer as created by a ``timer_factory``."""

    def start(self) -> None:
        """Start the countdown."""
        ...

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet."""
        ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


class SchedulerState(str, Enum):
    """Render scheduler state."""

    IDLE = "idle"
    PENDING = "pending"
    RENDERING = "rendering"
    RENDERING_SUPERSEDED = "rendering_superseded"


class RenderScheduler:
    """Coalesce text changes into at most one render per quiescence window.

    Parameters
    ----------
    text_provider : callable
        Returns the current source text; read when a render fires, never
        when the change is notified
    render : callable
        ``render(text, token)`` builds and returns the visual tree. It should
        observe ``token`` and raise ``RenderCancelledError`` when cancelled.
    publish : callable
        ``publish(result, text)`` receives each render that is still current
        when it completes. Called without the scheduler lock held, so it may
        notify new text from any thread; publishes never overlap.
    debounce_ms : int, default 300
        Quiescence window in milliseconds (10 to 2000)
    clock : callable, default time.monotonic
        Returns the current time in seconds
    timer_factory : callable, optional
        ``timer_factory(seconds, callback)`` returning an unstarted one-shot
        timer (``threading.Timer`` fits). Without one the host calls ``poll()``.
    executor : concurrent.futures.Executor, optional
        Runs renders off the calling thread when given

    Examples
    --------
    Driving the scheduler manually with a fake clock:

        >>> now = [0.0]
        >>> text = ["# Hello"]
        >>> scheduler = RenderScheduler(lambda: text[0], render, publish, clock=lambda: now[0])
        >>> scheduler.notify_text_changed()
        >>> now[0] = 0.5
        >>> scheduler.poll()
        True

    """

    def __init__(
        self,
        text_provider: TextProvider,
        render: RenderFunction,
        publish: PublishFunction,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Optional[TimerFactory] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """Initialize the scheduler in the IDLE state."""
        if not MIN_DEBOUNCE_MS <= debounce_ms <= MAX_DEBOUNCE_MS:
            raise ValidationError(
                f"debounce_ms must be between {MIN_DEBOUNCE_MS} and {MAX_DEBOUNCE_MS}, got {debounce_ms}",
                parameter_name="debounce_ms",
                parameter_value=debounce_ms,
            )

        self._text_provider = text_provider
        self._render = render
        self._publish = publish
        self._debounce_seconds = debounce_ms / 1000.0
        self._clock = clock
        self._timer_factory = timer_factory
        self._executor = executor

        # Reentrant: publish callbacks may notify new text on the same thread
        self._lock = threading.RLock()
        # Serializes publishes so an older result never lands after a newer one
        self._publish_lock = threading.Lock()
        self._state = SchedulerState.IDLE
        self._deadline: Optional[float] = None
        self._timer: Optional[Timer] = None
        self._token: Optional[CancellationToken] = None
        self._future: Optional[Future] = None
        self._generation = 0
        self._last_rendered_text: Optional[str] = None
        self._closed = False

        self._render_count = 0
        self._skipped_count = 0
        self._cancelled_count = 0
        self._failed_count = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        """Return the current state."""
        return self._state

    @property
    def deadline(self) -> Optional[float]:
        """Return the clock time at which a pending render fires, if any."""
        return self._deadline

    @property
    def generation(self) -> int:
        """Return the number of changes notified so far."""
        return self._generation

    @property
    def render_count(self) -> int:
        """Return the number of renders that were published."""
        return self._render_count

    @property
    def skipped_count(self) -> int:
        """Return the number of renders skipped because the text was unchanged."""
        return self._skipped_count

    @property
    def cancelled_count(self) -> int:
        """Return the number of renders cancelled or superseded before publishing."""
        return self._cancelled_count

    @property
    def failed_count(self) -> int:
        """Return the number of renders that raised an error."""
        return self._failed_count

    @property
    def closed(self) -> bool:
        """Return True once ``close()`` has been called."""
        return self._closed

    @property
    def last_rendered_text(self) -> Optional[str]:
        """Return the text of the last published render."""
        return self._last_rendered_text

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def notify_text_changed(self) -> None:
        """Restart the quiescence window after an edit.

        Any render in flight is cancelled; its result will not be published.
        """
        with self._lock:
            if self._closed:
                return

            self._generation += 1
            if self._token is not None:
                self._token.cancel("text changed")

            self._deadline = self._clock() + self._debounce_seconds
            if self._state in (SchedulerState.RENDERING, SchedulerState.RENDERING_SUPERSEDED):
                self._state = SchedulerState.RENDERING_SUPERSEDED
            else:
                self._state = SchedulerState.PENDING
                self._arm_timer()

    def invalidate(self) -> None:
        """Forget the last rendered text so the next render always runs.

        Used when something other than the text changed (theme, render mode).
        An in-flight render is cancelled.
        """
        with self._lock:
            self._last_rendered_text = None
            self._generation += 1
            if self._token is not None:
                self._token.cancel("render inputs changed")
            if self._state == SchedulerState.RENDERING:
                self._state = SchedulerState.RENDERING_SUPERSEDED
                if self._deadline is None:
                    self._deadline = self._clock()

    def poll(self) -> bool:
        """Render if a pending deadline has passed.

        Returns
        -------
        bool
            True if a render was started

        """
        with self._lock:
            if self._state != SchedulerState.PENDING or self._deadline is None:
                return False
            if self._clock() < self._deadline:
                return False
        return self._start_render()

    def flush(self) -> bool:
        """Render now, ignoring the quiescence window.

        Returns
        -------
        bool
            True if a render was started

        """
        return self._start_render()

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until an offloaded render in flight has finished.

        Parameters
        ----------
        timeout : float, optional
            Maximum seconds to wait

        """
        with self._lock:
            future = self._future
        if future is not None:
            # Render errors are handled inside the worker
            future.result(timeout=timeout)

    def close(self) -> None:
        """Cancel any pending or running render and drop the timer."""
        with self._lock:
            self._closed = True
            self._cancel_timer()
            if self._token is not None:
                self._token.cancel("scheduler closed")
            self._deadline = None
            self._state = SchedulerState.IDLE
        logger.debug("Render scheduler closed")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _arm_timer(self) -> None:
        """(Re)start the one-shot timer for the current deadline. Lock held."""
        if self._timer_factory is None or self._deadline is None:
            return
        self._cancel_timer()
        delay = max(0.0, self._deadline - self._clock())
        timer = self._timer_factory(delay, self._on_timer)
        if hasattr(timer, "daemon"):
            timer.daemon = True  # type: ignore[attr-defined]
        self._timer = timer
        timer.start()

    def _cancel_timer(self) -> None:
        """Stop the pending timer, if any. Lock held."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        """Timer callback: render, or re-arm if the deadline moved."""
        if self.poll():
            return
        with self._lock:
            if not self._closed and self._state == SchedulerState.PENDING:
                self._arm_timer()

    def _start_render(self) -> bool:
        """Begin a render of the current text unless it is redundant."""
        with self._lock:
            if self._closed:
                return False
            if self._state in (SchedulerState.RENDERING, SchedulerState.RENDERING_SUPERSEDED):
                # One render at a time; the running one is re-queued when it finishes
                self._state = SchedulerState.RENDERING_SUPERSEDED
                if self._deadline is None:
                    self._deadline = self._clock()
                return False

            self._cancel_timer()
            self._deadline = None
            text = self._text_provider()

            if text == self._last_rendered_text:
                self._skipped_count += 1
                self._state = SchedulerState.IDLE
                logger.debug("Text unchanged since last render, skipping")
                return False

            token = CancellationToken()
            self._token = token
            generation = self._generation
            self._state = SchedulerState.RENDERING

            if self._executor is not None:
                self._future = self._executor.submit(self._run_render, text, token, generation)
                return True

        self._run_render(text, token, generation)
        return True

    def _run_render(self, text: str, token: CancellationToken, generation: int) -> None:
        """Run one render and publish it if it is still current."""
        try:
            try:
                result = self._render(text, token)
            except RenderCancelledError as e:
                with self._lock:
                    self._cancelled_count += 1
                logger.debug(f"Render discarded: {e}")
                return
            except Exception as e:
                with self._lock:
                    self._failed_count += 1
                logger.warning(f"Render failed, keeping previous preview: {e}")
                return

            with self._publish_lock:
                with self._lock:
                    if token.cancelled or generation != self._generation or self._closed:
                        self._cancelled_count += 1
                        logger.debug("Render superseded before publishing, discarded")
                        return
                    self._last_rendered_text = text
                    self._render_count += 1
                self._publish(result, text)
        finally:
            self._finish(token)

    def _finish(self, token: CancellationToken) -> None:
        """Leave the rendering state, re-queueing if the render was superseded."""
        with self._lock:
            if self._token is token:
                self._token = None
            self._future = None

            if self._closed:
                self._state = SchedulerState.IDLE
                return

            if self._state == SchedulerState.RENDERING_SUPERSEDED:
                self._state = SchedulerState.PENDING
                if self._deadline is None:
                    self._deadline = self._clock()
                self._arm_timer()
            elif self._state == SchedulerState.RENDERING:
                self._state = SchedulerState.IDLE


__all__ = [
    "RenderScheduler",
    "SchedulerState",
]
