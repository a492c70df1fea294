#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/live/scroll.py
"""Proportional scroll synchronization between the editor and the preview.

Positions are exchanged as fractions of the scrollable extent, so the two
panes stay aligned even though their content heights differ. Applying a
scroll to one pane makes that pane report a scroll event of its own; a
one-shot guard swallows that echo so the panes do not chase each other.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ExtentProvider = Callable[[], float]
ScrollApplier = Callable[[float], None]
DeferFunction = Callable[[Callable[[], None]], None]


def _clamp_fraction(fraction: float) -> float:
    if fraction is None or math.isnan(fraction):
        return 0.0
    return min(max(fraction, 0.0), 1.0)


def _usable_extent(extent: float) -> bool:
    return extent is not None and not math.isnan(extent) and not math.isinf(extent) and extent > 0


def map_scroll_offset(fraction: float, extent: float) -> float:
    """Convert a scroll fraction to an offset within ``extent``.

    Parameters
    ----------
    fraction : float
        Scroll position as a fraction; clamped to [0, 1], NaN counts as 0
    extent : float
        Scrollable extent of the target pane (content height minus viewport)

    Returns
    -------
    float
        ``fraction * extent``, or 0 when the extent is zero, negative or not finite

    Examples
    --------
        >>> map_scroll_offset(0.5, 1000.0)
        500.0
        >>> map_scroll_offset(0.5, 0.0)
        0.0

    """
    if not _usable_extent(extent):
        return 0.0
    return _clamp_fraction(fraction) * extent


def scroll_fraction(offset: float, extent: float) -> float:
    """Convert a scroll offset to a fraction of ``extent``.

    Returns 0 when the extent is zero, negative or not finite. The result is
    clamped to [0, 1].
    """
    if not _usable_extent(extent) or offset is None or math.isnan(offset):
        return 0.0
    return _clamp_fraction(offset / extent)


class ScrollSynchronizer:
    """Mirror scroll positions between a source pane and a rendered pane.

    Parameters
    ----------
    apply_to_target : callable
        Scrolls the rendered pane to an absolute offset
    target_extent : callable
        Returns the rendered pane's current scrollable extent
    apply_to_source : callable, optional
        Scrolls the source pane to an absolute offset; without it only the
        source-to-target direction is synchronized
    source_extent : callable, optional
        Returns the source pane's current scrollable extent
    defer : callable, optional
        Host hook that runs a callback after the current UI event has been
        processed. The echo guard is released through it. Without it the guard
        is released as soon as the scroll has been applied, which only
        suppresses echoes delivered synchronously.
    enabled : bool, default True
        Initial state; mirrors the ``sync_scroll`` session setting

    Examples
    --------
        >>> sync = ScrollSynchronizer(apply_to_target=print, target_extent=lambda: 0.0)
        >>> sync.on_source_scroll(0.5)
        0.0
        0.0

    """

    def __init__(
        self,
        apply_to_target: ScrollApplier,
        target_extent: ExtentProvider,
        apply_to_source: Optional[ScrollApplier] = None,
        source_extent: Optional[ExtentProvider] = None,
        defer: Optional[DeferFunction] = None,
        enabled: bool = True,
    ) -> None:
        """Initialize the synchronizer with the host's pane callbacks."""
        self._apply_to_target = apply_to_target
        self._target_extent = target_extent
        self._apply_to_source = apply_to_source
        self._source_extent = source_extent
        self._defer = defer
        self.enabled = enabled
        self._guard = False

    @property
    def guard_held(self) -> bool:
        """Return True while a programmatic scroll echo is being suppressed."""
        return self._guard

    def on_source_scroll(self, fraction: float) -> Optional[float]:
        """Handle a scroll of the source pane.

        Parameters
        ----------
        fraction : float
            New source position as a fraction of its extent

        Returns
        -------
        float or None
            Offset applied to the rendered pane, or None when synchronization
            is disabled or the event is an echo

        """
        if not self.enabled:
            return None
        if self._guard:
            logger.debug("Ignoring source scroll echo")
            return None

        offset = map_scroll_offset(fraction, self._target_extent())
        self._apply_guarded(self._apply_to_target, offset)
        return offset

    def on_target_scroll(self, offset: float) -> Optional[float]:
        """Handle a scroll of the rendered pane.

        Parameters
        ----------
        offset : float
            New rendered pane offset

        Returns
        -------
        float or None
            Offset applied to the source pane, or None when synchronization is
            disabled, no source callbacks were given, or the event is an echo

        """
        if not self.enabled or self._apply_to_source is None or self._source_extent is None:
            return None
        if self._guard:
            logger.debug("Ignoring target scroll echo")
            return None

        fraction = scroll_fraction(offset, self._target_extent())
        source_offset = map_scroll_offset(fraction, self._source_extent())
        self._apply_guarded(self._apply_to_source, source_offset)
        return source_offset

    def _apply_guarded(self, apply: ScrollApplier, offset: float) -> None:
        self._guard = True
        try:
            apply(offset)
        finally:
            if self._defer is not None:
                self._defer(self._release_guard)
            else:
                self._release_guard()

    def _release_guard(self) -> None:
        self._guard = False


__all__ = [
    "ScrollSynchronizer",
    "map_scroll_offset",
    "scroll_fraction",
]
