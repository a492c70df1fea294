#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/options/session.py
"""Configuration options for live preview sessions."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpreview.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_OFFLOAD_RENDERING,
    DEFAULT_SYNC_SCROLL,
    MAX_DEBOUNCE_MS,
    MIN_DEBOUNCE_MS,
    READ_WIDTH_PRESETS,
    RenderModeType,
)
from mdpreview.exceptions import ValidationError
from mdpreview.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SessionOptions(CloneFrozenMixin):
    """Options controlling the live preview loop of a document session.

    Parameters
    ----------
    debounce_ms : int, default 300
        Quiescence window after the last edit before a render fires.
        Must be within 10..2000.
    sync_scroll : bool, default True
        Whether editor and preview scroll positions are kept in sync.
    offload_rendering : bool, default False
        Whether parse and build run on a worker thread instead of the
        caller's thread.
    render_mode : {"edit", "read"}, default "edit"
        Initial render mode of new sessions.
    read_width : {"fit", "50", "75", "100"}, default "fit"
        Content width preset used in read mode.

    """

    debounce_ms: int = field(
        default=DEFAULT_DEBOUNCE_MS,
        metadata={"help": "Quiescence window in milliseconds before a render fires", "type": int, "importance": "core"},
    )
    sync_scroll: bool = field(
        default=DEFAULT_SYNC_SCROLL,
        metadata={"help": "Keep editor and preview scroll positions in sync", "importance": "core"},
    )
    offload_rendering: bool = field(
        default=DEFAULT_OFFLOAD_RENDERING,
        metadata={"help": "Run parse and build on a worker thread", "importance": "advanced"},
    )
    render_mode: RenderModeType = field(
        default="edit",
        metadata={"help": "Initial render mode", "choices": ["edit", "read"], "importance": "core"},
    )
    read_width: str = field(
        default="fit",
        metadata={
            "help": "Content width preset in read mode",
            "choices": list(READ_WIDTH_PRESETS),
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate the debounce window and the enumerated fields.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if not MIN_DEBOUNCE_MS <= self.debounce_ms <= MAX_DEBOUNCE_MS:
            raise ValidationError(
                f"debounce_ms must be in range [{MIN_DEBOUNCE_MS}, {MAX_DEBOUNCE_MS}], got {self.debounce_ms}",
                parameter_name="debounce_ms",
                parameter_value=self.debounce_ms,
            )
        if self.render_mode not in ("edit", "read"):
            raise ValidationError(
                f"render_mode must be 'edit' or 'read', got {self.render_mode!r}",
                parameter_name="render_mode",
                parameter_value=self.render_mode,
            )
        if str(self.read_width) not in READ_WIDTH_PRESETS:
            raise ValidationError(
                f"read_width must be one of {sorted(READ_WIDTH_PRESETS)}, got {self.read_width!r}",
                parameter_name="read_width",
                parameter_value=self.read_width,
            )
        # Allow read_width = 75 in TOML without quoting
        object.__setattr__(self, "read_width", str(self.read_width))

    @property
    def debounce_seconds(self) -> float:
        """Return the quiescence window in seconds."""
        return self.debounce_ms / 1000.0

    @property
    def read_max_width(self) -> float:
        """Return the maximum content width for the configured read width preset."""
        return READ_WIDTH_PRESETS[self.read_width]
