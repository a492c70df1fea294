#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/tasks.py
"""Task-list checkbox toggling on markdown source text.

Clicking a checkbox in the preview never edits the visual tree. Instead the
source text is rewritten and the normal render loop picks the change up.

The rewrite is deliberately simple: it replaces the *first* ``[ ]`` (when
ticking) or ``[x]``/``[X]`` (when unticking) in the whole text. The clicked
checkbox's ``occurrence_index`` is carried along for diagnostics but does not
select the match, so with several boxes in the same state the first one in the
document flips, whichever was clicked.

Examples
--------
    >>> toggle("- [ ] task one\\n- [x] task two", 0, checked=False)
    '- [x] task one\\n- [x] task two'

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from mdpreview.exceptions import ValidationError
from mdpreview.visual.nodes import InteractiveCheckbox

logger = logging.getLogger(__name__)

_UNCHECKED_PATTERN = re.compile(r"\[ \]")
_CHECKED_PATTERN = re.compile(r"\[x\]", re.IGNORECASE)
_ANY_MARKER_PATTERN = re.compile(r"\[([ xX])\]")


@dataclass(frozen=True)
class TaskMarkerPosition:
    """Location of a checkbox marker in source text.

    Parameters
    ----------
    start : int
        Offset of the opening bracket
    end : int
        Offset after the closing bracket
    checked : bool
        Whether the marker is ``[x]``/``[X]``

    """

    start: int
    end: int
    checked: bool


def toggle(source_text: str, occurrence_index: int, checked: bool) -> str:
    """Flip the first checkbox marker of the given state.

    Parameters
    ----------
    source_text : str
        Current markdown source
    occurrence_index : int
        Ordinal of the clicked checkbox among checkboxes of the same state at
        render time. Validated and logged only.
    checked : bool
        State of the clicked checkbox before the click. ``False`` replaces the
        first ``[ ]`` with ``[x]``; ``True`` replaces the first ``[x]`` (either
        case) with ``[ ]``.

    Returns
    -------
    str
        Source with exactly one marker flipped, or the input unchanged when no
        marker of that state exists.

    Raises
    ------
    ValidationError
        If ``occurrence_index`` is negative.

    """
    if occurrence_index < 0:
        raise ValidationError(
            f"occurrence_index must be non-negative, got {occurrence_index}",
            parameter_name="occurrence_index",
            parameter_value=occurrence_index,
        )

    pattern = _CHECKED_PATTERN if checked else _UNCHECKED_PATTERN
    replacement = "[ ]" if checked else "[x]"

    match = pattern.search(source_text)
    if match is None:
        logger.debug(f"No {'checked' if checked else 'unchecked'} task marker found, text unchanged")
        return source_text

    logger.debug(
        f"Toggling {'checked' if checked else 'unchecked'} task marker at offset {match.start()} "
        f"(clicked occurrence {occurrence_index})"
    )
    return source_text[: match.start()] + replacement + source_text[match.end() :]


def toggle_checkbox(source_text: str, checkbox: InteractiveCheckbox) -> str:
    """Toggle the marker for a clicked preview checkbox.

    Parameters
    ----------
    source_text : str
        Current markdown source
    checkbox : InteractiveCheckbox
        The checkbox that was clicked

    Returns
    -------
    str
        Updated source text

    """
    return toggle(source_text, checkbox.occurrence_index, checkbox.checked)


def find_task_markers(source_text: str) -> list[TaskMarkerPosition]:
    """List every ``[ ]``, ``[x]`` and ``[X]`` marker in the text, in order."""
    return [
        TaskMarkerPosition(start=m.start(), end=m.end(), checked=m.group(1) != " ")
        for m in _ANY_MARKER_PATTERN.finditer(source_text)
    ]


__all__ = [
    "TaskMarkerPosition",
    "find_task_markers",
    "toggle",
    "toggle_checkbox",
]
