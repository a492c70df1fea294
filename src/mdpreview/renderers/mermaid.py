#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/renderers/mermaid.py
"""Placeholder rendering for mermaid diagrams.

Mermaid is not rendered natively. Instead the preview shows a titled card
with a rough summary recovered from keywords (sequence diagram participants
or flowchart node labels), the diagram source in monospace, and a hint to
export to HTML for the real diagram.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from mdpreview.constants import (
    DEFAULT_CODE_FONT_SIZE,
    MERMAID_BOX_TEXT_COLOR,
    MERMAID_HINT,
    MERMAID_TITLE,
)
from mdpreview.options.preview import PreviewOptions
from mdpreview.theme import Palette
from mdpreview.visual.nodes import StyledContainer, TextRun, VisualNode

logger = logging.getLogger(__name__)

# Flowchart node with a bracketed label, e.g. ``A[Start]``
_FLOW_NODE_PATTERN = re.compile(r"([A-Z][a-zA-Z0-9]*)\[([^\]]+)\]")

DiagramKind = Literal["sequence", "flowchart", "unknown"]


@dataclass(frozen=True)
class MermaidSummary:
    """Keyword-derived summary of a mermaid diagram.

    Parameters
    ----------
    kind : {"sequence", "flowchart", "unknown"}
        Diagram type detected from the first line
    labels : list of str
        Participant names (sequence) or node labels (flowchart)

    """

    kind: DiagramKind
    labels: list[str] = field(default_factory=list)

    @property
    def caption(self) -> str:
        """Return the caption shown above the summary boxes."""
        if self.kind == "sequence":
            return "Sequence Diagram Preview"
        if self.kind == "flowchart":
            return "Flow Diagram Preview"
        return ""


def summarize_mermaid(source: str, max_nodes: int = 6) -> MermaidSummary:
    """Derive a crude summary from mermaid source.

    Parameters
    ----------
    source : str
        Diagram source
    max_nodes : int, default 6
        Maximum number of flowchart labels to keep

    Returns
    -------
    MermaidSummary
        ``kind="unknown"`` with no labels when nothing could be recognized

    Examples
    --------
        >>> summarize_mermaid("graph TD\\n  A[Start] --> B[End]").labels
        ['Start', 'End']

    """
    lines = [line.strip() for line in source.split("\n") if line.strip()]
    if not lines:
        return MermaidSummary(kind="unknown")

    diagram_type = lines[0].lower()

    if "sequencediagram" in diagram_type:
        participants = []
        for line in lines[1:]:
            if "participant" in line.lower():
                parts = line.split()
                if len(parts) > 1:
                    participants.append(parts[1])
        return MermaidSummary(kind="sequence", labels=participants)

    if "graph" in diagram_type or "flowchart" in diagram_type:
        labels = []
        for line in lines[1:]:
            labels.extend(match.group(2) for match in _FLOW_NODE_PATTERN.finditer(line))
        return MermaidSummary(kind="flowchart", labels=labels[:max_nodes])

    return MermaidSummary(kind="unknown")


def render_mermaid_placeholder(source: str, palette: Palette, options: PreviewOptions) -> StyledContainer:
    """Build the placeholder card for a mermaid code block.

    Parameters
    ----------
    source : str
        Diagram source
    palette : Palette
        Resolved theme colors
    options : PreviewOptions
        Renderer options (``mermaid_max_nodes``, ``show_mermaid_hint``)

    Returns
    -------
    StyledContainer
        Container with role ``"mermaid"``

    """
    children: list[VisualNode] = [
        StyledContainer(
            role="mermaid_header",
            orientation="inline",
            children=(TextRun(text=MERMAID_TITLE, color=palette.link, font_size=16.0, bold=True),),
            margin=(0, 0, 0, 8),
        )
    ]

    summary = summarize_mermaid(source, options.mermaid_max_nodes)
    logger.debug(f"Mermaid summary: kind={summary.kind}, {len(summary.labels)} label(s)")
    if summary.labels:
        boxes = tuple(
            StyledContainer(
                role="mermaid_box",
                orientation="inline",
                children=(TextRun(text=label, color=MERMAID_BOX_TEXT_COLOR, font_size=13.0, bold=True),),
                background=palette.mermaid_box,
                padding=(12, 6, 12, 6),
                margin=(0, 0, 8, 0),
                corner_radius=8 if summary.kind == "flowchart" else 4,
            )
            for label in summary.labels
        )
        children.append(
            StyledContainer(
                role="mermaid_summary",
                children=(
                    StyledContainer(
                        role="caption",
                        orientation="inline",
                        children=(TextRun(text=summary.caption, color=palette.muted, font_size=13.0),),
                    ),
                    StyledContainer(role="mermaid_boxes", orientation="horizontal", children=boxes),
                ),
                margin=(0, 0, 0, 8),
            )
        )

    children.append(
        StyledContainer(
            role="code_block",
            orientation="inline",
            children=(
                TextRun(
                    text=source.rstrip(),
                    color=palette.syntax_default,
                    font_size=DEFAULT_CODE_FONT_SIZE - 1,
                    monospace=True,
                ),
            ),
            background=palette.code_background,
            border_color=palette.code_border,
            border=1,
            padding=12,
            corner_radius=4,
        )
    )

    if options.show_mermaid_hint:
        children.append(
            StyledContainer(
                role="mermaid_hint",
                orientation="inline",
                children=(TextRun(text=MERMAID_HINT, color=palette.muted, font_size=12.0),),
                border_color=palette.mermaid_box,
                border=(0, 0, 0, 2),
                padding=(12, 8, 12, 8),
                margin=(0, 8, 0, 0),
                corner_radius=4,
            )
        )

    return StyledContainer(
        role="mermaid",
        children=tuple(children),
        background=palette.background,
        border_color=palette.border,
        border=2,
        padding=16,
        margin=(0, 0, 0, 16),
        corner_radius=6,
    )


__all__ = [
    "MermaidSummary",
    "render_mermaid_placeholder",
    "summarize_mermaid",
]
