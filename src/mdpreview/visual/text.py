#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/visual/text.py
"""Plain text extraction from visual trees.

Used for "copy all" from the rendered view: every text-bearing block becomes
one line of output, containers are walked recursively and blank lines are
dropped.
"""

from __future__ import annotations

from typing import Iterable

from mdpreview.visual.nodes import (
    Image,
    InteractiveCheckbox,
    StyledContainer,
    TableGrid,
    TextRun,
    VisualNode,
)


def _inline_text(children: Iterable[VisualNode]) -> str:
    parts = []
    for child in children:
        if isinstance(child, TextRun):
            parts.append(child.text)
        elif isinstance(child, InteractiveCheckbox):
            parts.append(f"{child.glyph} ")
        elif isinstance(child, StyledContainer):
            parts.append(_inline_text(child.children))
    return "".join(parts)


def _collect_lines(nodes: Iterable[VisualNode], lines: list[str]) -> None:
    for node in nodes:
        if isinstance(node, TextRun):
            if node.text.strip():
                lines.append(node.text)
        elif isinstance(node, InteractiveCheckbox):
            lines.append(node.glyph)
        elif isinstance(node, Image):
            lines.append(node.alt or node.url)
        elif isinstance(node, TableGrid):
            for row in node.rows:
                cells = []
                for cell in row.cells:
                    cell_lines: list[str] = []
                    _collect_lines(cell.children, cell_lines)
                    cells.append(" ".join(cell_lines))
                lines.append("\t".join(cells))
        elif isinstance(node, StyledContainer):
            if node.orientation == "inline":
                text = _inline_text(node.children)
                if text.strip():
                    lines.append(text)
            elif node.orientation == "horizontal":
                # Markers (bullets, numbers, checkboxes) prefix the first line of the content
                prefix = ""
                content_lines: list[str] = []
                for child in node.children:
                    if isinstance(child, (TextRun, InteractiveCheckbox)) and not content_lines:
                        prefix += _inline_text([child])
                    else:
                        _collect_lines([child], content_lines)
                if content_lines:
                    content_lines[0] = prefix + content_lines[0]
                    lines.extend(content_lines)
                elif prefix.strip():
                    lines.append(prefix)
            else:
                _collect_lines(node.children, lines)


def extract_rendered_text(nodes: Iterable[VisualNode]) -> str:
    """Return the rendered text of a visual tree, one block per line.

    Parameters
    ----------
    nodes : iterable of VisualNode
        Top-level nodes of a published visual tree

    Returns
    -------
    str
        Newline-separated block texts, with a trailing newline when non-empty.
        Table rows are rendered with tab-separated cells.

    """
    lines: list[str] = []
    _collect_lines(nodes, lines)
    return "".join(f"{line}\n" for line in lines)


__all__ = ["extract_rendered_text"]
