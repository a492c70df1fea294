#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/visual/nodes.py
"""Visual node classes produced by the preview renderer.

A visual tree is what a host toolkit lays out and paints. It is made of
immutable, toolkit-independent records: styled text runs, styled containers,
images, table grids and interactive checkboxes. All colors are resolved
``#RRGGBB`` strings; no visual node keeps a reference into the document tree
it was built from, so a published tree stays valid after the document tree
is discarded.

Node Hierarchy
--------------
- TextRun: a span of uniformly styled text
- StyledContainer: a box with a role, layout orientation and decoration
- Image: a block image with a width cap
- TableGrid / GridRow / GridCell: uniform star-sized table layout
- InteractiveCheckbox: a clickable task-list checkbox

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from mdpreview.constants import BaselineType, OrientationType, TextAlignmentType

Edges = tuple[float, float, float, float]
"""Box edge widths as (left, top, right, bottom)."""

NO_EDGES: Edges = (0.0, 0.0, 0.0, 0.0)


def _edges(value: float | tuple[float, ...]) -> Edges:
    if isinstance(value, (int, float)):
        return (float(value),) * 4  # type: ignore[return-value]
    if len(value) == 2:
        horizontal, vertical = value
        return (float(horizontal), float(vertical), float(horizontal), float(vertical))
    if len(value) != 4:
        raise ValueError(f"Edges need 1, 2 or 4 values, got {value!r}")
    return tuple(float(v) for v in value)  # type: ignore[return-value]


@dataclass(frozen=True)
class TextRun:
    """A span of text with uniform styling.

    Parameters
    ----------
    text : str
        The run's text; ``"\\n"`` runs represent line breaks
    color : str
        Foreground color
    background : str or None, default None
        Highlight color behind the text
    font_size : float, default 14.0
        Font size in points
    bold, italic, underline, strikethrough : bool, default False
        Font decorations
    baseline : {"normal", "superscript", "subscript"}, default "normal"
        Vertical alignment of the run
    monospace : bool, default False
        Whether the run uses the monospace font family
    link : str or None, default None
        Target URL when the run is part of a hyperlink

    """

    text: str
    color: str
    background: Optional[str] = None
    font_size: float = 14.0
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    baseline: BaselineType = "normal"
    monospace: bool = False
    link: Optional[str] = None


@dataclass(frozen=True)
class StyledContainer:
    """A decorated box holding other visual nodes.

    ``orientation`` tells the host how to flow the children: ``"vertical"``
    stacks blocks, ``"horizontal"`` places blocks side by side and
    ``"inline"`` flows text runs as one wrapped paragraph.

    Parameters
    ----------
    role : str
        Semantic role (``"heading"``, ``"paragraph"``, ``"code_block"``,
        ``"quote"``, ``"rule"``, ...) for hosts that style by role
    children : tuple of VisualNode, default ()
        Child nodes
    orientation : {"vertical", "horizontal", "inline"}, default "vertical"
        Layout direction of the children
    background : str or None, default None
        Fill color
    border_color : str or None, default None
        Border color, used with ``border``
    border : tuple of float, default (0, 0, 0, 0)
        Border widths (left, top, right, bottom)
    padding : tuple of float, default (0, 0, 0, 0)
        Inner spacing (left, top, right, bottom)
    margin : tuple of float, default (0, 0, 0, 0)
        Outer spacing (left, top, right, bottom)
    indent : float, default 0
        Extra left indent of the whole box
    height : float or None, default None
        Fixed height (rules); None sizes to content
    corner_radius : float, default 0
        Rounded corner radius
    level : int or None, default None
        Heading level or list nesting depth where meaningful
    text_alignment : {"left", "center", "right"}, default "left"
        Horizontal alignment of inline content

    """

    role: str
    children: tuple[VisualNode, ...] = ()
    orientation: OrientationType = "vertical"
    background: Optional[str] = None
    border_color: Optional[str] = None
    border: Edges = NO_EDGES
    padding: Edges = NO_EDGES
    margin: Edges = NO_EDGES
    indent: float = 0.0
    height: Optional[float] = None
    corner_radius: float = 0.0
    level: Optional[int] = None
    text_alignment: TextAlignmentType = "left"

    def __post_init__(self) -> None:
        """Normalize children to a tuple and edge values to 4-tuples of floats."""
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "border", _edges(self.border))
        object.__setattr__(self, "padding", _edges(self.padding))
        object.__setattr__(self, "margin", _edges(self.margin))


@dataclass(frozen=True)
class Image:
    """A block-level image.

    Parameters
    ----------
    url : str
        Image source
    alt : str, default ""
        Alternative text
    title : str or None, default None
        Optional title, rendered by the builder as a caption
    max_width : float, default 800
        Upper bound of the displayed width

    """

    url: str
    alt: str = ""
    title: Optional[str] = None
    max_width: float = 800.0


@dataclass(frozen=True)
class GridCell:
    """One cell of a table grid."""

    row: int
    column: int
    children: tuple[VisualNode, ...] = ()
    background: Optional[str] = None
    is_header: bool = False

    def __post_init__(self) -> None:
        """Normalize children to a tuple."""
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class GridRow:
    """One row of a table grid."""

    cells: tuple[GridCell, ...] = ()

    def __post_init__(self) -> None:
        """Normalize cells to a tuple."""
        object.__setattr__(self, "cells", tuple(self.cells))


@dataclass(frozen=True)
class TableGrid:
    """Table laid out as a grid of uniformly sized columns.

    Parameters
    ----------
    column_count : int
        Number of columns (width of the widest row)
    rows : tuple of GridRow, default ()
        Rows in display order, header first
    column_width : str, default "*"
        Column sizing; ``"*"`` means every column gets an equal share
    border_color : str or None, default None
        Cell border color

    """

    column_count: int
    rows: tuple[GridRow, ...] = ()
    column_width: str = "*"
    border_color: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize rows to a tuple."""
        object.__setattr__(self, "rows", tuple(self.rows))


@dataclass(frozen=True)
class InteractiveCheckbox:
    """Clickable task-list checkbox.

    Parameters
    ----------
    checked : bool
        Whether the box is ticked
    glyph : str
        Glyph displayed for the current state
    color : str
        Glyph color
    occurrence_index : int
        Ordinal of this checkbox among the checkboxes of the same state, in
        document order, at render time
    font_size : float, default 16
        Glyph size
    bold : bool, default True
        Whether the glyph is drawn bold

    """

    checked: bool
    glyph: str
    color: str
    occurrence_index: int
    font_size: float = 16.0
    bold: bool = True


VisualNode = Union[TextRun, StyledContainer, Image, TableGrid, InteractiveCheckbox]


def iter_visual_nodes(nodes: tuple[VisualNode, ...] | list[VisualNode]) -> Iterator[VisualNode]:
    """Yield every node of a visual forest in document order (pre-order).

    Grid cells are descended into; ``GridRow`` and ``GridCell`` wrappers are
    not yielded themselves.
    """
    for node in nodes:
        yield node
        if isinstance(node, StyledContainer):
            yield from iter_visual_nodes(node.children)
        elif isinstance(node, TableGrid):
            for row in node.rows:
                for cell in row.cells:
                    yield from iter_visual_nodes(cell.children)


def find_checkboxes(nodes: tuple[VisualNode, ...] | list[VisualNode]) -> list[InteractiveCheckbox]:
    """Return all interactive checkboxes of a visual forest in document order."""
    return [node for node in iter_visual_nodes(nodes) if isinstance(node, InteractiveCheckbox)]


__all__ = [
    "NO_EDGES",
    "Edges",
    "GridCell",
    "GridRow",
    "Image",
    "InteractiveCheckbox",
    "StyledContainer",
    "TableGrid",
    "TextRun",
    "VisualNode",
    "find_checkboxes",
    "iter_visual_nodes",
]
