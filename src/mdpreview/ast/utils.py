#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/ast/utils.py
"""Utility functions for working with document trees."""

from __future__ import annotations

from typing import Union

from mdpreview.ast.nodes import (
    Abbreviation,
    Code,
    Document,
    ListItem,
    MathInline,
    Node,
    Paragraph,
    TaskMarker,
    Text,
    get_node_children,
)


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    r"""Extract plain text from a node or list of nodes.

    Recursively concatenates the literal content of ``Text``, ``Code``,
    ``MathInline`` and ``Abbreviation`` nodes, joining parts with ``joiner``.
    Task markers contribute nothing.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String used to join text parts. Use "" when the Text nodes already
        carry their own spacing.

    Returns
    -------
    str
        Concatenated text content

    Examples
    --------
        >>> para = Paragraph(content=[Text("Hello "), Emphasis("*", 2, content=[Text("world")])])
        >>> extract_text(para, joiner="")
        'Hello world'

    """
    if isinstance(node_or_nodes, list):
        text_parts = []
        for node in node_or_nodes:
            extracted = extract_text(node, joiner=joiner)
            if extracted:
                text_parts.append(extracted)
        return joiner.join(text_parts)

    node = node_or_nodes

    if isinstance(node, (Text, Code, MathInline)):
        return node.content
    if isinstance(node, Abbreviation):
        return node.label
    if isinstance(node, TaskMarker):
        return ""

    text_parts = []
    for child in get_node_children(node):
        extracted = extract_text(child, joiner=joiner)
        if extracted:
            text_parts.append(extracted)

    return joiner.join(text_parts)


def find_task_marker(item: ListItem) -> TaskMarker | None:
    """Return the task marker of a list item, or None for a plain item.

    The marker is only recognized as the first inline of the item's first
    paragraph.

    Parameters
    ----------
    item : ListItem
        The list item to inspect

    Returns
    -------
    TaskMarker or None
        The item's checkbox marker

    """
    if not item.children:
        return None
    first = item.children[0]
    if isinstance(first, Paragraph) and first.content and isinstance(first.content[0], TaskMarker):
        return first.content[0]
    return None


def is_empty_document(doc: Document) -> bool:
    """Return True when the document has no block content."""
    return not doc.children


__all__ = [
    "extract_text",
    "find_task_marker",
    "is_empty_document",
]
