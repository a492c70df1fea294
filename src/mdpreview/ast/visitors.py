#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/ast/visitors.py
"""Visitor pattern implementation for document tree traversal.

Every node kind in ``mdpreview.ast.nodes`` has exactly one abstract
``visit_*`` method here, so a concrete visitor that forgets a node kind fails
at instantiation instead of silently dropping content at render time.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdpreview.ast.nodes import (
    Abbreviation,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Document,
    Emphasis,
    Figure,
    Footnote,
    FootnoteGroup,
    FootnoteReference,
    Heading,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TaskMarker,
    Text,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """Abstract base class for document tree visitors.

    Subclasses implement one ``visit_*`` method per node kind. Return values
    are up to the visitor; the preview renderer returns lists of visual nodes.

    Examples
    --------
    Visitor that collects heading levels (other methods elided):

        >>> class HeadingLevels(NodeVisitor):
        ...     def __init__(self):
        ...         self.levels = []
        ...
        ...     def visit_document(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_heading(self, node):
        ...         self.levels.append(node.level)

    """

    # Block nodes

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node.

        Parameters
        ----------
        node : Heading
            The heading node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_math_block(self, node: MathBlock) -> Any:
        """Visit a MathBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node.

        Parameters
        ----------
        node : List
            The list node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_definition_list(self, node: DefinitionList) -> Any:
        """Visit a DefinitionList node."""
        pass

    @abstractmethod
    def visit_definition_item(self, node: DefinitionItem) -> Any:
        """Visit a DefinitionItem node."""
        pass

    @abstractmethod
    def visit_figure(self, node: Figure) -> Any:
        """Visit a Figure node."""
        pass

    @abstractmethod
    def visit_footnote_group(self, node: FootnoteGroup) -> Any:
        """Visit a FootnoteGroup node."""
        pass

    @abstractmethod
    def visit_footnote(self, node: Footnote) -> Any:
        """Visit a Footnote node."""
        pass

    # Inline nodes

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node (including images)."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""
        pass

    @abstractmethod
    def visit_abbreviation(self, node: Abbreviation) -> Any:
        """Visit an Abbreviation node."""
        pass

    @abstractmethod
    def visit_math_inline(self, node: MathInline) -> Any:
        """Visit a MathInline node."""
        pass

    @abstractmethod
    def visit_task_marker(self, node: TaskMarker) -> Any:
        """Visit a TaskMarker node."""
        pass
