#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/parsers/markdown.py
"""Markdown to document tree converter.

This module turns markdown source into the node tree consumed by the preview
renderer, using mistune's token stream (``renderer=None``). Extension syntax
is enabled through mistune plugins selected by ``MarkdownParserOptions``.

Token mapping notes:

- ``strong``/``emphasis``/``strikethrough`` and the extended spans (mark,
  superscript, subscript and ``++inserted++`` text) all become ``Emphasis``
  nodes carrying the delimiter pair the renderer styles on. mistune has no
  ``++`` rule of its own, so one is registered here.
- A leading YAML front matter block is cut off before tokenizing and kept
  in ``Document.metadata["front_matter"]``.
- Task list items get a ``TaskMarker`` as the first inline of their first
  paragraph.
- Footnote definitions arrive as one trailing ``footnotes`` token and become a
  ``FootnoteGroup`` numbered in order of first reference.
- Raw HTML is kept as literal text; the preview has no HTML engine.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

import yaml

from mdpreview.ast import (
    Abbreviation,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Document,
    Emphasis,
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
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TaskMarker,
    Text,
    ThematicBreak,
)
from mdpreview.constants import DEPS_MARKDOWN
from mdpreview.exceptions import ParsingError
from mdpreview.options.markdown import MarkdownParserOptions
from mdpreview.parsers.base import BaseParser
from mdpreview.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

# Inline span tokens and the delimiter pair they are written with
_EMPHASIS_DELIMITERS: dict[str, tuple[str, int]] = {
    "emphasis": ("*", 1),
    "strong": ("*", 2),
    "strikethrough": ("~", 2),
    "subscript": ("~", 1),
    "superscript": ("^", 1),
    "mark": ("=", 2),
    "insert": ("+", 2),
}

_INSERT_PATTERN = r"\+\+(?=[^\s+])"
_INSERT_END = re.compile(r"(?:(?<!\\)(?:\\\\)*\\\+|[^\s+])\+\+(?!\+)")

# Token types whose children are block tokens rather than inline tokens
_BLOCK_TOKEN_TYPES = frozenset(
    {
        "paragraph",
        "block_text",
        "heading",
        "block_code",
        "block_quote",
        "list",
        "table",
        "thematic_break",
        "block_html",
        "block_math",
        "def_list",
        "blank_line",
    }
)


def _parse_insert(inline: Any, m: re.Match, state: Any) -> int | None:
    """Consume ``++text++`` and emit an ``insert`` token with parsed children."""
    pos = m.end()
    end = _INSERT_END.search(state.src, pos)
    if not end:
        return None
    end_pos = end.end()
    new_state = state.copy()
    new_state.src = state.src[pos : end_pos - 2]
    children = inline.render(new_state)
    state.append_token({"type": "insert", "children": children})
    return end_pos


def insert_plugin(md: Any) -> None:
    """Register the ``++inserted++`` inline rule on a mistune Markdown instance."""
    md.inline.register("insert", _INSERT_PATTERN, _parse_insert, before="link")


def _footnote_identifier(label: str) -> str:
    """Normalize a footnote label the way reference and definition are matched."""
    return " ".join(label.split()).lower()


class MarkdownParser(BaseParser):
    r"""Convert markdown source to a document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\\n\\nThis is **bold**.")

    Disabling an extension:

        >>> parser = MarkdownParser(MarkdownParserOptions(parse_math=False))
        >>> doc = parser.parse("Costs $5 and $6")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._markdown: Any = None

    def _plugins(self) -> list[Any]:
        """Return the mistune plugins (names or callables) enabled by the options."""
        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_math:
            plugins.append("math")
        if self.options.parse_definition_lists:
            plugins.append("def_list")
        if self.options.parse_abbreviations:
            plugins.append("abbr")
        if self.options.parse_extended_emphasis:
            plugins.extend(["mark", insert_plugin, "superscript", "subscript"])
        return plugins

    def _get_markdown(self) -> Any:
        """Create the mistune parser on first use and reuse it afterwards."""
        if self._markdown is None:
            import mistune

            plugins = self._plugins()
            names = [plugin if isinstance(plugin, str) else plugin.__name__ for plugin in plugins]
            logger.debug(f"Creating mistune parser with plugins: {', '.join(names) or 'none'}")
            self._markdown = mistune.create_markdown(plugins=plugins, renderer=None)
        return self._markdown

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, text: str) -> Document:
        """Parse markdown source into a document tree.

        Parameters
        ----------
        text : str
            Markdown source. Line endings are normalized to ``\n``.

        Returns
        -------
        Document
            Document tree; empty source gives an empty document

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        if not isinstance(text, str):
            raise ParsingError(
                f"Markdown source must be str, got {type(text).__name__}",
                parsing_stage="input",
            )

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        metadata: dict[str, Any] = {}
        if self.options.parse_frontmatter:
            text, front_matter = self._split_front_matter(text)
            if front_matter is not None:
                metadata["front_matter"] = front_matter

        if not text.strip():
            return Document(metadata=metadata)

        with debug_timer(logger, "Markdown parse"):
            try:
                tokens, _state = self._get_markdown().parse(text)
            except Exception as e:
                raise ParsingError(
                    f"Failed to parse markdown: {e!r}",
                    parsing_stage="tokenize",
                    original_error=e,
                ) from e

            try:
                children = self._process_tokens(tokens if isinstance(tokens, list) else [])
            except Exception as e:
                raise ParsingError(
                    f"Failed to build document tree: {e!r}",
                    parsing_stage="tree",
                    original_error=e,
                ) from e

        return Document(children=children, metadata=metadata)

    @staticmethod
    def _split_front_matter(text: str) -> tuple[str, dict[str, Any] | None]:
        """Cut a leading ``---`` fenced YAML block off the source.

        The block is only treated as front matter when it has a closing
        ``---`` line and its content loads as a YAML mapping (or is empty).
        Otherwise the text is returned unchanged.

        Parameters
        ----------
        text : str
            Markdown source with ``\\n`` line endings

        Returns
        -------
        tuple[str, dict or None]
            (remaining_text, front_matter); front_matter is None when absent

        """
        if not text.startswith("---\n"):
            return text, None

        lines = text.splitlines(keepends=True)
        end_index = -1
        for i in range(1, len(lines)):
            if lines[i].strip() == "---":
                end_index = i
                break

        if end_index <= 0:
            return text, None

        try:
            data = yaml.safe_load("".join(lines[1:end_index]))
        except yaml.YAMLError as e:
            logger.debug(f"Leading --- block is not YAML front matter: {e}")
            return text, None

        if data is None:
            data = {}
        if not isinstance(data, dict):
            return text, None

        return "".join(lines[end_index + 1 :]), data

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into nodes.

        Parameters
        ----------
        tokens : list of dict
            Mistune token dictionaries

        Returns
        -------
        list of Node
            Block nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single mistune block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting node, or None for tokens with no visual counterpart

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return self._process_html_block(token)
        elif token_type == "block_math":
            return MathBlock(content=token.get("raw", "").strip("\n"))
        elif token_type == "def_list":
            return self._process_definition_list(token)
        elif token_type == "footnotes":
            return self._process_footnotes(token)
        elif token_type == "blank_line":
            return None

        logger.debug(f"Ignoring unsupported block token type {token_type!r}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1

        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph token."""
        return Paragraph(content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process fenced or indented code block token.

        The language is the first word of the info string; anything after it
        is kept in ``metadata["info_attrs"]``.

        """
        code_content = token.get("raw", "")
        attrs = token.get("attrs", {})
        info_string = attrs.get("info") if isinstance(attrs, dict) else None

        metadata: dict[str, Any] = {}
        language = None

        if info_string:
            info_string = info_string.strip()
            parts = info_string.split(maxsplit=1)
            if parts:
                language = parts[0]
                if len(parts) > 1:
                    metadata["info_attrs"] = parts[1]

        return CodeBlock(content=code_content, language=language or None, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'attrs' (ordered, start)

        Returns
        -------
        List
            List node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        if not isinstance(start, int):
            start = 1

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]

        return List(ordered=ordered, items=items, start=start)

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process a list item or task list item token.

        Task list items carry ``attrs["checked"]``; mistune has already removed
        the ``[ ]``/``[x]`` marker from the text, so a ``TaskMarker`` is put
        back at the start of the first paragraph.

        """
        children = self._process_tokens(token.get("children", []))

        if token.get("type") == "task_list_item":
            attrs = token.get("attrs", {})
            marker = TaskMarker(checked=bool(attrs.get("checked", False)))
            if children and isinstance(children[0], Paragraph):
                children[0].content.insert(0, marker)
            else:
                children.insert(0, Paragraph(content=[marker]))

        return ListItem(children=children)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        The header row comes first, followed by the body rows, so that the
        header is always ``rows[0]``.

        """
        rows: list[TableRow] = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                cells = self._process_table_cells(section.get("children", []))
                rows.insert(0, TableRow(cells=cells, metadata={"is_header": True}))
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token.get("children", []))))

        return Table(rows=rows)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        """Process table cell tokens."""
        cells = []

        for cell_token in cell_tokens:
            if cell_token.get("type") != "table_cell":
                continue
            metadata: dict[str, Any] = {}
            attrs = cell_token.get("attrs", {})
            if isinstance(attrs, dict) and attrs.get("align"):
                metadata["alignment"] = attrs["align"]
            content = self._process_inline_tokens(cell_token.get("children", []))
            cells.append(TableCell(content=content, metadata=metadata))

        return cells

    def _process_html_block(self, token: dict[str, Any]) -> Paragraph | None:
        """Process HTML block token as literal text; comments are dropped."""
        content = token.get("raw", "")
        if self._is_html_comment(content) or not content.strip():
            return None
        return Paragraph(content=[Text(content=content.rstrip("\n"))])

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Parameters
        ----------
        token : dict
            Definition list token with 'children'

        Returns
        -------
        DefinitionList
            Definition list node with one item per term

        """
        items: list[DefinitionItem] = []
        current: DefinitionItem | None = None

        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                term = self._process_mixed_children(child, inline=True)
                current = DefinitionItem(children=[Paragraph(content=term)])
                items.append(current)
            elif child_type in ("def_list_item", "def_list_content"):
                if current is None:
                    current = DefinitionItem(children=[Paragraph()])
                    items.append(current)
                current.children.extend(self._process_mixed_children(child, inline=False))

        return DefinitionList(items=items)

    def _process_mixed_children(self, token: dict[str, Any], inline: bool) -> list[Node]:
        """Process children that may be either inline or block tokens.

        mistune versions differ in whether definition list parts hold inline
        tokens or paragraphs. With ``inline=True`` the result is inline nodes,
        otherwise block nodes.

        """
        children = token.get("children", [])
        if not children and "text" in token:
            children = [{"type": "text", "raw": token["text"]}]

        is_block = any(child.get("type") in _BLOCK_TOKEN_TYPES for child in children)

        if inline:
            if not is_block:
                return self._process_inline_tokens(children)
            content: list[Node] = []
            for block in self._process_tokens(children):
                if isinstance(block, Paragraph):
                    content.extend(block.content)
            return content

        if is_block:
            return self._process_tokens(children)
        return [Paragraph(content=self._process_inline_tokens(children))]

    def _process_footnotes(self, token: dict[str, Any]) -> FootnoteGroup | None:
        """Process the trailing footnotes token into a footnote group."""
        footnotes: list[Footnote] = []

        for position, item in enumerate(token.get("children", []), start=1):
            if item.get("type") != "footnote_item":
                continue
            attrs = item.get("attrs", {})
            index = attrs.get("index", position)
            footnotes.append(
                Footnote(
                    index=index if isinstance(index, int) else position,
                    children=self._process_tokens(item.get("children", [])),
                    identifier=_footnote_identifier(str(attrs.get("key", ""))),
                )
            )

        if not footnotes:
            return None
        footnotes.sort(key=lambda footnote: footnote.index)
        return FootnoteGroup(footnotes=footnotes)

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle any delimited span token (emphasis, strong, mark, ...)."""
        char, count = _EMPHASIS_DELIMITERS[token["type"]]
        content = self._process_inline_tokens(token.get("children", []))
        return Emphasis(delimiter_char=char, delimiter_count=count, content=content)

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        children = token.get("children", [])
        if not isinstance(children, list):
            children = []
        return Link(
            url=attrs.get("url", ""),
            content=self._process_inline_tokens(children),
            title=attrs.get("title"),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Link:
        """Handle image token; alt text is in the children, not attrs."""
        link = self._handle_link_token(token)
        link.is_image = True
        return link

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard line break token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle soft line break token."""
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> Text | None:
        """Handle inline_html token as literal text; comments are dropped."""
        content = token.get("raw", "")
        if self._is_html_comment(content):
            return None
        return Text(content=content)

    def _handle_inline_math_token(self, token: dict[str, Any]) -> MathInline:
        """Handle inline_math token."""
        return MathInline(content=token.get("raw", ""))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token; ``raw`` holds the label, ``attrs.index`` the number."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        index = attrs.get("index", 1)
        return FootnoteReference(
            index=index if isinstance(index, int) else 1,
            identifier=_footnote_identifier(str(token.get("raw", ""))),
        )

    def _handle_abbr_token(self, token: dict[str, Any]) -> Abbreviation:
        """Handle abbr token."""
        attrs = token.get("attrs", {})
        label = "".join(child.get("raw", "") for child in token.get("children", []) if isinstance(child, dict))
        return Abbreviation(label=label, title=attrs.get("title") if isinstance(attrs, dict) else None)

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline node, or None for tokens with no visual counterpart

        """
        token_type = token.get("type", "")

        if token_type in _EMPHASIS_DELIMITERS:
            return self._handle_emphasis_token(token)

        handler_map: dict[str, Callable[[dict[str, Any]], Node | None]] = {
            "text": self._handle_text_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
            "inline_math": self._handle_inline_math_token,
            "footnote_ref": self._handle_footnote_ref_token,
            "abbr": self._handle_abbr_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug(f"Ignoring unsupported inline token type {token_type!r}")
        return None

    @staticmethod
    def _is_html_comment(content: str) -> bool:
        """Check if HTML content is a comment."""
        stripped = content.strip()
        return stripped.startswith("<!--") and stripped.endswith("-->")


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a markdown string to a document tree.

    This is a convenience function that creates a parser and parses the
    markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        Document tree

    Examples
    --------
    >>> from mdpreview.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownParser(options).parse(markdown_content)


__all__ = [
    "MarkdownParser",
    "markdown_to_ast",
]
