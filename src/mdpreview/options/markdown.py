#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/options/markdown.py
"""Configuration options for the markdown parser adapter."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpreview.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-tree parsing.

    Each flag enables one mistune plugin. All extensions the preview renderer
    understands are on by default.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_footnotes : bool, default True
        Whether to parse footnote references and definitions.
    parse_math : bool, default True
        Whether to parse inline ($...$) and block ($$...$$) math.
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_definition_lists : bool, default True
        Whether to parse definition lists (term : definition).
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_abbreviations : bool, default True
        Whether to parse abbreviation definitions (*[HTML]: ...).
    parse_extended_emphasis : bool, default True
        Whether to parse ==mark==, ++insert++, ^superscript^ and ~subscript~.
    parse_frontmatter : bool, default True
        Whether to lift a leading YAML front matter block (--- ... ---) out of
        the content and into ``Document.metadata``.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "importance": "core"},
    )
    parse_footnotes: bool = field(
        default=True,
        metadata={"help": "Parse footnote references and definitions", "importance": "core"},
    )
    parse_math: bool = field(
        default=True,
        metadata={"help": "Parse inline and block math ($...$ and $$...$$)", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "importance": "core"},
    )
    parse_definition_lists: bool = field(
        default=True,
        metadata={"help": "Parse definition lists (term : definition)", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_abbreviations: bool = field(
        default=True,
        metadata={"help": "Parse abbreviation definitions (*[ABBR]: expansion)", "importance": "advanced"},
    )
    parse_extended_emphasis: bool = field(
        default=True,
        metadata={
            "help": "Parse ==mark==, ++insert++, ^superscript^ and ~subscript~ spans",
            "importance": "advanced",
        },
    )
    parse_frontmatter: bool = field(
        default=True,
        metadata={"help": "Hide leading YAML front matter and keep it as document metadata", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
