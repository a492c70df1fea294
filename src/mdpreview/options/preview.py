#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/options/preview.py
"""Configuration options for the preview renderer.

The defaults reproduce the look of the desktop editor: 14pt body text, a
32..16pt heading scale, 800px image cap, bullet and check glyphs, and the
fixed checkbox colors. Colors that depend on light/dark mode are not options;
they come from the resolved theme palette.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdpreview.constants import (
    BULLET_GLYPH,
    CHECKED_COLOR,
    CHECKED_GLYPH,
    DEFAULT_BASE_FONT_SIZE,
    DEFAULT_CAPTION_FONT_SIZE,
    DEFAULT_CODE_FONT_SIZE,
    DEFAULT_HEADING_FONT_SIZES,
    DEFAULT_MAX_IMAGE_WIDTH,
    DEFAULT_MERMAID_MAX_NODES,
    DEFAULT_SMALL_FONT_SIZE,
    DEFINITION_INDENT,
    EMPTY_DOCUMENT_PLACEHOLDER,
    LIST_INDENT,
    UNCHECKED_COLOR,
    UNCHECKED_GLYPH,
)
from mdpreview.exceptions import ValidationError
from mdpreview.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PreviewOptions(BaseRendererOptions):
    """Configuration options for building the preview visual tree.

    Parameters
    ----------
    base_font_size : float, default 14.0
        Font size of body text.
    small_font_size : float, default 11.0
        Font size of subscript, superscript and footnote reference runs.
    code_font_size : float, default 13.0
        Font size of code block text.
    caption_font_size : float, default 13.0
        Font size of figure and image captions.
    heading_font_sizes : tuple of float, default (32, 28, 24, 20, 18, 16)
        Font sizes for heading levels 1..6; must be strictly decreasing.
    max_image_width : int, default 800
        Maximum display width of block images.
    list_indent : int, default 20
        Left indent of nested list content.
    definition_indent : int, default 32
        Left indent of definition paragraphs.
    bullet_glyph : str, default "•"
        Marker for unordered list items.
    checked_glyph : str, default "✓"
        Glyph shown for a ticked task checkbox.
    unchecked_glyph : str, default "✗"
        Glyph shown for an unticked task checkbox.
    checked_color : str, default "#22C55E"
        Color of a ticked checkbox glyph.
    unchecked_color : str, default "#EF4444"
        Color of an unticked checkbox glyph.
    mermaid_max_nodes : int, default 6
        Maximum number of flowchart nodes listed in a mermaid summary.
    show_mermaid_hint : bool, default True
        Whether mermaid placeholders end with the export-to-HTML hint.
    enable_highlighting : bool, default True
        Whether code blocks are colored through the code tokenizer.
    empty_placeholder : str
        Text shown in edit mode when the document is empty.

    """

    base_font_size: float = field(
        default=DEFAULT_BASE_FONT_SIZE,
        metadata={"help": "Font size of body text", "type": float, "importance": "core"},
    )
    small_font_size: float = field(
        default=DEFAULT_SMALL_FONT_SIZE,
        metadata={"help": "Font size of sub/superscript and footnote reference runs", "type": float},
    )
    code_font_size: float = field(
        default=DEFAULT_CODE_FONT_SIZE,
        metadata={"help": "Font size of code block text", "type": float},
    )
    caption_font_size: float = field(
        default=DEFAULT_CAPTION_FONT_SIZE,
        metadata={"help": "Font size of figure and image captions", "type": float},
    )
    heading_font_sizes: tuple[float, ...] = field(
        default=DEFAULT_HEADING_FONT_SIZES,
        metadata={"help": "Font sizes for heading levels 1-6 (strictly decreasing)", "importance": "core"},
    )
    max_image_width: int = field(
        default=DEFAULT_MAX_IMAGE_WIDTH,
        metadata={"help": "Maximum display width of block images", "type": int, "importance": "core"},
    )
    list_indent: int = field(
        default=LIST_INDENT,
        metadata={"help": "Left indent of nested list content", "type": int, "importance": "advanced"},
    )
    definition_indent: int = field(
        default=DEFINITION_INDENT,
        metadata={"help": "Left indent of definition paragraphs", "type": int, "importance": "advanced"},
    )
    bullet_glyph: str = field(
        default=BULLET_GLYPH,
        metadata={"help": "Marker for unordered list items", "importance": "advanced"},
    )
    checked_glyph: str = field(
        default=CHECKED_GLYPH,
        metadata={"help": "Glyph for a ticked task checkbox", "importance": "advanced"},
    )
    unchecked_glyph: str = field(
        default=UNCHECKED_GLYPH,
        metadata={"help": "Glyph for an unticked task checkbox", "importance": "advanced"},
    )
    checked_color: str = field(
        default=CHECKED_COLOR,
        metadata={"help": "Color of a ticked checkbox glyph", "importance": "advanced"},
    )
    unchecked_color: str = field(
        default=UNCHECKED_COLOR,
        metadata={"help": "Color of an unticked checkbox glyph", "importance": "advanced"},
    )
    mermaid_max_nodes: int = field(
        default=DEFAULT_MERMAID_MAX_NODES,
        metadata={"help": "Maximum flowchart nodes listed in a mermaid summary", "type": int},
    )
    show_mermaid_hint: bool = field(
        default=True,
        metadata={"help": "End mermaid placeholders with the export-to-HTML hint", "importance": "advanced"},
    )
    enable_highlighting: bool = field(
        default=True,
        metadata={"help": "Color code blocks through the code tokenizer", "importance": "core"},
    )
    empty_placeholder: str = field(
        default=EMPTY_DOCUMENT_PLACEHOLDER,
        metadata={"help": "Text shown in edit mode when the document is empty", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and the heading scale.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        for name in ("base_font_size", "small_font_size", "code_font_size", "caption_font_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValidationError(
                    f"{name} must be positive, got {value}", parameter_name=name, parameter_value=value
                )

        sizes = tuple(self.heading_font_sizes)
        if len(sizes) != 6:
            raise ValidationError(
                f"heading_font_sizes must have 6 entries, got {len(sizes)}",
                parameter_name="heading_font_sizes",
                parameter_value=sizes,
            )
        if any(later >= earlier for earlier, later in zip(sizes, sizes[1:])):
            raise ValidationError(
                f"heading_font_sizes must be strictly decreasing, got {sizes}",
                parameter_name="heading_font_sizes",
                parameter_value=sizes,
            )
        # Lists coming from config files are normalized to a hashable tuple
        object.__setattr__(self, "heading_font_sizes", sizes)

        if self.max_image_width <= 0:
            raise ValidationError(
                f"max_image_width must be positive, got {self.max_image_width}",
                parameter_name="max_image_width",
                parameter_value=self.max_image_width,
            )
        if self.list_indent < 0 or self.definition_indent < 0:
            raise ValidationError(
                "list_indent and definition_indent must be non-negative",
                parameter_name="list_indent" if self.list_indent < 0 else "definition_indent",
            )
        if self.mermaid_max_nodes < 0:
            raise ValidationError(
                f"mermaid_max_nodes must be non-negative, got {self.mermaid_max_nodes}",
                parameter_name="mermaid_max_nodes",
                parameter_value=self.mermaid_max_nodes,
            )

    def heading_font_size(self, level: int) -> float:
        """Return the font size for a heading level, clamping to 1..6."""
        index = min(max(level, 1), 6) - 1
        return self.heading_font_sizes[index]
