#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/__init__.py
"""mdpreview - the live preview rendering engine of a markdown editor.

mdpreview turns a parsed markdown document into a deterministic tree of
styled, immutable visual nodes that any UI toolkit can lay out, and keeps
that tree in step with an editable text buffer.

Key Features
------------
- Total, deterministic document-to-visual-tree builder with light and dark palettes
- Debounced, cancellable render scheduling with last-render-wins publication
- Proportional scroll synchronization between editor and preview
- Task-list checkboxes toggled by rewriting the markdown source
- mistune-based markdown parser and Pygments-based code highlighting

Requirements
------------
- Python 3.10+
- mistune 3 for parsing, Pygments for code highlighting

Examples
--------
One-shot rendering:

    >>> from mdpreview import build, markdown_to_ast
    >>> tree = build(markdown_to_ast("# Title\\n\\nSome **bold** text."), theme=False)
    >>> [node.role for node in tree]
    ['heading', 'rule', 'paragraph']

Live preview driven by the host's event loop:

    >>> from mdpreview import DocumentSession, LivePreview
    >>> preview = LivePreview(DocumentSession("- [ ] task"))
    >>> preview.start()
    True
    >>> preview.session.set_text("- [x] task")
    >>> preview.poll()  # called again once the quiescence window has passed
    False

"""

from mdpreview.ast import Document, NodeVisitor
from mdpreview.config import PreviewConfig, load_options
from mdpreview.exceptions import (
    ConfigurationError,
    DependencyError,
    InvalidOptionsError,
    MdPreviewError,
    ParsingError,
    RenderCancelledError,
    RenderingError,
    ValidationError,
)
from mdpreview.highlighting import CodeSpan, CodeTokenizer, NullTokenizer, PygmentsTokenizer
from mdpreview.live import (
    CancellationToken,
    DocumentSession,
    LivePreview,
    RenderScheduler,
    SchedulerState,
    ScrollSynchronizer,
    map_scroll_offset,
    scroll_fraction,
)
from mdpreview.logging_utils import configure_logging
from mdpreview.options import MarkdownParserOptions, PreviewOptions, SessionOptions
from mdpreview.parsers import MarkdownParser, markdown_to_ast
from mdpreview.renderers import PreviewRenderer, build
from mdpreview.tasks import find_task_markers, toggle, toggle_checkbox
from mdpreview.theme import Palette, Theme, resolve_palette
from mdpreview.visual import extract_rendered_text

__version__ = "1.0.0"

__all__ = [
    "CancellationToken",
    "CodeSpan",
    "CodeTokenizer",
    "ConfigurationError",
    "DependencyError",
    "Document",
    "DocumentSession",
    "InvalidOptionsError",
    "LivePreview",
    "MarkdownParser",
    "MarkdownParserOptions",
    "MdPreviewError",
    "NodeVisitor",
    "NullTokenizer",
    "Palette",
    "ParsingError",
    "PreviewConfig",
    "PreviewOptions",
    "PreviewRenderer",
    "PygmentsTokenizer",
    "RenderCancelledError",
    "RenderScheduler",
    "RenderingError",
    "SchedulerState",
    "ScrollSynchronizer",
    "SessionOptions",
    "Theme",
    "ValidationError",
    "__version__",
    "build",
    "configure_logging",
    "extract_rendered_text",
    "find_task_markers",
    "load_options",
    "map_scroll_offset",
    "markdown_to_ast",
    "resolve_palette",
    "scroll_fraction",
    "toggle",
    "toggle_checkbox",
]
