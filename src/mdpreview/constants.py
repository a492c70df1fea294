#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdpreview library.

This module centralizes the hardcoded values, magic numbers, and default
configuration constants used across the preview engine.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Typography - Font sizes and families
3. Fixed Colors - Colors that do not depend on the theme
4. Glyphs and Labels - Text emitted by the renderer
5. Live Preview Behavior - Scheduler and scroll defaults
6. Dependency Specifications - Optional package requirements
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

RenderModeType = Literal["edit", "read"]
BaselineType = Literal["normal", "superscript", "subscript"]
OrientationType = Literal["vertical", "horizontal", "inline"]
TextAlignmentType = Literal["left", "center", "right"]
ColorRole = Literal["keyword", "string", "comment", "number", "name", "operator", "default"]

# =============================================================================
# Typography
# =============================================================================

DEFAULT_BASE_FONT_SIZE = 14.0
DEFAULT_SMALL_FONT_SIZE = 11.0
DEFAULT_CODE_FONT_SIZE = 13.0
DEFAULT_CAPTION_FONT_SIZE = 13.0

# Heading font sizes for levels 1 through 6 (strictly decreasing)
DEFAULT_HEADING_FONT_SIZES: tuple[float, ...] = (32.0, 28.0, 24.0, 20.0, 18.0, 16.0)

MONOSPACE_FONT_FAMILY = "Consolas,Courier New,monospace"

DEFAULT_MAX_IMAGE_WIDTH = 800
DEFINITION_INDENT = 32
LIST_INDENT = 20
QUOTE_ACCENT_WIDTH = 4

# =============================================================================
# Fixed Colors
# =============================================================================

MARK_BACKGROUND_COLOR = "#FFF3CD"
MARK_FOREGROUND_COLOR = "#000000"
MATH_COLOR = "#8B008B"
CHECKED_COLOR = "#22C55E"
UNCHECKED_COLOR = "#EF4444"
MERMAID_BOX_TEXT_COLOR = "#FFFFFF"

# =============================================================================
# Glyphs and Labels
# =============================================================================

BULLET_GLYPH = "•"
CHECKED_GLYPH = "✓"
UNCHECKED_GLYPH = "✗"

EMPTY_DOCUMENT_PLACEHOLDER = "Start typing markdown in the editor to see the preview..."
MERMAID_TITLE = "Mermaid Diagram"
MERMAID_HINT = "For full interactive rendering, export to HTML (File > Export to HTML)."
FOOTNOTES_TITLE = "Footnotes"

DEFAULT_MERMAID_MAX_NODES = 6

# Code block languages with dedicated rendering paths (compared lower-cased)
MERMAID_LANGUAGES = frozenset({"mermaid"})
MATH_LANGUAGES = frozenset({"math", "latex"})

# =============================================================================
# Live Preview Behavior
# =============================================================================

DEFAULT_DEBOUNCE_MS = 300
MIN_DEBOUNCE_MS = 10
MAX_DEBOUNCE_MS = 2000
DEFAULT_SYNC_SCROLL = True
DEFAULT_OFFLOAD_RENDERING = False

# Read mode content widths, keyed by width preset
READ_WIDTH_PRESETS: dict[str, float] = {
    "fit": float("inf"),
    "50": 450.0,
    "75": 675.0,
    "100": 900.0,
}

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_HIGHLIGHT = [("pygments", "pygments", ">=2.15")]

# =============================================================================
# Configuration discovery
# =============================================================================

CONFIG_FILENAMES = [".mdpreview.toml", ".mdpreview.yaml", ".mdpreview.yml", ".mdpreview.json"]
PYPROJECT_SECTION = "mdpreview"
CONFIG_ENV_VAR = "MDPREVIEW_CONFIG"
