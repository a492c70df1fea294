#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/theme.py
"""Theme resolution for the preview renderer.

The renderer never sees theme tokens. It receives a ``Palette`` of resolved
hex colors chosen by the light/dark classification of the active theme.
``resolve_palette`` accepts either a plain ``is_dark`` flag or one of the
named application themes.

Examples
--------
    >>> resolve_palette(True).text
    '#E0E0E0'
    >>> resolve_palette(Theme.OCEAN_BREEZE).is_dark
    False

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from mdpreview.constants import ColorRole
from mdpreview.exceptions import ValidationError

logger = logging.getLogger(__name__)


class Theme(str, Enum):
    """Named application themes.

    Only the light/dark classification affects the preview; window chrome
    styling of the individual themes is a host concern.
    """

    GLASS_LIGHT = "GlassLight"
    GLASS_DARK = "GlassDark"
    ACRYLIC_LIGHT = "AcrylicLight"
    ACRYLIC_DARK = "AcrylicDark"
    PURE_DARK = "PureDark"
    OCEAN_BREEZE = "OceanBreeze"
    FOREST_CANOPY = "ForestCanopy"
    SUNSET_GLOW = "SunsetGlow"
    MIDNIGHT_PURPLE = "MidnightPurple"
    ROSE_GOLD = "RoseGold"
    ARCTIC_MINT = "ArcticMint"

    @property
    def is_dark(self) -> bool:
        """Return True for themes rendered with the dark palette."""
        return self in _DARK_THEMES

    @classmethod
    def from_name(cls, name: str) -> Theme:
        """Look up a theme by value ("PureDark") or member name ("PURE_DARK"), ignoring case.

        Raises
        ------
        ValidationError
            If no theme matches.

        """
        key = name.replace("-", "").replace("_", "").replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValidationError(
            f"Unknown theme {name!r}. Valid themes: {', '.join(m.value for m in cls)}",
            parameter_name="theme",
            parameter_value=name,
        )


_DARK_THEMES = frozenset({Theme.GLASS_DARK, Theme.ACRYLIC_DARK, Theme.PURE_DARK, Theme.MIDNIGHT_PURPLE})

ThemeLike = Union[bool, Theme, str]


@dataclass(frozen=True)
class Palette:
    """Resolved colors for one light/dark mode.

    All values are ``#RRGGBB`` strings.
    """

    is_dark: bool
    text: str
    muted: str
    background: str
    border: str
    link: str
    heading_rule: str
    code_background: str
    code_border: str
    inline_code_background: str
    quote_border: str
    quote_background: str
    table_border: str
    table_header_background: str
    table_even_row: str
    table_odd_row: str
    mermaid_box: str
    syntax_keyword: str
    syntax_string: str
    syntax_comment: str
    syntax_number: str
    syntax_name: str
    syntax_operator: str
    syntax_default: str

    def syntax_color(self, role: ColorRole | str) -> str:
        """Return the color for a code tokenizer role, falling back to the default role."""
        return getattr(self, f"syntax_{role}", self.syntax_default)


DARK_PALETTE = Palette(
    is_dark=True,
    text="#E0E0E0",
    muted="#888888",
    background="#1E1E1E",
    border="#404040",
    link="#58A6FF",
    heading_rule="#404040",
    code_background="#2D2D2D",
    code_border="#404040",
    inline_code_background="#2D2D2D",
    quote_border="#505050",
    quote_background="#2A2A2A",
    table_border="#404040",
    table_header_background="#2D2D2D",
    table_even_row="#252525",
    table_odd_row="#1E1E1E",
    mermaid_box="#4A90E2",
    syntax_keyword="#569CD6",
    syntax_string="#CE9178",
    syntax_comment="#6A9955",
    syntax_number="#B5CEA8",
    syntax_name="#9CDCFE",
    syntax_operator="#D4D4D4",
    syntax_default="#D4D4D4",
)

LIGHT_PALETTE = Palette(
    is_dark=False,
    text="#333333",
    muted="#666666",
    background="#FFFFFF",
    border="#E0E0E0",
    link="#0066CC",
    heading_rule="#E0E0E0",
    code_background="#F5F5F5",
    code_border="#E0E0E0",
    inline_code_background="#F5F5F5",
    quote_border="#CCCCCC",
    quote_background="#F9F9F9",
    table_border="#E0E0E0",
    table_header_background="#F5F5F5",
    table_even_row="#FAFAFA",
    table_odd_row="#FFFFFF",
    mermaid_box="#2196F3",
    syntax_keyword="#0000FF",
    syntax_string="#A31515",
    syntax_comment="#008000",
    syntax_number="#098658",
    syntax_name="#001080",
    syntax_operator="#333333",
    syntax_default="#333333",
)


def is_dark_theme(theme: ThemeLike) -> bool:
    """Return the dark/light classification of a theme-like value."""
    if isinstance(theme, bool):
        return theme
    if isinstance(theme, Theme):
        return theme.is_dark
    return Theme.from_name(theme).is_dark


def resolve_palette(theme: ThemeLike | Palette) -> Palette:
    """Resolve a theme, a theme name or an ``is_dark`` flag to a palette.

    Parameters
    ----------
    theme : bool, Theme, str or Palette
        ``True`` selects the dark palette, ``False`` the light one. Named
        themes select by their classification. A ``Palette`` is returned
        unchanged so hosts can supply custom colors.

    Returns
    -------
    Palette
        Resolved colors

    Raises
    ------
    ValidationError
        If a theme name is not recognized.

    """
    if isinstance(theme, Palette):
        return theme
    dark = is_dark_theme(theme)
    logger.debug(f"Resolved theme {theme!r} to {'dark' if dark else 'light'} palette")
    return DARK_PALETTE if dark else LIGHT_PALETTE


__all__ = [
    "DARK_PALETTE",
    "LIGHT_PALETTE",
    "Palette",
    "Theme",
    "ThemeLike",
    "is_dark_theme",
    "resolve_palette",
]
