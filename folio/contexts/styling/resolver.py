"""
Style Resolver

Resolves symbolic style names (colors, fonts, spacings) to concrete values with a
single level of indirection. Every function here is pure: identical inputs give
identical outputs and nothing is raised for bad data.

Examples:
    >>> hex_to_rgb("#2C3E50")
    RGB(red=44, green=62, blue=80)

    >>> resolve_color("secondary", {"secondary": "#34495E"})
    RGB(red=52, green=73, blue=94)

    >>> resolve_color("34495E", {})
    RGB(red=52, green=73, blue=94)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, NamedTuple, Optional

from folio.contexts.styling.config_data_structure import DocumentConfig, FontDefinition

HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")
DEFAULT_COLOR_HEX = "000000"


class RGB(NamedTuple):
    red: int
    green: int
    blue: int


BLACK = RGB(0, 0, 0)


class FontStyle(str, Enum):
    NORMAL = ""
    BOLD = "B"
    ITALIC = "I"
    BOLD_ITALIC = "BI"


@dataclass(frozen=True)
class ResolvedFont:
    """Font with every symbolic reference made concrete."""

    family: str
    size: float
    style: FontStyle
    color: RGB


def hex_to_rgb(hex_string: str) -> RGB:
    """
    Convert a hex color string to RGB.

    A single leading '#' is stripped. Anything that is not exactly six hex digits
    resolves to black.
    """
    if not isinstance(hex_string, str):
        return BLACK
    value = hex_string[1:] if hex_string.startswith("#") else hex_string
    if not HEX_COLOR.match(value):
        return BLACK
    return RGB(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def resolve_color(name: str, palette: Mapping[str, str]) -> RGB:
    """
    Resolve a palette name or literal hex to RGB.

    Palette entries are looked up once; the entry's value is always treated as a
    literal, never as another palette name.
    """
    if name in palette:
        return hex_to_rgb(palette[name])
    return hex_to_rgb(name)


def color_hex(name: Optional[str], palette: Mapping[str, str]) -> str:
    """
    Resolve a palette name or literal to six hex digits without '#'.

    Used for icon cache keys, so the digits keep the case they were written in.
    Missing or malformed colors give "000000".
    """
    if not name or not isinstance(name, str):
        return DEFAULT_COLOR_HEX
    value = palette.get(name, name)
    if not isinstance(value, str):
        return DEFAULT_COLOR_HEX
    value = value[1:] if value.startswith("#") else value
    if not HEX_COLOR.match(value):
        return DEFAULT_COLOR_HEX
    return value


def resolve_font_style(token: Optional[str]) -> FontStyle:
    """Map a style token to a FontStyle (case-insensitive, default normal)."""
    lowered = (token or "").lower()
    if lowered == "bold":
        return FontStyle.BOLD
    if lowered == "italic":
        return FontStyle.ITALIC
    if lowered == "bolditalic":
        return FontStyle.BOLD_ITALIC
    return FontStyle.NORMAL


def resolve_spacing(name: Optional[str], spacing: Mapping[str, float], default: float = 0.0) -> float:
    """
    Resolve a spacing name to a gap.

    Falls back to reading the name as a number, then to default.
    """
    if not name:
        return default
    if name in spacing:
        return float(spacing[name])
    try:
        return float(name)
    except (TypeError, ValueError):
        return default


def resolve_font(name: str, config: DocumentConfig, fallback: str = "body") -> ResolvedFont:
    """
    Resolve a named font against the config's font table and palette.

    Unknown font names use the fallback font, then the FontDefinition defaults.
    """
    definition = config.fonts.get(name) or config.fonts.get(fallback) or FontDefinition()
    return ResolvedFont(
        family=definition.family,
        size=float(definition.size),
        style=resolve_font_style(definition.style),
        color=resolve_color(definition.color, config.colors),
    )
