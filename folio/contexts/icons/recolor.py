"""
Textual SVG recoloring.

Rewrites raw SVG markup so monochrome icons pick up a requested color before the
markup is parsed. This is a heuristic text rewrite, not a structural transform:

- `currentColor` paints (fill/stroke attributes and inline style declarations)
  become the color
- explicit default-black fills (`#000`, `#000000`, `black`) become the color
- if no fill attribute appears anywhere, one is injected on every path, circle,
  rect and polygon start tag

Gradients, CSS classes and group-level fills set through other means are left
alone. Icons relying on those keep their original colors.
"""

import re

from folio.contexts.styling.resolver import HEX_COLOR

CURRENT_COLOR_ATTRIBUTE = re.compile(r"""\b(fill|stroke)\s*=\s*(["'])currentColor\2""", re.IGNORECASE)
CURRENT_COLOR_STYLE = re.compile(r"""\b(fill|stroke)\s*:\s*currentColor\b""", re.IGNORECASE)
DEFAULT_BLACK_FILL = re.compile(r"""\bfill\s*=\s*(["'])(?:#000|#000000|black)\1""", re.IGNORECASE)
ANY_FILL_ATTRIBUTE = re.compile(r"""\bfill\s*=\s*["']""", re.IGNORECASE)
SHAPE_START_TAG = re.compile(r"<(path|circle|rect|polygon)(\s)", re.IGNORECASE)


def recolor_svg_markup(markup: str, color: str) -> str:
    """
    Rewrite default and inherited paints in SVG markup to color.

    Args:
        markup: Raw SVG text
        color: Six hex digits, with or without a leading '#'

    Returns:
        Rewritten markup; unchanged when color is not six hex digits
    """
    color = color[1:] if color.startswith("#") else color
    if not HEX_COLOR.match(color):
        return markup
    paint = f"#{color}"

    markup = CURRENT_COLOR_ATTRIBUTE.sub(lambda m: f'{m.group(1)}="{paint}"', markup)
    markup = CURRENT_COLOR_STYLE.sub(lambda m: f"{m.group(1)}:{paint}", markup)
    markup = DEFAULT_BLACK_FILL.sub(f'fill="{paint}"', markup)

    # Icons without any fill (FontAwesome style) rely on the black default
    if not ANY_FILL_ATTRIBUTE.search(markup):
        markup = SHAPE_START_TAG.sub(lambda m: f'<{m.group(1)} fill="{paint}"{m.group(2)}', markup)

    return markup
