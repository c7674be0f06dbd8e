"""
Icons Context

Responsibilities:
- Maps icon keys to SVG files and searches the configured directories
- Recolors monochrome SVG markup to a palette color
- Parses SVG geometry and rasterizes it with anti-aliasing
- Caches rasters on disk keyed by (stem, color, size)

Owns: SVG parsing, rasterization, icon cache
Never: Decides where an icon is placed on the page
"""

from folio.contexts.icons.cache import IconCache, IconCacheKey
from folio.contexts.icons.exceptions import (
    IconConversionError,
    IconNotFoundError,
    RasterizationError,
    SVGParseError,
)
from folio.contexts.icons.pipeline import IconPipeline, ensure_icon
from folio.contexts.icons.rasterizer import compute_raster_size, rasterize, write_png
from folio.contexts.icons.recolor import recolor_svg_markup
from folio.contexts.icons.svg_parser import VectorIcon, parse_svg

__all__ = [
    # Pipeline
    "IconPipeline",
    "ensure_icon",
    # Cache
    "IconCache",
    "IconCacheKey",
    # Conversion steps
    "recolor_svg_markup",
    "parse_svg",
    "VectorIcon",
    "compute_raster_size",
    "rasterize",
    "write_png",
    # Exceptions
    "IconConversionError",
    "IconNotFoundError",
    "SVGParseError",
    "RasterizationError",
]
