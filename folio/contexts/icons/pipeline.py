"""
Icon Asset Pipeline

Turns a named vector icon, at a requested color and pixel size, into a cached PNG:

1. Map the icon key to an SVG file stem (unknown key -> no icon)
2. Resolve the color through the palette ("000000" when none is configured)
3. Derive the cache path from (stem, color, size)
4. Return the cached file if it exists (no parsing)
5. Find <stem>.svg in the first search directory that has it
6. Recolor the markup (textual heuristic)
7. Parse the markup and read its view box
8. Scale so the longer side is size pixels, preserving aspect ratio
9. Rasterize with anti-aliasing at full opacity
10. Write the PNG atomically into the cache
11. Return the path

Every failure in steps 5-10 is logged and reported as None so callers can
degrade to text-only rendering.
"""

import time
from pathlib import Path
from typing import Dict, List, Optional

from folio.contexts.icons.cache import IconCache, IconCacheKey
from folio.contexts.icons.exceptions import IconConversionError, IconNotFoundError
from folio.contexts.icons.logger import (
    _log_debug,
    log_cache_hit,
    log_icon_conversion,
    log_icon_failure,
)
from folio.contexts.icons.rasterizer import compute_raster_size, rasterize, write_png
from folio.contexts.icons.recolor import recolor_svg_markup
from folio.contexts.icons.svg_parser import parse_svg
from folio.contexts.styling.config_data_structure import DocumentConfig, IconConfig
from folio.contexts.styling.resolver import color_hex

SVG_EXTENSION = ".svg"


def find_svg(stem: str, search_paths: List[Path]) -> Path:
    """
    Find <stem>.svg in the first search directory containing it.

    Raises:
        IconNotFoundError: If no directory contains the file
    """
    for directory in search_paths:
        candidate = Path(directory) / f"{stem}{SVG_EXTENSION}"
        if candidate.is_file():
            return candidate
    raise IconNotFoundError(stem, [Path(p) for p in search_paths])


def convert_svg_to_png(svg_path: Path, write_to: Path, size: int, color: str) -> tuple:
    """
    Recolor, parse and rasterize one SVG file into a PNG.

    Args:
        svg_path: Source SVG
        write_to: Destination PNG path
        size: Pixel size of the longer side
        color: Six hex digits without '#'

    Returns:
        (width, height) of the written raster
    """
    markup = svg_path.read_text(encoding="utf-8")
    markup = recolor_svg_markup(markup, color)

    icon = parse_svg(markup)
    width, height = compute_raster_size(icon.view_box.width, icon.view_box.height, size)

    pixels = rasterize(icon, width, height, opacity=1.0)
    write_png(pixels, write_to)
    return width, height


class IconPipeline:
    """
    Icon pipeline bound to one icon configuration and palette.

    Attributes:
        icons: Icon settings (search paths, output dir, default size/color, mappings)
        colors: Palette used to resolve color references
        cache: On-disk raster cache
    """

    def __init__(self, icons: IconConfig, colors: Dict[str, str]):
        self.icons = icons
        self.colors = colors
        self.cache = IconCache(icons.output_path)

    @classmethod
    def from_config(cls, config: DocumentConfig) -> "IconPipeline":
        return cls(config.icons, config.colors)

    def cache_key(
        self, icon_key: str, size: Optional[int] = None, color_ref: Optional[str] = None
    ) -> Optional[IconCacheKey]:
        """Cache key for a request, or None if the icon key is unmapped."""
        if not icon_key:
            return None
        stem = self.icons.mappings.get(icon_key)
        if not stem:
            return None
        size = int(size or self.icons.default_size)
        color = color_hex(color_ref or self.icons.color, self.colors)
        return IconCacheKey(name=stem, color=color, size=size)

    def ensure_icon(
        self, icon_key: str, size: Optional[int] = None, color_ref: Optional[str] = None
    ) -> Optional[Path]:
        """
        Get the cached raster for an icon, converting it on first request.

        Args:
            icon_key: Key looked up in the icon mappings
            size: Pixel size of the longer side (default: icons.default_size)
            color_ref: Palette name or hex (default: icons.color)

        Returns:
            Path to the PNG, or None when the icon is unmapped or conversion failed
        """
        key = self.cache_key(icon_key, size, color_ref)
        if key is None:
            _log_debug(f"No mapping for icon '{icon_key}'")
            return None

        cached = self.cache.lookup(key)
        if cached is not None:
            log_cache_hit(icon_key, cached)
            return cached

        start_time = time.time()
        try:
            svg_path = find_svg(key.name, [Path(p) for p in self.icons.svg_paths])
            dimensions = {}

            def write(temp_path: Path) -> None:
                dimensions["size"] = convert_svg_to_png(svg_path, temp_path, key.size, key.color)

            target = self.cache.store(key, write)
        except (IconConversionError, OSError, ValueError) as e:
            log_icon_failure(icon_key, e)
            return None

        width, height = dimensions["size"]
        log_icon_conversion(icon_key, svg_path, target, width, height, time.time() - start_time)
        return target


def ensure_icon(
    icon_key: str, size: Optional[int], color_ref: Optional[str], config: DocumentConfig
) -> Optional[Path]:
    """
    Get the cached raster for an icon under a document config.

    See IconPipeline.ensure_icon.
    """
    return IconPipeline.from_config(config).ensure_icon(icon_key, size, color_ref)
