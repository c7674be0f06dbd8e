"""Custom exceptions for the icons context.

All of these are recoverable: the pipeline catches them, logs them and reports
"no icon" so composition degrades to text-only rows.
"""

from pathlib import Path
from typing import List, Optional


class IconConversionError(Exception):
    """Base class for failures while turning an SVG into a cached raster."""

    pass


class IconNotFoundError(IconConversionError):
    """
    Raised when no search directory contains the requested SVG.

    Attributes:
        stem: SVG file stem that was searched for
        search_paths: Directories searched, in order
    """

    def __init__(self, stem: str, search_paths: Optional[List[Path]] = None):
        self.stem = stem
        self.search_paths = search_paths or []
        searched = ", ".join(str(p) for p in self.search_paths) or "(no search paths)"
        super().__init__(f"Icon '{stem}.svg' not found in: {searched}")


class SVGParseError(IconConversionError):
    """Raised when SVG markup cannot be parsed into drawable geometry."""

    pass


class RasterizationError(IconConversionError):
    """Raised when geometry cannot be rasterized or the raster cannot be written."""

    pass
