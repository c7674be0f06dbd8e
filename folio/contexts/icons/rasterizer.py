"""
Rasterizer

Scan-converts a VectorIcon into an RGBA pixel buffer.

Coverage is computed per shape with vertical supersampling (several sample
scanlines per pixel row) and exact horizontal span coverage, which gives
anti-aliased edges without an oversized intermediate buffer. Shapes are
composited in document order with the source-over operator.

Strokes are converted to fillable outlines: one quad per segment plus a round
join or cap disc at every vertex, all wound the same way and filled with the
nonzero rule so overlaps merge.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image

from folio.contexts.icons.exceptions import RasterizationError
from folio.contexts.icons.svg_parser import Point, Subpath, VectorIcon

# Sample scanlines per pixel row
SUPERSAMPLE = 4
JOIN_SEGMENTS = 16


def compute_raster_size(view_width: float, view_height: float, size: int) -> Tuple[int, int]:
    """
    Compute raster dimensions for a view box.

    The larger side maps to size; the smaller side scales proportionally and is
    rounded to the nearest pixel (never below 1).

    Examples:
        >>> compute_raster_size(512, 448, 64)
        (64, 56)
    """
    if size <= 0:
        raise RasterizationError(f"Raster size must be positive, got {size}")
    if view_width <= 0 or view_height <= 0:
        raise RasterizationError(f"Degenerate view box {view_width}x{view_height}")

    if view_width >= view_height:
        return size, max(1, int(round(size * view_height / view_width)))
    return max(1, int(round(size * view_width / view_height))), size


# ============================================================================
# Geometry
# ============================================================================


def _signed_area(points: Sequence[Point]) -> float:
    area = 0.0
    for i, (x0, y0) in enumerate(points):
        x1, y1 = points[(i + 1) % len(points)]
        area += x0 * y1 - x1 * y0
    return area / 2


def _oriented(points: List[Point]) -> List[Point]:
    """Return points wound counter-clockwise (positive signed area)."""
    return points if _signed_area(points) >= 0 else list(reversed(points))


def _disc(center: Point, radius: float) -> List[Point]:
    cx, cy = center
    return [
        (
            cx + radius * math.cos(2 * math.pi * i / JOIN_SEGMENTS),
            cy + radius * math.sin(2 * math.pi * i / JOIN_SEGMENTS),
        )
        for i in range(JOIN_SEGMENTS)
    ]


def stroke_outline(subpaths: Sequence[Subpath], width: float) -> List[List[Point]]:
    """
    Convert stroked polylines into closed polygons covering the stroke area.

    Args:
        subpaths: Polylines in pixel space
        width: Stroke width in pixel space

    Returns:
        Polygons to be filled with the nonzero rule
    """
    half = width / 2
    if half <= 0:
        return []

    polygons: List[List[Point]] = []
    for subpath in subpaths:
        points = list(subpath.points)
        if subpath.closed and points[0] != points[-1]:
            points.append(points[0])

        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            length = math.hypot(x1 - x0, y1 - y0)
            if length == 0:
                continue
            nx, ny = -(y1 - y0) / length * half, (x1 - x0) / length * half
            quad = [(x0 + nx, y0 + ny), (x1 + nx, y1 + ny), (x1 - nx, y1 - ny), (x0 - nx, y0 - ny)]
            polygons.append(_oriented(quad))

        for vertex in points:
            polygons.append(_oriented(_disc(vertex, half)))

    return polygons


def _edges(polygons: Sequence[Sequence[Point]]) -> np.ndarray:
    """
    Build an edge table from closed polygons.

    Returns:
        Array of shape (n, 5): x_top, y_top, y_bottom, dx/dy, winding direction
    """
    rows = []
    for polygon in polygons:
        count = len(polygon)
        if count < 3:
            continue
        for i in range(count):
            x0, y0 = polygon[i]
            x1, y1 = polygon[(i + 1) % count]
            if y0 == y1:
                continue
            direction = 1.0 if y1 > y0 else -1.0
            if y0 > y1:
                x0, y0, x1, y1 = x1, y1, x0, y0
            rows.append((x0, y0, y1, (x1 - x0) / (y1 - y0), direction))

    if not rows:
        return np.empty((0, 5), dtype=np.float64)
    return np.asarray(rows, dtype=np.float64)


def _accumulate_span(row: np.ndarray, start: float, end: float, weight: float) -> None:
    """Add exact horizontal coverage of [start, end) to a pixel row."""
    width = row.shape[0]
    start, end = max(0.0, start), min(float(width), end)
    if end <= start:
        return

    first, last = int(math.floor(start)), int(math.floor(end))
    if first == last:
        row[first] += (end - start) * weight
        return

    row[first] += (first + 1 - start) * weight
    row[first + 1 : last] += weight
    if last < width:
        row[last] += (end - last) * weight


def coverage_mask(
    polygons: Sequence[Sequence[Point]], width: int, height: int, fill_rule: str = "nonzero"
) -> np.ndarray:
    """
    Scan-convert polygons into a coverage mask.

    Args:
        polygons: Closed polygons in pixel space
        width: Mask width
        height: Mask height
        fill_rule: "nonzero" or "evenodd"

    Returns:
        float64 array (height, width) with coverage in [0, 1]
    """
    mask = np.zeros((height, width), dtype=np.float64)
    edges = _edges(polygons)
    if edges.shape[0] == 0:
        return mask

    x_top, y_top, y_bottom, slope, direction = edges.T
    weight = 1.0 / SUPERSAMPLE
    first_row = max(0, int(math.floor(y_top.min())))
    last_row = min(height, int(math.ceil(y_bottom.max())))

    for py in range(first_row, last_row):
        row = mask[py]
        for sub in range(SUPERSAMPLE):
            sample_y = py + (sub + 0.5) / SUPERSAMPLE
            active = (y_top <= sample_y) & (sample_y < y_bottom)
            if not active.any():
                continue

            xs = x_top[active] + (sample_y - y_top[active]) * slope[active]
            winds = direction[active]
            order = np.argsort(xs, kind="stable")
            xs, winds = xs[order], winds[order]
            running = np.cumsum(winds)

            if fill_rule == "evenodd":
                inside = (np.arange(1, xs.shape[0] + 1) % 2) == 1
            else:
                inside = running != 0

            for i in np.nonzero(inside[:-1])[0]:
                _accumulate_span(row, xs[i], xs[i + 1], weight)

    np.clip(mask, 0.0, 1.0, out=mask)
    return mask


# ============================================================================
# Compositing
# ============================================================================


def _to_pixels(subpaths: Sequence[Subpath], icon: VectorIcon, scale_x: float, scale_y: float) -> List[Subpath]:
    view_box = icon.view_box
    return [
        Subpath(
            [((x - view_box.min_x) * scale_x, (y - view_box.min_y) * scale_y) for x, y in s.points],
            s.closed,
        )
        for s in subpaths
    ]


def _composite(buffer: np.ndarray, coverage: np.ndarray, color: Tuple[int, int, int], alpha: float) -> None:
    """Source-over a solid color with per-pixel coverage onto a premultiplied buffer."""
    source_alpha = coverage * alpha
    if not source_alpha.any():
        return
    keep = 1.0 - source_alpha
    for channel in range(3):
        buffer[..., channel] = color[channel] / 255.0 * source_alpha + buffer[..., channel] * keep
    buffer[..., 3] = source_alpha + buffer[..., 3] * keep


def rasterize(icon: VectorIcon, width: int, height: int, opacity: float = 1.0) -> np.ndarray:
    """
    Rasterize an icon to an RGBA buffer.

    Args:
        icon: Parsed vector icon
        width: Raster width in pixels
        height: Raster height in pixels
        opacity: Global opacity applied to every shape

    Returns:
        uint8 array (height, width, 4), straight (non-premultiplied) alpha
    """
    if width <= 0 or height <= 0:
        raise RasterizationError(f"Invalid raster size {width}x{height}")

    scale_x = width / icon.view_box.width
    scale_y = height / icon.view_box.height
    stroke_scale = math.sqrt(scale_x * scale_y)

    # Premultiplied RGBA in [0, 1]
    buffer = np.zeros((height, width, 4), dtype=np.float64)

    for shape in icon.shapes:
        pixel_paths = _to_pixels(shape.subpaths, icon, scale_x, scale_y)

        if shape.fill is not None and shape.fill_opacity > 0:
            polygons = [s.points for s in pixel_paths]
            coverage = coverage_mask(polygons, width, height, shape.fill_rule)
            _composite(buffer, coverage, shape.fill, shape.fill_opacity * opacity)

        if shape.stroke is not None and shape.stroke_opacity > 0 and shape.stroke_width > 0:
            polygons = stroke_outline(pixel_paths, shape.stroke_width * stroke_scale)
            coverage = coverage_mask(polygons, width, height, "nonzero")
            _composite(buffer, coverage, shape.stroke, shape.stroke_opacity * opacity)

    alpha = buffer[..., 3]
    rgba = np.zeros_like(buffer)
    visible = alpha > 0
    for channel in range(3):
        rgba[..., channel][visible] = buffer[..., channel][visible] / alpha[visible]
    rgba[..., 3] = alpha

    return np.clip(np.rint(rgba * 255.0), 0, 255).astype(np.uint8)


def to_image(pixels: np.ndarray) -> Image.Image:
    """Wrap an RGBA buffer as a Pillow image."""
    return Image.fromarray(pixels)


def write_png(pixels: np.ndarray, path) -> None:
    """Encode an RGBA buffer as PNG."""
    try:
        to_image(pixels).save(path, format="PNG")
    except (OSError, ValueError) as e:
        raise RasterizationError(f"Could not write PNG to {path}: {e}") from e
