"""
SVG Parser

Parses (already recolored) SVG markup into flattened, drawable geometry:
polylines in view-box user space, each shape carrying its resolved paint.

Supported:
- view box (or width/height when no viewBox is declared)
- <g> groups with transforms and inherited paint
- <path> with every command (M L H V C S Q T A Z, absolute and relative)
- <rect> (including rounded corners), <circle>, <ellipse>, <line>, <polyline>, <polygon>
- fill, stroke, opacity, fill-opacity, stroke-opacity, stroke-width, fill-rule and
  color, as attributes or inline style declarations

Not supported (silently skipped): text, <use>, gradients and patterns (url()
paints fall back to black), clipping and masking, CSS stylesheets.
"""

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from PIL import ImageColor

from folio.contexts.icons.exceptions import SVGParseError

Point = Tuple[float, float]
Color = Tuple[int, int, int]
Matrix = Tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
TRANSFORM = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
PATH_COMMANDS = "MmZzLlHhVvCcSsQqTtAa"

# Segments used to flatten curves
CUBIC_SEGMENTS = 16
QUADRATIC_SEGMENTS = 12
ELLIPSE_SEGMENTS = 64
ARC_STEP = math.pi / 16

NON_RENDERED_TAGS = {
    "defs",
    "clipPath",
    "mask",
    "symbol",
    "style",
    "title",
    "desc",
    "metadata",
    "linearGradient",
    "radialGradient",
    "pattern",
    "marker",
    "filter",
    "script",
    "text",
    "use",
}

INHERITED_PROPERTIES = (
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "color",
)

ROOT_STATE = {
    "fill": "black",
    "fill-opacity": "1",
    "fill-rule": "nonzero",
    "stroke": "none",
    "stroke-width": "1",
    "stroke-opacity": "1",
    "color": "black",
}


@dataclass(frozen=True)
class ViewBox:
    min_x: float
    min_y: float
    width: float
    height: float


@dataclass
class Subpath:
    points: List[Point]
    closed: bool = False


@dataclass
class Shape:
    """
    One drawable element with resolved paint.

    Attributes:
        subpaths: Flattened geometry in view-box user space
        fill: Fill color, or None for no fill
        fill_opacity: Effective fill opacity (element and group opacity folded in)
        fill_rule: "nonzero" or "evenodd"
        stroke: Stroke color, or None for no stroke
        stroke_width: Stroke width in user space
        stroke_opacity: Effective stroke opacity
    """

    subpaths: List[Subpath]
    fill: Optional[Color] = (0, 0, 0)
    fill_opacity: float = 1.0
    fill_rule: str = "nonzero"
    stroke: Optional[Color] = None
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0


@dataclass
class VectorIcon:
    view_box: ViewBox
    shapes: List[Shape] = field(default_factory=list)


# ============================================================================
# Attribute helpers
# ============================================================================


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _numbers(value: Optional[str]) -> List[float]:
    return [float(n) for n in NUMBER.findall(value or "")]


def _length(value: Optional[str], default: float = 0.0) -> float:
    """Read a length attribute, ignoring units."""
    if value is None:
        return default
    value = value.strip()
    if value.endswith("%"):
        raise SVGParseError(f"Percentage lengths are not supported: {value!r}")
    match = NUMBER.match(value)
    return float(match.group(0)) if match else default


def _style_declarations(element: ET.Element) -> Dict[str, str]:
    """Presentation attributes overlaid with inline style declarations."""
    props = {}
    for name in INHERITED_PROPERTIES + ("opacity", "display", "visibility"):
        if name in element.attrib:
            props[name] = element.attrib[name].strip()

    for declaration in element.attrib.get("style", "").split(";"):
        if ":" in declaration:
            name, value = declaration.split(":", 1)
            props[name.strip()] = value.strip()
    return props


def _parse_paint(value: str, current_color: str) -> Optional[Color]:
    value = value.strip()
    lowered = value.lower()
    if lowered in ("none", "transparent"):
        return None
    if lowered == "currentcolor":
        return _parse_paint(current_color, "black")
    if lowered.startswith("url("):
        fallback = value[value.find(")") + 1 :].strip()
        return _parse_paint(fallback, current_color) if fallback else (0, 0, 0)
    try:
        return tuple(ImageColor.getrgb(value)[:3])
    except ValueError:
        return (0, 0, 0)


def _opacity(value: Optional[str]) -> float:
    try:
        return min(1.0, max(0.0, float(value)))
    except (TypeError, ValueError):
        return 1.0


# ============================================================================
# Transforms
# ============================================================================


def multiply(m: Matrix, n: Matrix) -> Matrix:
    """Compose two affine matrices; n is applied first."""
    a1, b1, c1, d1, e1, f1 = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def apply(m: Matrix, point: Point) -> Point:
    a, b, c, d, e, f = m
    x, y = point
    return (a * x + c * y + e, b * x + d * y + f)


def parse_transform(value: Optional[str]) -> Matrix:
    """Parse an SVG transform list into one matrix."""
    matrix = IDENTITY
    for name, args in TRANSFORM.findall(value or ""):
        nums = _numbers(args)
        if name == "matrix" and len(nums) == 6:
            step = tuple(nums)
        elif name == "translate" and nums:
            step = (1.0, 0.0, 0.0, 1.0, nums[0], nums[1] if len(nums) > 1 else 0.0)
        elif name == "scale" and nums:
            sx = nums[0]
            sy = nums[1] if len(nums) > 1 else sx
            step = (sx, 0.0, 0.0, sy, 0.0, 0.0)
        elif name == "rotate" and nums:
            angle = math.radians(nums[0])
            cos, sin = math.cos(angle), math.sin(angle)
            step = (cos, sin, -sin, cos, 0.0, 0.0)
            if len(nums) == 3:
                cx, cy = nums[1], nums[2]
                step = multiply(
                    multiply((1.0, 0.0, 0.0, 1.0, cx, cy), step), (1.0, 0.0, 0.0, 1.0, -cx, -cy)
                )
        elif name == "skewX" and nums:
            step = (1.0, 0.0, math.tan(math.radians(nums[0])), 1.0, 0.0, 0.0)
        elif name == "skewY" and nums:
            step = (1.0, math.tan(math.radians(nums[0])), 0.0, 1.0, 0.0, 0.0)
        else:
            raise SVGParseError(f"Malformed transform: {name}({args})")
        matrix = multiply(matrix, step)
    return matrix


# ============================================================================
# Curve flattening
# ============================================================================


def _cubic(p0: Point, p1: Point, p2: Point, p3: Point) -> List[Point]:
    points = []
    for i in range(1, CUBIC_SEGMENTS + 1):
        t = i / CUBIC_SEGMENTS
        mt = 1 - t
        points.append(
            (
                mt**3 * p0[0] + 3 * mt**2 * t * p1[0] + 3 * mt * t**2 * p2[0] + t**3 * p3[0],
                mt**3 * p0[1] + 3 * mt**2 * t * p1[1] + 3 * mt * t**2 * p2[1] + t**3 * p3[1],
            )
        )
    return points


def _quadratic(p0: Point, p1: Point, p2: Point) -> List[Point]:
    points = []
    for i in range(1, QUADRATIC_SEGMENTS + 1):
        t = i / QUADRATIC_SEGMENTS
        mt = 1 - t
        points.append(
            (
                mt**2 * p0[0] + 2 * mt * t * p1[0] + t**2 * p2[0],
                mt**2 * p0[1] + 2 * mt * t * p1[1] + t**2 * p2[1],
            )
        )
    return points


def _arc(
    start: Point,
    rx: float,
    ry: float,
    rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Point,
) -> List[Point]:
    """Flatten an endpoint-parameterized elliptical arc (SVG implementation notes F.6.5)."""
    x1, y1 = start
    x2, y2 = end
    if (x1, y1) == (x2, y2):
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return [end]

    phi = math.radians(rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    dx2, dy2 = (x1 - x2) / 2, (y1 - y2) / 2
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    # Scale radii up when the endpoints cannot be reached
    radii_check = (x1p**2) / (rx**2) + (y1p**2) / (ry**2)
    if radii_check > 1:
        scale = math.sqrt(radii_check)
        rx, ry = rx * scale, ry * scale

    numerator = rx**2 * ry**2 - rx**2 * y1p**2 - ry**2 * x1p**2
    denominator = rx**2 * y1p**2 + ry**2 * x1p**2
    coef = math.sqrt(max(0.0, numerator / denominator)) if denominator else 0.0
    if large_arc == sweep:
        coef = -coef

    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx
    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    delta = theta2 - theta1
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    steps = max(2, math.ceil(abs(delta) / ARC_STEP))
    points = []
    for i in range(1, steps + 1):
        theta = theta1 + delta * i / steps
        ex, ey = rx * math.cos(theta), ry * math.sin(theta)
        points.append((cx + ex * cos_phi - ey * sin_phi, cy + ex * sin_phi + ey * cos_phi))
    points[-1] = end
    return points


def _ellipse(cx: float, cy: float, rx: float, ry: float) -> List[Point]:
    return [
        (
            cx + rx * math.cos(2 * math.pi * i / ELLIPSE_SEGMENTS),
            cy + ry * math.sin(2 * math.pi * i / ELLIPSE_SEGMENTS),
        )
        for i in range(ELLIPSE_SEGMENTS)
    ]


# ============================================================================
# Path data
# ============================================================================


class _PathScanner:
    """Tokenizer for path data; arc flags may be written without separators."""

    def __init__(self, data: str):
        self.data = data
        self.pos = 0

    def _skip(self) -> None:
        while self.pos < len(self.data) and self.data[self.pos] in " \t\r\n,":
            self.pos += 1

    def at_end(self) -> bool:
        self._skip()
        return self.pos >= len(self.data)

    def command(self) -> Optional[str]:
        self._skip()
        if self.pos < len(self.data) and self.data[self.pos] in PATH_COMMANDS:
            self.pos += 1
            return self.data[self.pos - 1]
        return None

    def number(self) -> float:
        self._skip()
        match = NUMBER.match(self.data, self.pos)
        if not match:
            raise SVGParseError(f"Expected number in path data at offset {self.pos}")
        self.pos = match.end()
        return float(match.group(0))

    def flag(self) -> bool:
        self._skip()
        if self.pos < len(self.data) and self.data[self.pos] in "01":
            self.pos += 1
            return self.data[self.pos - 1] == "1"
        raise SVGParseError(f"Expected arc flag in path data at offset {self.pos}")


def _reflect(x: float, y: float, control: Optional[Point]) -> Point:
    """Reflect the previous control point through the current point."""
    if control is None:
        return (x, y)
    return (2 * x - control[0], 2 * y - control[1])


def parse_path_data(data: str) -> List[Subpath]:
    """
    Parse a path 'd' attribute into flattened subpaths.

    Raises:
        SVGParseError: On malformed path data
    """
    scanner = _PathScanner(data or "")
    subpaths: List[Subpath] = []
    current: Optional[Subpath] = None
    x = y = 0.0
    start_x = start_y = 0.0
    last_control: Optional[Point] = None
    previous = ""
    command = None

    def begin(px: float, py: float) -> None:
        nonlocal current
        current = Subpath(points=[(px, py)])
        subpaths.append(current)

    def extend(points: List[Point]) -> None:
        if current is None:
            begin(x, y)
        current.points.extend(points)

    while not scanner.at_end():
        explicit = scanner.command()
        if explicit is not None:
            command = explicit
        elif command is None or command in "Zz":
            raise SVGParseError(f"Path data must start with a command: {data[:40]!r}")
        elif command == "M":
            command = "L"
        elif command == "m":
            command = "l"

        relative = command.islower()
        upper = command.upper()
        ox, oy = (x, y) if relative else (0.0, 0.0)

        if upper == "Z":
            if current is not None:
                current.closed = True
            x, y = start_x, start_y
            current = None
            last_control = None
            previous = upper
            continue

        if upper == "M":
            x, y = ox + scanner.number(), oy + scanner.number()
            start_x, start_y = x, y
            begin(x, y)
            last_control = None
        elif upper == "L":
            target = (ox + scanner.number(), oy + scanner.number())
            extend([target])
            x, y = target
            last_control = None
        elif upper == "H":
            target = (ox + scanner.number(), y)
            extend([target])
            x = target[0]
            last_control = None
        elif upper == "V":
            target = (x, oy + scanner.number())
            extend([target])
            y = target[1]
            last_control = None
        elif upper == "C":
            c1 = (ox + scanner.number(), oy + scanner.number())
            c2 = (ox + scanner.number(), oy + scanner.number())
            end = (ox + scanner.number(), oy + scanner.number())
            extend(_cubic((x, y), c1, c2, end))
            last_control = c2
            x, y = end
        elif upper == "S":
            c1 = _reflect(x, y, last_control) if previous in ("C", "S") else (x, y)
            c2 = (ox + scanner.number(), oy + scanner.number())
            end = (ox + scanner.number(), oy + scanner.number())
            extend(_cubic((x, y), c1, c2, end))
            last_control = c2
            x, y = end
        elif upper == "Q":
            c1 = (ox + scanner.number(), oy + scanner.number())
            end = (ox + scanner.number(), oy + scanner.number())
            extend(_quadratic((x, y), c1, end))
            last_control = c1
            x, y = end
        elif upper == "T":
            c1 = _reflect(x, y, last_control) if previous in ("Q", "T") else (x, y)
            end = (ox + scanner.number(), oy + scanner.number())
            extend(_quadratic((x, y), c1, end))
            last_control = c1
            x, y = end
        elif upper == "A":
            rx, ry, rotation = scanner.number(), scanner.number(), scanner.number()
            large_arc, sweep = scanner.flag(), scanner.flag()
            end = (ox + scanner.number(), oy + scanner.number())
            extend(_arc((x, y), rx, ry, rotation, large_arc, sweep, end))
            last_control = None
            x, y = end

        previous = upper

    return [s for s in subpaths if len(s.points) > 1]


# ============================================================================
# Elements
# ============================================================================


def _element_subpaths(tag: str, element: ET.Element) -> List[Subpath]:
    attr = element.attrib.get

    if tag == "path":
        return parse_path_data(attr("d", ""))

    if tag == "rect":
        x, y = _length(attr("x")), _length(attr("y"))
        width, height = _length(attr("width")), _length(attr("height"))
        if width <= 0 or height <= 0:
            return []
        rx_attr, ry_attr = attr("rx"), attr("ry")
        rx = _length(rx_attr if rx_attr is not None else ry_attr)
        ry = _length(ry_attr if ry_attr is not None else rx_attr)
        rx, ry = min(rx, width / 2), min(ry, height / 2)
        if rx <= 0 or ry <= 0:
            corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
            return [Subpath(corners, closed=True)]
        points: List[Point] = [(x + rx, y)]
        points += [(x + width - rx, y)]
        points += _arc((x + width - rx, y), rx, ry, 0, False, True, (x + width, y + ry))
        points += [(x + width, y + height - ry)]
        points += _arc((x + width, y + height - ry), rx, ry, 0, False, True, (x + width - rx, y + height))
        points += [(x + rx, y + height)]
        points += _arc((x + rx, y + height), rx, ry, 0, False, True, (x, y + height - ry))
        points += [(x, y + ry)]
        points += _arc((x, y + ry), rx, ry, 0, False, True, (x + rx, y))
        return [Subpath(points, closed=True)]

    if tag == "circle":
        r = _length(attr("r"))
        if r <= 0:
            return []
        return [Subpath(_ellipse(_length(attr("cx")), _length(attr("cy")), r, r), closed=True)]

    if tag == "ellipse":
        rx, ry = _length(attr("rx")), _length(attr("ry"))
        if rx <= 0 or ry <= 0:
            return []
        return [Subpath(_ellipse(_length(attr("cx")), _length(attr("cy")), rx, ry), closed=True)]

    if tag == "line":
        start = (_length(attr("x1")), _length(attr("y1")))
        end = (_length(attr("x2")), _length(attr("y2")))
        return [Subpath([start, end])]

    if tag in ("polyline", "polygon"):
        nums = _numbers(attr("points"))
        points = list(zip(nums[0::2], nums[1::2]))
        if len(points) < 2:
            return []
        return [Subpath(points, closed=(tag == "polygon"))]

    return []


DRAWABLE_TAGS = {"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"}


def _walk(
    element: ET.Element,
    matrix: Matrix,
    inherited: Dict[str, str],
    opacity: float,
    shapes: List[Shape],
) -> None:
    tag = _local_name(element.tag)
    if tag in NON_RENDERED_TAGS:
        return

    props = _style_declarations(element)
    if props.get("display") == "none":
        return

    state = {**inherited, **{k: v for k, v in props.items() if k in INHERITED_PROPERTIES}}
    matrix = multiply(matrix, parse_transform(element.attrib.get("transform")))
    opacity = opacity * _opacity(props.get("opacity", "1"))

    if tag in DRAWABLE_TAGS:
        if props.get("visibility") in ("hidden", "collapse"):
            return
        subpaths = _element_subpaths(tag, element)
        if not subpaths:
            return
        transformed = [Subpath([apply(matrix, p) for p in s.points], s.closed) for s in subpaths]
        a, b, c, d = matrix[:4]
        scale = math.sqrt(abs(a * d - b * c))
        fill = None if tag == "line" else _parse_paint(state["fill"], state["color"])
        shapes.append(
            Shape(
                subpaths=transformed,
                fill=fill,
                fill_opacity=_opacity(state["fill-opacity"]) * opacity,
                fill_rule="evenodd" if state["fill-rule"].strip() == "evenodd" else "nonzero",
                stroke=_parse_paint(state["stroke"], state["color"]),
                stroke_width=_length(state["stroke-width"], 1.0) * scale,
                stroke_opacity=_opacity(state["stroke-opacity"]) * opacity,
            )
        )
        return

    for child in element:
        _walk(child, matrix, state, opacity, shapes)


def _view_box(root: ET.Element) -> ViewBox:
    nums = _numbers(root.attrib.get("viewBox"))
    if len(nums) == 4:
        view_box = ViewBox(*nums)
    elif "width" in root.attrib and "height" in root.attrib:
        view_box = ViewBox(0.0, 0.0, _length(root.attrib["width"]), _length(root.attrib["height"]))
    else:
        raise SVGParseError("SVG declares neither a viewBox nor width/height")

    if view_box.width <= 0 or view_box.height <= 0:
        raise SVGParseError(f"Degenerate view box {view_box.width}x{view_box.height}")
    return view_box


def parse_svg(markup: str) -> VectorIcon:
    """
    Parse SVG markup into a VectorIcon.

    Args:
        markup: SVG document text

    Returns:
        VectorIcon with its view box and flattened shapes in document order

    Raises:
        SVGParseError: If the markup is not an SVG document or has bad geometry
    """
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as e:
        raise SVGParseError(f"Invalid SVG markup: {e}") from e

    if _local_name(root.tag) != "svg":
        raise SVGParseError(f"Root element is <{_local_name(root.tag)}>, expected <svg>")

    view_box = _view_box(root)
    shapes: List[Shape] = []

    root_props = _style_declarations(root)
    state = {**ROOT_STATE, **{k: v for k, v in root_props.items() if k in INHERITED_PROPERTIES}}
    opacity = _opacity(root_props.get("opacity", "1"))
    matrix = parse_transform(root.attrib.get("transform"))

    for child in root:
        _walk(child, matrix, state, opacity, shapes)

    return VectorIcon(view_box=view_box, shapes=shapes)
