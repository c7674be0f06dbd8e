"""
Render Commands

Backend-neutral layout instructions produced by composition. A document is a
sequence of rows; each row has a height and columns laid out on a 12-unit grid,
and each column holds at most one draw primitive.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from folio.contexts.styling.resolver import BLACK, RGB, FontStyle

GRID_COLUMNS = 12


class Alignment(str, Enum):
    LEFT = "L"
    CENTER = "C"
    RIGHT = "R"


class LineOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass
class TextPrimitive:
    """
    A run of text inside a column.

    Attributes:
        text: Text to draw
        family: Font family
        size: Font size in points
        style: Font style
        color: Text color
        align: Horizontal alignment in the cell
        hyperlink: Optional link target
        top: Offset from the top of the cell (mm)
        left: Offset from the left of the cell (mm)
    """

    text: str
    family: str = "Arial"
    size: float = 10.0
    style: FontStyle = FontStyle.NORMAL
    color: RGB = BLACK
    align: Alignment = Alignment.LEFT
    hyperlink: Optional[str] = None
    top: float = 0.0
    left: float = 0.0


@dataclass
class ImagePrimitive:
    """
    Raster image scaled to a percentage of its cell.

    Attributes:
        path: Image file
        percent: Size as percent of the cell
        top: Offset from the top of the cell (mm)
        left: Offset from the left of the cell (mm)
    """

    path: Path
    percent: float = 100.0
    top: float = 0.0
    left: float = 0.0


@dataclass
class LinePrimitive:
    """
    Straight rule inside a cell.

    offset_percent places the line across the cell (50 = centered); size_percent
    is its length relative to the cell.
    """

    orientation: LineOrientation = LineOrientation.HORIZONTAL
    color: RGB = BLACK
    thickness: float = 1.0
    offset_percent: float = 50.0
    size_percent: float = 100.0


Primitive = Union[TextPrimitive, ImagePrimitive, LinePrimitive]


@dataclass
class Column:
    """One grid column; primitive None is an empty spacer."""

    weight: int
    primitive: Optional[Primitive] = None


@dataclass
class Row:
    """
    One layout row.

    Attributes:
        height: Row height (mm)
        columns: Columns, left to right; weights should sum to at most 12
    """

    height: float
    columns: List[Column] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        """Text of every text column, in order."""
        return [c.primitive.text for c in self.columns if isinstance(c.primitive, TextPrimitive)]

    @property
    def images(self) -> List[ImagePrimitive]:
        return [c.primitive for c in self.columns if isinstance(c.primitive, ImagePrimitive)]


def text_row(height: float, primitive: TextPrimitive) -> Row:
    """Single full-width text row."""
    return Row(height, [Column(GRID_COLUMNS, primitive)])
