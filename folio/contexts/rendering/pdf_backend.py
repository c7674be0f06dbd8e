"""
PDF backend built on fpdf2.

Lays rows out top to bottom on a 12-unit column grid spanning the page width
between the margins. Rows never split across pages: a row that does not fit
below the cursor starts a new page.

Only the PDF core fonts are used (no font embedding), so text is reduced to
latin-1 before drawing.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from folio.contexts.composition.render_commands import (
    GRID_COLUMNS,
    Column,
    ImagePrimitive,
    LineOrientation,
    LinePrimitive,
    TextPrimitive,
)
from folio.contexts.rendering.logger import _log_debug, _log_warning
from folio.contexts.styling.config_data_structure import PageSettings
from folio.contexts.styling.resolver import RGB, resolve_color

PT_TO_MM = 25.4 / 72
LINE_HEIGHT_FACTOR = 1.25

PAGE_FORMATS = ("a3", "a4", "a5", "letter", "legal")
CORE_FONTS = ("courier", "helvetica", "times", "symbol", "zapfdingbats")
FONT_ALIASES = {"arial": "helvetica", "sans": "helvetica", "serif": "times", "mono": "courier"}

# Typographic characters outside latin-1
TEXT_REPLACEMENTS = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "•": "-",
    "…": "...",
}


def core_font_family(family: str) -> str:
    """Map a configured family name onto a PDF core font."""
    lowered = (family or "").strip().lower()
    lowered = FONT_ALIASES.get(lowered, lowered)
    return lowered if lowered in CORE_FONTS else "helvetica"


def latin1_text(text: str) -> str:
    for char, replacement in TEXT_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", "replace").decode("latin-1")


def line_height(size: float) -> float:
    """Height in mm of one line of text at size points."""
    return size * PT_TO_MM * LINE_HEIGHT_FACTOR


class FolioPDF(FPDF):
    """FPDF document that paints an optional page background."""

    def __init__(self, page_format: str, background: Optional[RGB] = None):
        super().__init__(orientation="portrait", unit="mm", format=page_format)
        self.background = background

    def header(self) -> None:
        if self.background is not None:
            self.set_fill_color(*self.background)
            self.rect(0, 0, self.w, self.h, style="F")


class FpdfBackend:
    """
    Document backend writing a PDF with fpdf2.

    Attributes:
        pdf: Underlying FPDF document
        rows_added: Number of rows drawn so far
    """

    def __init__(self, page: PageSettings, colors: Optional[Dict[str, str]] = None):
        colors = colors or {}
        page_format = (page.page_size or "A4").lower()
        if page_format not in PAGE_FORMATS:
            _log_warning(f"Unknown page size '{page.page_size}', using A4")
            page_format = "a4"

        background = None
        if page.background_color:
            background = resolve_color(page.background_color, colors)

        self.pdf = FolioPDF(page_format, background)
        self.pdf.set_margins(page.margins.left, page.margins.top, page.margins.right)
        self.pdf.set_auto_page_break(auto=False, margin=page.margins.bottom)
        self.pdf.add_page()
        self.rows_added = 0

    @property
    def column_unit(self) -> float:
        return self.pdf.epw / GRID_COLUMNS

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    def add_row(self, height: float, columns: Sequence[Column]) -> None:
        """Draw one row and advance the cursor below it."""
        needed = max([height] + [self._natural_height(c) for c in columns])
        if self.pdf.get_y() + needed > self.pdf.h - self.pdf.b_margin:
            self.pdf.add_page()

        top = self.pdf.get_y()
        x = self.pdf.l_margin
        bottom = top + height

        for column in columns:
            width = column.weight * self.column_unit
            primitive = column.primitive
            if isinstance(primitive, TextPrimitive):
                bottom = max(bottom, self._draw_text(primitive, x, top, width))
            elif isinstance(primitive, ImagePrimitive):
                self._draw_image(primitive, x, top, width, height)
            elif isinstance(primitive, LinePrimitive):
                self._draw_line(primitive, x, top, width, height)
            x += width

        self.pdf.set_xy(self.pdf.l_margin, bottom)
        self.rows_added += 1

    def _natural_height(self, column: Column) -> float:
        if isinstance(column.primitive, TextPrimitive):
            return column.primitive.top + line_height(column.primitive.size)
        return 0.0

    def _draw_text(self, text: TextPrimitive, x: float, top: float, width: float) -> float:
        self.pdf.set_font(core_font_family(text.family), text.style.value, text.size)
        self.pdf.set_text_color(*text.color)
        self.pdf.set_xy(x + text.left, top + text.top)
        self.pdf.multi_cell(
            max(width - text.left, 1.0),
            line_height(text.size),
            latin1_text(text.text),
            align=text.align.value,
            link=text.hyperlink or "",
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        return self.pdf.get_y()

    def _draw_image(self, image: ImagePrimitive, x: float, top: float, width: float, height: float) -> None:
        cell = min(width, height) if height > 0 else width
        size = cell * image.percent / 100
        if size <= 0:
            return
        path = Path(image.path)
        if not path.exists():
            _log_debug(f"Image vanished before drawing: {path}")
            return
        self.pdf.image(
            str(path), x=x + image.left, y=top + image.top, w=size, h=size, keep_aspect_ratio=True
        )

    def _draw_line(self, line: LinePrimitive, x: float, top: float, width: float, height: float) -> None:
        self.pdf.set_draw_color(*line.color)
        self.pdf.set_line_width(line.thickness * PT_TO_MM)
        if line.orientation == LineOrientation.HORIZONTAL:
            length = width * line.size_percent / 100
            y = top + height * line.offset_percent / 100
            start = x + (width - length) / 2
            self.pdf.line(start, y, start + length, y)
        else:
            length = height * line.size_percent / 100
            line_x = x + width * line.offset_percent / 100
            start = top + (height - length) / 2
            self.pdf.line(line_x, start, line_x, start + length)

    def save(self, output_path: Path) -> Path:
        """Write the PDF, creating parent directories as needed."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.pdf.output(str(output_path))
        return output_path
