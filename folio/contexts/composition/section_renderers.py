"""
Section Renderers

Each renderer turns one classified section payload into rows. Renderers are
stateless; everything they need about fonts and spacing arrives pre-resolved in
a ResolvedSectionStyle, so they never look at the config themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import List, Optional

from folio.contexts.composition.logger import _log_debug
from folio.contexts.composition.render_commands import Row, TextPrimitive, text_row
from folio.contexts.content.content_data_structure import (
    EntryItem,
    EntryListPayload,
    ListPayload,
    SectionPayload,
    TextPayload,
)
from folio.contexts.styling.resolver import FontStyle, ResolvedFont

LIST_SEPARATOR = " | "
BULLET_PREFIX = "- "
BULLET_INDENT = 5.0
# Secondary entry lines are one point smaller and two millimetres tighter
DETAIL_SIZE_DELTA = 1.0
DETAIL_SPACING_DELTA = 2.0


@dataclass(frozen=True)
class ResolvedSectionStyle:
    """
    Concrete style for one section's body.

    Attributes:
        body: Font for body text (from the section template)
        emphasis: Font for entry title lines
        spacing: Row height for body rows
        item_spacing: Row height for entry title lines
    """

    body: ResolvedFont
    emphasis: ResolvedFont
    spacing: float
    item_spacing: float


def _text(content: str, font: ResolvedFont, **overrides) -> TextPrimitive:
    primitive = TextPrimitive(
        text=content,
        family=font.family,
        size=font.size,
        style=font.style,
        color=font.color,
    )
    return replace(primitive, **overrides) if overrides else primitive


class SectionRenderer(ABC):
    """Turns a section payload into rows."""

    #: Short name used in logs
    name = "section"

    @abstractmethod
    def render(self, payload: SectionPayload, style: ResolvedSectionStyle) -> List[Row]:
        """
        Render a payload.

        Args:
            payload: Classified section payload
            style: Resolved fonts and spacings

        Returns:
            Rows in display order (may be empty)
        """

    def _unsupported(self, payload: SectionPayload) -> List[Row]:
        _log_debug(f"{self.name} renderer cannot draw {type(payload).__name__}")
        return []


class PlainTextRenderer(SectionRenderer):
    """One body row per paragraph, or per item for list payloads."""

    name = "plain_text"

    def render(self, payload: SectionPayload, style: ResolvedSectionStyle) -> List[Row]:
        if isinstance(payload, TextPayload):
            paragraphs = [p.strip() for p in payload.content.split("\n\n")]
        elif isinstance(payload, ListPayload):
            paragraphs = [item.strip() for item in payload.items]
        else:
            return self._unsupported(payload)

        return [
            text_row(style.spacing, _text(paragraph, style.body))
            for paragraph in paragraphs
            if paragraph
        ]


class DelimitedListRenderer(SectionRenderer):
    """All items on one body row, joined with a separator."""

    name = "delimited_list"

    def __init__(self, separator: str = LIST_SEPARATOR):
        self.separator = separator
        self._fallback = PlainTextRenderer()

    def render(self, payload: SectionPayload, style: ResolvedSectionStyle) -> List[Row]:
        if isinstance(payload, TextPayload):
            return self._fallback.render(payload, style)
        if not isinstance(payload, ListPayload):
            return self._unsupported(payload)

        items = [item for item in payload.items if item]
        if not items:
            return []
        return [text_row(style.spacing, _text(self.separator.join(items), style.body))]


class EntryListRenderer(SectionRenderer):
    """
    Experience/education style entries.

    Per entry:
        title - company        (emphasis font, item spacing)
        location | start - end (body font, one size smaller, italic)
        - bullet               (body font, one size smaller, indented), one per line
    """

    name = "entry_list"

    def __init__(self):
        self._fallback = PlainTextRenderer()

    def render(self, payload: SectionPayload, style: ResolvedSectionStyle) -> List[Row]:
        if not isinstance(payload, EntryListPayload):
            return self._fallback.render(payload, style)

        rows: List[Row] = []
        for entry in payload.entries:
            rows.extend(self._render_entry(entry, style))
        return rows

    def _render_entry(self, entry: EntryItem, style: ResolvedSectionStyle) -> List[Row]:
        rows = []
        detail_spacing = max(0.0, style.item_spacing - DETAIL_SPACING_DELTA)
        detail_size = max(1.0, style.body.size - DETAIL_SIZE_DELTA)

        title_line = entry_title_line(entry)
        if title_line:
            rows.append(text_row(style.item_spacing, _text(title_line, style.emphasis)))

        detail_line = entry_detail_line(entry)
        if detail_line:
            rows.append(
                text_row(
                    detail_spacing,
                    _text(detail_line, style.body, size=detail_size, style=FontStyle.ITALIC),
                )
            )

        for bullet in entry.description:
            rows.append(
                text_row(
                    detail_spacing,
                    _text(
                        f"{BULLET_PREFIX}{bullet}",
                        style.body,
                        size=detail_size,
                        style=FontStyle.NORMAL,
                        left=BULLET_INDENT,
                    ),
                )
            )
        return rows


def entry_title_line(entry: EntryItem) -> Optional[str]:
    """
    'title - company' for jobs, 'degree - institution' for education.

    Examples:
        >>> entry_title_line(EntryItem(title="Engineer", company="Acme"))
        'Engineer - Acme'
    """
    if entry.title or entry.company:
        parts = [entry.title, entry.company]
    else:
        parts = [entry.degree, entry.institution]
    parts = [p for p in parts if p]
    return " - ".join(parts) if parts else None


def entry_detail_line(entry: EntryItem) -> Optional[str]:
    """
    'location | start - end', leaving out whatever is missing.

    Examples:
        >>> entry_detail_line(EntryItem(location="Berlin", start_date="2020", end_date="Present"))
        'Berlin | 2020 - Present'
    """
    parts = []
    if entry.location:
        parts.append(entry.location)
    if entry.start_date or entry.end_date:
        parts.append(f"{entry.start_date or ''} - {entry.end_date or ''}")
    return LIST_SEPARATOR.join(parts) if parts else None
