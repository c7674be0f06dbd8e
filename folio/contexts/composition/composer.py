"""
Document Composer

Walks content and config into an ordered list of rows:

1. Header (name)
2. Contact block, three fields per row, each with an optional icon
3. Divider
4. Enabled sections with data, ascending by order; each gets an icon + title
   row followed by whatever its registered renderer produces

Sections are dispatched by type tag through a RendererRegistry. A tag with no
renderer is skipped quietly, a missing icon only removes the icon column, and
nothing here raises for bad data.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from folio.contexts.composition.logger import (
    _log_debug,
    log_composition_summary,
    log_section_skipped,
)
from folio.contexts.composition.registries import RendererRegistry, default_registry
from folio.contexts.composition.render_commands import (
    GRID_COLUMNS,
    Column,
    ImagePrimitive,
    LineOrientation,
    LinePrimitive,
    Row,
    TextPrimitive,
)
from folio.contexts.composition.section_renderers import ResolvedSectionStyle
from folio.contexts.content.content_data_structure import ContactField, Content, Section
from folio.contexts.content.placeholders import resolve_placeholders
from folio.contexts.icons.pipeline import IconPipeline
from folio.contexts.styling.config_data_structure import DocumentConfig, SectionTemplate
from folio.contexts.styling.defaults import DEFAULT_ICON_CELL_PERCENT
from folio.contexts.styling.resolver import resolve_color, resolve_font, resolve_spacing

# Blocks drawn by the composer itself rather than through the registry
FIXED_BLOCKS = ("header", "contact")

CONTACT_FIELDS_PER_ROW = 3
ICON_COLUMN_WEIGHT = 1
CONTACT_COLUMN_WEIGHT = GRID_COLUMNS // CONTACT_FIELDS_PER_ROW

HEADER_TOP_OFFSET = 5.0
ICON_TOP_OFFSET = 1.0
CONTACT_TOP_OFFSET = 1.0
TITLE_LEFT_OFFSET = 3.0


@dataclass
class CompositionResult:
    """
    Result of one composition pass.

    Attributes:
        rows: Rows in display order
        rendered: Keys of sections that produced rows, in display order
        skipped: Keys of sections that were left out (disabled, no data, no renderer)
        missing_icons: Icon keys that were requested but could not be produced
    """

    rows: List[Row] = field(default_factory=list)
    rendered: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    missing_icons: List[str] = field(default_factory=list)


class DocumentComposer:
    """
    Composes content into rows under one document config.

    Attributes:
        config: Loaded document config
        registry: Section renderers by type tag
        icons: Icon pipeline bound to the config
    """

    def __init__(
        self,
        config: DocumentConfig,
        registry: Optional[RendererRegistry] = None,
        icons: Optional[IconPipeline] = None,
    ):
        self.config = config
        self.registry = registry or default_registry()
        self.icons = icons or IconPipeline.from_config(config)

    def compose(self, content: Content) -> CompositionResult:
        """
        Compose a full document.

        Args:
            content: Loaded content

        Returns:
            CompositionResult with the rows and a record of what was left out
        """
        result = CompositionResult()

        if self.config.section_enabled("header"):
            result.rows.extend(self._header_rows(content))
        if self.config.section_enabled("contact"):
            result.rows.extend(self._contact_rows(content, result))
        if self.config.divider.enabled:
            result.rows.append(self._divider_row())

        for section in self.ordered_sections(content, result):
            rows = self._section_rows(section, result)
            if rows:
                result.rows.extend(rows)
                result.rendered.append(section.key)

        log_composition_summary(result)
        return result

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def ordered_sections(
        self, content: Content, result: Optional[CompositionResult] = None
    ) -> List[Section]:
        """
        Enabled sections that have data, sorted by order.

        Ties keep the order in which the sections appear in the config.
        """
        candidates = []
        for index, (key, section_config) in enumerate(self.config.sections.items()):
            if key in FIXED_BLOCKS:
                continue

            reason = None
            payload = content.sections.get(key)
            if not section_config.enabled:
                reason = "disabled"
            elif payload is None:
                reason = "no data"

            if reason:
                log_section_skipped(key, reason)
                if result is not None and payload is not None:
                    result.skipped.append(key)
                continue

            section = Section(
                key=key,
                type=section_config.type or key,
                title=section_config.title or key.replace("_", " ").title(),
                order=section_config.order,
                enabled=True,
                data=payload,
                icon=section_config.icon,
                template=section_config.template,
            )
            candidates.append((section.order, index, section))

        for key in content.sections:
            if key not in self.config.sections and key not in FIXED_BLOCKS:
                log_section_skipped(key, "not configured")
                if result is not None:
                    result.skipped.append(key)

        candidates.sort(key=lambda c: (c[0], c[1]))
        return [section for _, _, section in candidates]

    def _section_rows(self, section: Section, result: CompositionResult) -> List[Row]:
        renderer = self.registry.get(section.type)
        if renderer is None:
            log_section_skipped(section.key, f"no renderer registered for type '{section.type}'")
            result.skipped.append(section.key)
            return []

        template = self.config.section_template(section.template)
        body_rows = renderer.render(section.data, self.section_style(template))
        if not body_rows:
            log_section_skipped(section.key, "renderer produced no rows")
            result.skipped.append(section.key)
            return []

        return [self._title_row(section, template, result)] + body_rows

    def section_style(self, template: SectionTemplate) -> ResolvedSectionStyle:
        """Resolve a section template's fonts and spacings."""
        spacing = resolve_spacing(template.spacing, self.config.spacing)
        return ResolvedSectionStyle(
            body=resolve_font(template.font or "body", self.config),
            emphasis=resolve_font("emphasis", self.config),
            spacing=spacing,
            item_spacing=resolve_spacing(template.item_spacing, self.config.spacing, spacing),
        )

    def _title_row(self, section: Section, template: SectionTemplate, result: CompositionResult) -> Row:
        font = resolve_font("section_title", self.config)
        height = resolve_spacing(
            template.title_spacing,
            self.config.spacing,
            resolve_spacing(template.spacing, self.config.spacing),
        )

        columns = []
        icon_column = self._icon_column(section.icon, template, result)
        if icon_column is not None:
            columns.append(icon_column)

        columns.append(
            Column(
                GRID_COLUMNS - sum(c.weight for c in columns),
                TextPrimitive(
                    text=section.title,
                    family=font.family,
                    size=font.size,
                    style=font.style,
                    color=font.color,
                    left=TITLE_LEFT_OFFSET,
                ),
            )
        )
        return Row(height, columns)

    # ------------------------------------------------------------------
    # Fixed blocks
    # ------------------------------------------------------------------

    def _header_rows(self, content: Content) -> List[Row]:
        name = content.personal.name.strip()
        if not name:
            _log_debug("No name in personal info; header omitted")
            return []

        template = self.config.section_template("header")
        font = resolve_font(template.font or "header", self.config, fallback="header")
        return [
            Row(
                resolve_spacing(template.spacing, self.config.spacing),
                [
                    Column(
                        GRID_COLUMNS,
                        TextPrimitive(
                            text=name,
                            family=font.family,
                            size=font.size,
                            style=font.style,
                            color=font.color,
                            top=HEADER_TOP_OFFSET,
                        ),
                    )
                ],
            )
        ]

    def _contact_rows(self, content: Content, result: CompositionResult) -> List[Row]:
        template = self.config.section_template("contact")
        height = resolve_spacing(template.spacing, self.config.spacing)
        context = content.template_context()

        rows = []
        fields = content.contact_fields
        for start in range(0, len(fields), CONTACT_FIELDS_PER_ROW):
            columns = []
            for contact in fields[start : start + CONTACT_FIELDS_PER_ROW]:
                columns.extend(self._contact_columns(contact, template, context, result))
            if columns:
                rows.append(Row(height, columns))
        return rows

    def _contact_columns(
        self, contact: ContactField, template: SectionTemplate, context: dict, result: CompositionResult
    ) -> List[Column]:
        """Icon column (if the icon resolves) plus text column for one contact field."""
        text = resolve_placeholders(contact.content, context).strip()
        if not text:
            return []

        font = resolve_font(template.font or "contact", self.config, fallback="contact")
        primitive = TextPrimitive(
            text=text,
            family=font.family,
            size=font.size,
            style=font.style,
            color=font.color,
            top=CONTACT_TOP_OFFSET,
        )
        if contact.is_link:
            primitive.hyperlink = resolve_placeholders(contact.link, context)
            primitive.color = resolve_color("link", self.config.colors)

        icon_column = self._icon_column(contact.icon, template, result)
        if icon_column is None:
            return [Column(CONTACT_COLUMN_WEIGHT, primitive)]
        return [icon_column, Column(CONTACT_COLUMN_WEIGHT - ICON_COLUMN_WEIGHT, primitive)]

    def _divider_row(self) -> Row:
        divider = self.config.divider
        return Row(
            resolve_spacing(divider.spacing, self.config.spacing),
            [
                Column(
                    GRID_COLUMNS,
                    LinePrimitive(
                        orientation=LineOrientation.HORIZONTAL,
                        color=resolve_color(divider.color, self.config.colors),
                        thickness=divider.thickness,
                        offset_percent=50.0,
                        size_percent=100.0,
                    ),
                )
            ],
        )

    def _icon_column(
        self, icon_key: Optional[str], template: SectionTemplate, result: CompositionResult
    ) -> Optional[Column]:
        if not icon_key:
            return None

        path = self.icons.ensure_icon(icon_key)
        if path is None:
            if icon_key not in result.missing_icons:
                result.missing_icons.append(icon_key)
            return None

        return Column(
            ICON_COLUMN_WEIGHT,
            ImagePrimitive(
                path=path,
                percent=float(template.icon_size or DEFAULT_ICON_CELL_PERCENT),
                top=ICON_TOP_OFFSET,
            ),
        )


def compose_document(
    content: Content,
    config: DocumentConfig,
    backend,
    registry: Optional[RendererRegistry] = None,
) -> CompositionResult:
    """
    Compose content and forward every row to a backend.

    Args:
        content: Loaded content
        config: Loaded document config
        backend: Anything with add_row(height, columns)
        registry: Renderer registry (default: built-in renderers)

    Returns:
        CompositionResult for the rows that were sent
    """
    result = DocumentComposer(config, registry).compose(content)
    for row in result.rows:
        backend.add_row(row.height, row.columns)
    return result
