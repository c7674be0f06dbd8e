"""
Document Configuration Data Structures

Defines the cascading style configuration consumed by composition: page geometry,
named spacings, fonts and colors, icon settings, section templates and per-section
settings. Values are symbolic where the config is symbolic (a font's color is a
palette name or a literal hex) and are only made concrete by the resolver.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class Margins:
    """Page margins in millimetres."""

    top: float = 20.0
    bottom: float = 20.0
    left: float = 20.0
    right: float = 20.0


@dataclass
class PageSettings:
    """
    Page geometry.

    Attributes:
        page_size: Named page format understood by the backend (e.g. "A4", "Letter")
        margins: Page margins
        background_color: Optional palette name or hex for the page background
    """

    page_size: str = "A4"
    margins: Margins = field(default_factory=Margins)
    background_color: Optional[str] = None


@dataclass
class FontDefinition:
    """
    Named font.

    Attributes:
        family: Font family name (e.g. "Arial")
        size: Size in points
        style: Style token ("bold", "italic", "bolditalic", anything else is normal)
        color: Palette name or literal hex
    """

    family: str = "Arial"
    size: float = 10.0
    style: str = ""
    color: str = "000000"


@dataclass
class IconConfig:
    """
    Icon pipeline settings.

    Attributes:
        svg_paths: Ordered directories searched for <stem>.svg (first match wins)
        output_dir: Directory holding the rasterized icon cache
        default_size: Raster size in pixels of the longer side
        color: Default palette name or hex used to recolor icons
        mappings: Icon key -> source file stem
    """

    svg_paths: List[str] = field(default_factory=list)
    output_dir: str = "outs/icons"
    default_size: int = 64
    color: Optional[str] = None
    mappings: Dict[str, str] = field(default_factory=dict)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


@dataclass
class SectionTemplate:
    """
    Reusable layout recipe referenced by sections.

    Attributes:
        spacing: Spacing name for body rows
        font: Font name for body text
        icon_size: Icon size as percent of its cell (0 = use default)
        title_spacing: Spacing name for the title row
        item_spacing: Spacing name for rows inside entry lists
    """

    spacing: str = "medium"
    font: str = "body"
    icon_size: int = 0
    title_spacing: str = ""
    item_spacing: str = ""


@dataclass
class SectionConfig:
    """
    Per-section settings.

    Attributes:
        template: Name of the SectionTemplate to apply
        title: Display title
        icon: Optional icon key shown before the title
        enabled: Whether the section is rendered
        order: Sort key for rendering order (ascending)
        type: Renderer type tag; defaults to the section key when empty
    """

    template: str = ""
    title: str = ""
    icon: Optional[str] = None
    enabled: bool = False
    order: float = 0
    type: Optional[str] = None


@dataclass
class DividerConfig:
    """Horizontal rule drawn after the contact block."""

    enabled: bool = True
    color: str = "secondary"
    thickness: float = 1.0
    spacing: str = "medium"


@dataclass
class DocumentConfig:
    """
    Complete document configuration.

    Loaded once per build and treated as immutable during composition.
    """

    pdf: PageSettings = field(default_factory=PageSettings)
    spacing: Dict[str, float] = field(default_factory=dict)
    fonts: Dict[str, FontDefinition] = field(default_factory=dict)
    colors: Dict[str, str] = field(default_factory=dict)
    icons: IconConfig = field(default_factory=IconConfig)
    section_templates: Dict[str, SectionTemplate] = field(default_factory=dict)
    sections: Dict[str, SectionConfig] = field(default_factory=dict)
    divider: DividerConfig = field(default_factory=DividerConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentConfig":
        """
        Build a DocumentConfig from a plain (already merged) mapping.

        Unknown keys inside each block are ignored so that configs written for
        newer versions still load.
        """
        pdf = data.get("pdf") or {}
        icons = data.get("icons") or {}

        return cls(
            pdf=PageSettings(
                page_size=pdf.get("page_size", "A4"),
                margins=_build(Margins, pdf.get("margins")),
                background_color=_color_value(pdf.get("background_color"), "pdf.background_color"),
            ),
            spacing={k: float(v) for k, v in (data.get("spacing") or {}).items()},
            fonts={k: _font(k, v) for k, v in (data.get("fonts") or {}).items()},
            colors={
                k: _color_value(v, f"colors.{k}") for k, v in (data.get("colors") or {}).items()
            },
            icons=IconConfig(
                svg_paths=[str(p) for p in icons.get("svg_paths") or []],
                output_dir=str(icons.get("output_dir") or "outs/icons"),
                default_size=int(icons.get("default_size") or 64),
                color=_color_value(icons.get("color"), "icons.color"),
                mappings=dict(icons.get("mappings") or {}),
            ),
            section_templates={
                k: _build(SectionTemplate, v)
                for k, v in (data.get("section_templates") or {}).items()
            },
            sections={
                k: _section(k, v) for k, v in (data.get("sections") or {}).items()
            },
            divider=_divider(data.get("divider")),
        )

    def section_template(self, name: str) -> SectionTemplate:
        """Get a template by name, falling back to an all-default template."""
        return self.section_templates.get(name) or SectionTemplate()

    def section_enabled(self, key: str, default: bool = True) -> bool:
        """Whether a fixed block (header, contact) is enabled."""
        section = self.sections.get(key)
        if section is None:
            return default
        return section.enabled


def _build(cls, values: Optional[Dict[str, Any]]):
    """Instantiate a dataclass from a mapping, ignoring unknown keys."""
    if not values:
        return cls()
    known = cls.__dataclass_fields__.keys()
    return cls(**{k: v for k, v in values.items() if k in known})


def _color_value(value: Any, key: str) -> Optional[str]:
    """
    Read a palette entry or color reference as text.

    YAML reads an unquoted all-digit hex as a number. Six-digit integers keep
    their digits; anything else (leading zeros are read as octal) has lost them.

    Raises:
        ValueError: If the value is not a string and cannot be read back exactly
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and len(str(value)) == 6:
        return str(value)
    raise ValueError(
        f"{key}: color {value!r} was not read as text; quote hex colors (e.g. \"001122\")"
    )


def _font(name: str, values: Optional[Dict[str, Any]]) -> FontDefinition:
    font = _build(FontDefinition, values)
    font.color = _color_value(font.color, f"fonts.{name}.color")
    return font


def _section(key: str, values: Optional[Dict[str, Any]]) -> SectionConfig:
    section = _build(SectionConfig, values)
    try:
        section.order = float(section.order or 0)
    except (TypeError, ValueError) as e:
        raise ValueError(f"sections.{key}.order: {section.order!r} is not a number") from e
    return section


def _divider(values: Optional[Dict[str, Any]]) -> DividerConfig:
    divider = _build(DividerConfig, values)
    divider.color = _color_value(divider.color, "divider.color")
    return divider
