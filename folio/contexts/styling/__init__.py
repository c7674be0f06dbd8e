"""
Styling Context

Responsibilities:
- Represents the cascading document configuration (page, palette, fonts, spacing,
  icons, section templates, sections)
- Provides built-in default tables merged under user configs
- Loads config files and applies named presets
- Resolves symbolic style names to concrete values

Owns: DocumentConfig, default tables, style resolution
Never: Emits draw commands or touches the icon cache
"""

from folio.contexts.styling.config_data_structure import (
    DocumentConfig,
    FontDefinition,
    IconConfig,
    SectionConfig,
    SectionTemplate,
)
from folio.contexts.styling.config_loader import config_from_dict, load_config
from folio.contexts.styling.exceptions import ConfigLoadError
from folio.contexts.styling.resolver import (
    RGB,
    FontStyle,
    ResolvedFont,
    hex_to_rgb,
    resolve_color,
    resolve_font,
    resolve_font_style,
    resolve_spacing,
)

__all__ = [
    # Config model
    "DocumentConfig",
    "FontDefinition",
    "IconConfig",
    "SectionConfig",
    "SectionTemplate",
    # Loading
    "load_config",
    "config_from_dict",
    "ConfigLoadError",
    # Resolution
    "RGB",
    "FontStyle",
    "ResolvedFont",
    "hex_to_rgb",
    "resolve_color",
    "resolve_font",
    "resolve_font_style",
    "resolve_spacing",
]
