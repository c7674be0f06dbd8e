"""
Default values for FOLIO document configuration.

Provides the built-in tables (palette, spacing, fonts, icon mappings, section
templates and sections) that user configs are merged over by config_loader.
These tables are only read when a config is loaded; composition always works
from the loaded DocumentConfig value.
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

load_dotenv()
ICON_SEARCH_PATHS = os.getenv("ICON_SEARCH_PATHS", "assets/icons").split(os.pathsep)
ICON_OUTPUT_DIR = os.getenv("ICON_OUTPUT_DIR", "outs/icons")

# Default color scheme (slate blue professional)
DEFAULT_COLORS = {
    "primary": "#2C3E50",
    "secondary": "#34495E",
    "accent": "#2980B9",
    "text": "#333333",
    "muted": "#7F8C8D",
    "link": "#2980B9",
    "background": "#FFFFFF",
}

# Vertical gaps in millimetres
DEFAULT_SPACING = {
    "none": 0.0,
    "tiny": 3.0,
    "small": 5.0,
    "medium": 8.0,
    "large": 12.0,
    "xlarge": 18.0,
}

DEFAULT_FONTS = {
    "header": {"family": "Arial", "size": 24, "style": "bold", "color": "primary"},
    "section_title": {"family": "Arial", "size": 14, "style": "bold", "color": "primary"},
    "emphasis": {"family": "Arial", "size": 11, "style": "bold", "color": "secondary"},
    "body": {"family": "Arial", "size": 10, "style": "", "color": "text"},
    "contact": {"family": "Arial", "size": 9, "style": "", "color": "text"},
}

# Icon key -> SVG file stem
DEFAULT_ICON_MAPPINGS = {
    "email": "envelope",
    "phone": "phone",
    "address": "location",
    "location": "location",
    "website": "globe",
    "github": "github",
    "linkedin": "linkedin",
    "summary": "user",
    "experience": "briefcase",
    "education": "graduation",
    "skills": "tools",
    "certifications": "certificate",
}

DEFAULT_SECTION_TEMPLATES = {
    "header": {"spacing": "xlarge", "font": "header"},
    "contact": {"spacing": "small", "font": "contact", "icon_size": 60},
    "simple_list": {
        "spacing": "medium",
        "font": "body",
        "icon_size": 60,
        "title_spacing": "large",
    },
    "entry_list": {
        "spacing": "medium",
        "font": "body",
        "icon_size": 60,
        "title_spacing": "large",
        "item_spacing": "small",
    },
}

DEFAULT_SECTIONS = {
    "header": {"enabled": True},
    "contact": {"enabled": True},
    "summary": {
        "template": "simple_list",
        "title": "Summary",
        "icon": "summary",
        "enabled": True,
        "order": 1,
    },
    "experience": {
        "template": "entry_list",
        "title": "Experience",
        "icon": "experience",
        "enabled": True,
        "order": 2,
    },
    "education": {
        "template": "entry_list",
        "title": "Education",
        "icon": "education",
        "enabled": True,
        "order": 3,
    },
    "skills": {
        "template": "simple_list",
        "title": "Skills",
        "icon": "skills",
        "enabled": True,
        "order": 4,
    },
    "certifications": {
        "template": "simple_list",
        "title": "Certifications",
        "icon": "certifications",
        "enabled": True,
        "order": 5,
    },
}

# Icon default size as percent of its cell when a template leaves icon_size unset
DEFAULT_ICON_CELL_PERCENT = 60


def get_default_config() -> Dict[str, Any]:
    """
    Get complete default configuration structure.

    Returns fresh copies so callers can merge and mutate freely.

    Returns:
        Dict with every top-level config block populated
    """
    return {
        "pdf": {
            "page_size": "A4",
            "margins": {"top": 20.0, "bottom": 20.0, "left": 20.0, "right": 20.0},
            "background_color": None,
        },
        "spacing": DEFAULT_SPACING.copy(),
        "fonts": {name: font.copy() for name, font in DEFAULT_FONTS.items()},
        "colors": DEFAULT_COLORS.copy(),
        "icons": {
            "svg_paths": list(ICON_SEARCH_PATHS),
            "output_dir": ICON_OUTPUT_DIR,
            "default_size": 64,
            "color": "primary",
            "mappings": DEFAULT_ICON_MAPPINGS.copy(),
        },
        "section_templates": {
            name: template.copy() for name, template in DEFAULT_SECTION_TEMPLATES.items()
        },
        "sections": {name: section.copy() for name, section in DEFAULT_SECTIONS.items()},
        "divider": {"enabled": True, "color": "secondary", "thickness": 1.0, "spacing": "medium"},
    }
