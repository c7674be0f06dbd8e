"""
FOLIO - Formatted Output Layout with Icon Overlays

A config-driven document composition system that turns schema-free content and a
cascading style configuration into a paginated PDF.

Architecture:
- Content Context: Content model, section payload variants, placeholder substitution
- Styling Context: Document configuration, default tables, attribute resolution
- Icons Context: SVG recoloring, rasterization and the on-disk icon cache
- Composition Context: Section renderers, renderer registry, document composer
- Rendering Context: Document backends and build orchestration
"""

__version__ = "0.1.0"
