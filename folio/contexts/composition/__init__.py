"""
Composition Context

Responsibilities:
- Orders enabled sections and dispatches each to its registered renderer
- Lays out the header, contact block and divider
- Requests icons from the icons context and degrades to text when they fail
- Emits backend-neutral rows of draw primitives

Owns: RenderCommand types, section renderers, renderer registry, composer
Never: Writes output documents or reads config files
"""

from folio.contexts.composition.composer import (
    CompositionResult,
    DocumentComposer,
    compose_document,
)
from folio.contexts.composition.registries import RendererRegistry, default_registry
from folio.contexts.composition.render_commands import (
    Alignment,
    Column,
    ImagePrimitive,
    LineOrientation,
    LinePrimitive,
    Row,
    TextPrimitive,
)
from folio.contexts.composition.section_renderers import (
    DelimitedListRenderer,
    EntryListRenderer,
    PlainTextRenderer,
    ResolvedSectionStyle,
    SectionRenderer,
)

__all__ = [
    # Composer
    "DocumentComposer",
    "CompositionResult",
    "compose_document",
    # Registry
    "RendererRegistry",
    "default_registry",
    # Renderers
    "SectionRenderer",
    "ResolvedSectionStyle",
    "PlainTextRenderer",
    "EntryListRenderer",
    "DelimitedListRenderer",
    # Render commands
    "Row",
    "Column",
    "TextPrimitive",
    "ImagePrimitive",
    "LinePrimitive",
    "Alignment",
    "LineOrientation",
]
