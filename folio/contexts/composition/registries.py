"""
Composition Registries

Maps section type tags to section renderers. New section kinds are added by
registering a renderer, without touching the composer.
"""

from typing import Dict, List, Optional

from folio.contexts.composition.section_renderers import (
    DelimitedListRenderer,
    EntryListRenderer,
    PlainTextRenderer,
    SectionRenderer,
)

PLAIN_TEXT_TAGS = ("summary", "text", "plain_text", "profile")
ENTRY_LIST_TAGS = ("experience", "education", "entry_list")
DELIMITED_LIST_TAGS = ("skills", "certifications", "languages", "simple_list")


class RendererRegistry:
    """
    Registry of section renderers keyed by type tag.

    Aliased tags share one renderer instance. Lookups of unknown tags return None
    so callers can skip the section instead of failing the document.
    """

    def __init__(self):
        self._renderers: Dict[str, SectionRenderer] = {}

    def register(self, tag: str, renderer: SectionRenderer) -> None:
        """Register (or replace) the renderer for a tag."""
        if not tag:
            raise ValueError("Type tag must be a non-empty string")
        self._renderers[tag] = renderer

    def alias(self, tag: str, existing_tag: str) -> None:
        """
        Make tag dispatch to the renderer already registered for existing_tag.

        Raises:
            KeyError: If existing_tag is not registered
        """
        if existing_tag not in self._renderers:
            raise KeyError(f"Cannot alias '{tag}': '{existing_tag}' is not registered")
        self.register(tag, self._renderers[existing_tag])

    def get(self, tag: Optional[str]) -> Optional[SectionRenderer]:
        if not tag:
            return None
        return self._renderers.get(tag)

    def is_registered(self, tag: str) -> bool:
        return tag in self._renderers

    def tags(self) -> List[str]:
        """All registered tags, sorted."""
        return sorted(self._renderers)


def default_registry() -> RendererRegistry:
    """
    Registry with the built-in renderers.

    Returns:
        RendererRegistry covering plain text, entry list and delimited list tags
    """
    registry = RendererRegistry()

    for tags, renderer in (
        (PLAIN_TEXT_TAGS, PlainTextRenderer()),
        (ENTRY_LIST_TAGS, EntryListRenderer()),
        (DELIMITED_LIST_TAGS, DelimitedListRenderer()),
    ):
        registry.register(tags[0], renderer)
        for tag in tags[1:]:
            registry.alias(tag, tags[0])

    return registry
