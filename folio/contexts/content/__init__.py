"""
Content Context

Responsibilities:
- Represents personal info, ordered contact fields and section payloads
- Classifies untyped section payloads into payload variants at load time
- Substitutes placeholders in templated contact values
- Loads content documents and legacy flat resumes

Owns: Content model, payload variants, content loading
Never: Knows about fonts, colors or layout
"""

from folio.contexts.content.content_data_structure import (
    ContactField,
    Content,
    EntryItem,
    EntryListPayload,
    ListPayload,
    PersonalInfo,
    Section,
    SectionPayload,
    TextPayload,
    parse_section_payload,
)
from folio.contexts.content.exceptions import ContentLoadError
from folio.contexts.content.loader import load_content, load_legacy_resume
from folio.contexts.content.placeholders import resolve_placeholders

__all__ = [
    # Data structures
    "Content",
    "PersonalInfo",
    "ContactField",
    "EntryItem",
    "Section",
    # Payload variants
    "SectionPayload",
    "TextPayload",
    "ListPayload",
    "EntryListPayload",
    "parse_section_payload",
    # Loading
    "load_content",
    "load_legacy_resume",
    "ContentLoadError",
    "resolve_placeholders",
]
