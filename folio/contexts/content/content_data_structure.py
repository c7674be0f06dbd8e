"""
Content Data Structures

Defines the schema-free content model: personal info, ordered contact fields and
section payloads. Raw section payloads are classified once, at load time, into a
closed set of variants so renderers never re-inspect untyped data:

- TextPayload:      {content: "..."} or a bare string
- ListPayload:      {items: ["Go", "Rust"]} or a bare list of strings
- EntryListPayload: {items: [{title: ..., company: ...}, ...]}
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

from folio.contexts.content.logger import _log_warning


@dataclass
class PersonalInfo:
    """
    Personal record shown in the header and referenced by contact templates.

    Attributes:
        extra: Any keys beyond the well-known ones, kept for placeholder substitution
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    website: str = ""
    github: str = ""
    linkedin: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PersonalInfo":
        data = dict(data or {})
        known = {f.name for f in fields(cls)} - {"extra"}
        values = {k: "" if data.get(k) is None else str(data[k]) for k in known if k in data}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**values, extra=extra)

    def as_context(self) -> Dict[str, Any]:
        """Flat mapping of every personal value, for template rendering."""
        context = dict(self.extra)
        for f in fields(self):
            if f.name != "extra":
                context[f.name] = getattr(self, f.name)
        return context


@dataclass
class ContactField:
    """
    One entry of the contact block.

    Attributes:
        field: Field key (e.g. "email")
        content: Literal or templated display text
        icon: Icon key resolved through the icon mappings
        link: Optional literal or templated hyperlink target
        type: Optional kind; "link" renders the text as a hyperlink
    """

    field: str
    content: str = ""
    icon: str = ""
    link: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContactField":
        return cls(
            field=str(data.get("field", "")),
            content="" if data.get("content") is None else str(data["content"]),
            icon=str(data.get("icon") or ""),
            link=data.get("link"),
            type=data.get("type"),
        )

    @property
    def is_link(self) -> bool:
        return self.type == "link" and bool(self.link)


@dataclass
class EntryItem:
    """Experience or education entry."""

    title: Optional[str] = None
    company: Optional[str] = None
    degree: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntryItem":
        def text(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        description = data.get("description") or []
        if isinstance(description, str):
            description = [description]

        return cls(
            title=text("title"),
            company=text("company"),
            degree=text("degree"),
            institution=text("institution"),
            location=text("location"),
            start_date=text("start_date"),
            end_date=text("end_date"),
            description=[str(d) for d in description if isinstance(d, str)],
        )


@dataclass
class TextPayload:
    content: str


@dataclass
class ListPayload:
    items: List[str] = field(default_factory=list)


@dataclass
class EntryListPayload:
    entries: List[EntryItem] = field(default_factory=list)


SectionPayload = Union[TextPayload, ListPayload, EntryListPayload]


def parse_section_payload(raw: Any, section_key: str = "") -> Optional[SectionPayload]:
    """
    Classify a raw section payload into one of the payload variants.

    Args:
        raw: Payload as read from the content document
        section_key: Section key, for log messages

    Returns:
        Payload variant, or None when the payload carries no usable data
    """
    if isinstance(raw, str):
        return TextPayload(raw) if raw.strip() else None

    if isinstance(raw, list):
        items = raw
    elif isinstance(raw, dict):
        if isinstance(raw.get("content"), str):
            return TextPayload(raw["content"]) if raw["content"].strip() else None
        items = raw.get("items")
        if not isinstance(items, list):
            _log_warning(f"Section '{section_key}' has neither 'content' nor 'items'; skipping")
            return None
    else:
        if raw is not None:
            _log_warning(f"Section '{section_key}' payload of type {type(raw).__name__} ignored")
        return None

    if any(isinstance(item, dict) for item in items):
        entries = [EntryItem.from_dict(item) for item in items if isinstance(item, dict)]
        dropped = len(items) - len(entries)
        if dropped:
            _log_warning(f"Section '{section_key}': dropped {dropped} non-entry items")
        return EntryListPayload(entries)

    strings = [str(item) for item in items if isinstance(item, (str, int, float))]
    return ListPayload(strings) if strings else None


@dataclass
class Content:
    """
    Complete content document.

    Attributes:
        personal: Personal record
        contact_fields: Ordered contact fields
        sections: Section key -> classified payload (sections without data are absent)
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    contact_fields: List[ContactField] = field(default_factory=list)
    sections: Dict[str, SectionPayload] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Content":
        sections = {}
        for key, raw in (data.get("sections") or {}).items():
            payload = parse_section_payload(raw, key)
            if payload is not None:
                sections[key] = payload

        return cls(
            personal=PersonalInfo.from_dict(data.get("personal")),
            contact_fields=[
                ContactField.from_dict(item)
                for item in data.get("contact_fields") or []
                if isinstance(item, dict)
            ],
            sections=sections,
        )

    def template_context(self) -> Dict[str, Any]:
        """Context for contact placeholders: personal values at top level and under 'personal'."""
        personal = self.personal.as_context()
        return {**personal, "personal": personal}


@dataclass
class Section:
    """
    Generic section ready for dispatch.

    Attributes:
        key: Section key shared by config and content
        type: Renderer type tag
        title: Display title
        order: Sort key (ascending)
        enabled: Whether the section renders
        data: Classified payload
        icon: Optional icon key for the title row
        template: Section template name
    """

    key: str
    type: str
    title: str
    order: float
    enabled: bool
    data: SectionPayload
    icon: Optional[str] = None
    template: str = ""
