"""
Integration tests for document composition: config + content + icons -> rows.
"""

import pytest

from folio.contexts.composition.composer import DocumentComposer, compose_document
from folio.contexts.composition.registries import default_registry
from folio.contexts.composition.render_commands import GRID_COLUMNS, ImagePrimitive, LinePrimitive
from folio.contexts.content.content_data_structure import Content
from folio.contexts.content.loader import load_content, load_legacy_resume
from folio.contexts.rendering.backends import RecordingBackend
from folio.contexts.styling.config_loader import config_from_dict
from folio.contexts.styling.resolver import RGB


def _content(sections=None, contact_fields=None, **personal):
    return Content.from_dict(
        {
            "personal": {"name": "Jane Doe", **personal},
            "contact_fields": contact_fields or [],
            "sections": sections or {},
        }
    )


def _title_texts(result):
    """Texts of every row after the fixed blocks, in order."""
    return [text for row in result.rows for text in row.texts]


# ============================================================================
# End to end
# ============================================================================


@pytest.mark.integration
def test_compose_jane_doe(document_config, fixtures_path, icon_output_dir):
    content = load_content(fixtures_path / "content" / "jane_doe.yaml")

    result = DocumentComposer(document_config).compose(content)
    rows = result.rows

    # Header
    assert rows[0].texts == ["Jane Doe"]
    assert rows[0].columns[0].weight == GRID_COLUMNS

    # Contact block: icon + text per field
    contact = rows[1]
    assert [c.weight for c in contact.columns] == [1, 3, 1, 3]
    assert isinstance(contact.columns[0].primitive, ImagePrimitive)
    assert contact.columns[0].primitive.path == icon_output_dir / "envelope_2C3E50_32px.png"
    assert contact.texts == ["jane@x.com", "github.com/janedoe"]
    github = contact.columns[3].primitive
    assert github.hyperlink == "https://github.com/janedoe"
    assert github.color == RGB(41, 128, 185)
    assert contact.columns[1].primitive.hyperlink is None

    # Divider
    assert isinstance(rows[2].columns[0].primitive, LinePrimitive)
    assert rows[2].columns[0].primitive.color == RGB(52, 73, 94)

    # Skills: icon + title, then the joined list
    assert [c.weight for c in rows[3].columns] == [1, 11]
    assert rows[3].texts == ["Technical Skills"]
    assert rows[4].texts == ["Go | Rust"]

    # Experience: its icon maps to an SVG that does not exist, so the title spans the row
    assert [c.weight for c in rows[5].columns] == [GRID_COLUMNS]
    assert rows[5].texts == ["Experience"]
    assert [row.texts[0] for row in rows[6:]] == [
        "Engineer - Acme",
        "Berlin | 2020 - Present",
        "- Built things",
    ]

    assert result.rendered == ["skills", "experience"]
    assert result.skipped == ["hobbies"]
    assert result.missing_icons == ["experience"]


@pytest.mark.integration
def test_compose_legacy_resume(document_config, fixtures_path):
    content = load_legacy_resume(fixtures_path / "content" / "legacy_resume.json")

    result = DocumentComposer(document_config).compose(content)

    assert result.rows[1].texts == ["john@example.com", "+1 555 0199", "johnsmith.dev"]
    assert result.rows[1].columns[-1].primitive.hyperlink == "johnsmith.dev"
    # summary and skills share order 1; summary comes first in the config
    assert result.rendered == ["summary", "skills", "experience", "education"]
    assert "BSc Physics - MIT" in _title_texts(result)
    assert set(result.missing_icons) >= {"phone", "website", "summary"}


@pytest.mark.integration
def test_compose_document_feeds_backend(document_config, fixtures_path):
    content = load_content(fixtures_path / "content" / "jane_doe.yaml")
    backend = RecordingBackend()

    result = compose_document(content, document_config, backend)

    assert len(backend.rows) == len(result.rows)
    assert backend.texts()[0] == "Jane Doe"
    assert "Go | Rust" in backend.texts()


# ============================================================================
# Section ordering and dispatch
# ============================================================================


SECTIONS = {
    "skills": {"items": ["Go"]},
    "experience": {"items": [{"title": "Engineer"}]},
    "education": {"items": [{"degree": "BSc"}]},
}


@pytest.mark.integration
def test_sections_follow_order(config_data):
    config_data["sections"]["skills"]["order"] = 3
    config_data["sections"]["experience"]["order"] = 1
    config_data["sections"]["education"] = {"order": 2}
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content(SECTIONS))

    assert result.rendered == ["experience", "education", "skills"]


@pytest.mark.integration
def test_order_ties_keep_config_position(config_data):
    for key in ("skills", "experience", "education"):
        config_data["sections"].setdefault(key, {})["order"] = 2
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content(SECTIONS))

    # Config position comes from the default section table: experience, education, skills
    assert result.rendered == ["experience", "education", "skills"]


@pytest.mark.integration
def test_disabled_and_empty_sections_are_left_out(config_data):
    config_data["sections"]["education"] = {"enabled": False}
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content(SECTIONS))

    assert "education" not in result.rendered
    assert "education" in result.skipped
    # summary is enabled by default but has no data; it is not reported
    assert "summary" not in result.skipped


@pytest.mark.integration
def test_unregistered_type_is_skipped_without_affecting_others(document_config):
    sections = {**SECTIONS, "hobbies": {"items": ["Chess"]}}

    result = DocumentComposer(document_config).compose(_content(sections))

    assert "hobbies" in result.skipped
    assert "Chess" not in _title_texts(result)
    assert "skills" in result.rendered
    assert "experience" in result.rendered


@pytest.mark.integration
def test_registering_a_renderer_enables_new_section_type(document_config):
    registry = default_registry()
    registry.alias("hobbies", "simple_list")

    result = DocumentComposer(document_config, registry).compose(
        _content({"hobbies": {"items": ["Chess", "Go"]}})
    )

    assert result.rendered == ["hobbies"]
    assert "Chess | Go" in _title_texts(result)
    assert "Hobbies" in _title_texts(result)


@pytest.mark.integration
def test_section_type_overrides_key(config_data):
    config_data["sections"]["projects"] = {
        "type": "plain_text",
        "template": "simple_list",
        "enabled": True,
        "order": 1,
    }
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content({"projects": {"content": "A compiler."}}))

    assert result.rendered == ["projects"]
    # No title configured: derived from the key
    assert "Projects" in _title_texts(result)
    assert "A compiler." in _title_texts(result)


@pytest.mark.integration
def test_content_sections_missing_from_config_are_skipped(document_config):
    result = DocumentComposer(document_config).compose(_content({"talks": {"items": ["PyCon"]}}))

    assert result.rendered == []
    assert result.skipped == ["talks"]


# ============================================================================
# Fixed blocks
# ============================================================================


@pytest.mark.integration
def test_disabled_header_removes_header_row(config_data):
    config_data["sections"]["header"] = {"enabled": False}
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content())

    assert "Jane Doe" not in _title_texts(result)
    assert isinstance(result.rows[0].columns[0].primitive, LinePrimitive)


@pytest.mark.integration
def test_disabled_divider(config_data):
    config_data["divider"] = {"enabled": False}
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content())

    assert len(result.rows) == 1
    assert result.rows[0].texts == ["Jane Doe"]


@pytest.mark.integration
def test_blank_contact_fields_produce_no_columns(document_config):
    content = _content(
        contact_fields=[
            {"field": "phone", "content": "{{ personal.phone }}", "icon": "email"},
            {"field": "note", "content": "   "},
        ]
    )

    result = DocumentComposer(document_config).compose(content)

    # Header then divider; no contact row at all
    assert len(result.rows) == 2
    assert isinstance(result.rows[1].columns[0].primitive, LinePrimitive)


@pytest.mark.integration
def test_contact_fields_wrap_three_per_row(document_config):
    fields = [{"field": f"f{i}", "content": f"value {i}"} for i in range(4)]

    result = DocumentComposer(document_config).compose(_content(contact_fields=fields))

    assert result.rows[1].texts == ["value 0", "value 1", "value 2"]
    assert result.rows[2].texts == ["value 3"]
    assert [c.weight for c in result.rows[1].columns] == [4, 4, 4]


@pytest.mark.integration
def test_unresolved_placeholder_stays_literal(document_config):
    content = _content(contact_fields=[{"field": "x", "content": "{{ personal.twitter }}"}])

    result = DocumentComposer(document_config).compose(content)

    assert result.rows[1].texts == ["{{ personal.twitter }}"]


@pytest.mark.integration
def test_missing_contact_icon_is_recorded_once(document_config):
    fields = [
        {"field": "a", "content": "one", "icon": "missing"},
        {"field": "b", "content": "two", "icon": "missing"},
    ]

    result = DocumentComposer(document_config).compose(_content(contact_fields=fields))

    assert [c.weight for c in result.rows[1].columns] == [4, 4]
    assert result.missing_icons == ["missing"]


# ============================================================================
# Config values read as numbers
# ============================================================================


@pytest.mark.integration
def test_numeric_icon_color_composes(config_data, fixtures_path, icon_output_dir):
    config_data["icons"]["color"] = 334455
    config = config_from_dict(config_data)
    content = load_content(fixtures_path / "content" / "jane_doe.yaml")

    result = DocumentComposer(config).compose(content)

    assert result.rows[1].columns[0].primitive.path == icon_output_dir / "envelope_334455_32px.png"
    assert result.rendered == ["skills", "experience"]


@pytest.mark.integration
def test_string_section_order_sorts_with_numeric_orders(config_data):
    config_data["sections"]["skills"]["order"] = "2"
    config = config_from_dict(config_data)

    result = DocumentComposer(config).compose(_content(SECTIONS))

    # experience (2) and skills ("2") tie; experience comes first in the config
    assert result.rendered == ["experience", "skills", "education"]
