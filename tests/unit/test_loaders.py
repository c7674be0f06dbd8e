"""Unit tests for content and config loading."""

import json

import pytest

from folio.contexts.content.content_data_structure import EntryListPayload, ListPayload, TextPayload
from folio.contexts.content.exceptions import ContentLoadError
from folio.contexts.content.loader import load_content, load_legacy_resume
from folio.contexts.styling.config_data_structure import DocumentConfig
from folio.contexts.styling.config_loader import config_from_dict, load_config, load_presets
from folio.contexts.styling.exceptions import ConfigLoadError


# ============================================================================
# Content
# ============================================================================


@pytest.mark.unit
def test_load_content_yaml(fixtures_path):
    content = load_content(fixtures_path / "content" / "jane_doe.yaml")

    assert content.personal.name == "Jane Doe"
    assert [f.field for f in content.contact_fields] == ["email", "github"]
    assert content.contact_fields[1].is_link
    assert content.sections["skills"] == ListPayload(["Go", "Rust"])
    assert isinstance(content.sections["experience"], EntryListPayload)


@pytest.mark.unit
def test_load_content_json(tmp_path):
    path = tmp_path / "content.json"
    path.write_text(json.dumps({"personal": {"name": "Jane"}, "sections": {"summary": "Hello"}}))

    content = load_content(path)
    assert content.sections["summary"] == TextPayload("Hello")


@pytest.mark.unit
def test_load_content_missing_file(tmp_path):
    with pytest.raises(ContentLoadError) as excinfo:
        load_content(tmp_path / "nope.yaml")
    assert excinfo.value.path == tmp_path / "nope.yaml"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["- just\n- a list\n", "personal: [unclosed\n"])
def test_load_content_rejects_bad_documents(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)

    with pytest.raises(ContentLoadError):
        load_content(path)


@pytest.mark.unit
def test_load_legacy_resume(fixtures_path):
    content = load_legacy_resume(fixtures_path / "content" / "legacy_resume.json")

    assert content.personal.name == "John Smith"
    assert [f.field for f in content.contact_fields] == ["email", "phone", "website"]
    assert content.contact_fields[0].content == "{{ email }}"
    assert content.contact_fields[2].is_link
    assert content.sections["summary"] == TextPayload("Systems programmer.")
    assert content.sections["skills"] == ListPayload(["C", "Zig"])
    assert content.sections["education"].entries[0].institution == "MIT"
    assert content.sections["experience"].entries[0].description == ["Shipped the scheduler"]


# ============================================================================
# Config
# ============================================================================


@pytest.mark.unit
def test_load_config_merges_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text('colors:\n  primary: "#FF0000"\nsections:\n  skills:\n    order: 9\n')

    config = load_config(path)

    assert isinstance(config, DocumentConfig)
    assert config.colors["primary"] == "#FF0000"
    assert config.colors["secondary"] == "#34495E"
    assert config.sections["skills"].order == 9
    assert config.sections["skills"].title == "Skills"
    assert config.icons.mappings["email"] == "envelope"


@pytest.mark.unit
def test_load_config_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"pdf": {"page_size": "Letter"}}))

    assert load_config(path).pdf.page_size == "Letter"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["- a\n- b\n", "colors: [unclosed\n"])
def test_load_config_rejects_bad_documents(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)

    with pytest.raises(ConfigLoadError):
        load_config(path)


@pytest.mark.unit
def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_load_presets_flattens_categories(fixtures_path):
    presets = load_presets(fixtures_path / "config" / "presets.yaml")
    assert set(presets) == {"colors_forest", "colors_night", "spacing_tight"}


@pytest.mark.unit
def test_presets_apply_in_order(tmp_path, fixtures_path):
    path = tmp_path / "config.yaml"
    path.write_text("spacing:\n  medium: 10\n")

    config = load_config(
        path,
        presets=["colors_forest", "colors_night", "spacing_tight"],
        presets_path=fixtures_path / "config" / "presets.yaml",
    )

    assert config.colors["primary"] == "#101820"
    assert config.colors["accent"] == "#3A7D44"
    assert config.spacing["medium"] == 6.0


@pytest.mark.unit
def test_unknown_preset_is_a_load_error(tmp_path, fixtures_path):
    path = tmp_path / "config.yaml"
    path.write_text("{}\n")

    with pytest.raises(ConfigLoadError, match="colors_neon"):
        load_config(path, presets=["colors_neon"], presets_path=fixtures_path / "config" / "presets.yaml")


@pytest.mark.unit
def test_unknown_config_keys_are_ignored():
    config = config_from_dict({"sections": {"talks": {"title": "Talks", "speaker_notes": True}}})

    assert config.sections["talks"].title == "Talks"
    assert config.sections["talks"].enabled is False


@pytest.mark.unit
def test_section_enabled_defaults():
    config = config_from_dict({"sections": {"header": {"enabled": False}}})

    assert config.section_enabled("header") is False
    assert config.section_enabled("contact") is True
    assert config.section_enabled("unknown_block") is True


# ============================================================================
# Scalar types read from YAML
# ============================================================================


@pytest.mark.unit
def test_unquoted_six_digit_colors_are_kept(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "colors:\n  primary: 334455\n"
        "icons:\n  color: 334455\n"
        "fonts:\n  body:\n    color: 123456\n"
        "divider:\n  color: 654321\n"
    )

    config = load_config(path)

    assert config.colors["primary"] == "334455"
    assert config.icons.color == "334455"
    assert config.fonts["body"].color == "123456"
    assert config.divider.color == "654321"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, key",
    [
        ("colors:\n  primary: 001122\n", "colors.primary"),
        ("icons:\n  color: 0012\n", "icons.color"),
        ("pdf:\n  background_color: 1.5\n", "pdf.background_color"),
    ],
)
def test_colors_mangled_by_yaml_are_load_errors(tmp_path, text, key):
    path = tmp_path / "config.yaml"
    path.write_text(text)

    with pytest.raises(ConfigLoadError, match=key) as excinfo:
        load_config(path)
    assert "quote" in str(excinfo.value)


@pytest.mark.unit
def test_section_order_is_numeric(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("sections:\n  skills:\n    order: '2'\n")

    config = load_config(path)

    assert config.sections["skills"].order == 2.0
    assert isinstance(config.sections["experience"].order, float)


@pytest.mark.unit
def test_non_numeric_section_order_is_a_load_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("sections:\n  skills:\n    order: first\n")

    with pytest.raises(ConfigLoadError, match="sections.skills.order"):
        load_config(path)
