"""Unit tests for the icon asset pipeline."""

import pytest
from PIL import Image

from folio.contexts.icons import pipeline as pipeline_module
from folio.contexts.icons.exceptions import IconNotFoundError
from folio.contexts.icons.pipeline import IconPipeline, ensure_icon, find_svg
from folio.contexts.styling.config_loader import config_from_dict


@pytest.mark.unit
def test_ensure_icon_writes_cache_file(document_config, icon_output_dir):
    path = ensure_icon("email", 32, "primary", document_config)

    assert path == icon_output_dir / "envelope_2C3E50_32px.png"
    assert path.exists()
    with Image.open(path) as image:
        assert image.size == (32, 32)
        assert image.getpixel((16, 16)) == (44, 62, 80, 255)


@pytest.mark.unit
def test_second_request_is_a_cache_hit(document_config, monkeypatch):
    first = ensure_icon("email", 32, "primary", document_config)

    def no_parsing(markup):
        raise AssertionError("cache hit must not parse")

    monkeypatch.setattr(pipeline_module, "parse_svg", no_parsing)
    monkeypatch.setattr(pipeline_module, "rasterize", no_parsing)

    second = ensure_icon("email", 32, "primary", document_config)
    assert second == first


@pytest.mark.unit
def test_aspect_ratio_is_preserved(document_config):
    path = ensure_icon("wide", 64, None, document_config)

    assert path.name == "wide_2C3E50_64px.png"
    with Image.open(path) as image:
        assert image.size == (64, 56)


@pytest.mark.unit
def test_defaults_come_from_icon_config(document_config, icon_output_dir):
    path = IconPipeline.from_config(document_config).ensure_icon("email")
    assert path == icon_output_dir / "envelope_2C3E50_32px.png"


@pytest.mark.unit
def test_literal_color_keeps_written_case(document_config):
    path = ensure_icon("email", 16, "#aa0000", document_config)

    assert path.name == "envelope_aa0000_16px.png"
    with Image.open(path) as image:
        assert image.getpixel((8, 8)) == (170, 0, 0, 255)


@pytest.mark.unit
def test_no_color_configured_uses_black(config_data, icon_output_dir):
    config_data["icons"]["color"] = None
    config = config_from_dict(config_data)

    path = ensure_icon("email", 16, None, config)
    assert path == icon_output_dir / "envelope_000000_16px.png"


@pytest.mark.unit
@pytest.mark.parametrize("icon_key", ["", "not_mapped"])
def test_unknown_icon_key_is_none(document_config, icon_output_dir, icon_key):
    assert ensure_icon(icon_key, 32, "primary", document_config) is None
    assert not icon_output_dir.exists()


@pytest.mark.unit
def test_missing_svg_is_none(document_config, icon_output_dir):
    assert ensure_icon("missing", 32, "primary", document_config) is None
    assert not icon_output_dir.exists()


@pytest.mark.unit
def test_unparseable_svg_is_none_and_leaves_nothing_behind(document_config, icon_output_dir):
    assert ensure_icon("broken", 32, "primary", document_config) is None
    assert list(icon_output_dir.glob("*")) == []


@pytest.mark.unit
def test_first_search_path_wins(fixtures_path):
    found = find_svg("envelope", [fixtures_path / "icons_alt", fixtures_path / "icons"])
    assert found == fixtures_path / "icons_alt" / "envelope.svg"

    found = find_svg("wide", [fixtures_path / "icons_alt", fixtures_path / "icons"])
    assert found == fixtures_path / "icons" / "wide.svg"


@pytest.mark.unit
def test_find_svg_reports_search_paths(fixtures_path):
    with pytest.raises(IconNotFoundError) as excinfo:
        find_svg("nope", [fixtures_path / "icons"])

    assert excinfo.value.stem == "nope"
    assert "icons" in str(excinfo.value)
