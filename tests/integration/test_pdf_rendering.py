"""
Integration tests for the fpdf2 backend and the build pipeline.
"""

import pytest
from omegaconf import OmegaConf

from folio.contexts.composition.render_commands import (
    Column,
    ImagePrimitive,
    LinePrimitive,
    Row,
    TextPrimitive,
    text_row,
)
from folio.contexts.content.exceptions import ContentLoadError
from folio.contexts.icons.pipeline import ensure_icon
from folio.contexts.rendering.builder import build_document
from folio.contexts.rendering.pdf_backend import FpdfBackend, core_font_family, latin1_text
from folio.contexts.styling.config_loader import config_from_dict
from folio.contexts.styling.exceptions import ConfigLoadError


@pytest.fixture
def config_file(tmp_path, config_data):
    path = tmp_path / "config.yaml"
    OmegaConf.save(OmegaConf.create(config_data), path)
    return path


def _backend(**pdf):
    config = config_from_dict({"pdf": pdf} if pdf else None)
    return FpdfBackend(config.pdf, config.colors)


# ============================================================================
# Helpers
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "family, expected",
    [("Arial", "helvetica"), ("Times", "times"), ("mono", "courier"), ("Comic Sans", "helvetica"), ("", "helvetica")],
)
def test_core_font_family(family, expected):
    assert core_font_family(family) == expected


@pytest.mark.unit
def test_latin1_text():
    assert latin1_text("“Quoted” – done…") == '"Quoted" - done...'
    assert latin1_text("Zürich") == "Zürich"
    assert latin1_text("東京") == "??"


# ============================================================================
# Backend
# ============================================================================


@pytest.mark.integration
def test_backend_writes_pdf(tmp_path, document_config):
    icon = ensure_icon("email", 32, "primary", document_config)
    backend = FpdfBackend(document_config.pdf, document_config.colors)

    backend.add_row(10, [Column(12, TextPrimitive("Jane Doe", size=24))])
    backend.add_row(
        6,
        [
            Column(1, ImagePrimitive(icon, percent=60)),
            Column(3, TextPrimitive("jane@x.com", hyperlink="mailto:jane@x.com")),
        ],
    )
    backend.add_row(8, [Column(12, LinePrimitive())])

    output = backend.save(tmp_path / "nested" / "out.pdf")

    assert output.exists()
    assert output.read_bytes().startswith(b"%PDF")
    assert backend.page_count == 1
    assert backend.rows_added == 3


@pytest.mark.integration
def test_rows_overflow_onto_new_pages(tmp_path):
    backend = _backend()
    for i in range(60):
        backend.add_row(10, [Column(12, TextPrimitive(f"Row {i}"))])

    assert backend.page_count > 1
    backend.save(tmp_path / "long.pdf")


@pytest.mark.integration
def test_long_text_pushes_next_row_down():
    backend = _backend()
    start = backend.pdf.get_y()

    backend.add_row(5, [text_row(5, TextPrimitive("word " * 200)).columns[0]])

    assert backend.pdf.get_y() - start > 5


@pytest.mark.integration
def test_empty_columns_still_advance():
    backend = _backend()
    start = backend.pdf.get_y()

    backend.add_row(7, Row(7, [Column(6), Column(6)]).columns)

    assert backend.pdf.get_y() == pytest.approx(start + 7)


@pytest.mark.integration
def test_unknown_page_size_falls_back_to_a4():
    backend = _backend(page_size="B7")
    assert backend.pdf.w == pytest.approx(210, abs=0.1)


@pytest.mark.integration
def test_letter_page_and_background(tmp_path):
    backend = _backend(page_size="Letter", background_color="#F4F4F4")
    backend.add_row(10, [Column(12, TextPrimitive("On a tinted page"))])

    assert backend.pdf.w == pytest.approx(215.9, abs=0.1)
    assert backend.save(tmp_path / "letter.pdf").exists()


# ============================================================================
# Build pipeline
# ============================================================================


@pytest.mark.integration
def test_build_document(tmp_path, config_file, fixtures_path):
    output = tmp_path / "outs" / "jane.pdf"

    result = build_document(config_file, fixtures_path / "content" / "jane_doe.yaml", output)

    assert result.success, result.error
    assert result.output_path == output
    assert output.read_bytes().startswith(b"%PDF")
    assert result.page_count == 1
    assert result.rendered_sections == ["skills", "experience"]
    assert result.composition.skipped == ["hobbies"]


@pytest.mark.integration
def test_build_legacy_document(tmp_path, config_file, fixtures_path):
    result = build_document(
        config_file,
        fixtures_path / "content" / "legacy_resume.json",
        tmp_path / "legacy.pdf",
        legacy=True,
    )

    assert result.success
    assert result.rendered_sections == ["summary", "skills", "experience", "education"]


@pytest.mark.integration
def test_build_with_presets(tmp_path, config_file, fixtures_path, monkeypatch):
    monkeypatch.setattr(
        "folio.contexts.styling.config_loader.RESUME_PRESETS_PATH",
        fixtures_path / "config" / "presets.yaml",
    )

    result = build_document(
        config_file,
        fixtures_path / "content" / "jane_doe.yaml",
        tmp_path / "forest.pdf",
        presets=["colors_forest"],
    )

    assert result.success
    assert result.composition.rows[0].columns[0].primitive.color == (30, 77, 43)


@pytest.mark.integration
def test_build_reports_write_failure(tmp_path, config_file, fixtures_path):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("")

    result = build_document(config_file, fixtures_path / "content" / "jane_doe.yaml", blocker / "out.pdf")

    assert result.success is False
    assert result.output_path is None
    assert result.error
    assert result.rendered_sections == ["skills", "experience"]


@pytest.mark.integration
def test_build_load_errors_propagate(tmp_path, config_file, fixtures_path):
    with pytest.raises(ContentLoadError):
        build_document(config_file, tmp_path / "missing.yaml", tmp_path / "out.pdf")

    with pytest.raises(ConfigLoadError):
        build_document(tmp_path / "missing.yaml", fixtures_path / "content" / "jane_doe.yaml", tmp_path / "out.pdf")
