"""
Document build orchestration.

Loads config and content, composes rows and renders them to a PDF. Load errors
(ConfigLoadError, ContentLoadError) propagate to the caller; failures while
writing the PDF are reported through BuildResult.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from fpdf.errors import FPDFException

from folio.contexts.composition.composer import CompositionResult, compose_document
from folio.contexts.composition.registries import RendererRegistry
from folio.contexts.content.loader import load_content, load_legacy_resume
from folio.contexts.rendering.logger import _log_debug, log_build_result, log_build_start
from folio.contexts.rendering.pdf_backend import FpdfBackend
from folio.contexts.styling.config_loader import load_config


@dataclass
class BuildResult:
    """
    Result of a document build.

    Attributes:
        success: Whether the PDF was written
        output_path: Path of the PDF (None if writing failed)
        composition: Rows and section bookkeeping from composition
        page_count: Number of pages written
        error: Description of the failure, if any
    """

    success: bool
    output_path: Optional[Path] = None
    composition: CompositionResult = field(default_factory=CompositionResult)
    page_count: int = 0
    error: Optional[str] = None

    @property
    def rendered_sections(self) -> List[str]:
        return self.composition.rendered


def build_document(
    config_path: Path,
    content_path: Path,
    output_path: Path,
    presets: List[str] = (),
    legacy: bool = False,
    registry: Optional[RendererRegistry] = None,
) -> BuildResult:
    """
    Build a PDF from a config file and a content file.

    Args:
        config_path: Document config (YAML or JSON)
        content_path: Content document, or a legacy flat resume when legacy is set
        output_path: PDF to write
        presets: Style presets applied over the config, in order
        legacy: Read content_path in the legacy resume format
        registry: Renderer registry (default: built-in renderers)

    Returns:
        BuildResult

    Raises:
        ConfigLoadError: If the config cannot be loaded
        ContentLoadError: If the content cannot be loaded
    """
    start_time = time.time()
    config_path, content_path, output_path = Path(config_path), Path(content_path), Path(output_path)
    log_build_start(config_path, content_path, output_path)

    config = load_config(config_path, presets=presets)
    content = load_legacy_resume(content_path) if legacy else load_content(content_path)
    _log_debug(f"  Sections in content: {', '.join(content.sections) or '(none)'}")

    backend = FpdfBackend(config.pdf, config.colors)
    composition = compose_document(content, config, backend, registry)

    try:
        written = backend.save(output_path)
        result = BuildResult(
            success=True,
            output_path=written,
            composition=composition,
            page_count=backend.page_count,
        )
    except (OSError, FPDFException) as e:
        result = BuildResult(success=False, composition=composition, error=str(e))

    log_build_result(result, time.time() - start_time)
    return result
