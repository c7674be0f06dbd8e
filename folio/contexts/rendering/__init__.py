"""
Rendering Context

Responsibilities:
- Defines the backend protocol composition writes rows to
- Draws rows into a PDF with fpdf2 (grid layout, page breaks, background)
- Orchestrates a full build from files and reports the outcome

Owns: Document backends, PDF output, build orchestration
Never: Decides section order or resolves styles
"""

from folio.contexts.rendering.backends import DocumentBackend, RecordingBackend
from folio.contexts.rendering.builder import BuildResult, build_document
from folio.contexts.rendering.pdf_backend import FpdfBackend

__all__ = [
    "DocumentBackend",
    "RecordingBackend",
    "FpdfBackend",
    "BuildResult",
    "build_document",
]
