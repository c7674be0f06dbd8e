"""Custom exceptions for the content context."""

from pathlib import Path
from typing import Optional


class ContentLoadError(Exception):
    """
    Exception raised when a content document cannot be loaded.

    Attributes:
        message: Error description
        path: Path of the content file that failed
        original_error: Underlying parser or filesystem error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"Content: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
