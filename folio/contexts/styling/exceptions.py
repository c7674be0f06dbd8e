"""Custom exceptions for the styling context."""

from pathlib import Path
from typing import Optional


class ConfigLoadError(Exception):
    """
    Exception raised when a document config cannot be loaded.

    Load failures are fatal: composition never starts with a half-read config.

    Attributes:
        message: Error description
        path: Path of the config file that failed
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
            parts.append(f"Config: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class PresetNotFoundError(ValueError):
    """Raised when a requested style preset is not defined in the presets file."""

    pass
