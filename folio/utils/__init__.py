"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup with provenance tracking
"""

from folio.utils.logger import console_level_for, log_provenance, setup_logger

__all__ = ["console_level_for", "log_provenance", "setup_logger"]
