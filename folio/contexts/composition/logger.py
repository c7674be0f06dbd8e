"""
Composition context logger.

Provides logging interface for composition context with automatic [compose] prefix.
All composition modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[compose]"


def _log_info(message: str) -> None:
    """Log info message with [compose] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [compose] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [compose] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level composition-specific logging helpers


def log_section_skipped(section_key: str, reason: str) -> None:
    _log_debug(f"Skipping section '{section_key}': {reason}")


def log_composition_summary(result) -> None:
    """
    Log what a composition pass produced.

    Args:
        result: CompositionResult from DocumentComposer.compose()
    """
    _log_info(f"Composed {len(result.rows)} rows from {len(result.rendered)} sections")
    if result.rendered:
        _log_debug(f"  Rendered: {', '.join(result.rendered)}")
    if result.skipped:
        _log_debug(f"  Skipped: {', '.join(result.skipped)}")
    if result.missing_icons:
        _log_warning(f"Missing icons (rendered without): {', '.join(sorted(result.missing_icons))}")
