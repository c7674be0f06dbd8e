"""
Icons context logger.

Provides logging interface for icons context with automatic [icons] prefix.
All icons modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[icons]"


def _log_info(message: str) -> None:
    """Log info message with [icons] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [icons] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [icons] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [icons] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level icons-specific logging helpers


def log_cache_hit(icon_key: str, path: Path) -> None:
    _log_debug(f"Cache hit for '{icon_key}': {path.name}")


def log_icon_conversion(
    icon_key: str, source: Path, target: Path, width: int, height: int, elapsed_time: float
) -> None:
    """Log a completed SVG -> PNG conversion."""
    _log_success(f"Rasterized '{icon_key}' to {width}x{height} ({elapsed_time:.3f}s)")
    _log_debug(f"  Source: {source}")
    _log_debug(f"  Output: {target}")


def log_icon_failure(icon_key: str, error: Exception) -> None:
    """Log a conversion failure; the caller falls back to no icon."""
    _log_warning(f"Could not convert icon '{icon_key}': {error}")
