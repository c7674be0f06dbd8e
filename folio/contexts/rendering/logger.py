"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import console_level_for
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path, config_path: Path = None, content_path: Path = None, verbose: bool = False
) -> Path:
    """
    Setup logger for a build session.

    Args:
        log_dir: Directory for this build session
        config_path: Config file, recorded in the provenance header
        content_path: Content file, recorded in the provenance header
        verbose: Echo DEBUG records to the console as well as the log file

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Config": config_path, "Content": content_path},
        console_level=console_level_for(verbose),
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_build_start(config_path: Path, content_path: Path, output_path: Path) -> None:
    _log_info(f"Building {output_path.name}")
    _log_debug(f"  Config: {config_path}")
    _log_debug(f"  Content: {content_path}")


def log_build_result(result, elapsed_time: float) -> None:
    """
    Log a build result.

    Args:
        result: BuildResult from build_document()
        elapsed_time: Time taken for the whole build
    """
    if result.success:
        _log_success(
            f"{result.output_path.name}: {result.page_count} page(s), "
            f"{len(result.composition.rows)} rows ({elapsed_time:.2f}s)"
        )
        _log_debug(f"  PDF: {result.output_path}")
    else:
        _log_error(f"Build failed ({elapsed_time:.2f}s): {result.error}")
