"""
Logging setup shared by FOLIO scripts.

One build or icon run gets its own log directory. The log file always records
everything at DEBUG; the console shows INFO and above unless a verbose run asks
for DEBUG. Library modules never call setup_logger: they log through their
context's logger.py wrappers and leave sink configuration to the scripts.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from folio import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors for levels whose loguru default is hard to read on dark terminals
LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def console_level_for(verbose: bool) -> str:
    return "DEBUG" if verbose else "INFO"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, Any]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output for one run to <log_dir>/<context_name>.log and stdout.

    Args:
        context_name: Log file stem (e.g. "render")
        log_dir: Directory for this run, created if missing
        extra_provenance: Inputs of the run recorded in the header; None values are left out
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    logger.debug(f"Console level: {console_level}")

    return log_file


def log_provenance(extra_context: Optional[Dict[str, Any]] = None) -> None:
    """Write the run header: FOLIO version, command line, working directory and inputs."""
    logger.info("=" * 80)
    logger.info(f"FOLIO {__version__} (Python {sys.version.split()[0]})")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")

    for key, value in (extra_context or {}).items():
        if value is not None:
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
