"""
Document Config Loading and Preset Resolution

Loads a YAML or JSON document config, merges it over the built-in defaults and
applies named presets. Presets are composable and can override each other,
allowing flexible combination of palettes, spacing, etc.

Examples:
    # Load with defaults only
    >>> config = load_config(Path("config/document_config.yaml"))

    # Apply multiple presets (later overrides earlier)
    >>> config = load_config(path, presets=["spacing_tight", "colors_warm"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from folio.contexts.styling.config_data_structure import DocumentConfig
from folio.contexts.styling.defaults import get_default_config
from folio.contexts.styling.exceptions import ConfigLoadError, PresetNotFoundError
from folio.contexts.styling.logger import _log_debug, _log_info

load_dotenv()
RESUME_PRESETS_PATH = Path(os.getenv("RESUME_PRESETS_PATH", "config/presets.yaml"))


def load_presets(presets_path: Path = None) -> Dict[str, Any]:
    """
    Load presets file and flatten to single-level dict.

    Collapses nested structure: spacing.tight -> spacing_tight

    Args:
        presets_path: Optional path to presets file (defaults to RESUME_PRESETS_PATH env variable)

    Returns:
        Flattened dict mapping preset names to config fragments
        Example: {"spacing_tight": {"spacing": {...}}, "colors_warm": {"colors": {...}}}
    """
    if presets_path is None:
        presets_path = RESUME_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(presets_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, fragment in presets.items():
            flattened[f"{category}_{name}"] = fragment

    return flattened


def apply_presets(
    config_data: Dict[str, Any],
    preset_names: Sequence[str],
    presets_path: Path = None,
) -> Dict[str, Any]:
    """
    Apply named presets to raw config data.

    Presets are deep-merged in order, with later presets overriding earlier ones.

    Args:
        config_data: Config mapping (already merged over defaults)
        preset_names: Preset names to apply (e.g., ["spacing_tight", "colors_warm"])
        presets_path: Optional path to the presets file

    Returns:
        New config mapping with presets applied

    Raises:
        PresetNotFoundError: If a preset name is not defined
    """
    if not preset_names:
        return config_data

    presets = load_presets(presets_path)
    merged = OmegaConf.create(config_data)

    for preset_name in preset_names:
        if preset_name not in presets:
            available = sorted(presets.keys())
            raise PresetNotFoundError(
                f"Preset '{preset_name}' not found. Available presets: {available}"
            )
        _log_debug(f"Applying preset {preset_name}")
        merged = OmegaConf.merge(merged, OmegaConf.create(presets[preset_name]))

    return OmegaConf.to_container(merged, resolve=True)


def merge_with_defaults(user_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Deep-merge a user config mapping over get_default_config()."""
    merged = OmegaConf.merge(
        OmegaConf.create(get_default_config()), OmegaConf.create(user_data or {})
    )
    return OmegaConf.to_container(merged, resolve=True)


def load_config(
    config_path: Path,
    presets: Sequence[str] = (),
    presets_path: Path = None,
) -> DocumentConfig:
    """
    Load a document config file.

    Args:
        config_path: YAML or JSON config file
        presets: Optional preset names applied after the defaults merge
        presets_path: Optional presets file (defaults to RESUME_PRESETS_PATH)

    Returns:
        DocumentConfig ready for composition

    Raises:
        ConfigLoadError: If the file is missing, unparseable, has the wrong shape,
            or names an unknown preset
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigLoadError("Config file not found", path=config_path)

    try:
        raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    except (OmegaConfBaseException, yaml.YAMLError, OSError, ValueError) as e:
        raise ConfigLoadError("Could not parse config", path=config_path, original_error=e) from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigLoadError("Config root must be a mapping", path=config_path)

    try:
        data = merge_with_defaults(raw)
        data = apply_presets(data, list(presets), presets_path)
        config = DocumentConfig.from_dict(data)
    except PresetNotFoundError as e:
        raise ConfigLoadError(str(e), path=config_path, original_error=e) from e
    except (OmegaConfBaseException, OSError, TypeError, ValueError) as e:
        raise ConfigLoadError("Invalid config structure", path=config_path, original_error=e) from e

    _log_info(f"Loaded config {config_path.name} ({len(config.sections)} sections)")
    if presets:
        _log_info(f"Applied presets: {', '.join(presets)}")

    return config


def config_from_dict(data: Optional[Dict[str, Any]] = None, presets: List[str] = ()) -> DocumentConfig:
    """Build a DocumentConfig from an in-memory mapping, merged over defaults."""
    merged = apply_presets(merge_with_defaults(data), list(presets))
    return DocumentConfig.from_dict(merged)
