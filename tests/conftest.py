"""Shared fixtures for FOLIO tests."""

from pathlib import Path

import pytest

from folio.contexts.styling.config_loader import config_from_dict

FIXTURES_PATH = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def icon_output_dir(tmp_path) -> Path:
    """Fresh icon cache directory per test."""
    return tmp_path / "icons"


@pytest.fixture
def config_data(icon_output_dir) -> dict:
    """Config overrides pointing the icon pipeline at the fixture icons."""
    return {
        "icons": {
            "svg_paths": [str(FIXTURES_PATH / "icons")],
            "output_dir": str(icon_output_dir),
            "default_size": 32,
            "color": "primary",
            "mappings": {
                "email": "envelope",
                "github": "envelope",
                "skills": "envelope",
                "wide": "wide",
                "broken": "broken",
                "missing": "does_not_exist",
            },
        },
        "sections": {
            "skills": {"template": "simple_list", "title": "Technical Skills", "icon": "skills", "order": 1},
            "experience": {"template": "entry_list", "title": "Experience", "order": 2},
            "hobbies": {
                "template": "simple_list",
                "title": "Hobbies",
                "enabled": True,
                "order": 3,
            },
        },
    }


@pytest.fixture
def document_config(config_data):
    return config_from_dict(config_data)
