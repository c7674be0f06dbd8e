"""
Content Loading

Reads content documents (YAML or JSON) into the Content model. Two shapes are
accepted:

1. **Content documents**: personal / contact_fields / sections, the native shape.
2. **Legacy resumes**: personal_info / summary / experience / education / skills,
   the flat shape used by the first resume builder. These are converted into an
   equivalent content document so they compose with any document config.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from folio.contexts.content.content_data_structure import Content
from folio.contexts.content.exceptions import ContentLoadError
from folio.contexts.content.logger import _log_info

# Legacy personal_info keys turned into contact fields, in display order
LEGACY_CONTACT_KEYS = ["email", "phone", "address", "website"]


def _read_mapping(path: Path) -> Dict[str, Any]:
    """Read a YAML/JSON file into a plain dict, wrapping failures in ContentLoadError."""
    path = Path(path)
    if not path.exists():
        raise ContentLoadError("Content file not found", path=path)

    try:
        # Content is user text: no ${} interpolation
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    except (OmegaConfBaseException, yaml.YAMLError, OSError, ValueError) as e:
        raise ContentLoadError("Could not parse content", path=path, original_error=e) from e

    if not isinstance(data, dict):
        raise ContentLoadError("Content root must be a mapping", path=path)
    return data


def load_content(content_path: Path) -> Content:
    """
    Load a content document.

    Args:
        content_path: YAML or JSON file with personal, contact_fields and sections

    Returns:
        Content with section payloads classified

    Raises:
        ContentLoadError: If the file is missing, unparseable or malformed
    """
    data = _read_mapping(content_path)

    try:
        content = Content.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise ContentLoadError("Invalid content structure", path=content_path, original_error=e) from e

    _log_info(
        f"Loaded content {Path(content_path).name}: "
        f"{len(content.contact_fields)} contact fields, {len(content.sections)} sections"
    )
    return content


def legacy_resume_to_content_dict(resume: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a legacy flat resume mapping into a content document mapping.

    Args:
        resume: Mapping with personal_info, summary, experience, education, skills

    Returns:
        Content document mapping (personal, contact_fields, sections)
    """
    personal = dict(resume.get("personal_info") or {})

    contact_fields: List[Dict[str, Any]] = []
    for key in LEGACY_CONTACT_KEYS:
        value = personal.get(key)
        if not value:
            continue
        field = {"field": key, "content": f"{{{{ {key} }}}}", "icon": key}
        if key == "website":
            field.update({"type": "link", "link": f"{{{{ {key} }}}}"})
        contact_fields.append(field)

    sections: Dict[str, Any] = {}
    if resume.get("summary"):
        sections["summary"] = {"content": resume["summary"]}
    if resume.get("experience"):
        sections["experience"] = {"items": list(resume["experience"])}
    if resume.get("education"):
        sections["education"] = {"items": list(resume["education"])}
    if resume.get("skills"):
        sections["skills"] = {"items": list(resume["skills"])}

    return {"personal": personal, "contact_fields": contact_fields, "sections": sections}


def load_legacy_resume(resume_path: Path) -> Content:
    """
    Load a legacy flat resume file as Content.

    Raises:
        ContentLoadError: If the file is missing, unparseable or malformed
    """
    data = _read_mapping(resume_path)

    try:
        content = Content.from_dict(legacy_resume_to_content_dict(data))
    except (AttributeError, TypeError, ValueError) as e:
        raise ContentLoadError("Invalid legacy resume structure", path=resume_path, original_error=e) from e

    _log_info(f"Converted legacy resume {Path(resume_path).name} ({len(content.sections)} sections)")
    return content
