"""Template discovery and static validation."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from ..core.exceptions import TemplateNotFoundError
from ..core.models import TemplateInfo, TemplateReport
from .functions import FUNCTIONS
from .materializer import TEMPLATE_SUFFIX, template_files
from .scanner import FUNCTION, INCLUDE, iter_tags

logger = logging.getLogger(__name__)

METADATA_FILE = "template.json"

_VARIABLE_PATTERN = re.compile(r"\{\{([A-Z_][A-Z0-9_]*)\}\}")


def read_description(template_dir: Path) -> str:
    """Return the description from ``template.json``, or an empty string."""
    metadata_path = template_dir / METADATA_FILE
    if not metadata_path.is_file():
        return ""
    try:
        data = json.loads(metadata_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Invalid template metadata {metadata_path}: {e}")
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("description", ""))


def list_templates(templates_root: Path) -> list[TemplateInfo]:
    """List the project templates (subdirectories) of a templates root."""
    if not templates_root.is_dir():
        logger.warning(f"Templates directory not found: {templates_root}")
        return []
    return [
        TemplateInfo(name=path.name, path=path, description=read_description(path))
        for path in sorted(templates_root.iterdir())
        if path.is_dir()
    ]


def find_template(templates_root: Path, name: str) -> Path:
    """Resolve a template name to its directory.

    Raises:
        TemplateNotFoundError: If no such template exists
    """
    template_dir = templates_root / name
    if not template_dir.is_dir():
        raise TemplateNotFoundError(name)
    return template_dir


def validate_template(
    template_dir: Path, suffix: str = TEMPLATE_SUFFIX
) -> TemplateReport:
    """Statically inspect a template directory.

    Collects the upper-case variables referenced in file names and template
    contents, include tokens that do not resolve, and unknown functions.

    Raises:
        TemplateNotFoundError: If ``template_dir`` does not exist
    """
    if not template_dir.is_dir():
        raise TemplateNotFoundError(template_dir)

    variables: set[str] = set()
    missing_includes: set[str] = set()
    unknown_functions: set[str] = set()

    for path in template_files(template_dir):
        relpath = path.relative_to(template_dir).as_posix()
        variables.update(_VARIABLE_PATTERN.findall(relpath))
        if not path.name.endswith(suffix):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read template {path}: {e}")
            continue

        variables.update(_VARIABLE_PATTERN.findall(text))
        for tag in iter_tags(text, (INCLUDE, FUNCTION)):
            if tag.kind == INCLUDE and not (path.parent / tag.name).is_file():
                missing_includes.add(f"{relpath}: {tag.name}")
            elif tag.kind == FUNCTION and tag.name not in FUNCTIONS:
                unknown_functions.add(tag.name)

    return TemplateReport(
        template_dir=template_dir,
        variables=sorted(variables),
        missing_includes=sorted(missing_includes),
        unknown_functions=sorted(unknown_functions),
    )
