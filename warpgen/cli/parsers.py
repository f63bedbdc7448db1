"""CLI argument parsers and validators."""

from __future__ import annotations

import re

import typer

from ..core.exceptions import OptionsError
from ..core.models import ProjectOptions

_PROJECT_NAME = re.compile(r"^[a-zA-Z0-9_-]+$")


def parse_variable(value: str) -> tuple[str, str]:
    """Parse a variable override in format KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, val = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Empty variable name in: {value!r}")
    return key, val


def parse_project_name(value: str) -> str:
    """Validate a project name (letters, numbers, hyphens, underscores)."""
    if not _PROJECT_NAME.match(value):
        raise typer.BadParameter(
            "Invalid project name. Use only letters, numbers, hyphens, and underscores."
        )
    return value


def parse_options(value: str) -> ProjectOptions:
    """Parse project options JSON."""
    try:
        return ProjectOptions.from_json(value)
    except OptionsError as e:
        raise typer.BadParameter(e.message) from e


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e
