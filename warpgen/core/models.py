"""Domain models for template processing results and project options."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import OptionsError, RecoverableError


class Diagnostic(BaseModel):
    """A non-fatal processing anomaly reported to the caller."""

    code: str = Field(..., description="Machine-readable anomaly kind")
    message: str = Field(..., description="Human-readable description")
    source: Path | None = Field(default=None, description="File being processed")

    @classmethod
    def from_error(cls, error: RecoverableError) -> Diagnostic:
        return cls(code=error.code, message=error.message, source=error.source)

    def __str__(self) -> str:
        if self.source is not None:
            return f"{self.source}: {self.message}"
        return self.message


class RenderResult(BaseModel):
    """Output of running the template pipeline on one document."""

    text: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ProjectTree(BaseModel):
    """A materialized project directory."""

    root: Path = Field(..., description="Project output directory")
    files: list[Path] = Field(default_factory=list, description="Files written")
    executables: list[Path] = Field(
        default_factory=list, description="Files marked executable"
    )
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ProjectOptions(BaseModel):
    """User choices that drive project variable generation."""

    description: str = "Project created with Warp"
    author: str | None = None
    docker: bool = True
    testing: bool = True
    ci: bool = True
    docs: bool = True
    private: bool = False

    @classmethod
    def from_json(cls, text: str) -> ProjectOptions:
        """Parse options from a JSON object such as '{"docker": "false"}'."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise OptionsError(f"Invalid options JSON: {e}") from e
        if not isinstance(data, dict):
            raise OptionsError("Options must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise OptionsError(f"Invalid options: {e}") from e


class TemplateInfo(BaseModel):
    """A project template available in a templates root."""

    name: str
    path: Path
    description: str = ""


class TemplateReport(BaseModel):
    """Static analysis of a template directory."""

    template_dir: Path
    variables: list[str] = Field(default_factory=list)
    missing_includes: list[str] = Field(default_factory=list)
    unknown_functions: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.missing_includes or self.unknown_functions)
