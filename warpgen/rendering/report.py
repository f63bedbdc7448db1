"""Human-readable summary of a materialized project."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..core.models import ProjectOptions, ProjectTree

logger = logging.getLogger(__name__)

SUMMARY_TEMPLATE = "summary.txt.j2"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_summary(
    tree: ProjectTree,
    project_name: str,
    project_type: str,
    options: ProjectOptions,
) -> str:
    """Render the post-creation summary with next steps for the project type.

    Args:
        tree: Materialized project
        project_name: Project name
        project_type: Template/project type
        options: Options the project was created with

    Returns:
        Summary text
    """
    template = _environment().get_template(SUMMARY_TEMPLATE)
    logger.debug(f"Rendering summary for {project_name}")
    return template.render(
        project_name=project_name,
        project_type=project_type,
        root=tree.root,
        files=tree.files,
        executables=tree.executables,
        warnings=len(tree.diagnostics),
        docker=options.docker,
        ci=options.ci,
        docs=options.docs,
    )
