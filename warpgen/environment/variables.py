"""Project variable generation.

Derives the full set of template variables (name-case variants, feature
flags, dates, URLs) for a new project from its name, type and options.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
from typing import Mapping

from ..core.models import ProjectOptions
from ..rendering.functions import camel_case, pascal_case
from .store import VariableStore

logger = logging.getLogger(__name__)

_FILE_EXTENSIONS: dict[str, tuple[str, str, str]] = {
    "python": (".py", ".py", "setup.py"),
    "javascript": (".js", ".test.js", "package.json"),
    "node": (".js", ".test.js", "package.json"),
    "wordpress-plugin": (".php", ".php", "composer.json"),
    "wordpress-theme": (".php", ".php", "composer.json"),
    "php": (".php", ".php", "composer.json"),
}


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _single_line(value: str) -> str:
    return " ".join(value.split("\n"))


def file_extensions(project_type: str) -> dict[str, str]:
    """Return MAIN_FILE_EXT, TEST_FILE_EXT and CONFIG_FILE for a project type.

    Unknown types yield no variables.
    """
    if project_type not in _FILE_EXTENSIONS:
        return {}
    main_ext, test_ext, config_file = _FILE_EXTENSIONS[project_type]
    return {
        "MAIN_FILE_EXT": main_ext,
        "TEST_FILE_EXT": test_ext,
        "CONFIG_FILE": config_file,
    }


def project_variables(
    project_name: str,
    project_type: str,
    options: ProjectOptions | None = None,
    env: Mapping[str, str] | None = None,
    now: dt.datetime | None = None,
) -> dict[str, str]:
    """Build the ordered variable mapping for a project.

    Args:
        project_name: Project name as typed by the user
        project_type: Template/project type (python, node, wordpress-plugin...)
        options: Feature choices; defaults enable docker, testing, CI and docs
        env: Environment used for author and GitHub values (default: os.environ)
        now: Timestamp for date variables (default: current time)

    Returns:
        Mapping of variable name to value
    """
    options = options or ProjectOptions()
    env = os.environ if env is None else env
    now = now or dt.datetime.now()

    user = env.get("USER", "")
    github_user = env.get("GITHUB_USERNAME", "")
    pascal = pascal_case(project_name)
    camel = camel_case(project_name)
    snake = project_name.replace("-", "_")
    kebab = project_name.replace("_", "-")
    lower = project_name.lower()

    variables: dict[str, str] = {
        # Project basics
        "PROJECT_NAME": project_name,
        "PROJECT_TYPE": project_type,
        "PROJECT_DESCRIPTION": options.description,
        "AUTHOR_NAME": options.author or env.get("GITHUB_NAME") or user,
        "AUTHOR_EMAIL": env.get("GITHUB_EMAIL") or f"{user}@localhost",
        "AUTHOR_URL": env.get("GITHUB_URL") or f"https://github.com/{github_user}",
        # Name variants
        "CLASS_NAME": pascal,
        "CONSTANT_PREFIX": project_name.upper().replace("-", "_"),
        "FUNCTION_PREFIX": snake.lower(),
        "PACKAGE_NAME": project_name.replace("-", "").replace("_", ""),
        "NAMESPACE": pascal,
        # WordPress
        "TEXT_DOMAIN": project_name,
        "MENU_SLUG": kebab,
        "OPTION_PREFIX": snake,
        "SCRIPT_HANDLE": kebab,
        "STYLE_HANDLE": kebab,
        "NONCE_ACTION": f"{project_name}_nonce",
        "AJAX_ACTION": f"{project_name}_ajax",
        "SHORTCODE": kebab,
        "TABLE_NAME": snake,
        "CRON_HOOK": f"{project_name}_cron",
        "OPTION_GROUP": f"{project_name}_options",
        "SECTION_ID": f"{project_name}_section",
        "LOCALIZE_OBJECT": f"{camel}Object",
        "PLUGIN_URI": f"https://github.com/{github_user}/{project_name}",
        # Node.js / JavaScript
        "NPM_NAME": lower,
        "MODULE_NAME": camel,
        "COMPONENT_NAME": pascal,
        # Python
        "PYTHON_PACKAGE": snake.lower(),
        "PYTHON_MODULE": snake.lower(),
        "PYTHON_CLASS": pascal,
        # Feature flags
        "USE_DOCKER": _bool(options.docker),
        "INCLUDE_TESTING": _bool(options.testing),
        "INCLUDE_CI": _bool(options.ci),
        "INCLUDE_DOCS": _bool(options.docs),
        "PRIVATE_REPO": _bool(options.private),
        # Version and dates
        "PROJECT_VERSION": "1.0.0",
        "CURRENT_YEAR": now.strftime("%Y"),
        "CURRENT_DATE": now.strftime("%Y-%m-%d"),
        "CURRENT_DATETIME": now.strftime("%Y-%m-%d %H:%M:%S"),
        "LICENSE": env.get("LICENSE") or "MIT",
        # GitHub
        "GITHUB_USERNAME": github_user or user,
        "GITHUB_REPO_URL": f"https://github.com/{github_user}/{project_name}",
        "GITHUB_ISSUES_URL": f"https://github.com/{github_user}/{project_name}/issues",
        "GITHUB_CLONE_URL": f"git@github.com:{github_user}/{project_name}.git",
        # Docker
        "DOCKER_IMAGE_NAME": lower,
        "DOCKER_CONTAINER_NAME": f"{lower}_app",
        # Database
        "DB_NAME": snake,
        "DB_TABLE_PREFIX": f"{snake}_",
        # API
        "API_VERSION": "v1",
        "API_NAMESPACE": f"{project_name}/v1",
        "REST_ROUTE_PREFIX": project_name,
    }
    variables.update(file_extensions(project_type))
    return variables


def generate_project_variables(
    project_name: str,
    project_type: str,
    options: ProjectOptions | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Render the project variables as ``KEY=VALUE`` text under a header comment."""
    variables = project_variables(project_name, project_type, options, env)
    lines = [f"# Variables for {project_name} ({project_type})"]
    lines.extend(f"{key}={_single_line(value)}" for key, value in variables.items())
    logger.debug(f"Generated {len(variables)} variable(s) for {project_name}")
    return "\n".join(lines) + "\n"


def build_store(
    project_name: str,
    project_type: str,
    options: ProjectOptions | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> VariableStore:
    """Generate project variables and load them into a store.

    Values go through the ``KEY=VALUE`` text form, so multi-line values are
    folded onto one line.
    """
    text = generate_project_variables(project_name, project_type, options, env)
    store = VariableStore.load(text)
    if overrides:
        store = store.merged(overrides)
    return store
