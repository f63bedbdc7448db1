"""Project materialization from a template directory."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Iterable

from ..core.exceptions import FileWriteError, ParseError, TemplateNotFoundError
from ..core.models import Diagnostic, ProjectTree
from ..environment.store import VariableStore
from .engine import process_template, substitute
from .io import atomic_write_text, copy_file, make_executable

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".template"
EXECUTABLE_PATTERNS = ("*.sh",)


def template_files(template_dir: Path) -> list[Path]:
    """List regular files under ``template_dir`` in a stable order."""
    return sorted(path for path in template_dir.rglob("*") if path.is_file())


def output_relpath(
    template_file: Path, template_dir: Path, store: VariableStore, suffix: str
) -> str:
    """Compute the output path of a template file, relative to the project root.

    Variables in the path are substituted; the template suffix is dropped.
    """
    relpath = substitute(template_file.relative_to(template_dir).as_posix(), store)
    if template_file.name.endswith(suffix):
        relpath = relpath.removesuffix(suffix)
    return relpath


def materialize_file(
    template_file: Path,
    output_path: Path,
    store: VariableStore,
    suffix: str = TEMPLATE_SUFFIX,
    file_mode: int = 0o644,
) -> list[Diagnostic]:
    """Write one output file, processing it when it carries the template suffix.

    Returns:
        Diagnostics from template processing

    Raises:
        FileWriteError: If the source cannot be read or the output written
    """
    if not template_file.name.endswith(suffix):
        try:
            copy_file(template_file, output_path)
        except OSError as e:
            raise FileWriteError(f"Cannot copy file: {e}", template_file) from e
        logger.debug(f"Copied {template_file} → {output_path}")
        return []

    try:
        result = process_template(template_file, store)
    except ParseError as e:
        raise FileWriteError(e.message, template_file) from e

    try:
        atomic_write_text(output_path, result.text, mode=file_mode)
    except OSError as e:
        raise FileWriteError(f"Cannot write {output_path}: {e}", template_file) from e
    logger.debug(f"Rendered {template_file} → {output_path}")
    return result.diagnostics


def mark_executables(
    paths: Iterable[Path], patterns: Iterable[str] = EXECUTABLE_PATTERNS
) -> tuple[list[Path], list[Diagnostic]]:
    """Make files whose name matches one of ``patterns`` executable."""
    patterns = tuple(patterns)
    marked: list[Path] = []
    diagnostics: list[Diagnostic] = []
    for path in paths:
        if not any(fnmatch.fnmatch(path.name, pattern) for pattern in patterns):
            continue
        try:
            make_executable(path)
        except OSError as e:
            error = FileWriteError(f"Cannot mark executable: {e}", path)
            logger.warning(error.message)
            diagnostics.append(Diagnostic.from_error(error))
            continue
        marked.append(path)
    return marked, diagnostics


def materialize(
    template_dir: Path,
    project_name: str,
    store: VariableStore,
    target_dir: Path,
    *,
    suffix: str = TEMPLATE_SUFFIX,
    file_mode: int = 0o644,
    executable_patterns: Iterable[str] = EXECUTABLE_PATTERNS,
) -> ProjectTree:
    """Instantiate a project directory from a template directory.

    Every file under ``template_dir`` maps to one file under
    ``target_dir / project_name``. Per-file failures are collected as
    diagnostics and do not stop the remaining files.

    Args:
        template_dir: Template tree to instantiate
        project_name: Name of the project directory to create
        store: Variables for paths and contents
        target_dir: Directory the project directory is created in
        suffix: File name suffix marking files to process
        file_mode: Permissions for processed files
        executable_patterns: Glob patterns of file names to mark executable

    Returns:
        The materialized project tree

    Raises:
        TemplateNotFoundError: If ``template_dir`` does not exist
    """
    if not template_dir.is_dir():
        raise TemplateNotFoundError(template_dir)

    project_dir = target_dir / project_name
    project_root = project_dir.resolve()
    sources = template_files(template_dir)
    logger.info(f"Materializing {len(sources)} file(s) from {template_dir}")

    tree = ProjectTree(root=project_dir)
    written: set[Path] = set()

    for template_file in sources:
        output_path = project_dir / output_relpath(
            template_file, template_dir, store, suffix
        )
        try:
            resolved = output_path.resolve()
            if not resolved.is_relative_to(project_root) or resolved == project_root:
                raise FileWriteError(
                    f"Output path outside project: {output_path}", template_file
                )
            if resolved in written:
                raise FileWriteError(
                    f"Output path already written: {output_path}", template_file
                )
            tree.diagnostics.extend(
                materialize_file(template_file, output_path, store, suffix, file_mode)
            )
        except FileWriteError as error:
            logger.warning(error.message)
            tree.diagnostics.append(Diagnostic.from_error(error))
            continue

        written.add(resolved)
        tree.files.append(output_path)

    tree.executables, chmod_diagnostics = mark_executables(
        tree.files, executable_patterns
    )
    tree.diagnostics.extend(chmod_diagnostics)

    logger.info(
        f"Materialized {len(tree.files)} file(s) into {project_dir}"
        f" with {len(tree.diagnostics)} warning(s)"
    )
    return tree
