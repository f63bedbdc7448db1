"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from typing_extensions import Annotated

from ..core.exceptions import WarpError
from ..core.models import Diagnostic
from ..core.settings import WarpSettings
from ..environment import variables
from ..environment.store import VariableStore
from ..rendering import catalog, engine, materializer, report
from ..rendering.io import atomic_write_text
from .parsers import parse_file_mode, parse_options, parse_project_name, parse_variable

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="warp",
    help="Scaffold projects from template directories.",
    no_args_is_help=True,
)


def configure_logging(settings: WarpSettings, verbose: bool) -> None:
    """Log to the console and append timestamped lines to the warp log file."""
    if verbose or settings.debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    handlers: list[logging.Handler] = [console]

    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_dir / "warp.log", encoding="utf-8")
    except OSError as e:
        typer.echo(f"Warning: file logging disabled: {e}", err=True)
    else:
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s", "%Y-%m-%d %H:%M:%S")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)


def exit_with_error(error: WarpError) -> NoReturn:
    """Print a fatal error and exit with its exit code."""
    logger.debug(f"Aborting: {error.message}")
    typer.echo(f"Error: {error.message}", err=True)
    raise typer.Exit(code=error.exit_code)


def report_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        typer.secho(f"Warning: {diagnostic}", err=True, fg=typer.colors.YELLOW)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Scaffold projects from template directories."""
    settings = WarpSettings()
    configure_logging(settings, verbose)
    ctx.obj = settings


@app.command()
def create(
    ctx: typer.Context,
    project_name: Annotated[
        str, typer.Argument(help="Project name.", callback=parse_project_name)
    ],
    template: Annotated[str, typer.Argument(help="Template name.")],
    options: Annotated[
        str,
        typer.Option(
            "--options",
            help='Project options as JSON, e.g. {"docker": "false"}.',
            metavar="JSON",
        ),
    ] = "{}",
    target: Annotated[
        Path,
        typer.Option("--target", help="Directory to create the project in."),
    ] = Path("."),
    overrides: Annotated[
        Optional[list[str]],
        typer.Option(
            "--var",
            help="Override a generated variable (format: KEY=VALUE). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = None,
    templates_dir: Annotated[
        Optional[Path],
        typer.Option("--templates-dir", help="Templates root (default: WARP_TEMPLATES_DIR)."),
    ] = None,
    file_mode: Annotated[
        Optional[str],
        typer.Option("--mode", help="Permissions of processed files in octal.", metavar="OCTAL"),
    ] = None,
) -> None:
    """Create a project from a template."""
    settings: WarpSettings = ctx.obj
    project_options = parse_options(options)
    extra = dict(parse_variable(value) for value in overrides or [])
    mode = parse_file_mode(file_mode) if file_mode else settings.file_mode
    root = templates_dir or settings.templates_dir

    logger.info(f"Creating project from template: {template}")
    try:
        template_dir = catalog.find_template(root, template)
        store = variables.build_store(
            project_name, template, project_options, overrides=extra
        )
        tree = materializer.materialize(
            template_dir,
            project_name,
            store,
            target,
            suffix=settings.template_suffix,
            file_mode=mode,
        )
    except WarpError as e:
        exit_with_error(e)

    report_diagnostics(tree.diagnostics)
    typer.echo(report.render_summary(tree, project_name, template, project_options))


@app.command("list")
def list_command(
    ctx: typer.Context,
    templates_dir: Annotated[
        Optional[Path],
        typer.Option("--templates-dir", help="Templates root (default: WARP_TEMPLATES_DIR)."),
    ] = None,
) -> None:
    """List available project templates."""
    settings: WarpSettings = ctx.obj
    templates = catalog.list_templates(templates_dir or settings.templates_dir)

    typer.echo("Available project templates:")
    typer.echo()
    for info in templates:
        typer.echo(f"  {info.name:<20} {info.description or 'No description'}")


@app.command()
def validate(
    ctx: typer.Context,
    template: Annotated[str, typer.Argument(help="Template name.")],
    templates_dir: Annotated[
        Optional[Path],
        typer.Option("--templates-dir", help="Templates root (default: WARP_TEMPLATES_DIR)."),
    ] = None,
) -> None:
    """Report the variables a template uses and any broken references."""
    settings: WarpSettings = ctx.obj
    try:
        template_dir = catalog.find_template(templates_dir or settings.templates_dir, template)
        result = catalog.validate_template(template_dir, settings.template_suffix)
    except WarpError as e:
        exit_with_error(e)

    if result.variables:
        typer.echo("Template requires these variables:")
        for name in result.variables:
            typer.echo(f"  - {name}")
    for include in result.missing_includes:
        typer.secho(f"Missing include: {include}", err=True, fg=typer.colors.RED)
    for name in result.unknown_functions:
        typer.secho(f"Unknown function: {name}", err=True, fg=typer.colors.RED)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def render(
    template_file: Annotated[Path, typer.Argument(help="Template file to process.")],
    vars_file: Annotated[
        Path,
        typer.Option("--vars", help="Variables file (KEY=VALUE per line)."),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to FILE instead of stdout.", metavar="FILE"),
    ] = None,
) -> None:
    """Process a single template file."""
    try:
        store = VariableStore.load_file(vars_file)
        result = engine.process_template(template_file, store)
    except WarpError as e:
        exit_with_error(e)

    report_diagnostics(result.diagnostics)
    if output is None:
        typer.echo(result.text, nl=False)
        return

    try:
        atomic_write_text(output, result.text)
    except OSError as e:
        exit_with_error(WarpError(f"Cannot write {output}: {e}"))
    logger.info(f"Rendered {template_file} → {output}")


@app.command("variables")
def variables_command(
    project_name: Annotated[str, typer.Argument(help="Project name.")],
    project_type: Annotated[str, typer.Argument(help="Project type.")],
    options: Annotated[
        str,
        typer.Option("--options", help="Project options as JSON.", metavar="JSON"),
    ] = "{}",
) -> None:
    """Print the variables generated for a project."""
    text = variables.generate_project_variables(
        project_name, project_type, parse_options(options)
    )
    typer.echo(text, nl=False)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
