from __future__ import annotations

from dataclasses import replace

import typer

from graph_projector.core.config.projector_config import (
    ProjectorConfigError,
    build_registry,
    load_settings,
)
from graph_projector.core.errors import DocumentLoadError, InvalidArgumentError, ProjectionError
from graph_projector.core.expand.expander import Expander
from graph_projector.core.io.load_document import dump_document, load_document, render_document
from graph_projector.core.logging import configure_logging, reset_logging
from graph_projector.core.model import parse_includes
from graph_projector.core.sort.sort_items import sort_items

app = typer.Typer(add_completion=False, no_args_is_help=True)

_FORMATS = ("json", "yaml")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@app.callback()
def _callback(
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
    log_format: str = typer.Option("text", "--log-format", help="Log output format: text|json"),
) -> None:
    """Projector CLI."""
    level = log_level.upper()
    if level not in _LOG_LEVELS or log_format not in ("text", "json"):
        _print_errors(
            [
                InvalidArgumentError(
                    code="E_CLI_LOGGING",
                    message=f"invalid logging options: level={log_level} format={log_format}",
                    path="log",
                )
            ]
        )
        raise typer.Exit(code=2)
    configure_logging(level, "json" if log_format == "json" else "text")
    ctx.call_on_close(reset_logging)


@app.command("expand")
def expand(
    path: str = typer.Argument(..., help="Path to a document (.yaml/.yml/.json)"),
    include: str = typer.Option(
        "",
        "--include",
        "-i",
        help="Comma separated dotted paths, e.g. 'name,friends.name,-secret'",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Optional YAML file with registry settings",
    ),
    format: str = typer.Option("json", "--format", help="Output format: json|yaml"),
    out: str | None = typer.Option(None, "--out", help="Write the projection here instead of stdout"),
) -> None:
    """Project a document down to the included fields.

    Documents are plain mappings and lists, so they are always expanded blind.
    """
    _check_format(format)

    try:
        document = load_document(path)
    except DocumentLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    try:
        settings = load_settings(config_file)
    except FileNotFoundError:
        _print_errors(
            [
                DocumentLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"config file not found: {config_file}",
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except ProjectorConfigError as e:
        _print_errors(
            [
                InvalidArgumentError(
                    code="E_CONFIG_FILE_INVALID",
                    message=str(e),
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=2)

    expander = Expander(build_registry(replace(settings, expand_blind_objects=True)))
    try:
        projected = expander.expand(document, includes=parse_includes(include))
    except ProjectionError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    _emit(projected, format, out)


@app.command("sort")
def sort(
    path: str = typer.Argument(..., help="Path to a document whose top level is a list"),
    by: str = typer.Option(..., "--by", help="Property to sort on"),
    direction: str = typer.Option("ascending", "--direction", help="ascending|descending"),
    format: str = typer.Option("json", "--format", help="Output format: json|yaml"),
    out: str | None = typer.Option(None, "--out", help="Write the result here instead of stdout"),
) -> None:
    """Stable-sort a list of records by one property."""
    _check_format(format)

    try:
        document = load_document(path)
    except DocumentLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    try:
        ordered = sort_items(document, by, direction)
    except ProjectionError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    _emit(ordered, format, out)


def _check_format(format: str) -> None:
    if format not in _FORMATS:
        _print_errors(
            [
                InvalidArgumentError(
                    code="E_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: {', '.join(_FORMATS)})",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _emit(data: object, format: str, out: str | None) -> None:
    fmt = "yaml" if format == "yaml" else "json"
    if out is None:
        typer.echo(render_document(data, fmt))
        return
    dump_document(data, out, fmt)
    typer.echo(f"OK: wrote {out}")


def _print_errors(errors: list[ProjectionError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="projector")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
