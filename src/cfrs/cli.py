"""Typer CLI entrypoint for the résumé pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .container import create_container, load_schema_file
from .errors import CFRSError
from .logging import configure_logging
from .pipeline import ImportOutcome, ResumePipeline
from .schemas import load_schema_document
from .schemas.config import AppConfig, load_config
from .validation import compile_schema

app = typer.Typer(help="Import, validate and export résumés in the CloudFlow Resume Schema.")


@app.callback()
def main_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logging."),
) -> None:
    """Load configuration and logging shared by all commands."""
    raw: Any = None
    if config:
        with config.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    try:
        app_config = load_config(raw)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config: {exc}", param_hint="'--config'") from exc

    configure_logging(log_level or app_config.logging.level)
    ctx.obj = app_config


@app.command("import")
def import_(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Résumé file (.json, .md, .markdown) or '-' to read pasted text from stdin."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Write the canonical JSON here instead of stdout."),
) -> None:
    """Import a résumé, report diagnostics and emit canonical JSON."""
    pipeline = _pipeline(ctx)
    outcome = _load(pipeline, source)
    _report(outcome)
    if output:
        pipeline.export_to(outcome.document, output, "cfrs")
        typer.echo(f"Imported {outcome.format} résumé. Canonical JSON saved to {output}.", err=True)
    else:
        typer.echo(pipeline.export(outcome.document, "cfrs"))


@app.command()
def validate(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Résumé file or '-' for stdin."),
    as_json: bool = typer.Option(False, "--json", help="Print the full diagnostic report as JSON."),
) -> None:
    """Validate a résumé against the canonical schema; exit 1 when it does not conform."""
    pipeline = _pipeline(ctx)
    outcome = _load(pipeline, source)
    if as_json:
        typer.echo(json.dumps(outcome.report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _report(outcome, limit=len(outcome.report.errors))
    if not outcome.valid:
        raise typer.Exit(code=1)
    if not as_json:
        typer.echo("Resume is valid.")


@app.command()
def export(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Résumé file or '-' for stdin."),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="cfrs, json-resume, html or markdown."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Output path; stdout when omitted."),
    theme: Optional[str] = typer.Option(None, help="HTML theme (classic or modern)."),
) -> None:
    """Render a résumé into one of the supported output formats."""
    pipeline = _pipeline(ctx)
    outcome = _load(pipeline, source)
    _report(outcome)
    try:
        if output:
            pipeline.export_to(outcome.document, output, fmt, theme=theme)
            typer.echo(f"Exported {fmt or pipeline.default_format} to {output}.", err=True)
        else:
            typer.echo(pipeline.export(outcome.document, fmt, theme=theme))
    except CFRSError as exc:
        typer.echo(f"Export failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc


@app.command("check-schema")
def check_schema(
    schema: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Schema JSON path; bundled CFRS schema when omitted."),
) -> None:
    """Compile a schema document and print its identity."""
    try:
        document = load_schema_file(schema) if schema else load_schema_document()
        validator = compile_schema(document)
    except CFRSError as exc:
        typer.echo(f"Schema validation failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("Schema is valid")
    typer.echo(f"  Version: {validator.version or 'N/A'}")
    typer.echo(f"  $id: {validator.schema_id or 'N/A'}")
    typer.echo(f"  Title: {validator.title or 'N/A'}")


@app.command()
def version() -> None:
    """Print the package version."""
    typer.echo(__version__)


def _pipeline(ctx: typer.Context) -> ResumePipeline:
    app_config = ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()
    return create_container(settings=app_config.to_settings()).pipeline()


def _load(pipeline: ResumePipeline, source: str) -> ImportOutcome:
    try:
        if source == "-":
            return pipeline.import_text(typer.get_text_stream("stdin").read())
        path = Path(source)
        if not path.is_file():
            raise typer.BadParameter(f"File not found: {source}", param_hint="SOURCE")
        return pipeline.import_file(path)
    except CFRSError as exc:
        typer.echo(f"Import failed: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _report(outcome: ImportOutcome, *, limit: int = 5) -> None:
    if outcome.valid:
        return
    typer.echo(f"Validation warnings ({len(outcome.report.errors)}):", err=True)
    for line in outcome.report.summary(limit=limit):
        typer.echo(f"  {line}", err=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
