"""Dependency injection container for the résumé pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from dependency_injector import containers, providers

from .errors import SchemaCompileError
from .exporters import HTMLExporter, JSONExporter, JSONResumeExporter, MarkdownExporter
from .importers import JSONImporter, MarkdownImporter
from .pipeline import ExporterRegistry, ImporterRegistry, ResumePipeline
from .schemas import load_schema_document
from .validation import compile_schema, default_formats, pattern_predicate


def load_schema_file(path: str | Path) -> dict[str, Any]:
    """Load a JSON-Schema document from disk."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise SchemaCompileError(f"Invalid schema JSON in {path}: {exc}") from exc


class PipelineContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    schema_document = providers.Singleton(load_schema_document)
    formats = providers.Singleton(default_formats)
    validator = providers.Singleton(compile_schema, schema_document, formats)

    json_importer = providers.Singleton(JSONImporter)
    markdown_importer = providers.Singleton(MarkdownImporter)

    importer_registry = providers.Singleton(
        ImporterRegistry,
        importers=providers.List(json_importer, markdown_importer),
    )

    json_exporter = providers.Singleton(JSONExporter)
    json_resume_exporter = providers.Singleton(JSONResumeExporter)
    html_exporter = providers.Singleton(HTMLExporter)
    markdown_exporter = providers.Singleton(MarkdownExporter)

    exporter_registry = providers.Singleton(
        ExporterRegistry,
        exporters=providers.List(
            json_exporter,
            json_resume_exporter,
            html_exporter,
            markdown_exporter,
        ),
    )

    pipeline = providers.Factory(
        ResumePipeline,
        validator=validator,
        importers=importer_registry,
        exporters=exporter_registry,
        default_format=config.default_format,
    )


def create_container(*, settings: dict | None = None) -> PipelineContainer:
    """Instantiate container with optional overrides."""

    container = PipelineContainer()

    if not settings:
        return container

    validation_settings = settings.get("validation", {}) if isinstance(settings, dict) else {}

    schema_path = validation_settings.get("schema_path")
    if schema_path:
        container.schema_document.override(providers.Singleton(load_schema_file, schema_path))

    extra_formats = validation_settings.get("extra_formats") or {}
    if extra_formats:
        registry = default_formats()
        for name, pattern in extra_formats.items():
            registry = registry.register(name, pattern_predicate(pattern))
        container.formats.override(providers.Object(registry))

    export_settings = settings.get("export", {}) if isinstance(settings, dict) else {}

    if export_settings.get("default_format"):
        container.config.override({"default_format": export_settings["default_format"]})

    if export_settings.get("theme"):
        container.html_exporter.override(
            providers.Singleton(HTMLExporter, theme=export_settings["theme"])
        )

    return container
