from __future__ import annotations

import json
from pathlib import Path

import pytest

from cfrs.container import create_container, load_schema_file
from cfrs.errors import SchemaCompileError
from cfrs.schemas import SCHEMA_URI, load_schema_document
from cfrs.schemas.config import AppConfig, load_config


def test_create_container_defaults():
    container = create_container()
    pipeline = container.pipeline()

    assert pipeline.default_format == "cfrs"
    assert container.validator() is container.validator()
    assert container.html_exporter().theme == "classic"


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "validation": {"extra_formats": {"employee-id": r"^E[0-9]{4}$"}},
            "export": {"default_format": "html", "theme": "modern"},
        }
    )

    pipeline = container.pipeline()

    assert pipeline.default_format == "html"
    assert container.html_exporter().theme == "modern"
    assert "employee-id" in container.formats()
    assert container.formats()["employee-id"]("E1234")
    assert "cfrs-date" in container.formats()


def test_schema_path_override(tmp_path: Path):
    schema = load_schema_document()
    schema["$id"] = "https://example.com/schemas/custom.json"
    schema["required"] = ["$schema", "basics", "work"]
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema), encoding="utf-8")

    container = create_container(settings={"validation": {"schema_path": str(path)}})
    report = container.pipeline().validate({"$schema": SCHEMA_URI, "basics": {"name": "A"}})

    assert container.validator().schema_id == "https://example.com/schemas/custom.json"
    assert [(error.kind, error.params) for error in report.errors] == [
        ("required", {"missingProperty": "work"})
    ]


def test_load_schema_file_rejects_broken_json(tmp_path: Path):
    path = tmp_path / "schema.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SchemaCompileError):
        load_schema_file(path)


def test_load_config_feeds_container():
    app_config = load_config({"export": {"theme": "modern"}, "logging": {"level": "DEBUG"}})
    assert isinstance(app_config, AppConfig)

    container = create_container(settings=app_config.to_settings())

    assert container.html_exporter().theme == "modern"
    assert container.pipeline().default_format == "cfrs"
