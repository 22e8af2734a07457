from __future__ import annotations

import json

import pytest

from cfrs.errors import CFRSError, ParseError, PreconditionViolation
from cfrs.importers import JSONImporter, import_json
from cfrs.schemas import SCHEMA_URI


def test_import_json_injects_schema_ref():
    document = import_json('{"basics": {"name": "Test User"}}')

    assert document == {"$schema": SCHEMA_URI, "basics": {"name": "Test User"}}
    assert list(document)[0] == "$schema"


def test_import_json_keeps_existing_schema_ref():
    document = import_json(json.dumps({"$schema": "https://example.com/v2.json", "basics": {"name": "A"}}))

    assert document["$schema"] == "https://example.com/v2.json"


def test_import_json_moves_schema_ref_key():
    document = import_json(json.dumps({"schemaRef": "https://example.com/v2.json", "basics": {"name": "A"}}))

    assert document["$schema"] == "https://example.com/v2.json"
    assert "schemaRef" not in document


@pytest.mark.parametrize(
    "payload",
    [
        {"basics": {}},
        {"basics": {"name": ""}},
        {"basics": {"name": "   "}},
        {"basics": {"name": None}},
        {"work": []},
    ],
)
def test_import_json_requires_name(payload):
    with pytest.raises(PreconditionViolation) as exc:
        import_json(json.dumps(payload))
    assert exc.value.field == "basics.name"
    assert "basics.name" in str(exc.value)


@pytest.mark.parametrize("raw", ["[]", '"resume"', "42", "null"])
def test_import_json_rejects_non_objects(raw):
    with pytest.raises(PreconditionViolation):
        import_json(raw)


def test_import_json_surfaces_parse_diagnostic():
    with pytest.raises(ParseError) as exc:
        import_json('{"basics": {"name": "Test User"},}')

    message = str(exc.value)
    assert message.startswith("Invalid JSON:")
    assert "line 1" in message
    assert isinstance(exc.value, CFRSError)
    assert isinstance(exc.value.__cause__, json.JSONDecodeError)


def test_import_json_drops_unknown_fields_but_keeps_extensions():
    payload = {
        "basics": {"name": "Test User", "nickname": "TU"},
        "hobbies": ["chess"],
        "meta": {"version": "v1"},
        "x_cfrs_custom_sections": [{"sectionTitle": "Talks", "sectionType": "talks", "items": []}],
        "x_theme": "modern",
        "work": [{"name": "Acme"}],
    }

    document = import_json(json.dumps(payload))

    assert list(document) == ["$schema", "basics", "x_cfrs_custom_sections", "x_theme", "work"]
    assert document["basics"] == {"name": "Test User", "nickname": "TU"}
    assert document["x_theme"] == "modern"


def test_import_json_does_not_run_full_validation():
    payload = {"basics": {"name": "Test User"}, "work": [{"startDate": "Jan 2023", "highlights": "oops"}]}

    document = import_json(json.dumps(payload))

    assert document["work"] == payload["work"]


def test_json_importer_metadata():
    importer = JSONImporter()

    assert importer.format == "json"
    assert importer.extensions == (".json",)
