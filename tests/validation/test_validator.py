from __future__ import annotations

import copy

import pytest

from cfrs.errors import SchemaCompileError
from cfrs.schemas import SCHEMA_URI, load_schema_document
from cfrs.validation import (
    ValidationError,
    compile_schema,
    default_formats,
    default_validator,
    is_valid_resume,
    validate_resume,
)


def minimal(**extra) -> dict:
    document = {"$schema": SCHEMA_URI, "basics": {"name": "Test User"}}
    document.update(extra)
    return document


def test_minimal_resume_is_valid():
    report = validate_resume(minimal())

    assert report.valid is True
    assert report.errors == []


def test_missing_name_is_reported_at_basics():
    report = validate_resume({"$schema": SCHEMA_URI, "basics": {}})

    assert report.valid is False
    error = report.errors[0]
    assert error.kind == "required"
    assert error.path == "/basics"
    assert error.params == {"missingProperty": "name"}
    assert error.schema_path.endswith("/required")
    assert error.message == "must have required property 'name'"


@pytest.mark.parametrize("value", ["2023-01-01", "2023-06"])
def test_accepted_date_forms(value):
    document = minimal(work=[{"name": "Company", "position": "Developer", "startDate": value, "endDate": value}])

    assert validate_resume(document).valid is True


@pytest.mark.parametrize("value", ["2023/01/01", "Jan 2023", "", "2023", "23-01", "2023-13", "2023-02-30", "2023-01-01T00:00:00"])
def test_rejected_date_forms(value):
    document = minimal(work=[{"name": "Company", "position": "Developer", "startDate": value}])

    report = validate_resume(document)

    assert report.valid is False
    assert [(error.path, error.kind, error.params) for error in report.errors] == [
        ("/work/0/startDate", "format", {"format": "cfrs-date"})
    ]


def test_open_ended_employment_is_valid():
    document = minimal(
        work=[{"name": "Company", "startDate": "2021-04"}],
        education=[{"institution": "University", "startDate": "2015-09-01"}],
    )

    assert validate_resume(document).valid is True


def test_validation_is_exhaustive():
    document = {
        "$schema": SCHEMA_URI,
        "basics": {"name": "Test User", "email": "not-an-email"},
        "work": [{"startDate": "2023/01/01", "highlights": "shipped it"}],
        "languages": [{"language": "German", "x_cfrs_cefr_level": "D1"}],
    }

    report = validate_resume(document)

    assert report.valid is False
    assert len(report.errors) >= 4
    assert {(error.path, error.kind) for error in report.errors} >= {
        ("/basics/email", "format"),
        ("/work/0/startDate", "format"),
        ("/work/0/highlights", "type"),
        ("/languages/0/x_cfrs_cefr_level", "enum"),
    }


def test_errors_are_ordered_by_location():
    document = {
        "basics": {"name": "Test User", "url": "not a uri"},
        "work": [{"endDate": "soon"}, {"startDate": "later"}],
    }

    paths = [error.path for error in validate_resume(document).errors]

    assert paths == sorted(paths)
    assert paths == ["", "/basics/url", "/work/0/endDate", "/work/1/startDate"]


def test_validation_is_idempotent_and_does_not_mutate():
    document = minimal(work=[{"startDate": "Jan 2023"}], skills="python")
    snapshot = copy.deepcopy(document)

    first = validate_resume(document)
    second = validate_resume(document)

    assert first == second
    assert document == snapshot


@pytest.mark.parametrize("candidate", [None, "resume", 42, [], ["basics"]])
def test_non_object_candidates_are_reported_not_raised(candidate):
    report = validate_resume(candidate)

    assert report.valid is False
    assert report.errors[0].path == ""
    assert report.errors[0].kind == "type"
    assert report.errors[0].params == {"type": "object"}


def test_unknown_top_level_field_is_additional_property():
    report = validate_resume(minimal(hobbies=["chess"], x_cfrs_theme="modern", x_other={"a": 1}))

    assert [(error.kind, error.params) for error in report.errors] == [
        ("additionalProperties", {"additionalProperties": ["hobbies"]})
    ]


def test_unknown_fields_inside_records_are_allowed():
    document = minimal(work=[{"name": "Company", "team": "Platform", "x_cfrs_keywords": ["go"]}])

    assert validate_resume(document).valid is True


def test_blank_name_fails_schema():
    kinds = {error.kind for error in validate_resume({"$schema": SCHEMA_URI, "basics": {"name": ""}}).errors}

    assert {"minLength", "pattern"} <= kinds


def test_is_valid_matches_validate():
    good = minimal()
    bad = minimal(work=[{"startDate": "2023/01/01"}])

    assert is_valid_resume(good) is validate_resume(good).valid is True
    assert is_valid_resume(bad) is validate_resume(bad).valid is False
    assert default_validator().is_valid(bad) is False


def test_default_validator_is_compiled_once():
    assert default_validator() is default_validator()


def test_error_wire_shape():
    report = validate_resume(minimal(work=[{"startDate": "2023/01/01"}]))

    payload = report.to_dict()

    assert payload["valid"] is False
    assert payload["errors"] == [
        {
            "path": "/work/0/startDate",
            "schemaPath": report.errors[0].schema_path,
            "kind": "format",
            "params": {"format": "cfrs-date"},
            "message": 'must match format "cfrs-date"',
        }
    ]
    assert payload["errors"][0]["schemaPath"].startswith("#/properties/work/items")


def test_summary_truncates_long_reports():
    document = minimal(work=[{"startDate": f"bad-{index}"} for index in range(7)])

    lines = validate_resume(document).summary(limit=5)

    assert len(lines) == 6
    assert lines[0].startswith("/work/0/startDate: must match format")
    assert lines[-1] == "...and 2 more"


def test_json_pointer_escaping():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"a/b": {"type": "object", "properties": {"c~d": {"type": "string"}}}},
    }
    validator = compile_schema(schema)

    report = validator.validate({"a/b": {"c~d": 1}})

    assert report.errors == [
        ValidationError(
            path="/a~1b/c~0d",
            schema_path="#/properties/a~1b/properties/c~0d/type",
            kind="type",
            params={"type": "string"},
            message="must be string",
        )
    ]


def test_compile_rejects_unknown_format():
    schema = {"type": "object", "properties": {"born": {"type": "string", "format": "stardate"}}}

    with pytest.raises(SchemaCompileError, match="stardate"):
        compile_schema(schema)


def test_compile_rejects_invalid_schema():
    with pytest.raises(SchemaCompileError):
        compile_schema({"type": "not-a-type"})


def test_registered_format_is_used_by_compiled_validator():
    schema = load_schema_document()
    schema["definitions"]["basics"]["properties"]["phone"] = {"type": "string", "format": "digits"}
    formats = default_formats().register("digits", str.isdigit)

    validator = compile_schema(schema, formats)

    assert validator.is_valid(minimal(basics={"name": "A", "phone": "5551234"}))
    report = validator.validate(minimal(basics={"name": "A", "phone": "555-1234"}))
    assert report.errors[0].params == {"format": "digits"}


def test_non_string_keys_are_reported_not_raised():
    document = minimal(work=[{"name": "Acme", 2020: "year"}])
    document[1] = 2

    report = validate_resume(document)

    assert report.valid is False
    assert [(error.path, error.kind) for error in report.errors] == [
        ("", "propertyNames"),
        ("/work/0", "propertyNames"),
    ]
    assert report.errors[0].params == {"propertyName": "1"}
    assert report.errors[1].message == "property name 2020 must be string"
    assert document[1] == 2
