"""Compiled JSON-Schema validator producing exhaustive, path-anchored diagnostics."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterable, Mapping

import structlog
from jsonschema import FormatChecker
from jsonschema import exceptions as jsonschema_exceptions
from jsonschema.validators import validator_for

from ..errors import SchemaCompileError
from ..schemas import load_schema_document
from .formats import FormatPredicate, FormatRegistry, default_formats

_LIMIT_KEYWORDS = frozenset(
    {"minLength", "maxLength", "minimum", "maximum", "minItems", "maxItems"}
)


@dataclass(frozen=True, slots=True)
class ValidationError:
    """One schema violation, anchored in both the document and the schema."""

    path: str
    schema_path: str
    kind: str
    params: dict[str, Any] = field(default_factory=dict)
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "path": self.path,
            "schemaPath": self.schema_path,
            "kind": self.kind,
            "params": dict(self.params),
        }
        if self.message is not None:
            payload["message"] = self.message
        return payload


@dataclass(slots=True)
class ValidationReport:
    """Outcome of validating one candidate document."""

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": [error.to_dict() for error in self.errors]}

    def summary(self, limit: int = 5) -> list[str]:
        """Human-readable lines for the first ``limit`` errors."""
        lines = [f"{error.path or '/'}: {error.message}" for error in self.errors[:limit]]
        remaining = len(self.errors) - limit
        if remaining > 0:
            lines.append(f"...and {remaining} more")
        return lines


class CompiledValidator:
    """Reusable validator for one schema version.

    Built once by :func:`compile_schema`; holds no per-call state, so a single
    instance can serve any number of callers.
    """

    __slots__ = ("_validator", "_schema_id", "_title", "_version")

    def __init__(self, validator: Any, schema_document: Mapping[str, Any]):
        self._validator = validator
        self._schema_id = schema_document.get("$id")
        self._title = schema_document.get("title")
        self._version = schema_document.get("version")

    @property
    def schema_id(self) -> str | None:
        return self._schema_id

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def version(self) -> str | None:
        return self._version

    def validate(self, candidate: Any) -> ValidationReport:
        # Keyword checks assume string keys; others are reported, then left out.
        errors: list[ValidationError] = []
        candidate = _string_keyed(candidate, (), errors)
        errors.extend(_convert(error) for error in self._validator.iter_errors(candidate))
        errors.sort(key=lambda err: (err.path, err.schema_path, err.message or ""))
        return ValidationReport(valid=not errors, errors=errors)

    def is_valid(self, candidate: Any) -> bool:
        return self.validate(candidate).valid


def compile_schema(
    schema_document: Mapping[str, Any],
    formats: FormatRegistry | Mapping[str, FormatPredicate] | None = None,
) -> CompiledValidator:
    """Compile ``schema_document`` with the given format predicates."""
    registry = formats if formats is not None else default_formats()
    validator_cls = validator_for(schema_document)
    try:
        validator_cls.check_schema(schema_document)
    except jsonschema_exceptions.SchemaError as exc:
        raise SchemaCompileError(f"Invalid schema: {exc.message}") from exc

    unknown = sorted(set(_declared_formats(schema_document)) - set(registry))
    if unknown:
        raise SchemaCompileError(f"Unknown formats in schema: {', '.join(unknown)}")

    checker = FormatChecker(formats=())
    for name, predicate in registry.items():
        checker.checks(name)(_string_only(predicate))

    validator = validator_cls(schema_document, format_checker=checker)
    structlog.get_logger(__name__).debug(
        "schema.compiled",
        schema_id=schema_document.get("$id"),
        formats=sorted(registry),
    )
    return CompiledValidator(validator, schema_document)


@lru_cache(maxsize=1)
def default_validator() -> CompiledValidator:
    """Validator for the bundled CFRS schema, compiled on first use."""
    return compile_schema(load_schema_document())


def validate_resume(candidate: Any) -> ValidationReport:
    return default_validator().validate(candidate)


def is_valid_resume(candidate: Any) -> bool:
    return validate_resume(candidate).valid


def _string_only(predicate: FormatPredicate) -> FormatPredicate:
    # Non-string values are left to the "type" keyword.
    def _check(value: Any) -> bool:
        if not isinstance(value, str):
            return True
        return predicate(value)

    return _check


def _string_keyed(node: Any, parts: tuple[Any, ...], errors: list[ValidationError]) -> Any:
    if isinstance(node, Mapping):
        cleaned = {}
        for key, value in node.items():
            if isinstance(key, str):
                cleaned[key] = _string_keyed(value, parts + (key,), errors)
            else:
                errors.append(
                    ValidationError(
                        path=_pointer(parts),
                        schema_path="#",
                        kind="propertyNames",
                        params={"propertyName": repr(key)},
                        message=f"property name {key!r} must be string",
                    )
                )
        return cleaned
    if isinstance(node, list):
        return [_string_keyed(item, parts + (index,), errors) for index, item in enumerate(node)]
    return node


def _declared_formats(node: Any) -> Iterable[str]:
    if isinstance(node, Mapping):
        for key, value in node.items():
            if key == "format" and isinstance(value, str):
                yield value
            else:
                yield from _declared_formats(value)
    elif isinstance(node, list):
        for item in node:
            yield from _declared_formats(item)


def _pointer(parts: Iterable[Any]) -> str:
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1") for part in parts
    )


def _convert(error: jsonschema_exceptions.ValidationError) -> ValidationError:
    kind = str(error.validator)
    params = _params(error)
    return ValidationError(
        path=_pointer(error.absolute_path),
        schema_path="#" + _pointer(error.absolute_schema_path),
        kind=kind,
        params=params,
        message=_message(kind, params, error),
    )


def _params(error: jsonschema_exceptions.ValidationError) -> dict[str, Any]:
    kind = error.validator
    value = error.validator_value
    instance = error.instance

    if kind == "required":
        missing = [name for name in value if isinstance(instance, dict) and name not in instance]
        prop = next((name for name in missing if error.message.startswith(repr(name))), None)
        if prop is None and missing:
            prop = missing[0]
        return {"missingProperty": prop}
    if kind == "additionalProperties":
        return {"additionalProperties": _extra_properties(instance, error.schema)}
    if kind == "type":
        return {"type": value}
    if kind == "format":
        return {"format": value}
    if kind == "enum":
        return {"allowedValues": list(value)}
    if kind == "pattern":
        return {"pattern": value}
    if kind in _LIMIT_KEYWORDS:
        return {"limit": value}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return {str(kind): value}
    return {}


def _extra_properties(instance: Any, schema: Any) -> list[str]:
    if not isinstance(instance, dict) or not isinstance(schema, Mapping):
        return []
    known = schema.get("properties", {})
    patterns = [re.compile(pattern) for pattern in schema.get("patternProperties", {})]
    return [
        key
        for key in instance
        if key not in known and not any(pattern.search(key) for pattern in patterns)
    ]


def _message(
    kind: str,
    params: dict[str, Any],
    error: jsonschema_exceptions.ValidationError,
) -> str:
    if kind == "required":
        return f"must have required property '{params['missingProperty']}'"
    if kind == "additionalProperties":
        extras = ", ".join(params["additionalProperties"])
        return f"must NOT have additional properties ({extras})"
    if kind == "type":
        expected = params["type"]
        if isinstance(expected, list):
            expected = ",".join(expected)
        return f"must be {expected}"
    if kind == "format":
        return f'must match format "{params["format"]}"'
    if kind == "enum":
        return "must be equal to one of the allowed values"
    if kind == "pattern":
        return f'must match pattern "{params["pattern"]}"'
    if kind in ("minLength", "minItems"):
        unit = "characters" if kind == "minLength" else "items"
        return f"must NOT have fewer than {params['limit']} {unit}"
    if kind in ("maxLength", "maxItems"):
        unit = "characters" if kind == "maxLength" else "items"
        return f"must NOT have more than {params['limit']} {unit}"
    if kind == "minimum":
        return f"must be >= {params['limit']}"
    if kind == "maximum":
        return f"must be <= {params['limit']}"
    return error.message

