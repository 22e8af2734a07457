"""Helpers shared by the format importers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import structlog

from ..errors import PreconditionViolation
from ..schemas import SCHEMA_URI, has_name, is_extension_field, top_level_fields

# Ordered candidate source keys per canonical ``basics`` field; the first
# non-empty value wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "label": ("title", "label"),
    "email": ("email",),
    "phone": ("phone",),
    "url": ("website", "url"),
    "summary": ("summary",),
}

LEGACY_SCHEMA_KEY = "schemaRef"

_logger = structlog.get_logger(__name__)


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def first_non_empty(source: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the value of the first key in ``keys`` holding a non-empty value."""
    for key in keys:
        value = source.get(key)
        if not is_empty(value):
            return value
    return None


def resolve_aliases(
    source: Mapping[str, Any],
    aliases: Mapping[str, Sequence[str]] = FIELD_ALIASES,
) -> dict[str, Any]:
    """Map ``source`` onto canonical field names, skipping unresolved fields."""
    resolved: dict[str, Any] = {}
    for field_name, keys in aliases.items():
        value = first_non_empty(source, keys)
        if value is not None:
            resolved[field_name] = value
    return resolved


def retain_canonical_fields(data: Mapping[str, Any], *, source: str) -> dict[str, Any]:
    """Keep known top-level keys and extension keys, in their original order."""
    known = top_level_fields()
    retained: dict[str, Any] = {}
    dropped: list[str] = []
    for key, value in data.items():
        if key == LEGACY_SCHEMA_KEY:
            retained.setdefault("$schema", value)
        elif key in known or is_extension_field(key):
            retained[key] = value
        else:
            dropped.append(key)
    if dropped:
        _logger.debug("import.fields_dropped", source=source, fields=dropped)
    return retained


def ensure_schema_ref(document: Mapping[str, Any]) -> dict[str, Any]:
    """Inject the current schema URI when the document carries none."""
    if is_empty(document.get("$schema")):
        rest = {key: value for key, value in document.items() if key != "$schema"}
        return {"$schema": SCHEMA_URI, **rest}
    return dict(document)


def require_name(document: Any) -> None:
    if not has_name(document):
        raise PreconditionViolation("basics.name", "Resume must have basics.name field")
