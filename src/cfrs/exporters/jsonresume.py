"""Exporter targeting the JSON Resume dialect."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..schemas import CanonicalResume, is_extension_field
from .common import as_document

JSON_RESUME_SCHEMA_URI = (
    "https://raw.githubusercontent.com/jsonresume/resume-schema/v1.0.0/schema.json"
)


class JSONResumeExporter:
    """Strip CFRS extension fields and point ``$schema`` at JSON Resume.

    JSON Resume shares the base field catalog, so everything outside the
    ``x_`` namespace carries over unchanged. Custom sections have no JSON
    Resume counterpart and are dropped with the other extensions.
    """

    format = "json-resume"
    media_type = "application/json"
    suffix = ".json"

    def render(self, resume: Mapping[str, Any] | CanonicalResume) -> str:
        document = strip_extensions(as_document(resume))
        document["$schema"] = JSON_RESUME_SCHEMA_URI
        return json.dumps(document, ensure_ascii=False, indent=2)


def strip_extensions(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: strip_extensions(item)
            for key, item in value.items()
            if not is_extension_field(key)
        }
    if isinstance(value, list):
        return [strip_extensions(item) for item in value]
    return value


def export_json_resume(resume: Mapping[str, Any] | CanonicalResume) -> str:
    return JSONResumeExporter().render(resume)
