"""Importer for résumés supplied as JSON text."""

from __future__ import annotations

import json
from typing import Any

import structlog

from ..errors import ParseError, PreconditionViolation
from .common import ensure_schema_ref, require_name, retain_canonical_fields


class JSONImporter:
    """Parse JSON in any résumé dialect close to CFRS into a canonical document.

    Only ``basics.name`` is enforced here; everything else is left for the
    validator to report.
    """

    format = "json"
    extensions = (".json",)

    def __init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    def load(self, text: str) -> dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError("JSON", str(exc)) from exc

        if not isinstance(data, dict):
            raise PreconditionViolation(
                "$root", f"Resume must be a JSON object, got {type(data).__name__}"
            )
        require_name(data)

        document = ensure_schema_ref(retain_canonical_fields(data, source=self.format))
        self._logger.debug(
            "import.parsed",
            format=self.format,
            fields=list(document),
        )
        return document


def import_json(text: str) -> dict[str, Any]:
    return JSONImporter().load(text)
