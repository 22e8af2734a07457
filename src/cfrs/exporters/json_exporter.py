"""Canonical JSON exporter."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..schemas import CanonicalResume
from .common import as_document


class JSONExporter:
    """Pretty-print the canonical document; field order is preserved."""

    format = "cfrs"
    media_type = "application/json"
    suffix = ".json"

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def render(self, resume: Mapping[str, Any] | CanonicalResume) -> str:
        return json.dumps(as_document(resume), ensure_ascii=False, indent=self._indent)


def export_json(resume: Mapping[str, Any] | CanonicalResume) -> str:
    return JSONExporter().render(resume)
