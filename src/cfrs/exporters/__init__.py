"""Exporters rendering canonical documents into target formats."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from .html import THEMES, HTMLExporter, export_html
from .json_exporter import JSONExporter, export_json
from .jsonresume import JSON_RESUME_SCHEMA_URI, JSONResumeExporter, export_json_resume
from .markdown import MarkdownExporter, export_markdown


@runtime_checkable
class ResumeExporter(Protocol):
    """Exporter contract: a pure function of the canonical document."""

    format: str
    media_type: str
    suffix: str

    def render(self, resume: Mapping[str, Any]) -> str:
        """Return the rendered document text."""


__all__ = [
    "JSON_RESUME_SCHEMA_URI",
    "THEMES",
    "HTMLExporter",
    "JSONExporter",
    "JSONResumeExporter",
    "MarkdownExporter",
    "ResumeExporter",
    "export_html",
    "export_json",
    "export_json_resume",
    "export_markdown",
]
