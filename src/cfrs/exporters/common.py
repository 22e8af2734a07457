"""Helpers shared by the exporters."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from ..errors import RenderError
from ..schemas import CanonicalResume, has_name

PRESENT = "Present"


def as_document(resume: Mapping[str, Any] | CanonicalResume) -> dict[str, Any]:
    """Return the plain canonical mapping for either representation."""
    if isinstance(resume, CanonicalResume):
        document = resume.to_document()
    elif isinstance(resume, Mapping):
        document = dict(resume)
    else:
        raise RenderError(f"Cannot export {type(resume).__name__}; expected a résumé mapping")
    if not has_name(document):
        raise RenderError("Cannot export a resume without basics.name")
    return document


def typed_view(resume: Mapping[str, Any] | CanonicalResume) -> CanonicalResume:
    """Build the typed model for renderers that walk the document's structure."""
    document = as_document(resume)
    if isinstance(resume, CanonicalResume):
        return resume
    try:
        return CanonicalResume.from_document(document)
    except ValidationError as exc:
        raise RenderError(f"Cannot render resume: {exc.error_count()} structural problem(s)") from exc


def date_range(start: str | None, end: str | None) -> str:
    """Render ``start - end``; an open end shows as ``Present``, a lone end as itself."""
    if not start:
        return end or ""
    return f"{start} - {end or PRESENT}"
