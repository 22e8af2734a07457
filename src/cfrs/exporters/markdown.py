"""Markdown exporter producing front-matter the Markdown importer reads back."""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from ..schemas import CanonicalResume, is_extension_field
from .common import as_document, date_range, typed_view

FRONT_MATTER_BASICS = ("name", "label", "email", "phone", "url", "summary")
FRONT_MATTER_COLLECTIONS = ("work", "education", "skills")


class MarkdownExporter:
    format = "markdown"
    media_type = "text/markdown"
    suffix = ".md"

    def render(self, resume: Mapping[str, Any] | CanonicalResume) -> str:
        document = as_document(resume)
        model = typed_view(resume)
        front_matter = yaml.safe_dump(
            _front_matter(document),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        parts = [f"---\n{front_matter}---", f"# {model.basics.name}"]
        if model.basics.label:
            parts.append(f"_{model.basics.label}_")
        if model.basics.summary:
            parts.append(f"## Summary\n\n{model.basics.summary}")
        if model.work:
            parts.append("## Work Experience")
            for job in model.work:
                dates = date_range(job.startDate, job.endDate)
                parts.append(_entry(job.position, job.name, dates, job.summary, job.highlights))
        if model.education:
            parts.append("## Education")
            for edu in model.education:
                title = " in ".join(part for part in (edu.studyType, edu.area) if part)
                dates = date_range(edu.startDate, edu.endDate)
                parts.append(_entry(title, edu.institution, dates, None, edu.courses))
        skill_names = [skill.name for skill in model.skills or [] if skill.name]
        if skill_names:
            parts.append("## Skills\n\n" + "\n".join(f"- {name}" for name in skill_names))
        return "\n\n".join(parts) + "\n"


def _front_matter(document: dict[str, Any]) -> dict[str, Any]:
    basics = document.get("basics") or {}
    meta: dict[str, Any] = {
        key: basics[key] for key in FRONT_MATTER_BASICS if basics.get(key)
    }
    for key in FRONT_MATTER_COLLECTIONS:
        if document.get(key):
            meta[key] = document[key]
    for key, value in document.items():
        if is_extension_field(key):
            meta[key] = value
    return meta


def _entry(
    heading: str | None,
    organisation: str | None,
    dates: str,
    summary: str | None,
    bullets: list[str] | None,
) -> str:
    lines = [f"### {heading}"] if heading else []
    byline = " | ".join(part for part in (f"**{organisation}**" if organisation else "", dates) if part)
    if byline:
        lines.append(byline)
    if summary:
        lines.append("")
        lines.append(summary)
    if bullets:
        lines.append("")
        lines.extend(f"- {bullet}" for bullet in bullets)
    return "\n".join(lines)


def export_markdown(resume: Mapping[str, Any] | CanonicalResume) -> str:
    return MarkdownExporter().render(resume)
