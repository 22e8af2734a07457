"""Standalone HTML exporter."""

from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, PackageLoader, TemplateNotFound

from ..errors import RenderError
from ..schemas import CanonicalResume
from .common import date_range, typed_view

THEMES = ("classic", "modern")

env = Environment(
    loader=PackageLoader("cfrs.exporters", "templates"),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
env.filters["date_range"] = lambda entry: date_range(entry.startDate, entry.endDate)


class HTMLExporter:
    """Render a résumé to one HTML file with its stylesheet inlined.

    Every user-supplied string goes through Jinja's autoescaping; sections
    whose collection is empty are left out of the output altogether.
    """

    format = "html"
    media_type = "text/html"
    suffix = ".html"

    def __init__(self, *, theme: str = "classic") -> None:
        if theme not in THEMES:
            raise RenderError(f"Unknown theme {theme!r}; expected one of {', '.join(THEMES)}")
        self._theme = theme

    @property
    def theme(self) -> str:
        return self._theme

    def with_theme(self, theme: str) -> "HTMLExporter":
        return HTMLExporter(theme=theme)

    def render(self, resume: Mapping[str, Any] | CanonicalResume) -> str:
        model = typed_view(resume)
        try:
            template = env.get_template("resume.html.j2")
        except TemplateNotFound as exc:  # pragma: no cover - packaging error
            raise RenderError(f"Missing template: {exc.name}") from exc
        return template.render(r=model, theme=self._theme)


def export_html(resume: Mapping[str, Any] | CanonicalResume, *, theme: str = "classic") -> str:
    return HTMLExporter(theme=theme).render(resume)
