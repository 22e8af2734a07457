"""Import → validate → export orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping

import structlog

from .errors import ParseError, PreconditionViolation, UnsupportedFormatError
from .exporters import ResumeExporter
from .importers import ResumeImporter
from .schemas import merge_updates
from .validation import CompiledValidator, ValidationReport

DEFAULT_EXPORT_FORMAT = "cfrs"


@dataclass(slots=True)
class ImportOutcome:
    """A best-effort canonical document together with its diagnostics."""

    document: dict[str, Any]
    report: ValidationReport
    format: str

    @property
    def valid(self) -> bool:
        return self.report.valid


class ImporterRegistry:
    """Registry mapping format names and file suffixes to importers."""

    def __init__(self, importers: Iterable[ResumeImporter]):
        importers = list(importers)
        self._importers = {importer.format: importer for importer in importers}
        self._by_suffix = {
            suffix.lower(): importer
            for importer in importers
            for suffix in importer.extensions
        }

    def get(self, fmt: str) -> ResumeImporter:
        try:
            return self._importers[fmt]
        except KeyError as exc:
            raise UnsupportedFormatError(f"Unsupported import format: {fmt!r}") from exc

    def for_path(self, path: Path) -> ResumeImporter:
        try:
            return self._by_suffix[path.suffix.lower()]
        except KeyError as exc:
            supported = ", ".join(sorted(self._by_suffix))
            raise UnsupportedFormatError(
                f"Unsupported file format {path.suffix or '(none)'!r}; use one of {supported}"
            ) from exc

    def formats(self) -> List[str]:
        return list(self._importers.keys())


class ExporterRegistry:
    """Registry mapping export format names to exporters."""

    def __init__(self, exporters: Iterable[ResumeExporter]):
        self._exporters = {exporter.format: exporter for exporter in exporters}

    def get(self, fmt: str) -> ResumeExporter:
        try:
            return self._exporters[fmt]
        except KeyError as exc:
            raise UnsupportedFormatError(
                f"Unsupported export format: {fmt!r}; use one of {', '.join(self._exporters)}"
            ) from exc

    def formats(self) -> List[str]:
        return list(self._exporters.keys())


class OutputWriter:
    """Persist rendered documents as UTF-8 text."""

    def write(self, path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


class ResumePipeline:
    """Select an importer, validate its result and render it on demand.

    Schema diagnostics never abort an import: the document is returned with
    its report so callers can show both.
    """

    def __init__(
        self,
        *,
        validator: CompiledValidator,
        importers: ImporterRegistry,
        exporters: ExporterRegistry,
        writer: OutputWriter | None = None,
        default_format: str | None = None,
    ) -> None:
        self._validator = validator
        self._importers = importers
        self._exporters = exporters
        self._writer = writer or OutputWriter()
        self._default_format = default_format or DEFAULT_EXPORT_FORMAT
        self._logger = structlog.get_logger(__name__)

    @property
    def default_format(self) -> str:
        return self._default_format

    def import_file(self, path: Path) -> ImportOutcome:
        importer = self._importers.for_path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(importer.format, f"{path.name} is not UTF-8 text ({exc})") from exc
        return self._finish(importer.load(text), importer.format, source=str(path))

    def import_text(self, text: str) -> ImportOutcome:
        """Paste mode: try JSON, fall back to Markdown.

        Text that opens with ``{`` or ``[`` is taken to be JSON, so its parse
        or precondition error is raised instead of being reread as Markdown.
        """
        json_importer = self._importers.get("json")
        try:
            document = json_importer.load(text)
        except (ParseError, PreconditionViolation) as exc:
            if text.lstrip().startswith(("{", "[")):
                raise
            self._logger.debug("import.fallback", from_format="json", reason=str(exc))
            markdown_importer = self._importers.get("markdown")
            return self._finish(markdown_importer.load(text), markdown_importer.format, source="paste")
        return self._finish(document, json_importer.format, source="paste")

    def validate(self, document: Any) -> ValidationReport:
        return self._validator.validate(document)

    def update(self, document: Mapping[str, Any], updates: Mapping[str, Any]) -> ImportOutcome:
        """Apply a shallow top-level merge and revalidate the result."""
        merged = merge_updates(document, updates)
        return ImportOutcome(document=merged, report=self.validate(merged), format="update")

    def export(
        self,
        document: Mapping[str, Any],
        fmt: str | None = None,
        *,
        theme: str | None = None,
    ) -> str:
        fmt = fmt or self._default_format
        exporter = self._exporters.get(fmt)
        if theme is not None:
            with_theme = getattr(exporter, "with_theme", None)
            if with_theme is None:
                raise UnsupportedFormatError(f"Export format {fmt!r} does not support themes")
            exporter = with_theme(theme)
        rendered = exporter.render(document)
        self._logger.info("export.completed", format=fmt, size=len(rendered))
        return rendered

    def export_to(
        self,
        document: Mapping[str, Any],
        path: Path,
        fmt: str | None = None,
        *,
        theme: str | None = None,
    ) -> Path:
        return self.write(path, self.export(document, fmt, theme=theme))

    def write(self, path: Path, text: str) -> Path:
        return self._writer.write(path, text)

    def _finish(self, document: dict[str, Any], fmt: str, *, source: str) -> ImportOutcome:
        report = self.validate(document)
        if not report.valid:
            self._logger.warning(
                "validation.failed",
                source=source,
                error_count=len(report.errors),
                errors=report.summary(),
            )
        self._logger.info(
            "import.completed",
            source=source,
            format=fmt,
            valid=report.valid,
            error_count=len(report.errors),
        )
        return ImportOutcome(document=document, report=report, format=fmt)
