"""Importer for Markdown résumés carrying a YAML front-matter block."""

from __future__ import annotations

import re
from datetime import date
from typing import Any

import structlog
import yaml

from ..errors import ParseError
from ..schemas import SCHEMA_URI, is_extension_field
from .common import resolve_aliases

PLACEHOLDER_NAME = "Unknown"
SUMMARY_LINES = 3
SUMMARY_MAX_CHARS = 500
COLLECTION_KEYS = ("work", "education", "skills")

FRONT_MATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<meta>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Return ``(front_matter, body)``; front matter is None when absent."""
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return None, text
    return match.group("meta"), text[match.end():]


class MarkdownImporter:
    """Map front-matter metadata and body text onto a canonical document.

    Unlike the JSON importer this never rejects a missing name; it substitutes
    :data:`PLACEHOLDER_NAME` instead.
    """

    format = "markdown"
    extensions = (".md", ".markdown")

    def __init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    def load(self, text: str) -> dict[str, Any]:
        raw_meta, body = split_front_matter(text)
        meta = self._parse_front_matter(raw_meta)

        document: dict[str, Any] = {
            "$schema": SCHEMA_URI,
            "basics": self._basics(meta, body),
        }
        for key in COLLECTION_KEYS:
            value = meta.get(key)
            if isinstance(value, list):
                document[key] = value
            elif value is not None:
                self._logger.debug("import.section_ignored", section=key, type=type(value).__name__)
        for key, value in meta.items():
            if is_extension_field(key):
                document[key] = value

        self._logger.debug(
            "import.parsed",
            format=self.format,
            has_front_matter=raw_meta is not None,
            fields=list(document),
        )
        return document

    @staticmethod
    def _parse_front_matter(raw: str | None) -> dict[str, Any]:
        if raw is None:
            return {}
        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ParseError("front-matter", str(exc)) from exc
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ParseError(
                "front-matter",
                f"expected a key/value mapping, got {type(loaded).__name__}",
            )
        return _plain(loaded)

    @staticmethod
    def _basics(meta: dict[str, Any], body: str) -> dict[str, Any]:
        resolved = resolve_aliases(meta)
        name = resolved.pop("name", PLACEHOLDER_NAME)
        summary = resolved.pop("summary", None)

        basics: dict[str, Any] = {"name": name if isinstance(name, str) else str(name)}
        basics.update((key, _text(value)) for key, value in resolved.items())
        if summary is None:
            summary = synthesize_summary(body)
        if summary:
            basics["summary"] = _text(summary)
        return basics


def synthesize_summary(body: str) -> str:
    """First lines of the body joined with spaces, capped in length."""
    lines = [line.rstrip("\r") for line in body.split("\n")[:SUMMARY_LINES]]
    return " ".join(lines)[:SUMMARY_MAX_CHARS].strip()


def import_markdown(text: str) -> dict[str, Any]:
    return MarkdownImporter().load(text)


def _text(value: Any) -> Any:
    # YAML reads bare numbers as int/float; contact fields are strings.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _plain(value: Any) -> Any:
    """Convert YAML-native values (dates, non-string keys) to JSON types."""
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, date):
        return value.isoformat()
    return value
