"""Format-specific résumé importers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .common import FIELD_ALIASES, first_non_empty, resolve_aliases
from .json_importer import JSONImporter, import_json
from .markdown import MarkdownImporter, import_markdown, split_front_matter


@runtime_checkable
class ResumeImporter(Protocol):
    """Importer contract.

    Implementations map one source format onto a canonical document (a plain
    mapping in CFRS shape), filling required fields with deterministic
    defaults where the source underspecifies them.
    """

    format: str
    extensions: tuple[str, ...]

    def load(self, text: str) -> dict[str, Any]:
        """Parse ``text`` and return a canonical document."""


__all__ = [
    "FIELD_ALIASES",
    "JSONImporter",
    "MarkdownImporter",
    "ResumeImporter",
    "first_non_empty",
    "import_json",
    "import_markdown",
    "resolve_aliases",
    "split_front_matter",
]
